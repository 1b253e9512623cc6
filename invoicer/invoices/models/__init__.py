from .invoice import Invoice
from .charge import Charge
