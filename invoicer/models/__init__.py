'''
Models shared by all components of the application
'''
from .base import BaseModel
