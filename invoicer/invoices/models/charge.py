import html

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from invoicer import db
from invoicer.models.base import BaseModel

class Charge(db.Model, BaseModel):
    '''
    Represents a line item of the invoice. Doesn't exist apart from invoice
    '''
    __tablename__ = 'charges'

    invoice_id = Column(Integer, ForeignKey('invoices.id'), index=True)
    invoice = relationship('Invoice', back_populates='charges')
    type = Column(String(255))
    amount = Column(Float)
    description = Column(Text)

    def __repr__(self):
        return f"<Charge: {self.id} - Invoice: {self.invoice_id}>"

    def to_dict(self):
        # Text fields are escaped as they may end up in an HTML page
        return {
            'id': self.id,
            'invoice_id': self.invoice_id,
            'type': html.escape(self.type or ''),
            'amount': self.amount,
            'description': html.escape(self.description or ''),
            **self.get_metadata()
        }
