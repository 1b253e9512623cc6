'''
Invoice model
'''
from sqlalchemy import Boolean, Column, DateTime, Integer
from sqlalchemy.orm import relationship

from invoicer import db
from invoicer.models.base import BaseModel
from invoicer.tools import format_iso_timestamp

class Invoice(db.Model, BaseModel):
    '''
    Invoice model. Owns charges which are created and deleted along with it
    '''
    __tablename__ = 'invoices'

    is_paid = Column(Boolean, nullable=False, default=False)
    amount = Column(Integer, nullable=False, default=0)
    payment_date = Column(DateTime)
    due_date = Column(DateTime)
    charges = relationship('Charge', back_populates='invoice')

    def __repr__(self):
        return f"<Invoice: {self.id}>"

    def get_charges(self):
        from invoicer.invoices.models.charge import Charge
        return Charge.query.filter_by(invoice_id=self.id).order_by(Charge.id).all()

    def to_dict(self):
        '''
        Returns dictionary of the invoice ready to be jsonified
        '''
        return {
            'id': self.id,
            'is_paid': self.is_paid,
            'amount': self.amount,
            'payment_date': format_iso_timestamp(self.payment_date),
            'due_date': format_iso_timestamp(self.due_date),
            **self.get_metadata(),
            'charges': [charge.to_dict() for charge in self.get_charges()]
        }
