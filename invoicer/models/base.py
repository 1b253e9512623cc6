'''
Abstract base model
'''
from sqlalchemy import Column, DateTime, Integer

from invoicer.tools import format_timestamp, utcnow

class BaseModel:
    '''
    Base model
    '''
    id = Column(Integer, primary_key=True)
    when_created = Column(DateTime, index=True, default=utcnow)
    when_changed = Column(DateTime)

    def get_metadata(self):
        return {
            'when_created': format_timestamp(self.when_created),
            'when_changed': format_timestamp(self.when_changed)
        }
