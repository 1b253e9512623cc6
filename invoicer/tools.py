''' Handful tools '''
from datetime import datetime, timezone
from typing import Any, Optional

def utcnow() -> datetime:
    '''Current time as naive UTC, the way timestamps are stored'''
    return datetime.now(timezone.utc).replace(tzinfo=None)

def parse_timestamp(value: str) -> datetime:
    '''
    Parses an ISO 8601 timestamp. Aware timestamps are converted to naive UTC.
    Raises ValueError for anything else
    '''
    if not isinstance(value, str):
        raise ValueError(f"{value!r} is not a timestamp")
    if value.endswith(('Z', 'z')):
        value = value[:-1] + '+00:00'
    timestamp = datetime.fromisoformat(value)
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc).replace(tzinfo=None)
    return timestamp

def format_timestamp(timestamp: Optional[datetime]) -> Optional[str]:
    return timestamp.strftime('%Y-%m-%d %H:%M:%S') if timestamp else None

def format_iso_timestamp(timestamp: Optional[datetime]) -> Optional[str]:
    return timestamp.isoformat() + 'Z' if timestamp else None

def modify_object(entity, payload: dict[str, Any], editable_attributes: list[str]):
    '''
    Sets editable attributes present in the payload. Attributes missing from
    the payload or set to null keep their current values
    '''
    for attr in editable_attributes:
        if payload.get(attr) is not None:
            setattr(entity, attr, payload[attr])
            entity.when_changed = utcnow()
    return entity
