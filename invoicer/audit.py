'''
Application audit log. Every handled request leaves a record carrying the
action it performed and the request it belongs to
'''
from functools import wraps
import logging
from typing import Any, MutableMapping, Optional

from flask import g, has_request_context, request

APP_LOGGER_NAME = 'invoicer.app'

class AppLoggerAdapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        extra = kwargs.setdefault('extra', {})
        extra.update(self.extra)
        return msg, kwargs

def _get_request_context(action: Optional[str]) -> dict[str, Any]:
    if not has_request_context():
        return {
            'action': action or '-',
            'request_id': '-',
            'remote_addr': '-',
            'method': '-',
            'path': '-'
        }
    return {
        'action': action or g.get('action') or '-',
        'request_id': g.get('request_id') or '-',
        'remote_addr': request.remote_addr or '-',
        'method': request.method,
        'path': request.path
    }

def get_app_logger(action: Optional[str] = None, handler: Optional[logging.Handler] = None) -> AppLoggerAdapter:
    """Factory: returns the audit logger bound to the current request."""
    logger = logging.getLogger(APP_LOGGER_NAME)

    if not logger.handlers:  # Configure once
        if handler is None:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(
                "%(asctime)s\t%(levelname)s\t%(name)s: %(message)s "
                "[action=%(action)s rid=%(request_id)s remote=%(remote_addr)s "
                "%(method)s %(path)s]"
            ))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False

    return AppLoggerAdapter(logger, _get_request_context(action))

def audit_action(action: str):
    '''Tags the request handled by the decorated view with an audit action'''
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            g.action = action
            return func(*args, **kwargs)
        return wrapper
    return decorator
