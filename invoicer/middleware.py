'''
Request pipeline applied to every request ahead of routing:
request identification, request logging and response header policy
'''
import logging
import time
import uuid

from flask import current_app, g, request
from flask.wrappers import Response

logger = logging.getLogger('invoicer.request')

REQUEST_ID_HEADER = 'X-Request-ID'

def assign_request_id():
    g.request_id = uuid.uuid4().hex
    g.request_started = time.monotonic()

def log_request(response: Response) -> Response:
    duration_ms = (time.monotonic() - g.request_started) * 1000
    logger.info("%s %s %s %.2fms rid=%s",
                request.method, request.path, response.status_code,
                duration_ms, g.request_id)
    return response

def set_response_headers(response: Response) -> Response:
    for header, value in current_app.config['RESPONSE_HEADERS'].items():
        response.headers.setdefault(header, value)
    response.headers[REQUEST_ID_HEADER] = g.request_id
    return response

def init_middleware(flask_app):
    flask_app.before_request(assign_request_id)
    # after_request hooks run in reverse order of registration
    flask_app.after_request(set_response_headers)
    flask_app.after_request(log_request)
