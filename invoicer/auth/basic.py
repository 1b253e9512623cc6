'''Basic authentication against the configured credential pair'''
import base64
import binascii
from functools import wraps
import logging
import secrets

from flask import current_app, request

from invoicer.exceptions import AuthRequiredError

_logger = logging.getLogger('invoicer.auth')

def parse_basic_credentials(header) -> tuple[str, str]:
    '''
    Extracts username and password from the value of an Authorization header.
    Raises AuthRequiredError when the header isn't a well formed Basic one
    '''
    if not header or len(header) < 8 or header[:6] != 'Basic ':
        raise AuthRequiredError()
    try:
        credentials = base64.b64decode(header[6:], validate=True).decode('utf-8')
    except (binascii.Error, ValueError):
        raise AuthRequiredError()
    if ':' not in credentials:
        raise AuthRequiredError()
    username, _, password = credentials.partition(':')
    return username, password

def check_credentials(username: str, password: str,
                      expected_username: str, expected_password: str) -> bool:
    username_matches = secrets.compare_digest(
        username.encode('utf-8'), expected_username.encode('utf-8'))
    password_matches = secrets.compare_digest(
        password.encode('utf-8'), expected_password.encode('utf-8'))
    return username_matches and password_matches

def basic_auth_required(func):
    '''Lets the request through only with the configured credentials'''
    @wraps(func)
    def wrapper(*args, **kwargs):
        username, password = parse_basic_credentials(request.headers.get('Authorization'))
        if not check_credentials(username, password,
                                 current_app.config['INVOICER_USER'],
                                 current_app.config['INVOICER_PASSWORD']):
            _logger.info("Authentication failed for user '%s'", username)
            raise AuthRequiredError()
        return func(*args, **kwargs)
    return wrapper
