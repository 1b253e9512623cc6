'''
Self-verifying CSRF tokens.

A token is ``base64(msg) + "$" + base64(HMAC-SHA256(key, msg))`` where
``msg`` is 32 random bytes. Verification only needs the key, so no token
store is kept. Tokens stay valid as long as the key does.
'''
import base64
import binascii
from functools import wraps
import hashlib
import hmac
import secrets

from flask import current_app, request

from invoicer.exceptions import CSRFRejectedError

CSRF_HEADER = 'X-CSRF-Token'
TOKEN_SEPARATOR = '$'
MESSAGE_SIZE = 32

class CSRFTokenService:
    '''Creates and verifies CSRF tokens signed with a fixed key'''

    def __init__(self, key: bytes):
        if not key:
            raise ValueError("CSRF signing key must not be empty")
        self.__key = bytes(key)

    def __sign(self, msg: bytes) -> bytes:
        return hmac.new(self.__key, msg, hashlib.sha256).digest()

    def create(self) -> str:
        msg = secrets.token_bytes(MESSAGE_SIZE)
        return base64.b64encode(msg).decode('ascii') + TOKEN_SEPARATOR + \
            base64.b64encode(self.__sign(msg)).decode('ascii')

    def verify(self, token) -> bool:
        if not isinstance(token, str):
            return False
        parts = token.split(TOKEN_SEPARATOR)
        if len(parts) != 2:
            return False
        try:
            msg = base64.b64decode(parts[0], validate=True)
            mac = base64.b64decode(parts[1], validate=True)
        except (binascii.Error, ValueError):
            return False
        return hmac.compare_digest(mac, self.__sign(msg))

def get_csrf_service() -> CSRFTokenService:
    return current_app.extensions['csrf']

def csrf_protected(func):
    '''Rejects the request unless it carries a valid CSRF token header'''
    @wraps(func)
    def wrapper(*args, **kwargs):
        if not get_csrf_service().verify(request.headers.get(CSRF_HEADER)):
            raise CSRFRejectedError()
        return func(*args, **kwargs)
    return wrapper
