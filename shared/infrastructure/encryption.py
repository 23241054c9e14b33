"""
Encryption utilities

Symmetric (Fernet, AES-128-CBC + HMAC) encryption for client health data
such as medical conditions and dietary notes.
"""

import base64
import hashlib

from cryptography.fernet import Fernet, InvalidToken
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


def get_fernet() -> Fernet:
    """
    Build a Fernet instance from ``settings.ENCRYPTION_KEY``.

    Any string is accepted: it is hashed down to the 32 bytes Fernet expects,
    so rotating the setting invalidates previously stored values.
    """
    key = getattr(settings, 'ENCRYPTION_KEY', None)
    if not key:
        raise ImproperlyConfigured("ENCRYPTION_KEY is not configured.")

    if isinstance(key, str):
        key = key.encode()
    return Fernet(base64.urlsafe_b64encode(hashlib.sha256(key).digest()))


def encrypt_string(plaintext: str) -> str:
    if not plaintext:
        return ''
    return get_fernet().encrypt(plaintext.encode()).decode()


def decrypt_string(token: str) -> str:
    """Decrypt a stored token. Raises ``InvalidToken`` on tampered data."""
    if not token:
        return ''
    return get_fernet().decrypt(token.encode()).decode()


__all__ = ['InvalidToken', 'decrypt_string', 'encrypt_string', 'get_fernet']
