"""
Custom Django model fields for sensitive data.

EncryptedTextField encrypts values before they reach the database and
decrypts them on load. Encrypted columns cannot be filtered on.
"""

import logging

from django.db import models

from .encryption import InvalidToken, decrypt_string, encrypt_string

logger = logging.getLogger(__name__)


class EncryptedTextField(models.TextField):
    description = "Encrypted text field"

    def from_db_value(self, value, expression, connection):
        if value is None:
            return value
        try:
            return decrypt_string(value)
        except InvalidToken:
            logger.error("Could not decrypt %s.%s, was ENCRYPTION_KEY rotated?", self.model.__name__, self.name)
            return ''

    def get_prep_value(self, value):
        if value is None or value == '':
            return ''
        return encrypt_string(str(value))

    def to_python(self, value):
        if value is None:
            return value
        return str(value)
