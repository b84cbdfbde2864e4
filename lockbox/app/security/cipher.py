# lockbox/app/security/cipher.py
"""
Field-level encryption at rest.

Every sensitive vault field is encrypted on its own with AES-256-GCM:
- Key: HKDF-SHA256(ENCRYPTION_KEY, info="lockbox-field-v1"), derived once
- Nonce: random 96-bit per call, so equal plaintexts never share ciphertext
- Stored form: urlsafe-base64([version 1B][nonce 12B][ciphertext + tag 16B])

Security Note:
    Never log plaintext or ciphertext values.
"""
import base64
import binascii
import logging
import os
from functools import lru_cache

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from lockbox.app.core.config import settings
from lockbox.app.core.exceptions import DecryptionFailure

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1
NONCE_SIZE = 12
TAG_SIZE = 16
KEY_LENGTH = 32
KEY_CONTEXT = b"lockbox-field-v1"

_HEADER_SIZE = 1 + NONCE_SIZE


def derive_key(key_material: str) -> bytes:
    """Derive the 32-byte AES key from the configured key string."""
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=None,
        info=KEY_CONTEXT,
    )
    return hkdf.derive(key_material.encode("utf-8"))


class CipherService:
    """Encrypts and decrypts individual text fields with one static key."""

    def __init__(self, key_material: str):
        if not key_material:
            raise ValueError("An encryption key is required")
        self._aead = AESGCM(derive_key(key_material))

    def encrypt_field(self, plaintext: str) -> str:
        nonce = os.urandom(NONCE_SIZE)
        ct = self._aead.encrypt(nonce, plaintext.encode("utf-8"), None)
        blob = bytes([FORMAT_VERSION]) + nonce + ct
        return base64.urlsafe_b64encode(blob).decode("ascii")

    def decrypt_field(self, ciphertext: str) -> str:
        """
        Decrypt a value produced by `encrypt_field`.

        Raises:
            DecryptionFailure: wrong key, tampered or malformed input. An
                empty string is never returned in place of a failure.
        """
        try:
            blob = base64.urlsafe_b64decode(ciphertext.encode("ascii"))
        except (binascii.Error, ValueError, AttributeError) as e:
            raise DecryptionFailure() from e

        if len(blob) < _HEADER_SIZE + TAG_SIZE:
            raise DecryptionFailure()
        if blob[0] != FORMAT_VERSION:
            logger.warning("Unsupported ciphertext version %d", blob[0])
            raise DecryptionFailure()

        nonce = blob[1:_HEADER_SIZE]
        try:
            data = self._aead.decrypt(nonce, blob[_HEADER_SIZE:], None)
            return data.decode("utf-8")
        except (InvalidTag, UnicodeDecodeError) as e:
            raise DecryptionFailure() from e


@lru_cache()
def get_cipher() -> CipherService:
    """Process-wide cipher built from settings."""
    return CipherService(settings.ENCRYPTION_KEY)
