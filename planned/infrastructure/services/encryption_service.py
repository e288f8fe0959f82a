"""
Encryption of stored integration secrets.

API keys and OAuth tokens are encrypted with Fernet (AES-128-CBC + HMAC)
using a key derived from the configured master secret, so the database never
holds plaintext credentials.
"""

import base64

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ...application.ports.encryption_service import IEncryptionService
from ...core.config import settings
from ...core.observability import get_logger
from ...domain.shared.exceptions import EncryptionError

logger = get_logger(__name__)

_KDF_ITERATIONS = 100_000


class FernetEncryptionService(IEncryptionService):
    """Fernet-based implementation of the encryption port."""

    def __init__(self, master_key: str | None = None, salt: str | None = None):
        """
        Initialize the service.

        Args:
            master_key: Secret the encryption key is derived from
            salt: KDF salt; changing it invalidates every stored ciphertext
        """
        master_key = master_key or settings.ENCRYPTION_KEY
        if not master_key:
            raise EncryptionError("Encryption key is not configured")

        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=(salt or settings.ENCRYPTION_SALT).encode(),
            iterations=_KDF_ITERATIONS,
        )
        derived_key = base64.urlsafe_b64encode(kdf.derive(master_key.encode()))
        self._cipher = Fernet(derived_key)

    def encrypt(self, plaintext: str) -> str:
        return self._cipher.encrypt(plaintext.encode()).decode()

    def decrypt(self, ciphertext: str) -> str:
        try:
            return self._cipher.decrypt(ciphertext.encode()).decode()
        except InvalidToken as e:
            logger.error("Failed to decrypt stored secret")
            raise EncryptionError("Failed to decrypt value") from e
