"""Encryption service port."""

from abc import ABC, abstractmethod


class IEncryptionService(ABC):
    """Symmetric encryption of stored secrets. Ciphertexts need not be stable."""

    @abstractmethod
    def encrypt(self, plaintext: str) -> str:
        pass

    @abstractmethod
    def decrypt(self, ciphertext: str) -> str:
        """
        Raises:
            EncryptionError: If the ciphertext is invalid or was made with another key
        """
        pass
