"""
File Encryption Module

Applies the cipher envelope to whole files, following the naming convention

    .env  <->  .env-encrypted

Encryption writes PATH + "-encrypted"; decryption writes PATH with the
suffix stripped. Source files are never modified or removed. Files are read
fully into memory.
"""

import logging
from enum import Enum
from pathlib import Path

from ..core_crypto import envelope


logger = logging.getLogger(__name__)

# Naming convention
ENCRYPTED_SUFFIX = "-encrypted"
PLAINTEXT_MARKER = ".env"
ENCRYPTED_MARKER = PLAINTEXT_MARKER + ENCRYPTED_SUFFIX


class Mode(Enum):
    """Direction of a run."""
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"

    @property
    def marker(self) -> str:
        """Filename the scanner collects for this mode."""
        return PLAINTEXT_MARKER if self is Mode.ENCRYPT else ENCRYPTED_MARKER


def encrypted_path(path: str) -> str:
    """Output path for encrypting PATH."""
    return path + ENCRYPTED_SUFFIX


def decrypted_path(path: str) -> str:
    """
    Output path for decrypting PATH.

    Raises:
        ValueError: If PATH does not end with the encrypted suffix
    """
    if not path.endswith(ENCRYPTED_SUFFIX):
        raise ValueError(f"{path} does not end with '{ENCRYPTED_SUFFIX}'")
    return path[:-len(ENCRYPTED_SUFFIX)]


def encrypt_file(path: str, key: bytes) -> str:
    """
    Encrypt a file next to itself.

    Args:
        path: Plaintext file
        key: 32-byte derived key

    Returns:
        Path of the written .env-encrypted file
    """
    output_path = encrypted_path(path)
    plaintext = Path(path).read_bytes()
    sealed = envelope.encrypt(plaintext, key)
    Path(output_path).write_bytes(sealed.to_bytes())
    logger.debug("Encrypted %s -> %s (%d bytes)", path, output_path, len(sealed))
    return output_path


def decrypt_file(path: str, key: bytes) -> str:
    """
    Decrypt an encrypted file next to itself.

    Args:
        path: File ending in -encrypted
        key: 32-byte derived key

    Returns:
        Path of the written plaintext file

    Raises:
        MalformedEnvelope: If the content is not a valid envelope for KEY
        OSError: If the file cannot be read or the output written
    """
    output_path = decrypted_path(path)
    data = Path(path).read_bytes()
    plaintext = envelope.decrypt(data, key)
    Path(output_path).write_bytes(plaintext)
    logger.debug("Decrypted %s -> %s (%d bytes)", path, output_path, len(plaintext))
    return output_path


class FileCrypto:
    """
    Encrypts or decrypts single files with a bound key.

    Example:
        >>> crypto = FileCrypto(derive_key("passphrase"))
        >>> crypto.process("project/.env", Mode.ENCRYPT)
        'project/.env-encrypted'
    """

    def __init__(self, key: bytes):
        """
        Args:
            key: 32-byte key from derive_key()
        """
        self._key = key

    def encrypt_file(self, path: str) -> str:
        return encrypt_file(path, self._key)

    def decrypt_file(self, path: str) -> str:
        return decrypt_file(path, self._key)

    def process(self, path: str, mode: Mode) -> str:
        """Apply MODE to PATH and return the output path."""
        if mode is Mode.ENCRYPT:
            return self.encrypt_file(path)
        return self.decrypt_file(path)
