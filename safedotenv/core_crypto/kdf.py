"""
Passphrase Key Derivation

Turns a user passphrase into a 32-byte AES-256 key using PBKDF2-HMAC-SHA256.

The salt and iteration count are fixed constants so that every machine
derives the same key from the same passphrase. Existing .env-encrypted files
depend on these values; changing them makes those files undecryptable.

Known limitation: a fixed, public salt gives no per-installation uniqueness
and allows precomputation against common passphrases.
"""

from typing import Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.backends import default_backend

from .errors import KeyDerivationFailure


# PBKDF2 configuration
PBKDF2_SALT = b"somesalt"
PBKDF2_ITERATIONS = 4096
KEY_SIZE = 32               # 256-bit keys


def derive_key(passphrase: Union[str, bytes],
               iterations: int = PBKDF2_ITERATIONS) -> bytes:
    """
    Derive the encryption key from a passphrase.

    Args:
        passphrase: User passphrase (str is encoded as UTF-8)
        iterations: PBKDF2 iterations

    Returns:
        32-byte derived key

    Raises:
        KeyDerivationFailure: If the passphrase is empty or not text/bytes
    """
    if isinstance(passphrase, str):
        secret = passphrase.encode('utf-8')
    elif isinstance(passphrase, (bytes, bytearray)):
        secret = bytes(passphrase)
    else:
        raise KeyDerivationFailure(
            f"Passphrase must be str or bytes, not {type(passphrase).__name__}"
        )

    if not secret:
        raise KeyDerivationFailure("Passphrase must not be empty")

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=PBKDF2_SALT,
        iterations=iterations,
        backend=default_backend()
    )
    return kdf.derive(secret)
