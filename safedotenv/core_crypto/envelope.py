"""
Cipher Envelope

AES-256-CBC with PKCS#7 padding, stored as:

    [iv (16) | ciphertext (N * 16)]

There is no magic, version field or authentication tag. A wrong key or a
corrupted file is only detected when the decrypted padding is invalid, which
happens with high but not certain probability. Valid padding does not prove
the key was correct.
"""

import os
from dataclasses import dataclass

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.backends import default_backend

from .errors import MalformedEnvelope


# Constants
IV_SIZE = 16                # AES block-sized IV
BLOCK_SIZE = 16             # AES block size in bytes


@dataclass(frozen=True)
class Envelope:
    """Encrypted payload: random IV followed by block-aligned ciphertext."""
    iv: bytes
    ciphertext: bytes

    def to_bytes(self) -> bytes:
        """Serialize envelope to bytes."""
        return self.iv + self.ciphertext

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Envelope':
        """
        Split raw file content into IV and ciphertext.

        Raises:
            MalformedEnvelope: If data cannot hold an IV or the ciphertext
                is not a whole number of blocks
        """
        if len(data) < IV_SIZE:
            raise MalformedEnvelope(
                f"Envelope too short: {len(data)} bytes, need at least {IV_SIZE}"
            )

        ciphertext = data[IV_SIZE:]
        if len(ciphertext) % BLOCK_SIZE != 0:
            raise MalformedEnvelope(
                f"Ciphertext length {len(ciphertext)} is not a multiple of {BLOCK_SIZE}"
            )

        return cls(iv=data[:IV_SIZE], ciphertext=ciphertext)

    def __len__(self) -> int:
        return len(self.iv) + len(self.ciphertext)


def pad(data: bytes) -> bytes:
    """PKCS#7 pad to the AES block size (always adds 1..16 bytes)."""
    padder = padding.PKCS7(BLOCK_SIZE * 8).padder()
    return padder.update(data) + padder.finalize()


def unpad(data: bytes) -> bytes:
    """
    Strip PKCS#7 padding.

    Raises:
        MalformedEnvelope: If the pad length byte exceeds the data length
            or the padding bytes are inconsistent
    """
    if not data:
        raise MalformedEnvelope("Nothing to unpad: decrypted data is empty")

    pad_len = data[-1]
    if pad_len > len(data):
        raise MalformedEnvelope(
            f"Invalid padding: pad length {pad_len} exceeds data length {len(data)}"
        )

    unpadder = padding.PKCS7(BLOCK_SIZE * 8).unpadder()
    try:
        return unpadder.update(data) + unpadder.finalize()
    except ValueError as e:
        raise MalformedEnvelope("Invalid padding (corrupt data or wrong key)") from e


def _cipher(key: bytes, iv: bytes) -> Cipher:
    return Cipher(algorithms.AES(key), modes.CBC(iv), backend=default_backend())


def encrypt(plaintext: bytes, key: bytes) -> Envelope:
    """
    Encrypt plaintext under a fresh random IV.

    Args:
        plaintext: Data to encrypt (any length, including empty)
        key: 32-byte derived key

    Returns:
        Envelope holding the IV and ciphertext
    """
    iv = os.urandom(IV_SIZE)
    encryptor = _cipher(key, iv).encryptor()
    ciphertext = encryptor.update(pad(plaintext)) + encryptor.finalize()
    return Envelope(iv=iv, ciphertext=ciphertext)


def decrypt(data: bytes, key: bytes) -> bytes:
    """
    Decrypt raw envelope bytes.

    Args:
        data: iv || ciphertext, as read from disk
        key: 32-byte derived key

    Returns:
        Original plaintext

    Raises:
        MalformedEnvelope: If the envelope is short, misaligned or its
            padding is invalid
    """
    envelope = Envelope.from_bytes(data)
    decryptor = _cipher(key, envelope.iv).decryptor()
    padded = decryptor.update(envelope.ciphertext) + decryptor.finalize()
    return unpad(padded)
