"""
Exception types raised by safedotenv.

Per-file errors (MalformedEnvelope, OSError) are captured by the batch
processor; KeyDerivationFailure and ScanError abort a run.
"""


class SafeDotenvError(Exception):
    """Base class for safedotenv errors."""
    pass


class MalformedEnvelope(SafeDotenvError, ValueError):
    """Raised when encrypted data is too short, misaligned or badly padded."""
    pass


class KeyDerivationFailure(SafeDotenvError, ValueError):
    """Raised when a key cannot be derived from the given passphrase."""
    pass


class ScanError(SafeDotenvError, OSError):
    """Raised when a directory in the scanned tree cannot be listed."""

    def __init__(self, directory: str, cause: OSError):
        super().__init__(f"cannot read directory {directory}: {cause}")
        self.directory = directory
        self.cause = cause
