# File Encryption Module
"""
File-level operations:
- Encrypt/decrypt a single file next to itself (.env <-> .env-encrypted)
- Scan a directory tree for marker files
"""

# Lazy imports to avoid RuntimeWarning when running modules directly
def __getattr__(name):
    """Resolve public names from the submodules on first access."""
    from . import file_crypto, scanner
    for module in (file_crypto, scanner):
        if hasattr(module, name):
            return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    'FileCrypto',
    'Mode',
    'encrypt_file',
    'decrypt_file',
    'encrypted_path',
    'decrypted_path',
    'scan',
    'ENCRYPTED_SUFFIX',
    'PLAINTEXT_MARKER',
    'ENCRYPTED_MARKER',
]
