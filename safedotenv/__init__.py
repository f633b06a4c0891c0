# safedotenv
"""
Encrypt and decrypt .env files across a directory tree with a
passphrase-derived AES-256 key.
"""

__version__ = "0.1.0"
