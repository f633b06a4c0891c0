# Core Cryptography Module
"""
Core cryptographic building blocks:
- PBKDF2 passphrase key derivation
- AES-256-CBC envelope with PKCS#7 padding
- Error types
"""
