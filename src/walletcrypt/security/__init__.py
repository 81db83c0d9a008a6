"""Security helpers: primitive engines and the authenticated encryption helper.

This package provides:
- a CryptoEngine interface and the default ``cryptography`` based engine
- CryptoHelper: scrypt/HKDF key derivation, AES-CBC + HMAC-SHA256
  encrypt-then-MAC, constant-time comparison and BIP-39 mnemonics
"""

from .engine import CryptoEngine, CryptographyEngine
from .helper import CryptoHelper

__all__ = [
    "CryptoEngine",
    "CryptographyEngine",
    "CryptoHelper",
]
