"""Password-derived, authenticated symmetric encryption on top of a CryptoEngine.

The helper composes engine primitives into:

- key derivation: scrypt(password, email) -> master key, then HKDF-expand
  into separate "enc" and "mac" keys and a PBKDF2 hash key
- encrypt-then-MAC: AES-CBC under enc_key, HMAC-SHA256 over iv || data
- MAC verification with double-HMAC comparison before any decryption

It holds no state besides the engine reference, so one instance can be shared.
"""
from __future__ import annotations

import logging
import math

from mnemonic import Mnemonic

from walletcrypt.core.encoding import from_b64, from_utf8, to_bytes
from walletcrypt.core.exceptions import AuthenticationFailedError, InvalidArgumentError
from walletcrypt.core.models import CipherString, EncryptedObject, SymmetricCryptoKey
from .engine import CryptoEngine


logger = logging.getLogger(__name__)

IV_LENGTH = 16
# SHA-256 output size, the HKDF HashLen
HASH_LENGTH = 32
KEY_LENGTH = 32
COMPARE_KEY_LENGTH = 32

# The same email/password must always produce the same key on every platform,
# so these are fixed and never taken from callers.
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1

HKDF_ENC_INFO = b"enc"
HKDF_MAC_INFO = b"mac"

MNEMONIC_LANGUAGE = "english"

_ENGINE_METHODS = ("random_bytes", "hmac", "encrypt", "decrypt", "pbkdf2", "scrypt")


def _require_bytes(value, name: str) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)) or not len(value):
        raise InvalidArgumentError(f"Required parameter [{name}] was not provided or is not a bytes object")
    return bytes(value)


def _require_key(key) -> SymmetricCryptoKey:
    if not isinstance(key, SymmetricCryptoKey) or not key.enc_key or not key.mac_key:
        raise InvalidArgumentError("Required parameter [key] was not provided or is not a SymmetricCryptoKey")
    return key


class CryptoHelper:
    def __init__(self, engine: CryptoEngine):
        if engine is None or not all(callable(getattr(engine, name, None)) for name in _ENGINE_METHODS):
            raise InvalidArgumentError("Missing cryptography engine")
        self._engine = engine

    def compare(self, a: bytes, b: bytes) -> bool:
        """Compare two buffers without leaking where they first differ.

        Both values are MAC'd under a fresh random key and the fixed-length MACs
        are compared byte by byte without an early exit (double HMAC verification).
        Differing MAC lengths are not secret and short-circuit to False.
        """
        mac_key = self._engine.random_bytes(COMPARE_KEY_LENGTH)

        mac1 = self._engine.hmac(a, mac_key)
        mac2 = self._engine.hmac(b, mac_key)

        if len(mac1) != len(mac2):
            return False

        diff = 0
        for x, y in zip(mac1, mac2):
            diff |= x ^ y
        return diff == 0

    def aes_encrypt(self, data: bytes, key: SymmetricCryptoKey) -> EncryptedObject:
        data = _require_bytes(data, "data")
        key = _require_key(key)

        iv = self._engine.random_bytes(IV_LENGTH)
        ct = self._engine.encrypt(data, key.enc_key, iv)
        mac = self._engine.hmac(iv + ct, key.mac_key)
        logger.debug("aes_encrypt: %d plaintext bytes -> %d ciphertext bytes", len(data), len(ct))

        return EncryptedObject(iv=iv, data=ct, mac=mac, key=key)

    def aes_decrypt(self, data: bytes, iv: bytes, mac: bytes, key: SymmetricCryptoKey) -> bytes:
        """Verify ``mac`` over ``iv || data`` and only then decrypt.

        Raises:
            InvalidArgumentError: an input is missing or empty
            AuthenticationFailedError: the MAC does not match
        """
        data = _require_bytes(data, "data")
        iv = _require_bytes(iv, "iv")
        mac = _require_bytes(mac, "mac")
        key = _require_key(key)

        computed = self._engine.hmac(iv + data, key.mac_key)
        if not self.compare(mac, computed):
            logger.warning("aes_decrypt: MAC verification failed for %d byte payload", len(data))
            raise AuthenticationFailedError("HMAC signature is not valid or data has been tampered with")

        return self._engine.decrypt(data, key.enc_key, iv)

    def hkdf_expand(self, prk: bytes, info: str | bytes, size: int) -> bytes:
        """RFC 5869 HKDF-Expand with HMAC-SHA256 (no extract step).

        T(0) = empty, T(i) = HMAC(T(i-1) || info || i, prk); the blocks are
        concatenated and truncated to ``size`` bytes.
        """
        if not isinstance(size, int) or size < 0 or size > 255 * HASH_LENGTH:
            raise InvalidArgumentError(f"Invalid HKDF output size: {size!r}")
        info = to_bytes(info)

        okm = bytearray()
        previous = b""
        for i in range(math.ceil(size / HASH_LENGTH)):
            previous = self._engine.hmac(previous + info + bytes([i + 1]), prk)
            okm += previous
        return bytes(okm[:size])

    def pbkdf2(self, password: str | bytes, salt: str | bytes, iterations: int) -> bytes:
        return self._engine.pbkdf2(to_bytes(password), to_bytes(salt), iterations=iterations, key_len=KEY_LENGTH)

    def make_key(self, password: str, email: str) -> SymmetricCryptoKey:
        """Derive the key bundle for ``(password, email)``.

        The master key is scrypt(password, salt=email) with fixed parameters; the
        hash key is a single PBKDF2 round of the master key salted with the
        password, and the enc/mac keys are HKDF expansions of the master key.
        """
        if not (password and email and isinstance(password, str) and isinstance(email, str)):
            raise InvalidArgumentError("A password and email are required to make a symmetric crypto key.")

        master_key = self._engine.scrypt(
            to_bytes(password),
            to_bytes(email),
            iterations=SCRYPT_N,
            block_size=SCRYPT_R,
            parallelism=SCRYPT_P,
            key_length=KEY_LENGTH,
        )
        hash_key = self.pbkdf2(master_key, password, 1)
        enc_key = self.hkdf_expand(master_key, HKDF_ENC_INFO, KEY_LENGTH)
        mac_key = self.hkdf_expand(master_key, HKDF_MAC_INFO, KEY_LENGTH)
        logger.debug("make_key: derived key bundle")

        return SymmetricCryptoKey(hash_key=hash_key, enc_key=enc_key, mac_key=mac_key)

    def encrypt(self, plaintext: str | bytes, key: SymmetricCryptoKey) -> CipherString:
        """Encrypt text (UTF-8) or bytes and return the base64 CipherString."""
        obj = self.aes_encrypt(to_bytes(plaintext), key)
        return CipherString.from_encrypted_object(obj)

    def decrypt(self, cipher_string: CipherString, key: SymmetricCryptoKey) -> str:
        if not isinstance(cipher_string, CipherString):
            raise InvalidArgumentError("Required parameter [cipher_string] was not provided or is not a CipherString")
        data = from_b64(cipher_string.data)
        iv = from_b64(cipher_string.iv)
        mac = from_b64(cipher_string.mac)
        plaintext = self.aes_decrypt(data, iv, mac, key)
        return from_utf8(plaintext)

    def generate_mnemonic(self, strength: int = 128) -> str:
        # entropy comes from the engine so a custom randomness source is honoured
        entropy = self._engine.random_bytes(strength // 8)
        return Mnemonic(MNEMONIC_LANGUAGE).to_mnemonic(entropy)
