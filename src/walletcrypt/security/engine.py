"""Primitive crypto providers used by :class:`~walletcrypt.security.helper.CryptoHelper`.

The helper never touches a primitive directly; it only sequences calls to an
engine. ``CryptoEngine`` is the interface a provider must satisfy and
``CryptographyEngine`` is the default provider built on the ``cryptography``
package:

- random_bytes: os.urandom
- hmac: HMAC-SHA256 (32 byte output)
- encrypt/decrypt: AES-CBC with PKCS#7 padding
- pbkdf2: PBKDF2-HMAC-SHA256
- scrypt: standard scrypt

Every method except random_bytes must be deterministic for identical inputs.
"""
import abc
import hashlib
import hmac as _hmac
import os

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt


AES_BLOCK_BITS = 128


class CryptoEngine(abc.ABC):
    """Capability interface over the raw primitives."""

    @abc.abstractmethod
    def random_bytes(self, length: int) -> bytes:
        ...

    @abc.abstractmethod
    def hmac(self, data: bytes, key: bytes) -> bytes:
        ...

    @abc.abstractmethod
    def encrypt(self, data: bytes, key: bytes, iv: bytes) -> bytes:
        ...

    @abc.abstractmethod
    def decrypt(self, data: bytes, key: bytes, iv: bytes) -> bytes:
        ...

    @abc.abstractmethod
    def pbkdf2(self, password: bytes, salt: bytes, iterations: int, key_len: int) -> bytes:
        ...

    @abc.abstractmethod
    def scrypt(
        self,
        password: bytes,
        salt: bytes,
        iterations: int,
        block_size: int,
        parallelism: int,
        key_length: int,
    ) -> bytes:
        ...


class CryptographyEngine(CryptoEngine):
    def random_bytes(self, length: int) -> bytes:
        return os.urandom(length)

    def hmac(self, data: bytes, key: bytes) -> bytes:
        return _hmac.new(key, data, hashlib.sha256).digest()

    def encrypt(self, data: bytes, key: bytes, iv: bytes) -> bytes:
        padder = padding.PKCS7(AES_BLOCK_BITS).padder()
        padded = padder.update(data) + padder.finalize()
        encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        return encryptor.update(padded) + encryptor.finalize()

    def decrypt(self, data: bytes, key: bytes, iv: bytes) -> bytes:
        # raises ValueError on a partial block or malformed padding
        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(data) + decryptor.finalize()
        unpadder = padding.PKCS7(AES_BLOCK_BITS).unpadder()
        return unpadder.update(padded) + unpadder.finalize()

    def pbkdf2(self, password: bytes, salt: bytes, iterations: int, key_len: int) -> bytes:
        kdf = PBKDF2HMAC(algorithm=hashes.SHA256(), length=key_len, salt=salt, iterations=iterations)
        return kdf.derive(password)

    def scrypt(
        self,
        password: bytes,
        salt: bytes,
        iterations: int,
        block_size: int,
        parallelism: int,
        key_length: int,
    ) -> bytes:
        kdf = Scrypt(salt=salt, length=key_length, n=iterations, r=block_size, p=parallelism)
        return kdf.derive(password)
