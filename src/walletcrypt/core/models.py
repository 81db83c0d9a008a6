"""
Value objects passed between the crypto helper and its callers
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .encoding import from_b64, to_b64
from .exceptions import InvalidArgumentError


@dataclass(frozen=True)
class SymmetricCryptoKey:
    """
    Key bundle derived from a user's credentials.

    ``hash_key`` only proves knowledge of the master key (e.g. for server side
    password verification); ``enc_key`` and ``mac_key`` are the AES and HMAC keys.
    """

    hash_key: Optional[bytes]
    enc_key: Optional[bytes]
    mac_key: Optional[bytes]

    def __repr__(self):
        # never print key material
        return "SymmetricCryptoKey(<redacted>)"

    def to_dict(self) -> Dict[str, Optional[str]]:
        """
            Convert to dict of base64 strings
        """
        return {
            "hash_key": to_b64(self.hash_key) if self.hash_key is not None else None,
            "enc_key": to_b64(self.enc_key) if self.enc_key is not None else None,
            "mac_key": to_b64(self.mac_key) if self.mac_key is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SymmetricCryptoKey":
        """
            Rebuild a key bundle from the output of to_dict()
        """
        if not isinstance(data, dict):
            raise InvalidArgumentError("Key bundle must be a mapping of base64 fields")

        def _field(name):
            value = data.get(name)
            if value is None:
                return None
            if not isinstance(value, str) or not value:
                raise InvalidArgumentError(f"Key bundle field [{name}] must be a non-empty base64 string")
            return from_b64(value)

        return cls(
            hash_key=_field("hash_key"),
            enc_key=_field("enc_key"),
            mac_key=_field("mac_key"),
        )


@dataclass(frozen=True)
class EncryptedObject:
    """A single ciphertext unit; ``mac`` covers ``iv || data``."""

    iv: bytes
    data: bytes
    mac: bytes
    # held by reference only, never serialized
    key: SymmetricCryptoKey = field(repr=False, compare=False)


@dataclass(frozen=True)
class CipherString:
    """Transport form of an EncryptedObject: base64 ``data``, ``iv`` and ``mac``."""

    data: str
    iv: str
    mac: str

    @classmethod
    def from_encrypted_object(cls, obj: EncryptedObject) -> "CipherString":
        return cls(data=to_b64(obj.data), iv=to_b64(obj.iv), mac=to_b64(obj.mac))

    def to_dict(self) -> Dict[str, str]:
        return {"data": self.data, "iv": self.iv, "mac": self.mac}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CipherString":
        if not isinstance(data, dict):
            raise InvalidArgumentError("CipherString must be a mapping with data, iv and mac")
        missing = [name for name in ("data", "iv", "mac") if not data.get(name)]
        if missing:
            raise InvalidArgumentError(f"CipherString is missing field(s): {', '.join(missing)}")
        wrong = [name for name in ("data", "iv", "mac") if not isinstance(data[name], str)]
        if wrong:
            raise InvalidArgumentError(f"CipherString field(s) must be base64 strings: {', '.join(wrong)}")
        return cls(data=data["data"], iv=data["iv"], mac=data["mac"])
