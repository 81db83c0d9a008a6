"""Small helper to build the runtime context for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import getpass
import os

from walletcrypt.core.exceptions import InvalidArgumentError
from walletcrypt.security import CryptoHelper, CryptographyEngine

PASSWORD_ENV = "WALLETCRYPT_PASSWORD"
EMAIL_ENV = "WALLETCRYPT_EMAIL"


@dataclass
class AppContext:
    """Container for the objects a command needs."""

    helper: CryptoHelper
    email: Optional[str] = None
    password: Optional[str] = None


def build_context(email: Optional[str] = None, need_credentials: bool = True) -> AppContext:
    """
    Build the helper and, if needed, resolve the credentials.

    - The email comes from ``email`` or the ``WALLETCRYPT_EMAIL`` environment variable.
    - The password comes from ``WALLETCRYPT_PASSWORD`` so scripts can run
      non-interactively; otherwise the user is prompted with :func:`getpass.getpass`.
    """
    helper = CryptoHelper(CryptographyEngine())
    if not need_credentials:
        return AppContext(helper=helper)

    email = email or os.getenv(EMAIL_ENV)
    if not email:
        raise InvalidArgumentError(f"An email is required (use --email or set {EMAIL_ENV})")

    password = os.getenv(PASSWORD_ENV)
    if not password:
        password = getpass.getpass("Password: ")

    return AppContext(helper=helper, email=email, password=password)
