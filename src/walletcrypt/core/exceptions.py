"""
Exceptions for walletcrypt
Everything derives from WalletCryptError so callers have a general error catcher
"""


class WalletCryptError(Exception):
    # general container for errors
    pass


class InvalidArgumentError(WalletCryptError, ValueError):
    # raised when an input is missing, empty or has the wrong shape
    pass


class AuthenticationFailedError(WalletCryptError):
    # raised on a MAC mismatch (tampered or corrupt ciphertext)
    pass
