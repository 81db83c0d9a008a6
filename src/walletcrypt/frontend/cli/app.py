"""
Command line interface for walletcrypt.

Derive keys, encrypt/decrypt text and generate recovery phrases:

    walletcrypt make-key --email user@example.com
    walletcrypt encrypt --email user@example.com "hello world"
    walletcrypt decrypt --email user@example.com '{"data": "...", "iv": "...", "mac": "..."}'
    walletcrypt decrypt --key "$(walletcrypt make-key --email user@example.com)" '{"data": ...}'
    walletcrypt mnemonic --strength 256

The password is read from WALLETCRYPT_PASSWORD or prompted for.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from walletcrypt.core.exceptions import WalletCryptError
from walletcrypt.core.models import CipherString, SymmetricCryptoKey
from .context import build_context
from .logging_config import configure_logging


logger = logging.getLogger(__name__)


def _load_json_object(text: str, what: str) -> dict:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise WalletCryptError(f"{what} is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise WalletCryptError(f"{what} must be a JSON object")
    return payload


def _resolve_key(args: argparse.Namespace):
    # A key bundle from `make-key` skips the scrypt derivation and the password prompt.
    if args.key:
        ctx = build_context(need_credentials=False)
        return ctx, SymmetricCryptoKey.from_dict(_load_json_object(args.key, "key bundle"))
    ctx = build_context(args.email)
    return ctx, ctx.helper.make_key(ctx.password, ctx.email)


def _cmd_make_key(args: argparse.Namespace) -> str:
    ctx = build_context(args.email)
    key = ctx.helper.make_key(ctx.password, ctx.email)
    return json.dumps(key.to_dict())


def _cmd_encrypt(args: argparse.Namespace) -> str:
    ctx, key = _resolve_key(args)
    cipher_string = ctx.helper.encrypt(args.text, key)
    return json.dumps(cipher_string.to_dict())


def _cmd_decrypt(args: argparse.Namespace) -> str:
    cipher_string = CipherString.from_dict(_load_json_object(args.cipher_string, "cipher string"))
    ctx, key = _resolve_key(args)
    return ctx.helper.decrypt(cipher_string, key)


def _cmd_mnemonic(args: argparse.Namespace) -> str:
    ctx = build_context(need_credentials=False)
    return ctx.helper.generate_mnemonic(args.strength)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="walletcrypt",
        description="Password-derived authenticated encryption.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    make_key = sub.add_parser("make-key", help="Derive and print the key bundle (base64 JSON)")
    make_key.add_argument("--email", default=None, help="Account email, used as the scrypt salt")
    make_key.set_defaults(func=_cmd_make_key)

    encrypt = sub.add_parser("encrypt", help="Encrypt text and print the cipher string JSON")
    encrypt.add_argument("--email", default=None, help="Account email, used as the scrypt salt")
    encrypt.add_argument("--key", default=None, help="Key bundle JSON from make-key, used instead of the password")
    encrypt.add_argument("text", help="Plaintext to encrypt")
    encrypt.set_defaults(func=_cmd_encrypt)

    decrypt = sub.add_parser("decrypt", help="Decrypt a cipher string JSON and print the text")
    decrypt.add_argument("--email", default=None, help="Account email, used as the scrypt salt")
    decrypt.add_argument("--key", default=None, help="Key bundle JSON from make-key, used instead of the password")
    decrypt.add_argument("cipher_string", help='JSON object with "data", "iv" and "mac"')
    decrypt.set_defaults(func=_cmd_decrypt)

    mnemonic = sub.add_parser("mnemonic", help="Generate a BIP-39 recovery phrase")
    mnemonic.add_argument(
        "--strength",
        type=int,
        default=128,
        choices=(128, 160, 192, 224, 256),
        help="Entropy in bits (default: 128, i.e. 12 words)",
    )
    mnemonic.set_defaults(func=_cmd_mnemonic)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else None)

    try:
        output = args.func(args)
    except (WalletCryptError, ValueError) as e:
        # ValueError covers engine failures such as bad padding or key sizes
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
