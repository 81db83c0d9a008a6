"""Lightweight logging setup for the command line tool."""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "WALLETCRYPT_LOG_LEVEL"


def configure_logging(level: int | None = None) -> None:
    # Configure root logger once; logs go to stderr so stdout stays machine readable.
    if level is None:
        level = logging.getLevelName(os.getenv(LOG_LEVEL_ENV, "WARNING").upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
