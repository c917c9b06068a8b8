"""
random_source.py — Secure random secret generation.

The random source is any callable `(nbytes) -> bytes`; os.urandom (CSPRNG)
by default. Tests inject deterministic or failing sources.
"""

import logging
import os
from typing import Callable

from .errors import RandomSourceError

logger = logging.getLogger(__name__)

RandomSource = Callable[[int], bytes]


def draw_secret(nbytes: int, random_source: RandomSource = os.urandom) -> bytes:
    """
    Draw `nbytes` bytes from the random source.

    Raises:
        RandomSourceError: the source failed or returned a short read.
            Never falls back to a weaker source.
    """
    try:
        raw = random_source(nbytes)
    except (OSError, NotImplementedError) as e:
        raise RandomSourceError(f"Random source failed while drawing {nbytes} bytes") from e

    if not isinstance(raw, (bytes, bytearray)) or len(raw) != nbytes:
        got = len(raw) if isinstance(raw, (bytes, bytearray)) else type(raw).__name__
        raise RandomSourceError(f"Random source returned {got}, expected {nbytes} bytes")

    logger.debug("Drew %d-bit secret from random source", nbytes * 8)
    return bytes(raw)
