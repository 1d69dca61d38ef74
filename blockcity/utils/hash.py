"""
Seed derivation helpers.

Sub-seeds are taken from a SHA-256 digest so they are stable across Python
versions and platforms (unlike ``hash()``, which is salted per process).
"""

from __future__ import annotations

import hashlib

from blockcity.constants import MAX_SEED


def derive_seed(seed: int, salt: str) -> int:
    """
    Derive an independent 64-bit seed from *seed* and a textual *salt*.

    Parameters
    ----------
    seed : int
        Parent seed.
    salt : str
        Purpose label, e.g. ``"zoning-noise"``.

    Returns
    -------
    int
        Integer in ``[0, 2**64)``.
    """
    digest = hashlib.sha256(f"{seed}:{salt}".encode("utf-8")).hexdigest()
    return int(digest[:16], 16) % MAX_SEED


def block_seed(seed: int, bx: int, bz: int) -> int:
    """Seed of the private RNG stream used by block ``(bx, bz)``."""
    return derive_seed(seed, f"block:{bx}:{bz}")
