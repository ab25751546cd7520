"""Seed handling for reproducible runs."""

import time


def clock_seed() -> int:
    """Derive a seed from the wall clock.

    Initializers never fall back to this on their own; callers that want a
    non-reproducible run ask for it explicitly and should report the value.

    Returns:
        Non-negative 32-bit seed
    """
    return time.time_ns() % (2 ** 32)
