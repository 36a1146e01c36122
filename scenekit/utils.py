"""Small helpers shared by the scene loader and the game loop."""

from __future__ import annotations

import time

__all__ = ["split", "monotonic_ms"]


def split(line: str, delimiter: str = "\t") -> list[str]:
    """Split ``line`` on ``delimiter``, keeping empty fields.

    After each match the scan resumes one character further on, so with
    single-character delimiters this behaves like :meth:`str.split`.
    """
    tokens: list[str] = []
    start = 0
    while (found := line.find(delimiter, start)) != -1:
        tokens.append(line[start:found])
        start = found + 1
    tokens.append(line[start:])
    return tokens


def monotonic_ms() -> int:
    """Milliseconds from a monotonic clock, as a whole number."""
    return time.monotonic_ns() // 1_000_000