"""Password hashing, fuzzy string scoring and console input helpers."""

from __future__ import annotations

import re
import sys
from typing import Iterable, Optional, TextIO

DEFAULT_CHOICE_PROMPT = "Enter choice (0 to exit/return): "
INVALID_INPUT = "Invalid input, please try again.\r\n"

_LEADING_INT = re.compile(r"-?\d+")
_INT32_MAX = 2**31 - 1


def rshash(text: str) -> int:
    """Return the 31-bit RS hash of ``text`` (bytes taken as signed chars)."""
    b = 378551
    a = 63689
    value = 0
    for byte in text.encode("utf-8"):
        char = byte - 256 if byte >= 128 else byte
        value = (value * a + char) & 0xFFFFFFFF
        a = (a * b) & 0xFFFFFFFF
    return value & 0x7FFFFFFF


def levenshtein(s1: str, s2: str) -> int:
    """Return the edit distance between two strings."""
    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, 1):
        current = [i]
        for j, c2 in enumerate(s2, 1):
            current.append(
                min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + (c1 != c2))
            )
        previous = current
    return previous[-1]


def weighted_string_score(s1: str, s2: str) -> float:
    """Return a similarity in [0, 1]: 1 minus the edit distance over the longer length."""
    max_len = max(len(s1), len(s2))
    if max_len == 0:
        return 1.0
    return 1.0 - levenshtein(s1, s2) / max_len


def _source(lines: Optional[Iterable[str]]) -> Iterable[str]:
    return sys.stdin if lines is None else lines


def collect_input_str(
    prompt: str,
    lines: Optional[Iterable[str]] = None,
    out: Optional[TextIO] = None,
) -> str:
    """Prompt until a non-empty line is read and return it.

    ``lines`` should be an iterator so that successive calls keep consuming it.
    Raises EOFError when input runs out.
    """
    out = sys.stdout if out is None else out
    out.write(f"{prompt}\r\n")
    for raw in _source(lines):
        choice = raw.rstrip("\r\n")
        if choice:
            return choice
        out.write(INVALID_INPUT + prompt)
    raise EOFError("input ended")


def collect_input_int(
    upper: int,
    prompt: str = DEFAULT_CHOICE_PROMPT,
    lines: Optional[Iterable[str]] = None,
    out: Optional[TextIO] = None,
) -> int:
    """Prompt until a line starting with an integer in [0, upper] is read.

    Trailing characters after the leading integer are ignored.
    Raises EOFError when input runs out.
    """
    out = sys.stdout if out is None else out
    out.write(prompt)
    for raw in _source(lines):
        choice = raw.rstrip("\r\n")
        match = _LEADING_INT.match(choice)
        if match:
            value = int(match.group())
            if 0 <= value <= upper and value <= _INT32_MAX:
                return value
        out.write(INVALID_INPUT + prompt)
    raise EOFError("input ended")