"""Canonical form for free-text schedule descriptions."""

import re

_REWRITES = [
    (re.compile(r"o'clock"), ""),
    (re.compile(r"every single"), "every"),
    (re.compile(r"each and every"), "every"),
    (re.compile(r"(\d)(am|pm)"), r"\1 \2"),
]


def _rewrite(text: str) -> str:
    text = text.lower()
    for pattern, repl in _REWRITES:
        text = pattern.sub(repl, text)
    return " ".join(text.split())


def normalize(text: str) -> str:
    # Removals can bring new matches together ("9o'clockam"), so rewrite to a fixed point.
    result = _rewrite(text)
    while True:
        again = _rewrite(result)
        if again == result:
            return result
        result = again
