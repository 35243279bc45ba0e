"""Filename pattern matching with ``*`` and ``?``."""

import os

# Markers that stand in for quote characters once quotes have been paired.
SINGLE_QUOTE = "\x01"
DOUBLE_QUOTE = "\x02"
QUOTE_MARKS = SINGLE_QUOTE + DOUBLE_QUOTE


def _match(pattern, p, name, s, quote):
    while p < len(pattern) and s < len(name):
        char = pattern[p]
        if char in QUOTE_MARKS and (char == quote or not quote):
            quote = "" if quote else char
            p += 1
        elif char == "*" and not quote:
            return _match_star(pattern, p, name, s)
        elif char == "?" or char == name[s]:
            p += 1
            s += 1
        else:
            return False
    return not pattern[p:].lstrip("*") and s == len(name)


def _match_star(pattern, p, name, s):
    while p < len(pattern) and pattern[p] == "*":
        p += 1
    if p == len(pattern):
        return True
    return any(_match(pattern, p, name, start, "") for start in range(s, len(name) + 1))


def match_pattern(pattern, name):
    """Tell whether ``name`` matches ``pattern``; quoted ``*`` is literal."""
    return _match(pattern, 0, name, 0, "")


def contains_wildcard(pattern):
    """Tell whether ``pattern`` holds an unquoted ``*`` or ``?``."""
    quote = ""
    for char in pattern:
        if char in QUOTE_MARKS and (char == quote or not quote):
            quote = "" if quote else char
        elif char in "*?":
            return True
    return False


def expand_wildcard(pattern, directory="."):
    """Return the sorted names in ``directory`` matching ``pattern``, or ``[pattern]``."""
    if not contains_wildcard(pattern):
        return [pattern]
    candidates = [".", "..", *os.listdir(directory)]
    matches = [
        name
        for name in candidates
        if not (name.startswith(".") and not pattern.startswith("."))
        and match_pattern(pattern, name)
    ]
    if not matches:
        return [pattern]
    return sorted(matches)