"""Line-oriented parsers for the text formats probes read."""

from __future__ import annotations

from typing import Iterable

from packaging.version import InvalidVersion, Version


def parse_key_value_lines(content: str, separator: str = "=", *, first_wins: bool = True) -> dict[str, str]:
    """Split ``key<sep>value`` lines into a mapping.

    Blank lines, ``#`` comments and lines without the separator are skipped.
    Values are trimmed and surrounding quotes removed. With ``first_wins``
    only the first occurrence of a key is kept, which matches files such as
    ``/proc/cpuinfo`` that repeat a block per processor.
    """

    values: dict[str, str] = {}
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or separator not in line:
            continue
        key, value = line.split(separator, 1)
        key = key.strip()
        if not key or (first_wins and key in values):
            continue
        values[key] = _unquote(value.strip())
    return values


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    return value


def leading_int(text: str) -> int | None:
    """Return the first whitespace-separated token as an int, if it is one."""

    tokens = text.split()
    if not tokens:
        return None
    try:
        return int(tokens[0].rstrip("."))
    except ValueError:
        return None


def version_token(token: str) -> str | None:
    """Return ``token`` trimmed to a version number, or None.

    Surrounding punctuation and a parenthesised suffix are dropped first,
    so ``5.2.21(1)-release`` yields ``5.2.21``.
    """

    candidate = token.strip(",;:[]()")
    candidate = candidate.split("(", 1)[0]
    if not candidate[:1].isdigit():
        return None
    try:
        Version(candidate)
    except InvalidVersion:
        return None
    return candidate


def last_version_token(tokens: Iterable[str]) -> str | None:
    for token in reversed(list(tokens)):
        version = version_token(token)
        if version is not None:
            return version
    return None
