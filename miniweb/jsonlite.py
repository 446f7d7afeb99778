"""A minimal JSON object builder and a flat, one-level key/value parser."""

from __future__ import annotations

DEFAULT_MAX_PAIRS = 10


class JsonBuilder:
    """Builds a JSON object text by appending members in order.

    Keys and string values are written verbatim, without escaping.
    """

    def __init__(self) -> None:
        self._parts: list[str] = ["{"]

    def _last_char(self) -> str:
        return self._parts[-1][-1]

    def _add_comma(self) -> None:
        if len(self._parts) > 1 and self._last_char() not in "{[":
            self._parts.append(",")

    def add_string(self, key: str, value: str) -> None:
        """Append ``"key":"value"``."""
        self._add_comma()
        self._parts.append(f'"{key}":"{value}"')

    def add_number(self, key: str, value: int) -> None:
        """Append ``"key":value`` with ``value`` written as an integer."""
        self._add_comma()
        self._parts.append(f'"{key}":{int(value)}')

    def add_bool(self, key: str, value: bool) -> None:
        """Append ``"key":true`` or ``"key":false``."""
        self._add_comma()
        self._parts.append(f'"{key}":{"true" if value else "false"}')

    def start_array(self, key: str) -> None:
        """Open an array member named ``key``."""
        self._add_comma()
        self._parts.append(f'"{key}":[')

    def end_array(self) -> None:
        """Close the most recently opened array."""
        self._parts.append("]")

    def to_string(self) -> str:
        """Return the finished object text."""
        return "".join(self._parts) + "}"

    def __str__(self) -> str:
        return self.to_string()


def parse_simple(text: str, max_pairs: int = DEFAULT_MAX_PAIRS) -> list[tuple[str, str]]:
    """Split a flat JSON object into at most ``max_pairs`` ``(key, value)`` strings.

    Members are separated at every comma and split at the first colon; spaces
    and double quotes around keys and values are dropped. Text without both a
    ``{`` and a ``}`` yields no pairs.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start < 0 or end < 0:
        return []
    body = text[start + 1 : end] if end > start else text[start + 1 :]

    pairs: list[tuple[str, str]] = []
    for token in filter(None, body.split(",")):
        if len(pairs) >= max_pairs:
            break
        key, colon, value = token.partition(":")
        if not colon:
            continue
        pairs.append((key.strip(' "'), value.strip(' "')))
    return pairs


def get_value(pairs: list[tuple[str, str]], key: str) -> str | None:
    """Return the value of the first pair named ``key``, or ``None``."""
    return next((value for name, value in pairs if name == key), None)