"""Typed, case-insensitive access to a nested configuration mapping."""

from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal
from typing import Any, Mapping, Optional

_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}

_UNIT_NS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60_000_000_000,
    "h": 3_600_000_000_000,
}
_DUR_PART = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_ZERO_DECIMAL = re.compile(r"^([+-]?\d+)\.0*$")
_OCTAL = re.compile(r"^[+-]?0[0-7_]+$")


def _normalize(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k).lower(): _normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    return value


def _to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return ""


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        s = value.strip()
        zero = _ZERO_DECIMAL.match(s)
        if zero:
            s = zero.group(1)
        try:
            if _OCTAL.match(s):
                return int(s, 8)
            return int(s, 0)
        except ValueError:
            return 0
    return 0


def _to_float(value: Any) -> float:
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return 0.0
    return 0.0


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip() in _TRUE
    return False


def _parse_duration(text: str) -> Optional[timedelta]:
    s = text.strip()
    sign = 1
    if s[:1] in ("+", "-"):
        sign = -1 if s[0] == "-" else 1
        s = s[1:]
    if s == "0":
        return timedelta(0)
    if not s:
        return None
    total = Decimal(0)
    pos = 0
    while pos < len(s):
        match = _DUR_PART.match(s, pos)
        if not match:
            return None
        total += Decimal(match.group(1)) * _UNIT_NS[match.group(2)]
        pos = match.end()
    return timedelta(microseconds=float(sign * total / 1000))


def _to_duration(value: Any) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        return timedelta(0)
    if isinstance(value, (int, float)):
        return timedelta(microseconds=value / 1000)
    if isinstance(value, str):
        s = value if any(ch in value for ch in "nsuµmh") else value + "ns"
        parsed = _parse_duration(s)
        return parsed if parsed is not None else timedelta(0)
    return timedelta(0)


def _to_strings(value: Any) -> list[str]:
    if isinstance(value, (list, tuple)):
        return [_to_str(v) for v in value]
    if isinstance(value, str):
        return value.split()
    return []


class Config:
    """A configuration section; keys are case-insensitive and dotted for nesting."""

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data: dict[str, Any] = _normalize(data or {})

    def __repr__(self) -> str:
        return f"Config({self._data!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Config) and self._data == other._data

    def _lookup(self, key: str) -> Any:
        node: Any = self._data
        for part in key.lower().split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def get(self, key: str) -> Optional["Config"]:
        """Child mapping as a Config, or None when the field is not a mapping."""
        value = self._lookup(key)
        if not isinstance(value, dict):
            return None
        return Config(value)

    def slice(self, key: str) -> Optional[list["Config"]]:
        """Child list of mappings as Configs, or None when it is not such a list."""
        value = self._lookup(key)
        if not isinstance(value, list):
            return None
        if not all(isinstance(item, dict) for item in value):
            return None
        return [Config(item) for item in value]

    def get_str(self, key: str) -> str:
        return _to_str(self._lookup(key))

    def get_int(self, key: str) -> int:
        return _to_int(self._lookup(key))

    def get_float(self, key: str) -> float:
        return _to_float(self._lookup(key))

    def get_bool(self, key: str) -> bool:
        return _to_bool(self._lookup(key))

    def get_duration(self, key: str) -> timedelta:
        """Duration from a number of nanoseconds or a string such as "1h30m"."""
        return _to_duration(self._lookup(key))

    def chat_id(self, key: str) -> int:
        """Integer chat identifier."""
        return self.get_int(key)

    def strings(self, key: str) -> list[str]:
        return _to_strings(self._lookup(key))

    def ints(self, key: str) -> list[int]:
        value = self._lookup(key)
        if isinstance(value, (list, tuple)):
            return [_to_int(v) for v in value]
        return []

    def floats(self, key: str) -> list[float]:
        return [_to_float(s) for s in self.strings(key)]