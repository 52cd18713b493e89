"""Per-key settings received from the host and their normalization."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Union


DEFAULT_INTERVAL_SECONDS = 10

IntervalValue = Union[int, float, str, None]


def parse_interval(value: Any) -> Optional[float]:
    """Parse a polling interval strictly.

    Accepts numbers and numeric strings (surrounding whitespace allowed).
    Booleans, non-numeric strings, non-finite and non-positive values are
    rejected.

    Args:
        value: Raw interval as stored by the host

    Returns:
        Interval in seconds, or None if the value is not a usable interval
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number) or number <= 0:
        return None
    return number


def normalize_interval(value: Any) -> float:
    """Interval in seconds, falling back to the default for unusable input."""
    parsed = parse_interval(value)
    if parsed is None:
        return float(DEFAULT_INTERVAL_SECONDS)
    return parsed


@dataclass(frozen=True)
class KeySettings:
    """Settings of a single key, passed by value with every host event."""

    path: Optional[str] = None
    use_venv: bool = False
    venv_path: Optional[str] = None
    interval: IntervalValue = None
    display_values: bool = False
    value1: Optional[str] = None
    image1: Optional[str] = None
    value2: Optional[str] = None
    image2: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Optional[dict[str, Any]]) -> "KeySettings":
        """Build settings from the host's JSON payload.

        Unknown keys are ignored. Flags are coerced to bool the way the host
        stores them (missing means False).
        """
        payload = payload or {}
        return cls(
            path=payload.get("path") or None,
            use_venv=bool(payload.get("useVenv")),
            venv_path=payload.get("venvPath") or None,
            interval=payload.get("interval"),
            display_values=bool(payload.get("displayValues")),
            value1=payload.get("value1"),
            image1=payload.get("image1") or None,
            value2=payload.get("value2"),
            image2=payload.get("image2") or None,
        )

    @property
    def interval_seconds(self) -> float:
        """Normalized polling interval."""
        return normalize_interval(self.interval)

    @property
    def venv(self) -> Optional[str]:
        """Virtual environment path if one is requested and configured."""
        if self.use_venv and self.venv_path:
            return self.venv_path
        return None

    def is_complete(self) -> bool:
        """Whether a background service may be started with these settings."""
        return bool(self.path) and parse_interval(self.interval) is not None
