"""Editable settings lists and the plain-text settings format."""

from __future__ import annotations

import math
import re
from pathlib import Path
from typing import Any, Mapping, Sequence

SPIN_MIN = 0
SPIN_MAX = 1000

_INT_RE = re.compile(r"[+-]?\d+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def _as_number(value: Any) -> float:
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return 0.0
    return 0.0


def _round_half_away(number: float) -> int:
    return math.floor(number + 0.5) if number >= 0 else math.ceil(number - 0.5)


def _clamp(number: int) -> int:
    return max(SPIN_MIN, min(SPIN_MAX, number))


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false")
    if isinstance(value, (list, dict)):
        return False
    return bool(value)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, str):
        return value
    return ""


def coerce_setting_value(setting: Mapping[str, Any], value: Any) -> Any:
    """Convert ``value`` the way the editor for this setting's type stores it.

    ``int`` and ``double`` settings are edited as whole numbers between 0 and
    1000, ``bool`` settings as a flag, everything else as text.
    """
    kind = setting.get("type")
    if kind == "int":
        return _clamp(_round_half_away(_as_number(value)))
    if kind == "double":
        number = _as_number(value)
        if not math.isfinite(number):
            number = 0.0
        return _clamp(math.trunc(number))
    if kind == "bool":
        return _as_bool(value)
    return _as_text(value)


def apply_setting_values(
    settings: Sequence[Mapping[str, Any]], values: Mapping[int, Any]
) -> list[dict[str, Any]]:
    """Return a copy of ``settings`` with edited values stored by row index.

    Rows without an edited value keep their current value, passed through
    the editor of their type.
    """
    result = []
    for row, setting in enumerate(settings):
        updated = dict(setting)
        raw = values[row] if row in values else setting.get("value")
        updated["value"] = coerce_setting_value(setting, raw)
        result.append(updated)
    return result


def _parse_value(text: str) -> Any:
    lowered = text.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if _INT_RE.fullmatch(text):
        number = int(text)
        if _INT32_MIN <= number <= _INT32_MAX:
            return number
    return text


def load_settings_txt(path: str | Path) -> dict[str, Any]:
    """Read ``key value`` lines; comments (``//``) and malformed lines are skipped."""
    settings: dict[str, Any] = {}
    for raw in Path(path).read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("//"):
            continue
        parts = line.split(" ")
        if len(parts) != 2:
            continue
        key, value = (part.strip() for part in parts)
        settings[key] = _parse_value(value)
    return settings


def save_settings_txt(settings: Mapping[str, Any], folder: str | Path) -> Path:
    """Write ``settings.txt`` into ``folder`` as ``key = value`` lines; return its path."""
    target = Path(folder) / "settings.txt"
    lines = "".join(f"{key} = {_as_text(settings[key])}\n" for key in sorted(settings))
    target.write_text(lines, encoding="utf-8")
    return target