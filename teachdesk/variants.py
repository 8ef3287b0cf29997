"""Task variants: reading, formatting and choosing one for a student."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

_TOPOLOGY_PARAMETERS = {
    "Омега": ["Количество входов сети", "Количество выходов сети"],
    "Баньян": ["Количество входов сети", "Количество выходов сети"],
    "н-куб": ["Количество входов сети", "Количество выходов сети"],
    "Дельта": [
        "Количество ступеней",
        "Количество входов кроссбара",
        "Количество выходов кроссбара",
    ],
    "Клоша": [
        "Кроссбарами во входной ступени",
        "Кроссбарами в промежуточной ступени",
        "Кроссбарами во выходной ступени",
        "Входами кроссбаров во входной ступени",
        "Выходами кроссбаров во выходной ступени",
    ],
}

NO_DATA = "Нет данных"


def read_variants(path: str | Path) -> list[str]:
    """Non-empty trimmed lines of a variants file; an unreadable file gives none."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def variant_number(variant: str) -> str:
    """The part of a variant string before the first ``-``."""
    return variant.split("-", 1)[0]


def format_variant(variant: str) -> str:
    """Readable description of a ``number-topology*param*...`` variant string."""
    number, *topologies = variant.split("-")
    text = number + "\n"
    for part in topologies:
        name, *values = part.split("*")
        name = name.strip()
        text += "\n" + name
        for param, value in zip(_TOPOLOGY_PARAMETERS.get(name, []), values):
            text += f"\n{param}: {value}"
        text += "\n"
    return text


class VariantSelection:
    """State of choosing a variant from a list by its number."""

    def __init__(self, variants: Iterable[str], current: str = "") -> None:
        self.variants = list(variants)
        self.selected = ""
        self.details = ""
        self.can_accept = False
        self.current: str | None = None
        if current:
            wanted = variant_number(current)
            if wanted in self.numbers():
                self.current = wanted

    def numbers(self) -> list[str]:
        return [variant_number(v) for v in self.variants]

    def select(self, number: str) -> str:
        """Show the variant with this number and return its description."""
        self.current = number
        for variant in self.variants:
            if variant.startswith(number + "-"):
                self.selected = variant
                self.can_accept = True
        self.details = format_variant(self.selected) if self.selected else NO_DATA
        return self.details