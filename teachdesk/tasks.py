"""Task descriptions for switching-network topologies."""

from __future__ import annotations

from dataclasses import dataclass

TOPOLOGIES = ("Баньян", "Омега", "Бенеша", "Дельта", "Клоша")

SUBTASKS = ("Построить схему", "Построить маршрут", "Выполнить блокировки")

PARAM_MIN = 1
PARAM_MAX = 100
SCORE_MIN = -100
SCORE_MAX = 100

_NETWORK_PARAMS = ["Количество входов", "Количество выходов"]
_PARAMETERS = {
    "Баньян": _NETWORK_PARAMS,
    "Омега": _NETWORK_PARAMS,
    "Бенеша": _NETWORK_PARAMS,
    "Дельта": ["Входов кроссбара", "Выходов кроссбара", "Ступеней"],
    "Клоша": [
        "Кроссбаров во входной ступени",
        "Кроссбаров в промежуточной ступени",
        "Кроссбаров в выходной ступени",
        "Входов кроссбаров во входной ступени",
        "Выходов кроссбаров в выходной ступени",
    ],
}


@dataclass
class SubtaskScore:
    success_points: int = 10
    failure_penalty: int = 0


def topology_parameters(topology: str) -> list[str]:
    """Parameter names for a topology; an unknown topology has none."""
    return list(_PARAMETERS.get(topology, []))


def default_subtask_scores() -> dict[str, SubtaskScore]:
    return {name: SubtaskScore() for name in SUBTASKS}


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, int(value)))


class TaskSpec:
    """A task: a topology, its parameter values and the scores of its subtasks."""

    def __init__(self, topology: str = TOPOLOGIES[0]) -> None:
        self.topology = ""
        self.parameters: dict[str, int] = {}
        self.scores = default_subtask_scores()
        self.set_topology(topology)

    def set_topology(self, topology: str) -> None:
        """Switch topology, resetting every parameter to its minimum."""
        if topology not in TOPOLOGIES:
            raise ValueError(f"unknown topology: {topology}")
        self.topology = topology
        self.parameters = {name: PARAM_MIN for name in topology_parameters(topology)}

    def set_task(self, topology: str, params: dict[str, int]) -> None:
        """Select a known topology if it differs, then apply matching parameters."""
        if topology in TOPOLOGIES and topology != self.topology:
            self.set_topology(topology)
        for name in self.parameters:
            if name in params:
                self.parameters[name] = _clamp(params[name], PARAM_MIN, PARAM_MAX)

    def set_score(self, subtask: str, success_points: int, failure_penalty: int) -> None:
        if subtask not in self.scores:
            raise KeyError(subtask)
        self.scores[subtask] = SubtaskScore(
            _clamp(success_points, SCORE_MIN, SCORE_MAX),
            _clamp(failure_penalty, SCORE_MIN, SCORE_MAX),
        )