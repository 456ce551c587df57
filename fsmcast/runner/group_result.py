from typing import Dict

from fsmcast.models import CoordinatorResult, WorkerState


class GroupResult:
    __slots__ = (
        "coordinator",
        "workers",
    )

    def __init__(
        self,
        coordinator: CoordinatorResult,
        workers: Dict[int, WorkerState],
    ) -> None:
        self.coordinator = coordinator
        self.workers = workers

    @property
    def all_accepted(self) -> bool:
        return all(state.acknowledged for state in self.workers.values())

    def __repr__(self) -> str:
        return f"GroupResult(coordinator={self.coordinator!r}, workers={self.workers!r})"
