import msgspec

from .coordinator_status import CoordinatorStatus


class CoordinatorResult(msgspec.Struct, kw_only=True):
    status: CoordinatorStatus
    rounds: int
    completed: set[int] = msgspec.field(default_factory=set)
    missing: set[int] = msgspec.field(default_factory=set)
    rejected: int = 0

    @property
    def all_acknowledged(self) -> bool:
        return len(self.missing) == 0
