from fsmcast.automaton import State


class WorkerState:
    __slots__ = (
        "rank",
        "automaton_state",
        "done",
        "acknowledged",
        "shutdown",
        "received",
    )

    def __init__(
        self,
        rank: int,
        automaton_state: State = State.Q0,
    ) -> None:
        self.rank = rank
        self.automaton_state = automaton_state
        self.done = False
        self.acknowledged = False
        self.shutdown = False
        self.received = 0

    def __repr__(self) -> str:
        return (
            f"WorkerState(rank={self.rank}, state={self.automaton_state.name}, "
            f"done={self.done}, acknowledged={self.acknowledged}, "
            f"shutdown={self.shutdown}, received={self.received})"
        )
