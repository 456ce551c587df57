from fsmcast.models import CoordinatorResult, CoordinatorStatus, WorkerState
from fsmcast.automaton import State


class TestCoordinatorResult:

    def test_all_acknowledged(self):
        result = CoordinatorResult(
            status=CoordinatorStatus.COMPLETED,
            rounds=4,
            completed={1, 2},
        )

        assert result.all_acknowledged is True
        assert result.rejected == 0

    def test_missing_workers(self):
        result = CoordinatorResult(
            status=CoordinatorStatus.ROUND_CAP_REACHED,
            rounds=2,
            missing={2},
        )

        assert result.all_acknowledged is False


class TestWorkerState:

    def test_initial(self):
        state = WorkerState(4)

        assert state.rank == 4
        assert state.automaton_state == State.Q0
        assert state.done is False
        assert state.acknowledged is False
        assert state.shutdown is False
        assert state.received == 0
        assert "rank=4" in repr(state)
