from __future__ import annotations

from abc import ABC, abstractmethod

from fsmcast.models import CompletionSet, CoordinatorStatus


class TerminationPolicy(ABC):
    name: str
    stops_on_completion: bool

    @abstractmethod
    def should_stop(
        self,
        rounds: int,
        completions: CompletionSet,
    ) -> CoordinatorStatus | None:
        """Return the terminal status once broadcasting must stop, otherwise ``None``."""


class FixedRoundPolicy(TerminationPolicy):
    """
    Broadcast exactly ``rounds`` rounds, then stop.

    There is no feedback from workers: some may never reach their
    accepting state. Acknowledgments that do arrive are still recorded so
    callers can see which workers never completed.
    """

    name = "fixed-round"
    stops_on_completion = False

    def __init__(self, rounds: int) -> None:
        if rounds < 0:
            raise ValueError("Err. - round count must be non-negative")

        self.rounds = rounds

    def should_stop(
        self,
        rounds: int,
        completions: CompletionSet,
    ) -> CoordinatorStatus | None:
        if rounds >= self.rounds:
            return CoordinatorStatus.ROUND_CAP_REACHED

        return None


class AcknowledgmentPolicy(TerminationPolicy):
    """
    Broadcast until every worker has acknowledged, optionally capped at
    ``max_rounds``.
    """

    name = "acknowledgment"
    stops_on_completion = True

    def __init__(self, max_rounds: int | None = None) -> None:
        if max_rounds is not None and max_rounds < 0:
            raise ValueError("Err. - round cap must be non-negative")

        self.max_rounds = max_rounds

    def should_stop(
        self,
        rounds: int,
        completions: CompletionSet,
    ) -> CoordinatorStatus | None:
        if completions.complete:
            return CoordinatorStatus.COMPLETED

        if self.max_rounds is not None and rounds >= self.max_rounds:
            return CoordinatorStatus.ROUND_CAP_REACHED

        return None
