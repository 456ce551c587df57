from typing import Iterable, Set


class CompletionSet:
    """
    Coordinator-side record of which workers acknowledged completion.

    Membership is keyed by sender rank, so a worker contributes at most
    one event no matter how many acknowledgments arrive from it, and a
    sender outside the expected ranks never counts as progress.
    """

    __slots__ = (
        "expected",
        "_acknowledged",
    )

    def __init__(self, expected: Iterable[int]) -> None:
        self.expected = frozenset(expected)
        self._acknowledged: Set[int] = set()

    def add(self, rank: int) -> bool:
        if rank not in self.expected or rank in self._acknowledged:
            return False

        self._acknowledged.add(rank)
        return True

    @property
    def complete(self) -> bool:
        return len(self._acknowledged) == len(self.expected)

    @property
    def acknowledged(self) -> frozenset[int]:
        return frozenset(self._acknowledged)

    def missing(self) -> frozenset[int]:
        return self.expected - self._acknowledged

    def __contains__(self, rank: int) -> bool:
        return rank in self._acknowledged

    def __len__(self) -> int:
        return len(self._acknowledged)
