from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Iterable

from fsmcast.models import Envelope


COORDINATOR_RANK = 0


class WorkerEndpoint(ABC):
    """Worker side of a transport: one inbound and one outbound channel."""

    rank: int

    @abstractmethod
    async def receive(self) -> Envelope: ...

    @abstractmethod
    async def send(self, envelope: Envelope) -> None: ...


class Transport(ABC):
    """
    Coordinator side of a transport.

    Delivery to any single worker is FIFO. Nothing is assumed about
    ordering across workers, or between the symbol channels and the
    acknowledgment channel.
    """

    def __init__(self, num_workers: int) -> None:
        if num_workers < 1:
            raise ValueError("Err. - transport requires at least one worker")

        self.num_workers = num_workers
        self.rank = COORDINATOR_RANK
        self._closed = False

    @property
    def ranks(self) -> range:
        return range(COORDINATOR_RANK + 1, COORDINATOR_RANK + self.num_workers + 1)

    @property
    def closed(self) -> bool:
        return self._closed

    async def broadcast(
        self,
        envelope: Envelope,
        ranks: Iterable[int] | None = None,
    ) -> None:
        if ranks is None:
            ranks = self.ranks

        await asyncio.gather(
            *[self.send(rank, envelope) for rank in ranks]
        )

    @abstractmethod
    async def send(self, rank: int, envelope: Envelope) -> None: ...

    @abstractmethod
    def poll(self) -> Envelope | None:
        """Return the next pending acknowledgment-channel envelope without waiting."""

    @abstractmethod
    def endpoint(self, rank: int) -> WorkerEndpoint: ...

    async def close(self) -> None:
        self._closed = True
