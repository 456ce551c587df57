from __future__ import annotations

import asyncio
from typing import Dict

from fsmcast.errors import TransportError
from fsmcast.models import Envelope

from .transport import Transport, WorkerEndpoint


class LocalEndpoint(WorkerEndpoint):
    def __init__(
        self,
        rank: int,
        inbox: asyncio.Queue[bytes],
        acknowledgments: asyncio.Queue[bytes],
    ) -> None:
        self.rank = rank
        self._inbox = inbox
        self._acknowledgments = acknowledgments

    async def receive(self) -> Envelope:
        return Envelope.load(
            await self._inbox.get()
        )

    async def send(self, envelope: Envelope) -> None:
        await self._acknowledgments.put(envelope.dump())


class LocalTransport(Transport):
    """
    In-process transport where every participant is an asyncio task.

    Envelopes cross the channel as encoded bytes so the same codec and
    validation paths run as with the process transport. ``max_pending``
    bounds each worker inbox, making sends block until the worker
    catches up.
    """

    def __init__(
        self,
        num_workers: int,
        max_pending: int = 0,
    ) -> None:
        super().__init__(num_workers)

        self._inboxes: Dict[int, asyncio.Queue[bytes]] = {
            rank: asyncio.Queue(maxsize=max_pending) for rank in self.ranks
        }
        self._acknowledgments: asyncio.Queue[bytes] = asyncio.Queue()
        self._endpoints: Dict[int, LocalEndpoint] = {
            rank: LocalEndpoint(
                rank,
                self._inboxes[rank],
                self._acknowledgments,
            ) for rank in self.ranks
        }

    async def send(self, rank: int, envelope: Envelope) -> None:
        if self._closed:
            raise TransportError("Err. - transport is closed")

        inbox = self._inboxes.get(rank)
        if inbox is None:
            raise TransportError(f"Err. - no worker with rank {rank}")

        await inbox.put(envelope.dump())

    def poll(self) -> Envelope | None:
        try:
            data = self._acknowledgments.get_nowait()

        except asyncio.QueueEmpty:
            return None

        return Envelope.load(data)

    def endpoint(self, rank: int) -> LocalEndpoint:
        endpoint = self._endpoints.get(rank)
        if endpoint is None:
            raise TransportError(f"Err. - no worker with rank {rank}")

        return endpoint

    def inject(self, data: bytes) -> None:
        """Place raw bytes on the acknowledgment channel."""
        self._acknowledgments.put_nowait(data)
