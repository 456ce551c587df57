from __future__ import annotations

import asyncio
import functools
import queue
from multiprocessing.managers import SyncManager
from typing import Any, Dict

from fsmcast.errors import TransportError
from fsmcast.models import Envelope

from .transport import Transport, WorkerEndpoint


TRANSPORT_ERRORS = (
    EOFError,
    OSError,
)


class ProcessEndpoint(WorkerEndpoint):
    """
    Worker side of a ``ProcessTransport``.

    Holds only manager queue proxies, so it pickles across the spawn
    boundary into worker processes.
    """

    def __init__(
        self,
        rank: int,
        inbox: Any,
        acknowledgments: Any,
    ) -> None:
        self.rank = rank
        self._inbox = inbox
        self._acknowledgments = acknowledgments

    async def receive(self) -> Envelope:
        loop = asyncio.get_event_loop()

        try:
            data: bytes = await loop.run_in_executor(
                None,
                self._inbox.get,
            )

        except TRANSPORT_ERRORS as err:
            raise TransportError(
                f"Err. - worker {self.rank} could not receive: {err}"
            ) from err

        return Envelope.load(data)

    async def send(self, envelope: Envelope) -> None:
        loop = asyncio.get_event_loop()

        try:
            await loop.run_in_executor(
                None,
                self._acknowledgments.put,
                envelope.dump(),
            )

        except TRANSPORT_ERRORS as err:
            raise TransportError(
                f"Err. - worker {self.rank} could not send: {err}"
            ) from err


class ProcessTransport(Transport):
    def __init__(
        self,
        num_workers: int,
        manager: SyncManager,
    ) -> None:
        super().__init__(num_workers)

        self._manager = manager
        self._inboxes: Dict[int, Any] = {
            rank: manager.Queue() for rank in self.ranks
        }
        self._acknowledgments = manager.Queue()
        self._loop: asyncio.AbstractEventLoop | None = None

    async def send(self, rank: int, envelope: Envelope) -> None:
        if self._closed:
            raise TransportError("Err. - transport is closed")

        inbox = self._inboxes.get(rank)
        if inbox is None:
            raise TransportError(f"Err. - no worker with rank {rank}")

        if self._loop is None:
            self._loop = asyncio.get_event_loop()

        try:
            await self._loop.run_in_executor(
                None,
                functools.partial(
                    inbox.put,
                    envelope.dump(),
                ),
            )

        except TRANSPORT_ERRORS as err:
            raise TransportError(
                f"Err. - could not send to worker {rank}: {err}"
            ) from err

    def poll(self) -> Envelope | None:
        try:
            data: bytes = self._acknowledgments.get_nowait()

        except queue.Empty:
            return None

        except TRANSPORT_ERRORS as err:
            raise TransportError(
                f"Err. - could not poll acknowledgments: {err}"
            ) from err

        return Envelope.load(data)

    def endpoint(self, rank: int) -> ProcessEndpoint:
        inbox = self._inboxes.get(rank)
        if inbox is None:
            raise TransportError(f"Err. - no worker with rank {rank}")

        return ProcessEndpoint(
            rank,
            inbox,
            self._acknowledgments,
        )
