from __future__ import annotations

import asyncio
from typing import Iterable

from fsmcast.automaton import Symbol
from fsmcast.env import Env
from fsmcast.errors import ProtocolViolationError
from fsmcast.logging import Logger
from fsmcast.logging.fsmcast_logging_models import (
    CoordinatorAcknowledgmentDebug,
    CoordinatorInfo,
    CoordinatorRejectionWarning,
    CoordinatorRoundTrace,
)
from fsmcast.models import (
    CompletionSet,
    CoordinatorResult,
    CoordinatorStatus,
    Envelope,
)
from fsmcast.transport import Transport

from .policies import AcknowledgmentPolicy, TerminationPolicy


class Coordinator:
    """
    Broadcasts symbols to every worker and detects group completion.

    Each round drains the acknowledgment channel without waiting, asks
    the termination policy whether to stop, then broadcasts the next
    symbol. A collector task keeps draining between rounds and while
    waiting on an exhausted source. Both share one completion set.

    A send blocked on a full inbox is abandoned once that worker has
    acknowledged.
    """

    def __init__(
        self,
        transport: Transport,
        env: Env | None = None,
        logger: Logger | None = None,
    ) -> None:
        if env is None:
            env = Env()

        if logger is None:
            logger = Logger()

        self._transport = transport
        self._env = env
        self._logger = logger

        self._block_size = env.FSMCAST_MESSAGE_BLOCK_SIZE
        self._poll_interval = env.ack_poll_interval
        self._timeout = env.coordinator_timeout
        self._shutdown_workers = env.FSMCAST_SHUTDOWN_WORKERS

        self.completions = CompletionSet(transport.ranks)
        self.rounds = 0
        self.rejected = 0

    @property
    def num_workers(self) -> int:
        return self._transport.num_workers

    async def run(
        self,
        symbol_source: Iterable[Symbol],
        policy: TerminationPolicy | None = None,
    ) -> CoordinatorResult:
        if policy is None:
            policy = AcknowledgmentPolicy()

        self.completions = CompletionSet(self._transport.ranks)
        self.rounds = 0
        self.rejected = 0

        collector = asyncio.create_task(
            self._collect_acknowledgments()
        )

        try:
            status = await asyncio.wait_for(
                self._broadcast_rounds(
                    symbol_source,
                    policy,
                    collector,
                ),
                timeout=self._timeout,
            )

        except asyncio.TimeoutError:
            status = CoordinatorStatus.TIMED_OUT

        finally:
            if not collector.done():
                collector.cancel()

            try:
                await collector

            except asyncio.CancelledError:
                pass

        await self._drain()

        missing = self.completions.missing()
        if self._shutdown_workers and len(missing) > 0:
            await self._transport.broadcast(
                Envelope.shutdown(self._transport.rank),
                ranks=sorted(missing),
            )

        result = CoordinatorResult(
            status=status,
            rounds=self.rounds,
            completed=set(self.completions.acknowledged),
            missing=set(missing),
            rejected=self.rejected,
        )

        await self._logger.log(
            CoordinatorInfo(
                message=f"Coordinator finished with {status.value} after {self.rounds} rounds",
                status=status.value,
                rounds=self.rounds,
                acknowledged=len(self.completions),
                workers=self.num_workers,
                policy=policy.name,
            ),
            name="coordinator",
        )

        return result

    async def _broadcast_rounds(
        self,
        symbol_source: Iterable[Symbol],
        policy: TerminationPolicy,
        collector: asyncio.Task,
    ) -> CoordinatorStatus:
        for symbol in symbol_source:
            if collector.done():
                collector.result()

            await self._drain()

            if status := policy.should_stop(self.rounds, self.completions):
                return status

            data_symbol = Symbol.from_value(symbol)
            if data_symbol is None or data_symbol.is_data is False:
                raise ProtocolViolationError(
                    f"Err. - symbol source produced {symbol!r}, which is not part of the alphabet"
                )

            await self._broadcast(
                Envelope.symbol_block(
                    data_symbol,
                    self._transport.rank,
                    block_size=self._block_size,
                )
            )

            self.rounds += 1

            await self._logger.log(
                CoordinatorRoundTrace(
                    message=f"Broadcast {data_symbol.name} to {self.num_workers} workers",
                    round=self.rounds,
                    symbol=data_symbol.name,
                    workers=self.num_workers,
                ),
                name="coordinator",
            )

            await asyncio.sleep(0)

        if status := policy.should_stop(self.rounds, self.completions):
            return status

        if policy.stops_on_completion is False:
            return CoordinatorStatus.SOURCE_EXHAUSTED

        # No more symbols, so only outstanding acknowledgments can finish the run.
        await collector

        return CoordinatorStatus.COMPLETED

    async def _broadcast(self, envelope: Envelope):
        await asyncio.gather(
            *[self._deliver(rank, envelope) for rank in self._transport.ranks]
        )

    async def _deliver(self, rank: int, envelope: Envelope):
        send = asyncio.ensure_future(
            self._transport.send(rank, envelope)
        )

        try:
            while not send.done():
                await asyncio.wait({send}, timeout=self._poll_interval)

                if send.done():
                    break

                # A worker stops reading once it acknowledges, so a send
                # blocked on its full inbox can never complete.
                await self._drain()
                if rank in self.completions:
                    send.cancel()
                    await asyncio.gather(send, return_exceptions=True)
                    return

            send.result()

        finally:
            if not send.done():
                send.cancel()

    async def _collect_acknowledgments(self):
        while not self.completions.complete:
            if await self._drain() == 0:
                await asyncio.sleep(self._poll_interval)

    async def _drain(self) -> int:
        received = 0

        while (envelope := self._transport.poll()) is not None:
            received += 1
            await self._record(envelope)

        return received

    async def _record(self, envelope: Envelope) -> bool:
        if not envelope.is_acknowledgment:
            reason = "not an acknowledgment"

        elif envelope.sender not in self.completions.expected:
            reason = "unknown sender"

        elif not self.completions.add(envelope.sender):
            reason = "duplicate acknowledgment"

        else:
            await self._logger.log(
                CoordinatorAcknowledgmentDebug(
                    message=f"Received ACK from Node {envelope.sender}",
                    rank=envelope.sender,
                    acknowledged=len(self.completions),
                    workers=self.num_workers,
                ),
                name="coordinator",
            )

            return True

        self.rejected += 1

        await self._logger.log(
            CoordinatorRejectionWarning(
                message=f"Ignored message from Node {envelope.sender}: {reason}",
                sender=envelope.sender,
                tag=envelope.tag.name,
                reason=reason,
            ),
            name="coordinator",
        )

        return False
