from __future__ import annotations

from fsmcast.automaton import Automaton
from fsmcast.errors import FsmcastError
from fsmcast.logging import Logger
from fsmcast.logging.fsmcast_logging_models import (
    WorkerAcknowledgmentInfo,
    WorkerError,
    WorkerShutdownDebug,
    WorkerTrace,
    WorkerTransitionInfo,
)
from fsmcast.models import Channel, Envelope, WorkerState
from fsmcast.transport import WorkerEndpoint


class Worker:
    """
    Consumes symbols from the coordinator until its automaton accepts,
    then sends exactly one acknowledgment and stops.

    A ``SHUTDOWN`` envelope ends the loop early without acknowledging.
    Malformed payloads and transport failures are fatal and propagate.
    """

    def __init__(
        self,
        rank: int,
        automaton: Automaton | None = None,
        block_size: int = 1,
        logger: Logger | None = None,
    ) -> None:
        if automaton is None:
            automaton = Automaton.create_default()

        if logger is None:
            logger = Logger()

        self.rank = rank
        self.automaton = automaton
        self.block_size = block_size
        self.state = WorkerState(
            rank,
            automaton_state=automaton.initial,
        )

        self._logger = logger

    async def run(self, endpoint: WorkerEndpoint) -> WorkerState:
        try:
            while not self.state.done:
                envelope = await endpoint.receive()
                self.state.received += 1

                if envelope.tag == Channel.SHUTDOWN:
                    self.state.shutdown = True
                    self.state.done = True

                    await self._logger.log(
                        WorkerShutdownDebug(
                            message=f"Node {self.rank} shut down by coordinator in state {self.state.automaton_state.name}",
                            rank=self.rank,
                            state=self.state.automaton_state.name,
                            received=self.state.received,
                        ),
                        name="worker",
                    )

                    continue

                symbol = envelope.leading_symbol(expected_size=self.block_size)

                previous_state = self.state.automaton_state
                self.state.automaton_state = self.automaton.advance(
                    previous_state,
                    symbol,
                )

                if self.state.automaton_state == previous_state:
                    await self._logger.log(
                        WorkerTrace(
                            message=f"Node {self.rank} absorbed {symbol.name}",
                            rank=self.rank,
                            symbol=symbol.name,
                            state=previous_state.name,
                        ),
                        name="worker",
                    )

                    continue

                await self._logger.log(
                    WorkerTransitionInfo(
                        message=f"Node {self.rank} now in state {self.state.automaton_state.name}",
                        rank=self.rank,
                        symbol=symbol.name,
                        previous_state=previous_state.name,
                        state=self.state.automaton_state.name,
                    ),
                    name="worker",
                )

                if self.automaton.is_accepting(self.state.automaton_state):
                    await self._acknowledge(endpoint)

        except FsmcastError as err:
            await self._logger.log(
                WorkerError(
                    message=f"Node {self.rank} stopped on error",
                    rank=self.rank,
                    error=str(err),
                ),
                name="worker",
            )

            raise

        return self.state

    async def _acknowledge(self, endpoint: WorkerEndpoint):
        await endpoint.send(
            Envelope.acknowledgment(
                self.rank,
                block_size=self.block_size,
            )
        )

        self.state.acknowledged = True
        self.state.done = True

        await self._logger.log(
            WorkerAcknowledgmentInfo(
                message=f"Node {self.rank} now in FINAL state {self.state.automaton_state.name} (shutting down...)",
                rank=self.rank,
                state=self.state.automaton_state.name,
                received=self.state.received,
            ),
            name="worker",
        )
