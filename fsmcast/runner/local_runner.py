from __future__ import annotations

import asyncio
import os
import signal
from typing import Dict, Iterable

from fsmcast.automaton import RandomSymbolSource, Symbol
from fsmcast.coordinator import Coordinator, TerminationPolicy
from fsmcast.env import Env
from fsmcast.logging import Logger, LoggingConfig
from fsmcast.logging.fsmcast_logging_models import RunnerError, RunnerInfo
from fsmcast.models import WorkerState
from fsmcast.transport import LocalTransport, Transport
from fsmcast.worker import Worker

from .group_result import GroupResult
from .local_worker_pool import LocalWorkerPool


class LocalRunner:
    """
    Bootstraps one coordinator and ``workers`` workers on this host.

    With ``FSMCAST_WORKER_EXECUTOR_TYPE="task"`` every participant is an
    asyncio task sharing a ``LocalTransport``. With ``"process"`` each
    worker runs in its own spawned process behind a ``ProcessTransport``.
    """

    def __init__(
        self,
        workers: int | None = None,
        env: Env | None = None,
        logger: Logger | None = None,
    ) -> None:
        if env is None:
            env = Env()

        if workers is None:
            workers = env.FSMCAST_WORKERS

        if workers < 1:
            raise ValueError("Err. - at least one worker is required")

        if logger is None:
            logger = Logger()

        self._env = env
        self._workers = workers
        self._logger = logger
        self._pool: LocalWorkerPool | None = None

    async def run(
        self,
        symbol_source: Iterable[Symbol] | None = None,
        policy: TerminationPolicy | None = None,
    ) -> GroupResult:
        if symbol_source is None:
            symbol_source = RandomSymbolSource()

        LoggingConfig().update(
            log_level=self._env.FSMCAST_LOG_LEVEL,
        )

        if self._env.FSMCAST_LOGS_DIRECTORY:
            for name in ("coordinator", "runner", "worker"):
                self._logger.configure(
                    name=name,
                    path=os.path.join(
                        self._env.FSMCAST_LOGS_DIRECTORY,
                        f"{name}.json",
                    ),
                )

        executor = self._env.FSMCAST_WORKER_EXECUTOR_TYPE

        await self._logger.log(
            RunnerInfo(
                message=f"Starting {self._workers} workers as {executor}es",
                workers=self._workers,
                executor=executor,
                block_size=self._env.FSMCAST_MESSAGE_BLOCK_SIZE,
            ),
            name="runner",
        )

        try:
            if executor == "task":
                return await self._run_tasks(symbol_source, policy)

            return await self._run_processes(symbol_source, policy)

        except Exception as err:
            await self._logger.log(
                RunnerError(
                    message="Group run failed",
                    workers=self._workers,
                    executor=executor,
                    error=str(err),
                ),
                name="runner",
            )

            raise

        finally:
            await self._logger.close()

    async def _run_tasks(
        self,
        symbol_source: Iterable[Symbol],
        policy: TerminationPolicy | None,
    ) -> GroupResult:
        transport = LocalTransport(self._workers)

        workers = {
            rank: Worker(
                rank,
                block_size=self._env.FSMCAST_MESSAGE_BLOCK_SIZE,
                logger=self._logger,
            ) for rank in transport.ranks
        }

        worker_tasks: Dict[int, asyncio.Future] = {
            rank: asyncio.create_task(
                worker.run(transport.endpoint(rank))
            ) for rank, worker in workers.items()
        }

        try:
            coordinator_result = await self._supervise(
                transport,
                symbol_source,
                policy,
                worker_tasks,
            )

        finally:
            await transport.close()

        return GroupResult(
            coordinator_result,
            {rank: worker.state for rank, worker in workers.items()},
        )

    async def _run_processes(
        self,
        symbol_source: Iterable[Symbol],
        policy: TerminationPolicy | None,
    ) -> GroupResult:
        self._pool = LocalWorkerPool(self._workers)

        loop = asyncio.get_event_loop()
        for signame in ("SIGINT", "SIGTERM"):
            loop.add_signal_handler(
                getattr(
                    signal,
                    signame,
                ),
                self.abort,
            )

        transport = self._pool.setup()
        worker_futures = self._pool.run_pool(transport, self._env)

        try:
            coordinator_result = await self._supervise(
                transport,
                symbol_source,
                policy,
                worker_futures,
            )

            worker_states: Dict[int, WorkerState] = {
                rank: future.result() for rank, future in worker_futures.items()
                if not future.cancelled()
            }

        except (Exception, asyncio.CancelledError):
            self._pool.abort()
            raise

        else:
            await transport.close()

            if len(worker_states) == len(worker_futures):
                await self._pool.shutdown()

            else:
                # Workers left running without a shutdown message are
                # still blocked on their inbox.
                self._pool.abort()

        finally:
            for signame in ("SIGINT", "SIGTERM"):
                loop.remove_signal_handler(
                    getattr(signal, signame),
                )

        return GroupResult(
            coordinator_result,
            worker_states,
        )

    async def _supervise(
        self,
        transport: Transport,
        symbol_source: Iterable[Symbol],
        policy: TerminationPolicy | None,
        worker_futures: Dict[int, asyncio.Future],
    ):
        coordinator = Coordinator(
            transport,
            env=self._env,
            logger=self._logger,
        )

        coordinator_task = asyncio.create_task(
            coordinator.run(symbol_source, policy)
        )

        pending = {coordinator_task, *worker_futures.values()}

        try:
            # Any participant failing is fatal for the group: an
            # acknowledgment from a failed worker can never arrive.
            while not coordinator_task.done():
                done, pending = await asyncio.wait(
                    pending,
                    return_when=asyncio.FIRST_COMPLETED,
                )

                for future in done:
                    if not future.cancelled() and future.exception():
                        raise future.exception()

            coordinator_result = coordinator_task.result()

            workers_pending = [
                future for future in worker_futures.values() if not future.done()
            ]

            if self._env.FSMCAST_SHUTDOWN_WORKERS:
                await asyncio.gather(*workers_pending)

            else:
                for future in workers_pending:
                    future.cancel()

                await asyncio.gather(*workers_pending, return_exceptions=True)

            return coordinator_result

        except (Exception, asyncio.CancelledError):
            for future in pending:
                future.cancel()

            await asyncio.gather(*pending, return_exceptions=True)
            raise

    def abort(self):
        self._logger.abort()

        if self._pool:
            self._pool.abort()
