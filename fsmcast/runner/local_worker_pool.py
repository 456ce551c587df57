import asyncio
import functools
import multiprocessing
import os
import signal
import warnings
from concurrent.futures import ProcessPoolExecutor
from multiprocessing.context import SpawnContext
from multiprocessing.managers import SyncManager
from typing import Any, Dict, List

from fsmcast.env import Env
from fsmcast.logging import Logger, LoggingConfig
from fsmcast.models import WorkerState
from fsmcast.transport import ProcessEndpoint, ProcessTransport
from fsmcast.worker import Worker


def abort(run_task: asyncio.Task):
    if not run_task.done():
        run_task.cancel()


def run_worker(
    endpoint: ProcessEndpoint,
    worker_env: Dict[str, Any],
) -> WorkerState:
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    env = Env(**worker_env)

    LoggingConfig().update(
        log_level=env.FSMCAST_LOG_LEVEL,
    )

    logger = Logger()
    if env.FSMCAST_LOGS_DIRECTORY:
        logger.configure(
            name="worker",
            path=os.path.join(
                env.FSMCAST_LOGS_DIRECTORY,
                f"worker_{endpoint.rank}.json",
            ),
        )

    worker = Worker(
        endpoint.rank,
        block_size=env.FSMCAST_MESSAGE_BLOCK_SIZE,
        logger=logger,
    )

    run_task = loop.create_task(worker.run(endpoint))

    for signame in ("SIGINT", "SIGTERM"):
        loop.add_signal_handler(
            getattr(
                signal,
                signame,
            ),
            functools.partial(
                abort,
                run_task,
            ),
        )

    try:
        return loop.run_until_complete(run_task)

    finally:
        loop.run_until_complete(logger.close())
        loop.close()


class LocalWorkerPool:
    """
    Runs one worker per spawned process.

    Coordinator and workers talk through queues owned by a
    ``multiprocessing`` manager process, so the only thing a worker
    process shares with the coordinator is its ``ProcessEndpoint``.
    """

    def __init__(self, pool_size: int) -> None:
        self._pool_size = pool_size
        self._context: SpawnContext | None = None
        self._executor: ProcessPoolExecutor | None = None
        self._manager: SyncManager | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._futures: List[asyncio.Future] = []

    def setup(self) -> ProcessTransport:
        self._context = multiprocessing.get_context("spawn")
        self._manager = self._context.Manager()
        self._executor = ProcessPoolExecutor(
            max_workers=self._pool_size,
            mp_context=self._context,
        )

        self._loop = asyncio.get_event_loop()

        return ProcessTransport(
            self._pool_size,
            self._manager,
        )

    def run_pool(
        self,
        transport: ProcessTransport,
        env: Env,
    ) -> Dict[int, asyncio.Future]:
        futures = {
            rank: self._loop.run_in_executor(
                self._executor,
                functools.partial(
                    run_worker,
                    transport.endpoint(rank),
                    env.model_dump(),
                ),
            )
            for rank in transport.ranks
        }

        self._futures = list(futures.values())

        return futures

    async def shutdown(self):
        await self._loop.run_in_executor(
            None,
            functools.partial(
                self._executor.shutdown,
                wait=True,
                cancel_futures=True,
            ),
        )

        self._manager.shutdown()

    def abort(self):
        for future in self._futures:
            if not future.done():
                future.cancel()

        with warnings.catch_warnings():
            warnings.simplefilter("ignore")

            for process in multiprocessing.active_children():
                process.kill()

            if self._executor:
                self._executor.shutdown(cancel_futures=True, wait=False)

        if self._manager:
            self._manager.shutdown()
