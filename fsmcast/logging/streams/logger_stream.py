import asyncio
import io
import pathlib
import sys

import msgspec

from fsmcast.logging.models import Log

DEFAULT_TEMPLATE = "{timestamp} - {level} - {thread_id} - {filename}:{function_name}.{line_number} - {message}"


class LoggerStream:
    """
    Output for one named logger.

    Without a ``path`` records are rendered through ``DEFAULT_TEMPLATE``
    to stdout. With one they are appended to that file as msgspec JSON
    lines. All writes run in the default executor.
    """

    def __init__(
        self,
        name: str,
        path: str | None = None,
    ) -> None:
        self.name = name
        self.path = path

        self._init_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None

        self._logfile: io.BufferedWriter | None = None
        self._stream: io.TextIOBase | None = None
        self._initialized: bool = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self):

        async with self._init_lock:

            if self._initialized:
                return

            if self._loop is None:
                self._loop = asyncio.get_event_loop()

            if self.path:
                self._logfile = await self._loop.run_in_executor(
                    None,
                    self._open_file,
                    self.path,
                )

            else:
                self._stream = sys.stdout

            self._initialized = True

    def _open_file(self, path: str) -> io.BufferedWriter:
        resolved_path = pathlib.Path(path).absolute().resolve()
        resolved_path.parent.mkdir(parents=True, exist_ok=True)

        return open(resolved_path, "ab")

    async def log(self, log: Log):
        if self._initialized is False:
            await self.initialize()

        async with self._write_lock:
            if self._logfile:
                await self._loop.run_in_executor(
                    None,
                    self._write_to_file,
                    msgspec.json.encode(log) + b"\n",
                )

            else:
                await self._loop.run_in_executor(
                    None,
                    self._write_to_stream,
                    self._render(log),
                )

    def _render(self, log: Log) -> str:
        return log.entry.to_template(
            DEFAULT_TEMPLATE,
            context={
                "filename": log.filename,
                "function_name": log.function_name,
                "line_number": log.line_number,
                "thread_id": log.thread_id,
                "timestamp": log.timestamp,
            },
        )

    def _write_to_file(self, data: bytes):
        if self._logfile and self._logfile.closed is False:
            self._logfile.write(data)
            self._logfile.flush()

    def _write_to_stream(self, line: str):
        if self._stream and self._stream.closed is False:
            self._stream.write(line + "\n")
            self._stream.flush()

    async def close(self):
        if self._initialized is False:
            return

        async with self._write_lock:
            if self._logfile and self._logfile.closed is False:
                await self._loop.run_in_executor(None, self._logfile.close)

            elif self._stream and self._stream.closed is False:
                await self._loop.run_in_executor(None, self._stream.flush)

        self._logfile = None
        self._stream = None
        self._initialized = False

    def abort(self):
        if self._logfile and self._logfile.closed is False:
            self._logfile.close()

        self._logfile = None
        self._stream = None
        self._initialized = False
