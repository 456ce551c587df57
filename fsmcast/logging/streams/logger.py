import asyncio
import datetime
import sys
import threading
from typing import Dict

from fsmcast.logging.config import LoggingConfig
from fsmcast.logging.models import Entry, Log

from .logger_stream import LoggerStream


class Logger:
    """
    Named log streams. A name that was never configured with a path
    logs to stdout.
    """

    def __init__(self) -> None:
        self._streams: Dict[str, LoggerStream] = {}
        self._config = LoggingConfig()

    def configure(
        self,
        name: str,
        path: str | None = None,
    ):
        self._streams[name] = LoggerStream(name, path=path)

    async def log(
        self,
        entry: Entry,
        name: str = "default",
    ):
        if self._config.enabled(entry.level) is False:
            return

        stream = self._streams.get(name)
        if stream is None:
            stream = self._streams[name] = LoggerStream(name)

        frame = sys._getframe(1)
        code = frame.f_code

        await stream.log(
            Log(
                entry=entry,
                filename=code.co_filename,
                function_name=code.co_name,
                line_number=frame.f_lineno,
                thread_id=threading.get_native_id(),
                timestamp=datetime.datetime.now(datetime.UTC).isoformat(),
            )
        )

    async def close(self):
        await asyncio.gather(*[
            stream.close() for stream in self._streams.values()
            if stream.initialized
        ])

    def abort(self):
        for stream in self._streams.values():
            stream.abort()
