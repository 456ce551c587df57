import contextvars

from fsmcast.logging.models import LogLevel, LogLevelName


_global_log_level = contextvars.ContextVar("_global_log_level", default=LogLevel.INFO)


class LoggingConfig:
    """
    Minimum log level for every logger running in the current context.

    Tasks inherit the level set before they were created, and each
    worker process sets its own on startup.
    """

    def __init__(self) -> None:
        self._log_level: contextvars.ContextVar[LogLevel] = _global_log_level

    def update(self, log_level: LogLevelName | None = None):
        if log_level:
            self._log_level.set(
                LogLevel.to_level(log_level)
            )

    def enabled(self, log_level: LogLevel) -> bool:
        return log_level.severity >= self._log_level.get().severity

    @property
    def level(self) -> LogLevel:
        return self._log_level.get()
