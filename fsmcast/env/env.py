from __future__ import annotations

import psutil
from pydantic import BaseModel, StrictBool, StrictInt, StrictStr, field_validator
from typing import Callable, Dict, Literal, Union

from .time_parser import TimeParser

PrimaryType = Union[str, int, float, bytes, bool]


def parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Env(BaseModel):
    FSMCAST_WORKERS: StrictInt = psutil.cpu_count(logical=False) or 1
    FSMCAST_MESSAGE_BLOCK_SIZE: StrictInt = 100
    FSMCAST_WORKER_EXECUTOR_TYPE: Literal["process", "task"] = "process"
    FSMCAST_COORDINATOR_TIMEOUT: StrictStr | None = None
    FSMCAST_ACK_POLL_INTERVAL: StrictStr = "0.01s"
    FSMCAST_SHUTDOWN_WORKERS: StrictBool = True
    FSMCAST_LOG_LEVEL: StrictStr = "info"
    FSMCAST_LOGS_DIRECTORY: StrictStr | None = None

    @field_validator("FSMCAST_WORKERS", "FSMCAST_MESSAGE_BLOCK_SIZE")
    @classmethod
    def _at_least_one(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")

        return value

    @field_validator("FSMCAST_COORDINATOR_TIMEOUT", "FSMCAST_ACK_POLL_INTERVAL")
    @classmethod
    def _duration(cls, value: str | None) -> str | None:
        if value is not None:
            TimeParser(value)

        return value

    @classmethod
    def types_map(cls) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "FSMCAST_WORKERS": int,
            "FSMCAST_MESSAGE_BLOCK_SIZE": int,
            "FSMCAST_WORKER_EXECUTOR_TYPE": str,
            "FSMCAST_COORDINATOR_TIMEOUT": str,
            "FSMCAST_ACK_POLL_INTERVAL": str,
            "FSMCAST_SHUTDOWN_WORKERS": parse_bool,
            "FSMCAST_LOG_LEVEL": str,
            "FSMCAST_LOGS_DIRECTORY": str,
        }

    @property
    def coordinator_timeout(self) -> float | None:
        if self.FSMCAST_COORDINATOR_TIMEOUT is None:
            return None

        return TimeParser(self.FSMCAST_COORDINATOR_TIMEOUT).time

    @property
    def ack_poll_interval(self) -> float:
        return TimeParser(self.FSMCAST_ACK_POLL_INTERVAL).time
