from .models import Entry, LogLevel


class WorkerTrace(Entry, kw_only=True):
    rank: int
    symbol: str
    state: str
    level: LogLevel = LogLevel.TRACE

class WorkerTransitionInfo(Entry, kw_only=True):
    rank: int
    symbol: str
    previous_state: str
    state: str
    level: LogLevel = LogLevel.INFO

class WorkerAcknowledgmentInfo(Entry, kw_only=True):
    rank: int
    state: str
    received: int
    level: LogLevel = LogLevel.INFO

class WorkerShutdownDebug(Entry, kw_only=True):
    rank: int
    state: str
    received: int
    level: LogLevel = LogLevel.DEBUG

class WorkerError(Entry, kw_only=True):
    rank: int
    error: str
    level: LogLevel = LogLevel.ERROR

class CoordinatorRoundTrace(Entry, kw_only=True):
    round: int
    symbol: str
    workers: int
    level: LogLevel = LogLevel.TRACE

class CoordinatorAcknowledgmentDebug(Entry, kw_only=True):
    rank: int
    acknowledged: int
    workers: int
    level: LogLevel = LogLevel.DEBUG

class CoordinatorRejectionWarning(Entry, kw_only=True):
    sender: int
    tag: str
    reason: str
    level: LogLevel = LogLevel.WARN

class CoordinatorInfo(Entry, kw_only=True):
    status: str
    rounds: int
    acknowledged: int
    workers: int
    policy: str
    level: LogLevel = LogLevel.INFO

class RunnerInfo(Entry, kw_only=True):
    workers: int
    executor: str
    block_size: int
    level: LogLevel = LogLevel.INFO

class RunnerError(Entry, kw_only=True):
    workers: int
    executor: str
    error: str
    level: LogLevel = LogLevel.ERROR
