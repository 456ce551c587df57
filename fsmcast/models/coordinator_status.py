from enum import Enum


class CoordinatorStatus(Enum):
    COMPLETED = "COMPLETED"
    ROUND_CAP_REACHED = "ROUND_CAP_REACHED"
    SOURCE_EXHAUSTED = "SOURCE_EXHAUSTED"
    TIMED_OUT = "TIMED_OUT"
