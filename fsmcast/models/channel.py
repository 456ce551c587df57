from enum import IntEnum


class Channel(IntEnum):
    SYMBOL = 0
    ACK = 1
    SHUTDOWN = 2
