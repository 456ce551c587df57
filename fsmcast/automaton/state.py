from enum import IntEnum


class State(IntEnum):
    Q0 = 0  # initial
    Q1 = 1
    Q2 = 2
    Q3 = 3  # accepting
