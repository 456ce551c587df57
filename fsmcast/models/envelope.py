from __future__ import annotations

from fsmcast.automaton import Symbol
from fsmcast.errors import ProtocolViolationError

from .channel import Channel
from .message import Message


CHANNEL_SYMBOLS = {
    Channel.ACK: Symbol.ACK,
    Channel.SHUTDOWN: Symbol.SHUTDOWN,
}


class Envelope(Message, kw_only=True):
    """
    Wire envelope for every message exchanged inside the group.

    ``payload`` is a homogeneous block of one integer-coded symbol. Only
    element zero carries meaning, the block size is a transport sizing
    knob.
    """

    payload: list[int]
    sender: int
    tag: Channel

    @classmethod
    def symbol_block(
        cls,
        symbol: Symbol,
        sender: int,
        block_size: int = 1,
    ) -> Envelope:
        return cls(
            payload=[int(symbol)] * max(block_size, 1),
            sender=sender,
            tag=Channel.SYMBOL,
        )

    @classmethod
    def acknowledgment(
        cls,
        sender: int,
        block_size: int = 1,
    ) -> Envelope:
        return cls(
            payload=[int(Symbol.ACK)] * max(block_size, 1),
            sender=sender,
            tag=Channel.ACK,
        )

    @classmethod
    def shutdown(cls, sender: int) -> Envelope:
        return cls(
            payload=[int(Symbol.SHUTDOWN)],
            sender=sender,
            tag=Channel.SHUTDOWN,
        )

    @property
    def is_acknowledgment(self) -> bool:
        return (
            self.tag == Channel.ACK
            and len(self.payload) > 0
            and self.payload[0] == Symbol.ACK
        )

    def leading_symbol(self, expected_size: int | None = None) -> Symbol:
        if len(self.payload) < 1:
            raise ProtocolViolationError(
                f"Err. - empty payload from sender {self.sender}"
            )

        if expected_size is not None and len(self.payload) != expected_size:
            raise ProtocolViolationError(
                f"Err. - payload from sender {self.sender} has {len(self.payload)} elements, expected {expected_size}"
            )

        symbol = Symbol.from_value(self.payload[0])
        if symbol is None:
            raise ProtocolViolationError(
                f"Err. - unknown symbol tag {self.payload[0]} from sender {self.sender}"
            )

        expected_symbol = CHANNEL_SYMBOLS.get(self.tag)
        if expected_symbol is None and symbol.is_data is False:
            raise ProtocolViolationError(
                f"Err. - reserved symbol {symbol.name} sent on the {self.tag.name} channel"
            )

        elif expected_symbol is not None and symbol != expected_symbol:
            raise ProtocolViolationError(
                f"Err. - {self.tag.name} envelope carries {symbol.name}"
            )

        return symbol
