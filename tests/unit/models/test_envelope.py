"""
Tests for Envelope encoding and validation.

Covers:
- Factories for symbol blocks, acknowledgments and shutdowns
- Decoding of malformed bytes
- Leading symbol validation per channel
"""

import pytest

from fsmcast.automaton import Symbol
from fsmcast.errors import ProtocolViolationError
from fsmcast.models import Channel, Envelope


class TestEnvelopeFactories:
    """Test envelope constructors."""

    def test_symbol_block(self):
        envelope = Envelope.symbol_block(Symbol.B, sender=0, block_size=5)

        assert envelope.payload == [1, 1, 1, 1, 1]
        assert envelope.tag == Channel.SYMBOL
        assert envelope.sender == 0
        assert envelope.leading_symbol(expected_size=5) == Symbol.B

    def test_block_size_is_at_least_one(self):
        envelope = Envelope.symbol_block(Symbol.C, sender=0, block_size=0)

        assert envelope.payload == [2]

    def test_acknowledgment(self):
        envelope = Envelope.acknowledgment(3, block_size=2)

        assert envelope.is_acknowledgment is True
        assert envelope.sender == 3
        assert envelope.leading_symbol() == Symbol.ACK

    def test_shutdown(self):
        envelope = Envelope.shutdown(0)

        assert envelope.tag == Channel.SHUTDOWN
        assert envelope.is_acknowledgment is False
        assert envelope.leading_symbol() == Symbol.SHUTDOWN


class TestEnvelopeCodec:
    """Test the wire format."""

    def test_load_dump(self):
        envelope = Envelope.symbol_block(Symbol.A, sender=0, block_size=3)

        assert Envelope.load(envelope.dump()) == envelope

    def test_tag_is_integer_coded(self):
        data = Envelope.acknowledgment(2).dump()

        assert b'"tag":1' in data

    @pytest.mark.parametrize(
        "data",
        [
            b"not json",
            b'{"payload": [0], "sender": 0}',
            b'{"payload": "A", "sender": 0, "tag": 0}',
            b'{"payload": [0], "sender": 0, "tag": 9}',
        ],
    )
    def test_malformed_bytes(self, data: bytes):
        with pytest.raises(ProtocolViolationError):
            Envelope.load(data)


class TestLeadingSymbol:
    """Test validation of the meaningful payload element."""

    def test_empty_payload(self):
        envelope = Envelope(payload=[], sender=0, tag=Channel.SYMBOL)

        with pytest.raises(ProtocolViolationError):
            envelope.leading_symbol()

    def test_wrong_block_size(self):
        envelope = Envelope.symbol_block(Symbol.A, sender=0, block_size=2)

        with pytest.raises(ProtocolViolationError):
            envelope.leading_symbol(expected_size=3)

    def test_unknown_symbol(self):
        envelope = Envelope(payload=[42], sender=0, tag=Channel.SYMBOL)

        with pytest.raises(ProtocolViolationError):
            envelope.leading_symbol()

    def test_reserved_symbol_on_symbol_channel(self):
        envelope = Envelope.symbol_block(Symbol.ACK, sender=0)

        with pytest.raises(ProtocolViolationError):
            envelope.leading_symbol()

    def test_data_symbol_on_acknowledgment_channel(self):
        envelope = Envelope(payload=[0], sender=1, tag=Channel.ACK)

        assert envelope.is_acknowledgment is False

        with pytest.raises(ProtocolViolationError):
            envelope.leading_symbol()
