import msgspec
import orjson

from fsmcast.errors import ProtocolViolationError


class Message(msgspec.Struct):

    @classmethod
    def load(cls, data: bytes):
        try:
            return msgspec.convert(
                orjson.loads(data),
                cls,
            )

        except (
            orjson.JSONDecodeError,
            msgspec.ValidationError,
        ) as err:
            raise ProtocolViolationError(
                f"Err. - could not decode {cls.__name__}: {err}"
            ) from err

    def dump(self) -> bytes:
        return orjson.dumps(
            msgspec.structs.asdict(self)
        )
