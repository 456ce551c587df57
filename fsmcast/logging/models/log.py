import msgspec

from .entry import Entry


class Log(msgspec.Struct, kw_only=True):
    entry: Entry
    filename: str
    function_name: str
    line_number: int
    thread_id: int
    timestamp: str
