from typing import Any, Dict

import msgspec

from .log_level import LogLevel


class Entry(msgspec.Struct, kw_only=True):
    """
    Base for every structured log record. Subclasses add their own
    fields and a default ``level``.
    """

    message: str
    level: LogLevel

    def to_template(
        self,
        template: str,
        context: Dict[str, Any] | None = None,
    ) -> str:
        fields = msgspec.structs.asdict(self)
        fields["level"] = self.level.value

        if context:
            fields.update(context)

        return template.format(**fields)
