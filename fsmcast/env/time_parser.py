import re
from datetime import timedelta


DURATION_PATTERN = re.compile(r"(?P<val>\d+(\.\d+)?)(?P<unit>[smhdw]?)", flags=re.I)
DURATION_STRING = re.compile(r"(\d+(\.\d+)?[smhdw]?)+", flags=re.I)


class TimeParser:
    def __init__(self, time_amount: str | int | float | None = None) -> None:
        self._units = {
            "s": "seconds",
            "m": "minutes",
            "h": "hours",
            "d": "days",
            "w": "weeks",
        }

        self.time: float | None = None
        if time_amount is not None:
            self.time = self.parse(time_amount)

    def parse(self, time_amount: str | int | float):
        if isinstance(time_amount, (int, float)):
            return float(time_amount)

        time_amount = time_amount.strip()
        if DURATION_STRING.fullmatch(time_amount) is None:
            raise ValueError(
                f"Err. - could not parse duration {time_amount!r}, expected a value like 30s or 1m30s"
            )

        return float(
            timedelta(
                **{
                    self._units.get(
                        m.group("unit").lower(),
                        "seconds",
                    ): float(
                        m.group("val")
                    )
                    for m in DURATION_PATTERN.finditer(time_amount)
                }
            ).total_seconds()
        )
