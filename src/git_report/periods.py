from __future__ import annotations

import dataclasses
import datetime as dt


@dataclasses.dataclass(frozen=True)
class DateRange:
    start: dt.date  # inclusive
    end: dt.date  # inclusive

    @property
    def until(self) -> dt.date:
        # git --until is exclusive at midnight
        return self.end + dt.timedelta(days=1)

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


def parse_date(value: str) -> dt.date:
    s = (value or "").strip()
    try:
        return dt.datetime.strptime(s, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from None


def parse_date_range(start: str, end: str) -> DateRange:
    d0 = parse_date(start)
    d1 = parse_date(end)
    if d1 < d0:
        raise ValueError(f"End date {d1.isoformat()} is before start date {d0.isoformat()}")
    return DateRange(start=d0, end=d1)


def sanitize_company(name: str) -> str:
    return name.replace(" ", "-").replace("/", "-")


def default_output_name(end: dt.date, company: str) -> str:
    return f"{end.isoformat()}-{sanitize_company(company)}-report.html"
