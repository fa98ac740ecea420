"""
Core Tracker Entities

Entities:
- Entry: One day's recorded activity (sales, cancellations, leads)
- Goals: The two NSLI thresholds a seller measures against
- DateWindow: Inclusive date range used to bucket entries
- Aggregate: Running totals of entries inside a window
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Optional


class Tier(Enum):
    """
    Classification of an NSLI ratio against the configured goals.
    Each tier is inclusive at its lower edge.
    """
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class WindowName(Enum):
    """
    The four aggregation windows shown on the dashboard.

    Calendar-bounded windows (YTD, MTD) run to the natural end of the
    period. Trailing windows (ROLLING, WTD) stop at yesterday.
    """
    YTD = "ytd"
    MTD = "mtd"
    ROLLING = "rolling"
    WTD = "wtd"

    @property
    def title(self) -> str:
        return _WINDOW_TITLES[self][0]

    @property
    def subtext(self) -> str:
        return _WINDOW_TITLES[self][1]


_WINDOW_TITLES = {
    WindowName.YTD: ("Year to Date", "Fiscal (Nov 1 - Oct 31)"),
    WindowName.MTD: ("Month to Date", "Current Month"),
    WindowName.ROLLING: ("Rolling 30", "Last 30 Days (Lagging)"),
    WindowName.WTD: ("Week to Date", "Mon - Yesterday"),
}


def parse_entry_date(value) -> date:
    """Accept a date, a datetime or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


@dataclass(frozen=True)
class Entry:
    """
    A single user-submitted record of a day's activity.

    Entries are created by explicit submission and deleted by explicit
    action; they are never edited in place, hence frozen.
    """
    date: date
    sales: float = 0.0
    cancellations: float = 0.0
    leads: int = 0
    id: Optional[str] = None
    timestamp: Optional[datetime] = field(default=None, compare=False)

    @property
    def net_sales(self) -> float:
        return self.sales - self.cancellations

    @property
    def nsli(self) -> float:
        """Daily NSLI. Zero when no leads were issued."""
        return self.net_sales / self.leads if self.leads > 0 else 0

    @classmethod
    def from_record(cls, record: dict, entry_id: str = None) -> "Entry":
        """Build an entry from a stored record (date as ISO string)."""
        return cls(
            id=entry_id if entry_id is not None else record.get("id"),
            date=parse_entry_date(record["date"]),
            sales=record.get("sales", 0),
            cancellations=record.get("cancellations", 0),
            leads=record.get("leads", 0),
            timestamp=record.get("timestamp"),
        )

    def to_record(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "sales": self.sales,
            "leads": self.leads,
            "cancellations": self.cancellations,
        }


DEFAULT_HIGH_GOAL = 5000.0
DEFAULT_MEDIUM_GOAL = 3000.0


@dataclass
class Goals:
    """
    Per-user NSLI thresholds.

    ratio >= high is the best tier, ratio >= medium the middle tier,
    anything below medium the worst tier.
    """
    high: float = DEFAULT_HIGH_GOAL
    medium: float = DEFAULT_MEDIUM_GOAL

    @classmethod
    def from_settings(cls, settings_record: Optional[dict]) -> "Goals":
        """Read goals from a stored settings record, falling back to defaults."""
        if not settings_record or not settings_record.get("goals"):
            return cls()
        goals = settings_record["goals"]
        return cls(
            high=goals.get("high", DEFAULT_HIGH_GOAL),
            medium=goals.get("medium", DEFAULT_MEDIUM_GOAL),
        )

    def to_record(self) -> dict:
        return {"high": self.high, "medium": self.medium}


@dataclass(frozen=True)
class DateWindow:
    """A pair of inclusive instants bounding an aggregation window."""
    start: datetime
    end: datetime

    def contains(self, day: date) -> bool:
        """True when ``day`` at local midnight lies within [start, end]."""
        instant = datetime.combine(parse_entry_date(day), time.min)
        return self.start <= instant <= self.end

    @property
    def is_empty(self) -> bool:
        return self.end < self.start


@dataclass
class Aggregate:
    """Totals of the entries that fall inside one window."""
    sales: float = 0.0
    leads: int = 0
    cancellations: float = 0.0

    def add(self, entry: Entry) -> None:
        self.sales += entry.sales
        self.leads += entry.leads
        self.cancellations += entry.cancellations

    @property
    def net_sales(self) -> float:
        return self.sales - self.cancellations

    @property
    def nsli(self) -> float:
        """NSLI over the window. Zero when no leads were issued."""
        return self.net_sales / self.leads if self.leads > 0 else 0

    def to_dict(self) -> dict:
        return {
            "sales": self.sales,
            "leads": self.leads,
            "cancellations": self.cancellations,
        }
