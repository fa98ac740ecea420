"""
Dashboard Data Generation

Turns aggregates and entries into the snapshot the presentation layer
displays: one stat card per window and the entry history with daily
NSLI, each classified against the goals.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Union

from ..core.entities import Aggregate, Entry, Goals, Tier, WindowName
from .calculator import aggregate_entries, as_entry
from .tiers import classify, gap_to_tier


@dataclass
class StatCard:
    """Aggregated figures for one window."""
    window: WindowName
    sales: float = 0.0
    leads: int = 0
    cancellations: float = 0.0
    net_sales: float = 0.0
    nsli: float = 0.0
    tier: Tier = Tier.LOW
    gap_to_high: float = 0.0

    @property
    def title(self) -> str:
        return self.window.title

    @property
    def subtext(self) -> str:
        return self.window.subtext


@dataclass
class HistoryRow:
    """One entry as listed in the history view."""
    entry: Entry
    nsli: float = 0.0
    tier: Tier = Tier.LOW


@dataclass
class DashboardData:
    """Complete dashboard snapshot."""
    generated_at: datetime = field(default_factory=datetime.now)
    reference_date: Optional[date] = None
    goals: Goals = field(default_factory=Goals)

    cards: dict = field(default_factory=dict)  # WindowName -> StatCard
    history: list = field(default_factory=list)  # HistoryRow, storage order


def build_stat_card(window: WindowName, aggregate: Aggregate, goals: Goals) -> StatCard:
    ratio = aggregate.nsli
    return StatCard(
        window=window,
        sales=aggregate.sales,
        leads=aggregate.leads,
        cancellations=aggregate.cancellations,
        net_sales=aggregate.net_sales,
        nsli=ratio,
        tier=classify(ratio, goals),
        gap_to_high=gap_to_tier(ratio, Tier.HIGH, goals)
    )


def generate_dashboard(
    entries: Iterable[Union[Entry, dict]],
    goals: Goals = None,
    today: date = None,
    aggregates: dict = None
) -> DashboardData:
    """
    Build the dashboard snapshot.

    ``aggregates`` may be passed in when the caller already holds them
    for the same entries and reference date.
    """
    goals = goals or Goals()
    entries = [as_entry(e) for e in entries]
    if aggregates is None:
        aggregates = aggregate_entries(entries, today)

    dashboard = DashboardData(reference_date=today or date.today(), goals=goals)

    for name in WindowName:
        dashboard.cards[name] = build_stat_card(name, aggregates[name], goals)

    for entry in entries:
        dashboard.history.append(HistoryRow(
            entry=entry,
            nsli=entry.nsli,
            tier=classify(entry.nsli, goals)
        ))

    return dashboard


def format_currency(amount: float) -> str:
    """US dollars, no decimals. Halves round away from zero."""
    whole = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if whole < 0 else ""
    return f"{sign}${abs(whole):,}"


def format_summary(dashboard: DashboardData) -> str:
    """Format dashboard as text summary."""
    goals = dashboard.goals
    lines = [
        f"NSLI Dashboard ({dashboard.reference_date.isoformat()})",
        f"Goals: high {format_currency(goals.high)} / medium {format_currency(goals.medium)}",
        ""
    ]

    for card in dashboard.cards.values():
        lines.append(
            f"  {card.title:<14} {format_currency(card.nsli):>10} NSLI "
            f"[{card.tier.value.upper()}]  "
            f"net {format_currency(card.net_sales)}, "
            f"leads {card.leads}, "
            f"cancels {format_currency(card.cancellations)}"
        )

    if dashboard.history:
        lines.extend(["", "History:"])
        for row in dashboard.history:
            lines.append(
                f"  {row.entry.date.isoformat()}  "
                f"sales {format_currency(row.entry.sales)}  "
                f"leads {row.entry.leads}  "
                f"NSLI {format_currency(row.nsli)} ({row.tier.value})"
            )
    else:
        lines.extend(["", "No entries found. Start tracking today!"])

    return "\n".join(lines)
