"""
Metrics Calculator

Buckets entries into the four overlapping windows and sums sales, leads
and cancellations per window. Also hosts the stateless what-if
calculators.

Everything here is a pure function of its inputs: no I/O, no retained
state, safe to memoize on (entries, reference date).
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Union

from ..core.entities import Aggregate, Entry, WindowName
from .windows import compute_windows


def net_sales(sales: float, cancellations: float) -> float:
    return sales - cancellations


def nsli_ratio(net: float, leads: int) -> float:
    """Net sales per lead issued. Zero leads yields 0, never an error."""
    return net / leads if leads > 0 else 0


def as_entry(entry: Union[Entry, dict]) -> Entry:
    """Accept an Entry or a stored record with an ISO date string."""
    if isinstance(entry, Entry):
        return entry
    return Entry.from_record(entry)


def aggregate_entries(
    entries: Iterable[Union[Entry, dict]],
    today: date = None
) -> dict[WindowName, Aggregate]:
    """
    Sum entries into every window that contains their date.

    An entry may count toward zero to four windows. Order of ``entries``
    does not matter.
    """
    windows = compute_windows(today)
    aggregates = {name: Aggregate() for name in windows}

    for raw in entries:
        entry = as_entry(raw)
        for name, window in windows.items():
            if window.contains(entry.date):
                aggregates[name].add(entry)

    return aggregates


def daily_target(appointment_count: float, target_ratio: float) -> float:
    """Sales needed today to hit ``target_ratio`` over ``appointment_count`` leads."""
    return appointment_count * target_ratio


@dataclass
class ScenarioResult:
    """Outcome of adding a hypothetical sale to current figures."""
    new_net_sales: float
    new_ratio: float


def scenario(
    current_net_sales: float,
    current_leads: int,
    added_sale_amount: float
) -> ScenarioResult:
    """What the NSLI would become after one more sale."""
    new_net = current_net_sales + added_sale_amount
    return ScenarioResult(
        new_net_sales=new_net,
        new_ratio=nsli_ratio(new_net, current_leads)
    )
