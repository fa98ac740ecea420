#!/usr/bin/env python3
"""
NSLI Tracker - Main Demo

This script runs one session against in-memory collaborators:
1. Signs up a demo seller
2. Logs a few weeks of daily entries
3. Prints the dashboard (four windows, tiers, history)
4. Demonstrates the what-if calculators
"""

import logging
import sys
from datetime import date, timedelta

from nsli_tracker.collaborators import InMemoryIdentityProvider, InMemoryTrackerStore
from nsli_tracker.config import get_settings
from nsli_tracker.core.entities import WindowName
from nsli_tracker.metrics import format_summary
from nsli_tracker.metrics.dashboard import format_currency
from nsli_tracker.use_cases import TrackerSession, View


DEMO_ENTRIES = [
    # (days before reference, sales, leads, cancellations)
    (1, 8200, 2, 0),
    (2, 0, 1, 0),
    (3, 12500, 3, 1500),
    (6, 4000, 2, 0),
    (9, 9800, 2, 2200),
    (15, 6100, 1, 0),
    (24, 3000, 2, 0),
    (41, 15000, 3, 0),
]


def seed_entries(session: TrackerSession, reference: date) -> None:
    session.navigate(View.ENTRY)
    for days_back, sales, leads, cancels in DEMO_ENTRIES:
        session.update_entry_form(
            date=(reference - timedelta(days=days_back)).isoformat(),
            sales=str(sales),
            leads=str(leads),
            cancellations=str(cancels)
        )
        session.save_entry()


def run_dashboard_demo(reference: date) -> TrackerSession:
    """Sign up, seed entries and print the dashboard."""
    print("=" * 60)
    print("NSLI TRACKER - DASHBOARD DEMO")
    print("=" * 60)
    print()

    session = TrackerSession(
        identity=InMemoryIdentityProvider(),
        store=InMemoryTrackerStore(),
        today=lambda: reference
    )
    session.start()
    session.sign_up("demo@example.com", "demo-password", "Demo Seller")
    print(f"Signed in as: {session.user.display_name}")

    seed_entries(session, reference)
    print(f"Entries logged: {len(session.entries)}")
    print()

    print(format_summary(session.dashboard()))
    print()
    return session


def run_calculator_demo(session: TrackerSession) -> None:
    """Demonstrate the daily target and what-if calculators."""
    print("=" * 60)
    print("CALCULATORS")
    print("=" * 60)
    print()

    needed = session.daily_target()
    print(f"Daily target ({format_currency(session.goals.high)} NSLI, 2 appointments): "
          f"{format_currency(needed)}")

    card = session.dashboard().cards[WindowName.ROLLING]
    result = session.scenario(card.net_sales, card.leads, 5000)
    print(f"Rolling 30 with a $5,000 sale: {format_currency(result.new_ratio)} NSLI "
          f"(net {format_currency(result.new_net_sales)})")
    print()


def main(argv: list = None):
    """Main entry point. Optional argument: reference date (YYYY-MM-DD)."""
    argv = sys.argv[1:] if argv is None else argv
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    reference = date.fromisoformat(argv[0]) if argv else date.today()

    session = run_dashboard_demo(reference)
    run_calculator_demo(session)
    session.close()


if __name__ == "__main__":
    main()
