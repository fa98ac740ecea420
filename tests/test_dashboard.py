"""
Tests for dashboard snapshot generation and text formatting.
"""

from datetime import date

import pytest

from nsli_tracker.core.entities import Entry, Goals, Tier, WindowName
from nsli_tracker.metrics.calculator import aggregate_entries
from nsli_tracker.metrics.dashboard import format_currency, format_summary, generate_dashboard


class TestFormatCurrency:

    @pytest.mark.parametrize("amount, text", [
        (0, "$0"),
        (1234, "$1,234"),
        (1234.4, "$1,234"),
        (1234.6, "$1,235"),
        (-1500, "-$1,500"),
        (-0.2, "$0"),
        (2.5, "$3"),
        (-2.5, "-$3"),
        (1234.5, "$1,235"),
    ])
    def test_whole_dollars(self, amount, text):
        assert format_currency(amount) == text


class TestGenerateDashboard:

    def test_cards_per_window(self, sample_entries, reference):
        dashboard = generate_dashboard(sample_entries, Goals(), reference)

        assert list(dashboard.cards) == list(WindowName)
        wtd = dashboard.cards[WindowName.WTD]
        assert wtd.title == "Week to Date"
        assert wtd.subtext == "Mon - Yesterday"
        assert wtd.nsli == 3000
        assert wtd.tier == Tier.MEDIUM
        assert wtd.gap_to_high == 2000

    def test_history_keeps_order_and_classifies(self, sample_entries, reference):
        dashboard = generate_dashboard(sample_entries, Goals(), reference)

        assert [row.entry.id for row in dashboard.history] == [e.id for e in sample_entries]
        first = dashboard.history[0]
        assert first.nsli == 6000
        assert first.tier == Tier.HIGH

    def test_reuses_given_aggregates(self, sample_entries, reference):
        aggregates = aggregate_entries(sample_entries, reference)
        dashboard = generate_dashboard(sample_entries, Goals(), reference, aggregates=aggregates)
        assert dashboard.cards[WindowName.YTD].sales == aggregates[WindowName.YTD].sales

    def test_custom_goals_change_tiers(self, sample_entries, reference):
        dashboard = generate_dashboard(sample_entries, Goals(high=2500, medium=1000), reference)
        assert dashboard.cards[WindowName.WTD].tier == Tier.HIGH

    def test_empty(self, reference):
        dashboard = generate_dashboard([], today=reference)
        assert all(card.nsli == 0 for card in dashboard.cards.values())
        assert all(card.tier == Tier.LOW for card in dashboard.cards.values())
        assert dashboard.history == []

    def test_accepts_plain_records(self, reference):
        records = [
            {"id": "b", "date": "2024-06-11", "sales": 0, "leads": 1, "cancellations": 0},
            {"id": "a", "date": "2024-06-10", "sales": 6000, "leads": 1, "cancellations": 0},
        ]
        dashboard = generate_dashboard(records, Goals(), reference)

        assert dashboard.cards[WindowName.WTD].nsli == 3000
        assert dashboard.cards[WindowName.WTD].tier == Tier.MEDIUM
        assert all(isinstance(row.entry, Entry) for row in dashboard.history)
        assert [row.entry.id for row in dashboard.history] == ["b", "a"]
        assert dashboard.history[1].nsli == 6000
        assert dashboard.history[1].tier == Tier.HIGH


class TestFormatSummary:

    def test_contains_windows_and_history(self, sample_entries, reference):
        text = format_summary(generate_dashboard(sample_entries, Goals(), reference))

        assert "NSLI Dashboard (2024-06-15)" in text
        assert "Goals: high $5,000 / medium $3,000" in text
        for name in WindowName:
            assert name.title in text
        assert "[MEDIUM]" in text
        assert "2024-06-10" in text

    def test_empty_history_message(self, reference):
        text = format_summary(generate_dashboard([], today=reference))
        assert "No entries found" in text
