"""Tests for protocol effectiveness scoring."""
from datetime import date, datetime, timedelta

import pytest

from analytics.effectiveness import (
    NEUTRAL_SCORE,
    NO_DATA_SCORE,
    improvement_to_score,
    score,
    score_active_protocols,
    weekly_aggregates,
)
from log_models import LogEntry, ProtocolRecord

# Monday of ISO week 10, 2026
WEEK1 = datetime(2026, 3, 2, 8, 0)


def _entry(day_offset, severity, symptoms=("Bloating",)):
    return LogEntry(date=WEEK1 + timedelta(days=day_offset), symptoms=tuple(symptoms), severity=severity)


def _protocol(targets=("Bloating",), start=WEEK1, active=True, title="Low FODMAP"):
    return ProtocolRecord(title=title, start_date=start, target_symptoms=tuple(targets), is_active=active)


class TestScoreDefaults:

    def test_no_targets_scores_zero(self):
        logs = [_entry(0, 5), _entry(21, 1)]
        assert score(_protocol(targets=()), logs) == NO_DATA_SCORE == 0

    def test_no_relevant_entries_scores_zero(self):
        logs = [_entry(0, 5, ["Headache"]), _entry(21, 1, ["Headache"])]
        assert score(_protocol(), logs) == 0

    def test_entries_before_start_are_ignored(self):
        logs = [_entry(-14, 5), _entry(-7, 1)]
        assert score(_protocol(), logs) == 0

    def test_single_week_is_neutral(self):
        logs = [_entry(0, 5), _entry(3, 1), _entry(6, 2)]
        assert score(_protocol(), logs) == NEUTRAL_SCORE == 3

    def test_empty_logs(self):
        assert score(_protocol(), []) == 0


class TestScoreTrend:

    def test_significant_improvement_example(self):
        # week 1: 5 and 3 -> 4.0; week 4: 1 -> 1.0; improvement 3.0
        logs = [_entry(0, 5), _entry(1, 3), _entry(21, 1)]
        assert score(_protocol(), logs) == 5

    def test_worsened_materially(self):
        logs = [_entry(0, 1), _entry(14, 4)]
        assert score(_protocol(), logs) == 1

    def test_slightly_worse(self):
        logs = [_entry(0, 2), _entry(1, 3), _entry(7, 3)]
        assert score(_protocol(), logs) == 2

    def test_no_change(self):
        logs = [_entry(0, 3), _entry(7, 3)]
        assert score(_protocol(), logs) == 3

    def test_improved(self):
        logs = [_entry(0, 4), _entry(7, 3)]
        assert score(_protocol(), logs) == 4

    def test_only_first_and_last_week_matter(self):
        logs = [_entry(0, 4), _entry(7, 1), _entry(14, 5), _entry(21, 3)]
        assert score(_protocol(), logs) == 4

    def test_any_overlapping_target_counts(self):
        logs = [_entry(0, 5, ["Gas"]), _entry(14, 2, ["Bloating", "Cramps"])]
        assert score(_protocol(targets=("Gas", "Bloating")), logs) == 5

    def test_entry_on_start_date_is_relevant(self):
        logs = [_entry(0, 5), _entry(14, 5)]
        assert score(_protocol(start=WEEK1), logs) == 3

    def test_iso_week_spans_year_boundary(self):
        # 2026-12-31 (Thu) and 2027-01-01 (Fri) share ISO week 53 of 2026
        start = datetime(2026, 12, 28)
        logs = [
            LogEntry(date=datetime(2026, 12, 31), symptoms=("Bloating",), severity=5),
            LogEntry(date=datetime(2027, 1, 1), symptoms=("Bloating",), severity=1),
        ]
        assert score(_protocol(start=start), logs) == NEUTRAL_SCORE

    def test_idempotent(self):
        logs = [_entry(0, 5), _entry(1, 3), _entry(21, 1)]
        proto = _protocol()
        assert score(proto, logs) == score(proto, logs)


class TestImprovementToScore:

    @pytest.mark.parametrize("improvement, expected", [
        (-3.0, 1),
        (-1.0, 1),
        (-0.5, 2),
        (0.0, 3),
        (0.99, 3),
        (1.0, 4),
        (1.5, 4),
        (2.0, 5),
        (4.0, 5),
    ])
    def test_thresholds(self, improvement, expected):
        assert improvement_to_score(improvement) == expected


class TestWeeklyAggregates:

    def test_means_and_week_starts(self):
        logs = [_entry(21, 1), _entry(0, 5), _entry(1, 3)]
        weeks = weekly_aggregates(_protocol(), logs)
        assert [w.week_start for w in weeks] == [date(2026, 3, 2), date(2026, 3, 23)]
        assert [w.mean_severity for w in weeks] == [4.0, 1.0]
        assert [w.entry_count for w in weeks] == [2, 1]

    def test_empty_when_no_targets(self):
        assert weekly_aggregates(_protocol(targets=()), [_entry(0, 3)]) == []


class TestScoreActiveProtocols:

    def test_only_active_in_input_order(self):
        logs = [_entry(0, 5), _entry(1, 3), _entry(21, 1)]
        a = _protocol(title="A")
        b = _protocol(title="B", active=False)
        c = _protocol(title="C", targets=())
        scored = score_active_protocols([a, b, c], logs)
        assert [(p.title, s) for p, s in scored] == [("A", 5), ("C", 0)]
