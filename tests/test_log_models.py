"""Tests for snapshot records and their dict / pandas conversions."""
from datetime import date, datetime

import pandas as pd
import pytest

from environment import moon_phase_for
from log_models import (
    LOG_COLUMNS,
    LogEntry,
    Treatment,
    log_entry_from_dict,
    logs_to_frame,
    protocol_from_dict,
)


class TestLogsToFrame:

    def test_empty_snapshot_keeps_columns(self):
        df = logs_to_frame([])
        assert list(df.columns) == LOG_COLUMNS
        assert df.empty

    def test_first_treatment_name(self):
        t = Treatment(type="supplement", name="Peppermint oil", start_date=datetime(2026, 1, 1))
        df = logs_to_frame([
            LogEntry(date=datetime(2026, 1, 2), symptoms=("Bloating",), treatments=(t,)),
            LogEntry(date=datetime(2026, 1, 3)),
        ])
        assert df["treatment"].iloc[0] == "Peppermint oil"
        assert pd.isna(df["treatment"].iloc[1])
        assert df["symptoms"].iloc[0] == ("Bloating",)


class TestFromDict:

    def test_log_entry(self):
        e = log_entry_from_dict({
            "id": "abc",
            "date": "2026-03-02T08:30:00",
            "symptoms": ["Headache", "Nausea"],
            "food_drink_item": "Coffee",
            "severity": "4",
            "moon_phase": "Full Moon",
            "treatments": [{"type": "med", "name": "Ibuprofen", "start_date": "2026-03-02"}],
        })
        assert e.date == datetime(2026, 3, 2, 8, 30)
        assert e.symptoms == ("Headache", "Nausea")
        assert e.severity == 4
        assert e.atmospheric_pressure == "Normal"
        assert e.treatments[0].name == "Ibuprofen"
        assert e.entry_id == "abc"

    def test_empty_food_becomes_none(self):
        e = log_entry_from_dict({"date": "2026-03-02", "food_drink_item": ""})
        assert e.food_drink_item is None

    def test_zulu_timestamp(self):
        e = log_entry_from_dict({"date": "2026-03-02T08:30:00Z"})
        assert e.date.utcoffset().total_seconds() == 0

    def test_bad_date_raises(self):
        with pytest.raises(ValueError, match="date"):
            log_entry_from_dict({"date": "yesterday"})

    def test_missing_date_raises(self):
        with pytest.raises(ValueError):
            log_entry_from_dict({"symptoms": ["Headache"]})

    def test_bad_severity_raises(self):
        with pytest.raises(ValueError, match="severity"):
            log_entry_from_dict({"date": "2026-03-02", "severity": "bad"})

    def test_protocol(self):
        p = protocol_from_dict({
            "title": "Elimination diet",
            "start_date": date(2026, 3, 1),
            "symptoms": ["Bloating"],
            "is_active": False,
        })
        assert p.start_date == datetime(2026, 3, 1)
        assert p.target_symptoms == ("Bloating",)
        assert p.is_active is False

    def test_protocol_requires_title(self):
        with pytest.raises(ValueError, match="title"):
            protocol_from_dict({"start_date": "2026-03-01"})

    def test_protocol_string_flag(self):
        p = protocol_from_dict({"title": "Paused", "start_date": "2026-03-01", "is_active": "false"})
        assert p.is_active is False

    def test_protocol_bad_flag_raises(self):
        with pytest.raises(ValueError, match="is_active"):
            protocol_from_dict({"title": "Paused", "start_date": "2026-03-01", "is_active": "maybe"})


class TestFieldParsing:

    @pytest.mark.parametrize("raw, expected", [
        ("false", False), ("FALSE", False), ("no", False), ("0", False), (0, False), (False, False),
        ("true", True), (" Yes ", True), (1, True), (True, True),
    ])
    def test_boolean_flags(self, raw, expected):
        e = log_entry_from_dict({"date": "2026-03-02", "sudden_change": raw, "is_mercury_retrograde": raw})
        assert e.sudden_change is expected
        assert e.is_mercury_retrograde is expected

    @pytest.mark.parametrize("raw", ["maybe", "", 2, 0.5, [True]])
    def test_unrecognised_boolean_raises(self, raw):
        with pytest.raises(ValueError, match="sudden_change"):
            log_entry_from_dict({"date": "2026-03-02", "sudden_change": raw})

    @pytest.mark.parametrize("raw, expected", [(3, 3), (3.0, 3), (" 5 ", 5)])
    def test_whole_number_severity(self, raw, expected):
        assert log_entry_from_dict({"date": "2026-03-02", "severity": raw}).severity == expected

    @pytest.mark.parametrize("raw", [3.7, True, "3.5", None])
    def test_fractional_or_non_numeric_severity_raises(self, raw):
        with pytest.raises(ValueError, match="severity"):
            log_entry_from_dict({"date": "2026-03-02", "severity": raw})

    def test_fractional_rating_raises(self):
        with pytest.raises(ValueError, match="protocol_effectiveness"):
            log_entry_from_dict({"date": "2026-03-02", "protocol_effectiveness": 4.5})

    def test_non_object_treatment_raises(self):
        with pytest.raises(ValueError, match=r"treatments\[0\]"):
            log_entry_from_dict({"date": "2026-03-02", "treatments": ["Ibuprofen"]})


class TestDerivedContext:

    def test_missing_context_derived_from_date(self):
        e = log_entry_from_dict({"date": "2026-03-03T09:00:00"})
        assert e.moon_phase == moon_phase_for(date(2026, 3, 3))
        assert e.season == "Winter"
        assert e.is_mercury_retrograde is True

    def test_outside_retrograde(self):
        e = log_entry_from_dict({"date": "2026-05-01"})
        assert e.is_mercury_retrograde is False
        assert e.season == "Spring"

    def test_recorded_context_kept(self):
        e = log_entry_from_dict({
            "date": "2026-03-03",
            "moon_phase": "Full Moon",
            "season": "Spring",
            "is_mercury_retrograde": False,
        })
        assert e.moon_phase == "Full Moon"
        assert e.season == "Spring"
        assert e.is_mercury_retrograde is False

    def test_symptoms_standardized(self):
        e = log_entry_from_dict({
            "date": "2026-03-02",
            "symptoms": [" left shoulder ache", "Headache ", "", "sore LEFT shoulder"],
        })
        assert e.symptoms == ("Shoulder Pain Left", "Headache")

    def test_protocol_targets_standardized(self):
        p = protocol_from_dict({"title": "Stretch", "start_date": "2026-03-01",
                                "target_symptoms": ["right calf cramp"]})
        assert p.target_symptoms == ("Calf Pain Right",)
