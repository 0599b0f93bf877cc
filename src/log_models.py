"""
Snapshot records consumed by the analytics modules.

Log entries and protocols are owned by the tracker's log store; this module
only describes the read-only shape handed to the analytics, plus the small
derived records the analytics return.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional, Tuple

import pandas as pd

import environment
from constants import standardize_symptom_name

LOG_COLUMNS = [
    "entry_id", "date", "symptoms", "food_drink_item", "severity",
    "moon_phase", "atmospheric_pressure", "season",
    "protocol_id", "protocol_effectiveness", "treatment",
]


@dataclass(frozen=True)
class Treatment:
    type: str
    name: str
    start_date: datetime
    end_date: Optional[datetime] = None
    dosage: Optional[str] = None
    effectiveness: Optional[int] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class LogEntry:
    date: datetime
    symptoms: Tuple[str, ...] = ()
    food_drink_item: Optional[str] = None
    severity: int = 1
    moon_phase: str = ""
    atmospheric_pressure: str = "Normal"
    season: str = ""
    sudden_change: bool = False
    is_mercury_retrograde: bool = False
    protocol_id: Optional[str] = None
    protocol_effectiveness: Optional[int] = None
    treatments: Tuple[Treatment, ...] = ()
    entry_id: str = ""

    def has_symptom(self, symptom: str) -> bool:
        return symptom in self.symptoms


@dataclass(frozen=True)
class ProtocolRecord:
    title: str
    start_date: datetime
    target_symptoms: Tuple[str, ...] = ()
    is_active: bool = True
    protocol_id: str = ""
    category: str = ""


@dataclass(frozen=True)
class TriggerScore:
    label: str
    ratio: float
    total: int = 0
    with_symptom: int = 0


@dataclass(frozen=True)
class WeeklyAggregate:
    week_start: date
    mean_severity: float
    entry_count: int = 0


# ─── pandas view ───────────────────────────────────────────────


def logs_to_frame(logs: Iterable[LogEntry]) -> pd.DataFrame:
    """One row per entry; an empty snapshot still carries every column."""
    rows = [
        {
            "entry_id": e.entry_id,
            "date": e.date,
            "symptoms": tuple(e.symptoms),
            "food_drink_item": e.food_drink_item,
            "severity": e.severity,
            "moon_phase": e.moon_phase,
            "atmospheric_pressure": e.atmospheric_pressure,
            "season": e.season,
            "protocol_id": e.protocol_id,
            "protocol_effectiveness": e.protocol_effectiveness,
            "treatment": e.treatments[0].name if e.treatments else None,
        }
        for e in logs
    ]
    return pd.DataFrame(rows, columns=LOG_COLUMNS)


# ─── dict snapshots (JSON exports) ─────────────────────────────


def _parse_datetime(value: Any, field_name: str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError(f"Invalid {field_name}: {value!r}") from e
    raise ValueError(f"Missing or invalid {field_name}: {value!r}")


def _str_tuple(value: Any) -> Tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


_TRUE_STRINGS = frozenset({"true", "yes", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "0"})


def _parse_bool(value: Any, field_name: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"Invalid {field_name}: {value!r}")


def _parse_int(value: Any, field_name: str) -> int:
    """Whole numbers only: 4, 4.0 and "4" parse, 3.7 and True do not."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid {field_name}: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as e:
            raise ValueError(f"Invalid {field_name}: {value!r}") from e
    raise ValueError(f"Invalid {field_name}: {value!r}")


def _optional_int(value: Any, field_name: str) -> Optional[int]:
    return None if value is None else _parse_int(value, field_name)


def _symptom_names(value: Any) -> Tuple[str, ...]:
    names = (standardize_symptom_name(s) for s in _str_tuple(value))
    return tuple(dict.fromkeys(n for n in names if n))


def treatment_from_dict(raw: Dict[str, Any]) -> Treatment:
    end = raw.get("end_date")
    return Treatment(
        type=str(raw.get("type", "")),
        name=str(raw.get("name", "")),
        start_date=_parse_datetime(raw.get("start_date"), "treatment.start_date"),
        end_date=_parse_datetime(end, "treatment.end_date") if end else None,
        dosage=raw.get("dosage"),
        effectiveness=_optional_int(raw.get("effectiveness"), "treatment.effectiveness"),
        notes=raw.get("notes"),
    )


def _treatments(value: Any) -> Tuple[Treatment, ...]:
    treatments = []
    for i, row in enumerate(value or []):
        if not isinstance(row, dict):
            raise ValueError(f"treatments[{i}]: expected an object, got {type(row).__name__}")
        treatments.append(treatment_from_dict(row))
    return tuple(treatments)


def log_entry_from_dict(raw: Dict[str, Any]) -> LogEntry:
    """
    Build a LogEntry from an exported row.

    Moon phase, season and Mercury retrograde are derived from the entry date
    when the export leaves them out; values that are present are kept as is.
    """
    when = _parse_datetime(raw.get("date"), "date")
    return LogEntry(
        date=when,
        symptoms=_symptom_names(raw.get("symptoms")),
        food_drink_item=raw.get("food_drink_item") or None,
        severity=_parse_int(raw.get("severity", 1), "severity"),
        moon_phase=raw.get("moon_phase") or environment.moon_phase_for(when),
        atmospheric_pressure=raw.get("atmospheric_pressure", "Normal") or "",
        season=raw.get("season") or environment.season_for(when),
        sudden_change=_parse_bool(raw.get("sudden_change"), "sudden_change", False),
        is_mercury_retrograde=_parse_bool(
            raw.get("is_mercury_retrograde"), "is_mercury_retrograde",
            environment.is_mercury_retrograde(when),
        ),
        protocol_id=raw.get("protocol_id"),
        protocol_effectiveness=_optional_int(raw.get("protocol_effectiveness"), "protocol_effectiveness"),
        treatments=_treatments(raw.get("treatments")),
        entry_id=str(raw.get("id", raw.get("entry_id", ""))),
    )


def protocol_from_dict(raw: Dict[str, Any]) -> ProtocolRecord:
    title = raw.get("title")
    if not title:
        raise ValueError("Protocol is missing a title")
    return ProtocolRecord(
        title=str(title),
        start_date=_parse_datetime(raw.get("start_date"), "start_date"),
        target_symptoms=_symptom_names(raw.get("target_symptoms", raw.get("symptoms"))),
        is_active=_parse_bool(raw.get("is_active"), "is_active", True),
        protocol_id=str(raw.get("id", raw.get("protocol_id", ""))),
        category=raw.get("category") or "",
    )
