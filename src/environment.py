"""
Environmental context attached to each log entry.

Moon phase uses the arithmetic Julian-date approximation (accurate to about
a day), which is all a symptom log needs. Pressure is bucketed into the
same three labels the log store records.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from enum import Enum
from typing import Optional, Tuple, Union

from config import SUDDEN_PRESSURE_CHANGE_HPA

DateLike = Union[date, datetime]

SYNODIC_MONTH_DAYS = 29.53058867
# Julian day of the new moon on 2000-01-06
REFERENCE_NEW_MOON_JD = 2451550.1

# Upper bound (moon age in days) of each phase; anything above is waning crescent
_PHASE_UPPER_BOUNDS = (
    (1.0, "New Moon"),
    (6.38264692644, "Waxing Crescent"),
    (8.38264692644, "First Quarter"),
    (13.76529385288, "Waxing Gibbous"),
    (15.76529385288, "Full Moon"),
    (21.14794077932, "Waning Gibbous"),
    (23.14794077932, "Last Quarter"),
)

PRESSURE_LOW_HPA = 1000.0
PRESSURE_HIGH_HPA = 1020.0


class MoonPhase(str, Enum):
    NEW_MOON = "New Moon"
    WAXING_CRESCENT = "Waxing Crescent"
    FIRST_QUARTER = "First Quarter"
    WAXING_GIBBOUS = "Waxing Gibbous"
    FULL_MOON = "Full Moon"
    WANING_GIBBOUS = "Waning Gibbous"
    LAST_QUARTER = "Last Quarter"
    WANING_CRESCENT = "Waning Crescent"

    def __str__(self) -> str:
        return self.value

    @property
    def emoji(self) -> str:
        return _MOON_EMOJI[self]

    @property
    def display(self) -> str:
        return f"{self.value} {self.emoji}"

    @classmethod
    def from_label(cls, label: str) -> Optional["MoonPhase"]:
        """Parse stored labels such as 'Full Moon 🌕' or 'full moon'."""
        lowered = (label or "").lower()
        for phase in cls:
            if phase.value.lower() in lowered:
                return phase
        return None


_MOON_EMOJI = {
    MoonPhase.NEW_MOON: "🌑",
    MoonPhase.WAXING_CRESCENT: "🌒",
    MoonPhase.FIRST_QUARTER: "🌓",
    MoonPhase.WAXING_GIBBOUS: "🌔",
    MoonPhase.FULL_MOON: "🌕",
    MoonPhase.WANING_GIBBOUS: "🌖",
    MoonPhase.LAST_QUARTER: "🌗",
    MoonPhase.WANING_CRESCENT: "🌘",
}


class PressureCategory(str, Enum):
    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"

    def __str__(self) -> str:
        return self.value


# ─── Moon ──────────────────────────────────────────────────────


def _julian_day(d: DateLike) -> float:
    yy = d.year - (12 - d.month) // 10
    mm = d.month + 9
    if mm >= 12:
        mm -= 12
    mm += 1
    k1 = math.floor(365.25 * (yy + 4712))
    k2 = math.floor(30.6 * mm + 0.5)
    k3 = math.floor(math.floor(yy / 100 + 49) * 0.75) - 38
    return k1 + k2 + d.day + 59 - k3


def moon_age(d: DateLike) -> float:
    """Days since the last new moon, in [0, 29.53)."""
    cycles = (_julian_day(d) - REFERENCE_NEW_MOON_JD) / SYNODIC_MONTH_DAYS
    return (cycles - math.floor(cycles)) * 29.53


def moon_phase_for(d: DateLike) -> str:
    """Plain phase name, as stored on log entries."""
    age = moon_age(d)
    for upper, name in _PHASE_UPPER_BOUNDS:
        if age <= upper:
            return name
    return MoonPhase.WANING_CRESCENT.value


# ─── Pressure ──────────────────────────────────────────────────


def pressure_category(hpa: float) -> str:
    """Log-store label for a reading in hPa."""
    if hpa < PRESSURE_LOW_HPA:
        return PressureCategory.LOW.value
    if hpa <= PRESSURE_HIGH_HPA:
        return PressureCategory.NORMAL.value
    return PressureCategory.HIGH.value


def is_sudden_pressure_change(previous_hpa: Optional[float], current_hpa: float,
                              threshold: float = SUDDEN_PRESSURE_CHANGE_HPA) -> bool:
    if previous_hpa is None:
        return False
    return abs(current_hpa - previous_hpa) >= threshold


# ─── Season ────────────────────────────────────────────────────


def season_for(d: DateLike) -> str:
    """Northern-hemisphere astronomical season."""
    month, day = d.month, d.day
    if month == 3:
        return "Spring" if day >= 20 else "Winter"
    if month in (4, 5):
        return "Spring"
    if month == 6:
        return "Summer" if day >= 21 else "Spring"
    if month in (7, 8):
        return "Summer"
    if month == 9:
        return "Fall" if day >= 23 else "Summer"
    if month in (10, 11):
        return "Fall"
    if month == 12:
        return "Winter" if day >= 21 else "Fall"
    return "Winter"


# ─── Mercury retrograde ────────────────────────────────────────

# Inclusive (start, end); extend annually.
MERCURY_RETROGRADE_PERIODS: Tuple[Tuple[date, date], ...] = (
    (date(2025, 3, 14), date(2025, 4, 7)),
    (date(2025, 7, 17), date(2025, 8, 11)),
    (date(2025, 11, 9), date(2025, 11, 29)),
    (date(2026, 2, 25), date(2026, 3, 20)),
    (date(2026, 6, 29), date(2026, 7, 23)),
    (date(2026, 10, 24), date(2026, 11, 13)),
)


def _as_date(d: DateLike) -> date:
    return d.date() if isinstance(d, datetime) else d


def is_mercury_retrograde(d: DateLike) -> bool:
    day = _as_date(d)
    return any(start <= day <= end for start, end in MERCURY_RETROGRADE_PERIODS)


def current_or_next_retrograde(d: DateLike) -> Optional[Tuple[date, date]]:
    day = _as_date(d)
    for start, end in MERCURY_RETROGRADE_PERIODS:
        if start <= day <= end:
            return start, end
    for start, end in MERCURY_RETROGRADE_PERIODS:
        if start > day:
            return start, end
    return None
