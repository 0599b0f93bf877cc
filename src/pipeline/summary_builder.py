"""Helpers for building concise insight text for UI consumption."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from config import TOP_N_DISPLAY
from log_models import ProtocolRecord, TriggerScore

STAR_FULL = "★"
STAR_EMPTY = "☆"


def _pct(ratio: float) -> str:
    return f"{ratio * 100:.0f}%"


def _trigger_lines(scores: Sequence[TriggerScore], top_n: int) -> list:
    return [
        f"  - {s.label}: {_pct(s.ratio)} ({s.with_symptom}/{s.total} entries)"
        for s in list(scores)[:max(top_n, 0)]
    ]


def build_trigger_summary(
    symptom: str,
    food: Sequence[TriggerScore],
    env: Sequence[TriggerScore],
    top_n: Optional[int] = None,
) -> str:
    """Bullet digest of the top food and environmental triggers for one symptom."""
    n = TOP_N_DISPLAY if top_n is None else top_n
    if not food and not env:
        return f"- {symptom}: Insufficient data (no item logged often enough to rank)."

    lines = [f"- {symptom}:"]
    if food:
        lines.append("  Potential triggers:")
        lines.extend(_trigger_lines(food, n))
    if env:
        lines.append("  Environmental factors:")
        lines.extend(_trigger_lines(env, n))
    return "\n".join(lines)


def stars(score: int) -> str:
    filled = max(0, min(5, score))
    return STAR_FULL * filled + STAR_EMPTY * (5 - filled)


def build_effectiveness_summary(scored: Sequence[Tuple[ProtocolRecord, int]]) -> str:
    """One line per protocol: title, rating stars, targets and start date."""
    if not scored:
        return "- No active protocols."

    lines = []
    for proto, score in scored:
        rating = stars(score) if score > 0 else "not enough data"
        line = f"- {proto.title}: {rating}"
        if proto.target_symptoms:
            line += f" (targeting {', '.join(proto.target_symptoms)})"
        line += f", started {proto.start_date:%Y-%m-%d}"
        lines.append(line)
    return "\n".join(lines)
