"""
Trigger Correlation Engine
==========================
Ranks the contextual values that co-occur with a chosen symptom.

For every distinct value of a context column (food/drink item, moon phase,
pressure category) the engine counts how many entries carry that value and
how many of those also list the target symptom:

    ratio = with_symptom / total

Buckets with fewer than MIN_SAMPLE_SIZE entries are dropped so one or two
observations cannot produce a 100% "trigger". Results are sorted by ratio,
descending; ties keep the order in which the values first appear in the log.

Food and environment results are returned separately. Environment labels are
prefixed with their source ("Moon: ", "Pressure: ") so both kinds can share
one chart. Truncation to TOP_N_DISPLAY is left to presentation helpers.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from config import MIN_SAMPLE_SIZE, TOP_N_DISPLAY
from log_models import LogEntry, TriggerScore, logs_to_frame

log = logging.getLogger("correlation_engine")

FOOD_COLUMN = "food_drink_item"

# (column, label prefix) in display order
ENVIRONMENT_FACTORS = [
    ("moon_phase", "Moon: "),
    ("atmospheric_pressure", "Pressure: "),
]


def _rank(scores: List[TriggerScore]) -> List[TriggerScore]:
    # sorted() is stable with reverse=True, so ties keep insertion order
    return sorted(scores, key=lambda s: s.ratio, reverse=True)


def top_triggers(scores: Sequence[TriggerScore], n: int = TOP_N_DISPLAY) -> List[TriggerScore]:
    """Display slice of an already-ranked result."""
    return list(scores[:max(n, 0)])


def symptom_vocabulary(logs: Sequence[LogEntry]) -> List[str]:
    """Distinct symptom tags across the snapshot, sorted."""
    return sorted({s for e in logs for s in e.symptoms if s})


class TriggerCorrelator:
    """
    Food and environmental trigger ratios for one symptom at a time.
    Stateless: every call rebuilds its buckets from the snapshot passed in.
    """

    def __init__(self, min_samples: Optional[int] = None):
        self.min_samples = MIN_SAMPLE_SIZE if min_samples is None else min_samples

    def analyze(
        self, logs: Sequence[LogEntry], target_symptom: str
    ) -> Tuple[List[TriggerScore], List[TriggerScore]]:
        """Return (food_triggers, env_triggers), each sorted by ratio desc."""
        if not target_symptom or not logs:
            return [], []

        df = logs_to_frame(logs)
        df["has_target"] = df["symptoms"].map(lambda tags: target_symptom in tags)

        food = _rank(self._bucket_scores(df, FOOD_COLUMN))

        env: List[TriggerScore] = []
        for column, prefix in ENVIRONMENT_FACTORS:
            env.extend(self._bucket_scores(df, column, prefix))
        env = _rank(env)

        log.debug(
            "Trigger analysis for %r: %d food, %d environment buckets over %d entries",
            target_symptom, len(food), len(env), len(df),
        )
        return food, env

    def _bucket_scores(self, df: pd.DataFrame, column: str, prefix: str = "") -> List[TriggerScore]:
        values = df[column]
        present = df.loc[values.notna() & (values.astype(str) != ""), [column, "has_target"]]
        if present.empty:
            return []

        # sort=False keeps first-appearance order for the stable ranking
        counts = present.groupby(column, sort=False)["has_target"].agg(
            total="size", with_symptom="sum"
        )
        counts = counts[counts["total"] >= self.min_samples]

        return [
            TriggerScore(
                label=f"{prefix}{value}",
                ratio=float(with_symptom) / float(total),
                total=int(total),
                with_symptom=int(with_symptom),
            )
            for value, total, with_symptom in counts[["total", "with_symptom"]].itertuples(name=None)
        ]


def analyze(
    logs: Sequence[LogEntry], target_symptom: str, min_samples: Optional[int] = None
) -> Tuple[List[TriggerScore], List[TriggerScore]]:
    """Module-level shortcut for TriggerCorrelator(min_samples).analyze()."""
    return TriggerCorrelator(min_samples).analyze(logs, target_symptom)
