"""Insights pipeline orchestration with explicit health signaling."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from analytics.effectiveness import score_active_protocols
from analytics.treatment_analysis import symptom_frequencies, treatment_overview
from correlation_engine import TriggerCorrelator, symptom_vocabulary
from log_models import LogEntry, ProtocolRecord
from pipeline.summary_builder import build_effectiveness_summary, build_trigger_summary

log = logging.getLogger("insights_pipeline")


def _score_dict(s) -> Dict[str, Any]:
    return {"label": s.label, "ratio": s.ratio, "total": s.total, "with_symptom": s.with_symptom}


class InsightsPipeline:
    """Run every analysis over one snapshot of logs and protocols."""

    def __init__(
        self,
        logs: Sequence[LogEntry],
        protocols: Sequence[ProtocolRecord] = (),
        min_samples: Optional[int] = None,
        top_n: Optional[int] = None,
    ):
        self.logs = list(logs)
        self.protocols = list(protocols)
        self.correlator = TriggerCorrelator(min_samples)
        self.top_n = top_n

    def run(self, symptoms: Optional[Sequence[str]] = None) -> Dict[str, Any]:
        """
        Execute trigger analysis, protocol scoring and the treatment overview.

        A stage that raises is recorded in ``degraded_reasons`` and the run
        continues; the run only fails when no stage succeeds.
        """
        report: Dict[str, Any] = {
            "run_started_at": datetime.utcnow().isoformat() + "Z",
            "log_count": len(self.logs),
            "protocol_count": len(self.protocols),
            "triggers": {},
            "protocol_scores": [],
            "overview": {},
            "symptom_frequencies": [],
            "analysis_status": "success",
            "degraded_reasons": [],
            "summary": "",
        }

        log.info("Insights run: %d log entries, %d protocols", len(self.logs), len(self.protocols))

        if not self.logs:
            report["analysis_status"] = "degraded"
            report["degraded_reasons"].append("no_log_entries")

        targets = list(symptoms) if symptoms else symptom_vocabulary(self.logs)
        stages_ok = 0
        sections: List[str] = []

        try:
            trigger_lines = []
            for symptom in targets:
                food, env = self.correlator.analyze(self.logs, symptom)
                report["triggers"][symptom] = {
                    "food": [_score_dict(s) for s in food],
                    "environment": [_score_dict(s) for s in env],
                }
                trigger_lines.append(build_trigger_summary(symptom, food, env, self.top_n))
            if trigger_lines:
                sections.append("TRIGGERS\n" + "\n".join(trigger_lines))
            stages_ok += 1
        except Exception as e:
            log.exception("Trigger analysis failed: %s", e)
            report["degraded_reasons"].append("trigger_analysis_failed")

        try:
            scored = score_active_protocols(self.protocols, self.logs)
            report["protocol_scores"] = [
                {"title": p.title, "protocol_id": p.protocol_id, "score": s} for p, s in scored
            ]
            sections.append("PROTOCOLS\n" + build_effectiveness_summary(scored))
            stages_ok += 1
        except Exception as e:
            log.exception("Protocol scoring failed: %s", e)
            report["degraded_reasons"].append("protocol_scoring_failed")

        try:
            report["overview"] = treatment_overview(self.logs)
            report["symptom_frequencies"] = symptom_frequencies(self.logs)
            stages_ok += 1
        except Exception as e:
            log.warning("Treatment overview failed; continuing in degraded mode: %s", e)
            report["degraded_reasons"].append("treatment_overview_failed")

        report["summary"] = "\n\n".join(sections)
        report["analysis_status"] = self._overall_status(stages_ok, report["degraded_reasons"])
        report["run_finished_at"] = datetime.utcnow().isoformat() + "Z"
        self._log_summary(report)
        return report

    @staticmethod
    def _overall_status(stages_ok: int, reasons: Sequence[str]) -> str:
        if stages_ok == 0:
            return "failed"
        if reasons:
            return "degraded"
        return "success"

    @staticmethod
    def _log_summary(report: Dict[str, Any]) -> None:
        log.info("INSIGHTS SUMMARY:")
        log.info("  Symptoms analyzed: %d", len(report["triggers"]))
        log.info("  Protocols scored:  %d", len(report["protocol_scores"]))
        reasons = report.get("degraded_reasons") or []
        if reasons:
            log.info("  Degraded reasons: %s", ", ".join(reasons))
        log.info("  Analysis status: %s", report["analysis_status"])
