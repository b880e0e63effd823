"""
Summaries of recorded telemetry.

Reads the metrics CSV written by CsvSink and aggregates it per task code.
"""

import csv
import logging
import statistics
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class ActionSummary:
    """Aggregated figures for one task code."""

    task_code: str
    count: int = 0
    errors: int = 0
    enhanced: int = 0
    durations_ms: list[int] = field(default_factory=list)

    @property
    def error_rate(self) -> float:
        return self.errors / self.count if self.count else 0.0

    @property
    def enhanced_share(self) -> float:
        return self.enhanced / self.count if self.count else 0.0

    @property
    def median_ms(self) -> float:
        return statistics.median(self.durations_ms) if self.durations_ms else 0.0


def summarize_metrics(path: Path) -> list[ActionSummary]:
    """
    Aggregate a metrics CSV per task code.

    Rows that cannot be parsed are skipped with a warning.

    Args:
        path: CSV file written by CsvSink

    Returns:
        One ActionSummary per task code, sorted by task code

    Raises:
        FileNotFoundError: If the file does not exist
    """
    summaries: dict[str, ActionSummary] = {}
    with path.open(encoding="utf-8", newline="") as f:
        for line_no, row in enumerate(csv.DictReader(f), start=2):
            try:
                code = row["task_code"]
                ms = int(row["ms"])
                outcome = row["outcome"]
                mode = row["js_mode"]
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed metrics row %d in %s: %s", line_no, path, e)
                continue
            summary = summaries.setdefault(code, ActionSummary(task_code=code))
            summary.count += 1
            summary.durations_ms.append(ms)
            if outcome == "error":
                summary.errors += 1
            if mode == "htmx":
                summary.enhanced += 1
    return [summaries[code] for code in sorted(summaries)]
