"""Tracing module: logs picross solver steps and writes to CSV."""

import csv
import threading
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class TraceStep:
    """A single step in the solving process."""

    timestamp: float
    step_number: int
    action_type: str  # 'line_narrowed', 'round', 'failure', 'solution_found'
    axis: Optional[str] = None  # 'row' or 'col'
    line: Optional[int] = None  # 0-based line index within the axis
    round_number: Optional[int] = None
    unknown_cells: Optional[int] = None
    cells_decided: Optional[int] = None
    reason: Optional[str] = None


class Tracer:
    """Records solver steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0
        self._lock = threading.Lock()

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        if not self.enabled:
            return
        with self._lock:
            self.step_counter += 1
            self.steps.append(TraceStep(
                timestamp=self._get_timestamp(),
                step_number=self.step_counter,
                action_type=action_type,
                **fields,
            ))

    def log_line_narrowed(self, axis: str, line: int, cells_decided: int):
        """Log a line worker that decided new cells during a round."""
        self._record('line_narrowed', axis=axis, line=line, cells_decided=cells_decided)

    def log_round(self, round_number: int, unknown_before: int, unknown_after: int):
        """Log one full column-then-row round of the grid solver."""
        self._record(
            'round',
            round_number=round_number,
            unknown_cells=unknown_after,
            cells_decided=unknown_before - unknown_after,
        )

    def log_failure(self, kind: str, reason: str, round_number: Optional[int] = None,
                    unknown_cells: Optional[int] = None):
        """Log a contradiction, an unsolvable line or a stalled puzzle."""
        self._record(
            'failure',
            round_number=round_number,
            unknown_cells=unknown_cells,
            reason=f"{kind}: {reason}",
        )

    def log_solution_found(self, round_number: int):
        """Log when the grid has no unknown cells left."""
        self._record('solution_found', round_number=round_number, unknown_cells=0)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'axis', 'line',
            'round_number', 'unknown_cells', 'cells_decided', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts: Dict[str, int] = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_rounds': action_counts.get('round', 0),
            'num_lines_narrowed': action_counts.get('line_narrowed', 0),
            'num_failures': action_counts.get('failure', 0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=True)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
