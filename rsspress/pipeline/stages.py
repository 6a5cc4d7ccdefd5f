"""Pipeline stage timing."""

import time
from typing import Dict, List, Optional


class PipelineStage:
    """Represents a pipeline stage."""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.success = False
        self.error: Optional[str] = None
        self.stats: Dict = {}

    def start(self):
        self.start_time = time.monotonic()

    def complete(self, stats: Optional[Dict] = None):
        self.end_time = time.monotonic()
        self.success = True
        if stats:
            self.stats.update(stats)

    def fail(self, error: str):
        self.end_time = time.monotonic()
        self.success = False
        self.error = error

    @property
    def duration(self) -> float:
        """Stage duration in seconds."""
        if self.start_time is not None and self.end_time is not None:
            return self.end_time - self.start_time
        return 0.0


def summarize_stages(stages: List[PipelineStage]) -> Dict[str, Dict]:
    """Stage stats keyed by stage name, for logs and CLI output."""
    return {
        stage.name: {
            "duration": round(stage.duration, 3),
            "success": stage.success,
            "error": stage.error,
            "stats": stage.stats,
        }
        for stage in stages
    }
