from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

"""GenerationResult: outcome of one successful generate run, used for the
SUMMARY line."""


@dataclass(frozen=True)
class GenerationResult:
    participants: int  # exported record count
    groups: int  # distinct group values
    destination: Path
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
