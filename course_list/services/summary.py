from __future__ import annotations

from ..models.generation_result import GenerationResult

"""Summary line rendering for the course list generator."""


def render_summary_line(result: GenerationResult) -> str:
    """Render a SUMMARY line from a GenerationResult.

    Format:
    SUMMARY participants={n} groups={m} destination={path} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> from pathlib import Path
        >>> start = datetime(2023, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2023, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = GenerationResult(
        ...     participants=12, groups=3, destination=Path("/tmp/out.xlsx"),
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY participants=12 groups=3 destination=/tmp/out.xlsx elapsed_sec=2'
    """
    # Handle very small numbers and integer values appropriately
    if result.elapsed_seconds == 0:
        elapsed_str = "0"
    elif result.elapsed_seconds == int(result.elapsed_seconds):
        elapsed_str = str(int(result.elapsed_seconds))
    elif result.elapsed_seconds < 0.01:
        # avoid scientific notation
        elapsed_str = f"{result.elapsed_seconds:.6f}".rstrip('0').rstrip('.')
    else:
        elapsed_str = f"{result.elapsed_seconds:.3f}".rstrip('0').rstrip('.')

    return (
        f"SUMMARY participants={result.participants} "
        f"groups={result.groups} "
        f"destination={result.destination} "
        f"elapsed_sec={elapsed_str}"
    )
