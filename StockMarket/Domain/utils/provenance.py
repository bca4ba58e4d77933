from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable


def utc_timestamp(moment: datetime | None = None) -> str:
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def wrap_with_provenance(
    text: str,
    sources: Iterable[str],
    generated_at: datetime | None = None,
    note: str | None = None,
) -> str:
    """
    Append the provenance footer to an analysis.

    The footer is separated by a horizontal rule and lists the generation
    time (ISO-8601, UTC) and the upstream datasets the analysis was built on.
    """
    lines = [
        text,
        "",
        "---",
        f"*Analysis generated: {utc_timestamp(generated_at)}*",
        f"*Data sources: {', '.join(sources) or 'none'}*",
    ]
    if note:
        lines.append(f"*Note: {note}*")
    return "\n".join(lines)
