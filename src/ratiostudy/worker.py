"""Message adapter for running a ratio study behind a worker boundary.

A host (thread, subprocess, web worker bridge) passes request messages to
handle_message() together with a ``post`` callable that delivers
responses back. For each ``compute`` request the adapter posts zero or
more ``progress`` messages followed by exactly one terminal ``done`` or
``error`` message:

    {"type": "compute", "pairs": [...], "confidence": 0.95}
    -> {"type": "progress", "p": 0.05, "msg": "Parsing and filtering rows…"}
    -> {"type": "progress", "p": 0.1, "msg": "Rows filtered"}
    ...
    -> {"type": "done", "result": {...}}   or   {"type": "error", "error": "..."}

Messages that are not mappings, and requests of any other type, are ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

from ratiostudy.core.constants import DEFAULT_CONFIDENCE
from ratiostudy.report import compute_metrics

Post = Callable[[dict[str, Any]], None]


def progress_message(p: float, msg: str) -> dict[str, Any]:
    """Build a progress notification."""
    return {"type": "progress", "p": p, "msg": msg}


def handle_message(message: Mapping[str, Any] | None, post: Post) -> None:
    """
    Handle one request message, posting progress and a terminal response.

    The report is fully computed before ``done`` is posted; any failure
    during computation becomes a single ``error`` message instead.

    Args:
        message: Request mapping with a ``type`` key
        post: Callable receiving each response dict
    """
    if not isinstance(message, Mapping) or message.get("type") != "compute":
        return

    try:
        pairs = message["pairs"]
        confidence = message.get("confidence", DEFAULT_CONFIDENCE)
        post(progress_message(0.05, "Parsing and filtering rows…"))
        report = compute_metrics(
            pairs,
            confidence=confidence,
            progress=lambda p, msg: post(progress_message(p, msg)),
        )
        result = report.to_dict()
    except Exception as e:
        post({"type": "error", "error": str(e) or type(e).__name__})
        return

    post({"type": "done", "result": result})
