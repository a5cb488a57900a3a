# src/netinsights/formatters.py
"""Rendering of insights snapshots for the CLI.

Provides a JSON-ready mapping for machine consumers and a plain-text
summary for humans. Task identifiers are opaque to the aggregator, so they
are rendered with str() in both forms.
"""

from __future__ import annotations

from typing import Any

from netinsights.contracts.records import TransferSizeInfo
from netinsights.insights.aggregator import NetworkInsights

_BYTE_UNITS = ("bytes", "KB", "MB", "GB", "TB")


def format_bytes(count: int) -> str:
    """Format a byte count with decimal (1000-based) units, e.g. "1.5 MB"."""
    if count < 1000:
        return f"{count} bytes" if count != 1 else "1 byte"
    value = float(count)
    unit = _BYTE_UNITS[0]
    for unit in _BYTE_UNITS[1:]:
        value /= 1000
        if value < 1000:
            break
    return f"{value:.1f} {unit}"


def format_duration(seconds: float | None) -> str:
    """Format a duration in seconds: "850 ms", "1.25 s", "2m 5.0s", or "–" if absent."""
    if seconds is None:
        return "–"
    if seconds < 1:
        return f"{seconds * 1000:.0f} ms"
    if seconds < 60:
        return f"{seconds:.2f} s"
    minutes, rest = divmod(seconds, 60)
    return f"{minutes:.0f}m {rest:.1f}s"


def transfer_size_to_dict(info: TransferSizeInfo) -> dict[str, int]:
    return {
        "total_bytes_sent": info.total_bytes_sent,
        "request_header_bytes_sent": info.request_header_bytes_sent,
        "request_body_bytes_before_encoding": info.request_body_bytes_before_encoding,
        "request_body_bytes_sent": info.request_body_bytes_sent,
        "total_bytes_received": info.total_bytes_received,
        "response_header_bytes_received": info.response_header_bytes_received,
        "response_body_bytes_after_decoding": info.response_body_bytes_after_decoding,
        "response_body_bytes_received": info.response_body_bytes_received,
    }


def snapshot_to_dict(snapshot: NetworkInsights) -> dict[str, Any]:
    """Convert a snapshot to plain JSON-serializable data."""
    duration = snapshot.duration
    return {
        "transfer_size": transfer_size_to_dict(snapshot.transfer_size),
        "duration": {
            "count": duration.count,
            "median": duration.median,
            "minimum": duration.minimum,
            "maximum": duration.maximum,
            "values": list(duration.values),
            "task_ids": [str(task_id) for task_id in duration.task_ids],
        },
        "redirects": {
            "count": snapshot.redirects.count,
            "time_lost": snapshot.redirects.time_lost,
            "task_ids": [str(task_id) for task_id in snapshot.redirects.task_ids],
        },
        "failures": {
            "count": snapshot.failures.count,
            "task_ids": [str(task_id) for task_id in snapshot.failures.task_ids],
        },
    }


def format_console(snapshot: NetworkInsights) -> str:
    """Render a human-readable multi-line summary."""
    size = snapshot.transfer_size
    duration = snapshot.duration
    redirects = snapshot.redirects
    failures = snapshot.failures

    lines = [
        "Transfer Size",
        f"  Sent:      {format_bytes(size.total_bytes_sent)}",
        f"  Received:  {format_bytes(size.total_bytes_received)}",
        "",
        "Duration",
        f"  Requests:  {duration.count:,}",
        f"  Median:    {format_duration(duration.median)}",
        f"  Range:     {format_duration(duration.minimum)} – {format_duration(duration.maximum)}",
        "",
        "Redirects",
        f"  Count:     {redirects.count:,}",
        f"  Time lost: {format_duration(redirects.time_lost)}",
        f"  Tasks:     {len(redirects.task_ids):,}",
        "",
        "Failures",
        f"  Count:     {failures.count:,}",
    ]
    if failures.task_ids:
        lines.append(f"  Tasks:     {', '.join(str(task_id) for task_id in failures.task_ids)}")
    return "\n".join(lines)
