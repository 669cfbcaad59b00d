"""Init report formatting functions.

Provides human-readable and machine-readable output for ``init`` runs:

- ``format_init_report`` -- status lines printed after a run.
- ``format_tree_summary`` -- one ``created/updated/skipped`` line.
- ``report_to_json`` -- structured dict for ``--json`` output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import InitReport, SyncResult

PREFIX = "[ai-specflow]"


# ------------------------------------------------------------------
# Human-readable report
# ------------------------------------------------------------------


def format_tree_summary(label: str, result: SyncResult) -> str:
    """Format a single directory's counts as one report line."""
    return (
        f"{PREFIX} {label} -> created:{len(result.created)} "
        f"updated:{len(result.updated)} skipped:{len(result.skipped)}"
    )


def format_init_report(report: InitReport) -> str:
    """Format a complete init report as human-readable text.

    Args:
        report: The completed init report.

    Returns:
        Multi-line formatted string.
    """
    lines: list[str] = []

    mode = "DRY-RUN" if report.dry_run else "APPLIED"
    lines.append(f"{PREFIX} {mode}")
    lines.append(f"{PREFIX} target: {report.target}")

    for label, result in report.core.items():
        lines.append(format_tree_summary(label, result))

    providers = report.providers
    if not providers.enabled:
        lines.append(f"{PREFIX} providers -> none selected")
    else:
        lines.append(
            f"{PREFIX} providers -> {', '.join(providers.enabled)}"
        )
        lines.append(
            f"{PREFIX} wrappers root -> "
            f"created:{len(providers.wrappers_created)} "
            f"merged:{len(providers.wrappers_merged)}"
        )
        for d in providers.directories:
            lines.append(
                format_tree_summary(f"{d.directory} ({d.provider})", d.result)
            )

    if report.dry_run:
        lines.append(f"{PREFIX} Run again without --dry-run to write files.")

    return "\n".join(lines)


# ------------------------------------------------------------------
# JSON output
# ------------------------------------------------------------------


def _result_to_dict(result: SyncResult) -> dict:
    return {
        "counts": result.counts(),
        "created": list(result.created),
        "updated": list(result.updated),
        "skipped": list(result.skipped),
    }


def report_to_json(report: InitReport) -> dict:
    """Convert an init report to a structured dict for JSON serialisation.

    Args:
        report: The init report.

    Returns:
        Dict with run info, per-directory results and provider results.
    """
    providers = report.providers
    return {
        "target": report.target,
        "dry_run": report.dry_run,
        "force": report.force,
        "started_at": report.started_at,
        "completed_at": report.completed_at,
        "core": {
            label: _result_to_dict(result)
            for label, result in report.core.items()
        },
        "providers": {
            "enabled": list(providers.enabled),
            "wrappers": {
                "created": list(providers.wrappers_created),
                "merged": list(providers.wrappers_merged),
            },
            "directories": [
                {
                    "provider": d.provider,
                    "directory": d.directory,
                    **_result_to_dict(d.result),
                }
                for d in providers.directories
            ],
        },
        "files_written": report.files_written,
    }
