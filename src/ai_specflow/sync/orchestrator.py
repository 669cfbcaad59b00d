"""Full ``init`` run: core template trees plus enabled providers.

``run_init`` is the single entry point used by the command line.  It:

1. Validates that both mandatory template directories exist in the
   package (``.ai`` and ``docs/sdd``), raising ``MissingSourceError``
   before anything in the target is touched.
2. Mirrors each mandatory directory into the target.
3. For every enabled provider, in registry order, upserts its wrapper
   files and mirrors its auxiliary directories.  Directories the package
   does not ship are skipped.
4. Returns an ``InitReport``.

There is no retry and no rollback: the first error aborts the run and
files written before it remain on disk.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from ai_specflow.errors import MissingSourceError
from ai_specflow.providers import resolve_providers
from ai_specflow.sync.merger import ManagedBlock
from ai_specflow.sync.models import (
    InitReport,
    ProviderDirResult,
    ProviderReport,
    SyncOptions,
    SyncResult,
    WrapperAction,
)
from ai_specflow.sync.tree import sync_tree
from ai_specflow.sync.wrapper import upsert_wrapper

logger = logging.getLogger(__name__)

# Report label -> path relative to both package root and target root
CORE_DIRECTORIES: tuple[tuple[str, Path], ...] = (
    (".ai", Path(".ai")),
    ("docs/sdd", Path("docs") / "sdd"),
)


def default_package_root() -> Path:
    """Directory holding the bundled templates."""
    return Path(__file__).resolve().parent.parent / "templates"


def validate_sources(package_root: Path) -> None:
    """Ensure every mandatory template directory is present.

    Raises:
        MissingSourceError: If any mandatory directory is missing.
    """
    missing = [
        label
        for label, rel in CORE_DIRECTORIES
        if not (package_root / rel).is_dir()
    ]
    if missing:
        raise MissingSourceError(
            f"Missing {' and '.join(f'{m}/' for m in missing)} "
            f"sources inside the package ({package_root})."
        )


def _sync_core(
    package_root: Path, target: Path, options: SyncOptions
) -> dict[str, SyncResult]:
    results: dict[str, SyncResult] = {}
    for label, rel in CORE_DIRECTORIES:
        target_dir = target / rel
        if not options.dry_run:
            target_dir.mkdir(parents=True, exist_ok=True)
        results[label] = sync_tree(package_root / rel, target_dir, options)
    return results


def _install_providers(
    package_root: Path,
    target: Path,
    options: SyncOptions,
    providers: Iterable[str],
    block: ManagedBlock,
) -> ProviderReport:
    enabled: list[str] = []
    created: list[str] = []
    merged: list[str] = []
    directories: list[ProviderDirResult] = []

    for provider in resolve_providers(providers):
        enabled.append(provider.name)

        for wrapper in provider.wrappers:
            action = upsert_wrapper(
                package_root / wrapper, target / wrapper, options, block
            )
            if action == WrapperAction.CREATED:
                created.append(wrapper)
            else:
                merged.append(wrapper)

        for directory in provider.directories:
            source_dir = package_root / directory
            if not source_dir.is_dir():
                logger.debug(
                    "Provider %s: %s not bundled, skipping",
                    provider.name,
                    directory,
                )
                continue
            result = sync_tree(source_dir, target / directory, options)
            directories.append(
                ProviderDirResult(
                    provider=provider.name,
                    directory=directory,
                    result=result,
                )
            )

    return ProviderReport(
        enabled=enabled,
        wrappers_created=created,
        wrappers_merged=merged,
        directories=directories,
    )


def run_init(
    package_root: Path,
    target: Path,
    options: SyncOptions,
    providers: Iterable[str] = (),
    block: ManagedBlock | None = None,
) -> InitReport:
    """Scaffold the bundled templates into *target*.

    Args:
        package_root: Directory containing the bundled templates.
        target: Target project directory.
        options: Run options.
        providers: Provider names to enable.
        block: Managed block sentinels for wrapper merges.

    Returns:
        ``InitReport`` describing what was (or would be) written.

    Raises:
        MissingSourceError: If a mandatory template directory is absent.
        UsageError: If a provider name is unknown.
        TraversalError: If a template tree contains a symlink cycle.
        EncodingError: If a wrapper cannot be decoded or re-encoded.
        OSError: On any filesystem failure.
    """
    package_root = Path(package_root)
    target = Path(target)
    started_at = datetime.now(timezone.utc).isoformat()
    providers = list(providers)

    validate_sources(package_root)
    # Reject bad provider names before the first write
    resolve_providers(providers)

    logger.info(
        "init target=%s dry_run=%s force=%s providers=%s",
        target,
        options.dry_run,
        options.force,
        ",".join(providers) or "-",
    )

    core = _sync_core(package_root, target, options)
    provider_report = _install_providers(
        package_root, target, options, providers, block or ManagedBlock()
    )

    return InitReport(
        target=str(target),
        dry_run=options.dry_run,
        force=options.force,
        core=core,
        providers=provider_report,
        started_at=started_at,
        completed_at=datetime.now(timezone.utc).isoformat(),
    )
