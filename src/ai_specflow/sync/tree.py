"""Directory-pair synchronisation.

Mirrors every file of a source tree into a target tree through
``plan_file``.  Synchronisation is additive: target files without a
source counterpart are never deleted.  The first ``OSError`` aborts the
whole tree; files already written stay on disk.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ai_specflow.sync.enumerator import SourceTree
from ai_specflow.sync.models import SyncOptions, SyncResult
from ai_specflow.sync.planner import plan_file

logger = logging.getLogger(__name__)


def sync_tree(
    source_root: Path, target_root: Path, options: SyncOptions
) -> SyncResult:
    """Synchronise *source_root* into *target_root*.

    Args:
        source_root: Template directory to mirror.
        target_root: Destination directory (need not exist).
        options: Run options.

    Returns:
        ``SyncResult`` listing each relative path under exactly one of
        created/updated/skipped, in enumeration order.

    Raises:
        TraversalError: If the source tree contains a symlink cycle.
        OSError: On any filesystem failure.
    """
    source_root = Path(source_root)
    target_root = Path(target_root)
    logger.info("Syncing %s -> %s", source_root, target_root)

    result = SyncResult()
    for rel_path in SourceTree(source_root):
        action = plan_file(
            source_root / rel_path, target_root / rel_path, options
        )
        result = result.record(rel_path, action)

    logger.info(
        "Synced %s: created=%d updated=%d skipped=%d",
        target_root,
        len(result.created),
        len(result.updated),
        len(result.skipped),
    )
    return result
