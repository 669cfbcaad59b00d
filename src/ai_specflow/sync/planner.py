"""Per-file create/skip/overwrite decisions.

Decision table (``exists`` refers to the target path):

=======  =====  =======  =========================================
exists   force  outcome  side effect (unless dry-run)
=======  =====  =======  =========================================
no       any    CREATED  create parents, copy source bytes
yes      no     SKIPPED  none
yes      yes    UPDATED  overwrite target with source bytes
=======  =====  =======  =========================================

Dry-run runs the exact same decision logic and only suppresses the write.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ai_specflow.file_handler import copy_file_bytes
from ai_specflow.sync.models import SyncAction, SyncOptions

logger = logging.getLogger(__name__)


def decide(target_exists: bool, force: bool) -> SyncAction:
    """Pure decision function for one file."""
    if not target_exists:
        return SyncAction.CREATED
    if force:
        return SyncAction.UPDATED
    return SyncAction.SKIPPED


def plan_file(
    source: Path, target: Path, options: SyncOptions
) -> SyncAction:
    """Decide the outcome for one file and apply it unless dry-run.

    Args:
        source: Template file to copy from.
        target: Destination path in the target project.
        options: Run options.

    Returns:
        The ``SyncAction`` taken (or that would be taken in dry-run).

    Raises:
        OSError: If reading the source or writing the target fails.
    """
    action = decide(target.exists(), options.force)

    if action == SyncAction.SKIPPED:
        logger.debug("Skip existing %s", target)
        return action

    if options.dry_run:
        logger.debug("Would %s %s (dry run)", action.value, target)
        return action

    copy_file_bytes(source, target)
    logger.debug("%s %s", action.value.capitalize(), target)
    return action
