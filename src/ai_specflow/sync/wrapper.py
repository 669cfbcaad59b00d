"""Wrapper file upserts.

Wrapper files (``CLAUDE.md``, ``AGENTS.md``, ...) live at the target
project root and often already hold user content, so they are never
bulk-copied.  A missing wrapper is written verbatim from its template; an
existing one gets the template merged in as a managed block.  ``force``
has no effect here.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ai_specflow.file_handler import (
    encode_text,
    read_file_with_encoding,
    read_text,
    write_bytes,
    write_file,
)
from ai_specflow.sync.merger import ManagedBlock
from ai_specflow.sync.models import SyncOptions, WrapperAction

logger = logging.getLogger(__name__)


def upsert_wrapper(
    template: Path,
    target: Path,
    options: SyncOptions,
    block: ManagedBlock | None = None,
) -> WrapperAction:
    """Create or merge one wrapper file.

    Args:
        template: Bundled template whose text is the managed payload.
        target: Wrapper path in the target project.
        options: Run options (only ``dry_run`` is consulted).
        block: Sentinels to use; defaults to the ai-specflow markers.

    Returns:
        ``WrapperAction.CREATED`` or ``WrapperAction.MERGED``.

    Raises:
        EncodingError: If the template is not UTF-8, or the merged text
            cannot be written back in the target file's encoding.
        OSError: If the template cannot be read or the target written.
    """
    block = block or ManagedBlock()
    payload = read_text(template)

    if not target.exists():
        if not options.dry_run:
            write_file(target, payload)
        logger.debug("Created wrapper %s", target)
        return WrapperAction.CREATED

    existing, encoding = read_file_with_encoding(target)
    # Encode before the dry-run check so both modes fail alike
    data = encode_text(block.merge(existing, payload), encoding)
    if not options.dry_run:
        write_bytes(target, data)
    logger.debug("Merged managed block into %s", target)
    return WrapperAction.MERGED
