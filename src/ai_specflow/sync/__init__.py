"""Template synchronisation and managed-block merge engine.

Public API for scaffolding bundled convention files into a target
project.

Architecture
------------
Data flows one way: enumerate -> plan -> (optionally) write ->
aggregate -> report.  Every operation receives an explicit, immutable
``SyncOptions``; nothing reads process-wide flags.

Modules:

- ``enumerator``   -- ``SourceTree`` / ``iter_files``: deterministic,
  stack-based file listing with symlink cycle detection.
- ``merger``       -- ``ManagedBlock`` / ``merge_managed_block``: merge a
  regenerable block into user-owned text.
- ``planner``      -- ``plan_file``: create / skip / overwrite one file.
- ``tree``         -- ``sync_tree``: mirror one directory pair.
- ``wrapper``      -- ``upsert_wrapper``: create or merge a root wrapper.
- ``orchestrator`` -- ``run_init``: core trees plus enabled providers.
- ``models``       -- ``SyncOptions``, ``SyncAction``, ``WrapperAction``,
  ``SyncResult``, ``ProviderDirResult``, ``ProviderReport``,
  ``InitReport``.
- ``reporter``     -- Human-readable and JSON report formatting.

Usage example
-------------
::

    from pathlib import Path
    from ai_specflow.sync import (
        SyncOptions, default_package_root, format_init_report, run_init,
    )

    # Dry-run first to preview changes
    preview = run_init(
        default_package_root(),
        Path("/path/to/project"),
        SyncOptions(dry_run=True),
        providers=["claude", "cursor"],
    )
    print(format_init_report(preview))
"""

from .enumerator import SourceTree, iter_files
from .merger import (
    MARKER_END,
    MARKER_START,
    ManagedBlock,
    find_managed_block,
    merge_managed_block,
)
from .models import (
    InitReport,
    ProviderDirResult,
    ProviderReport,
    SyncAction,
    SyncOptions,
    SyncResult,
    WrapperAction,
)
from .orchestrator import default_package_root, run_init
from .planner import plan_file
from .reporter import format_init_report, report_to_json
from .tree import sync_tree
from .wrapper import upsert_wrapper

__all__ = [
    "InitReport",
    "MARKER_END",
    "MARKER_START",
    "ManagedBlock",
    "ProviderDirResult",
    "ProviderReport",
    "SourceTree",
    "SyncAction",
    "SyncOptions",
    "SyncResult",
    "WrapperAction",
    "default_package_root",
    "find_managed_block",
    "format_init_report",
    "iter_files",
    "merge_managed_block",
    "plan_file",
    "report_to_json",
    "run_init",
    "sync_tree",
    "upsert_wrapper",
]
