"""Pydantic models for the scaffolding sync engine.

Defines the data contracts shared by all sync modules:

- ``SyncOptions``: Immutable run options (dry-run, force).
- ``SyncAction``: Outcome of planning one tree file.
- ``WrapperAction``: Outcome of upserting one wrapper file.
- ``SyncResult``: Created/updated/skipped paths for one directory pair.
- ``ProviderDirResult``: ``SyncResult`` for one provider directory.
- ``ProviderReport``: Aggregate provider install results.
- ``InitReport``: Aggregate results for a full ``init`` run.

All models are frozen.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class SyncOptions(BaseModel):
    """Options threaded explicitly through every sync operation.

    Attributes:
        dry_run: Compute and report every decision without writing.
        force: Overwrite tree files that already exist in the target.
    """

    dry_run: bool = False
    force: bool = False

    model_config = {"frozen": True}


class SyncAction(str, Enum):
    """Possible outcomes for a single tree file."""

    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"


class WrapperAction(str, Enum):
    """Possible outcomes for a single wrapper file."""

    CREATED = "created"
    MERGED = "merged"


class SyncResult(BaseModel):
    """Outcome of synchronising one source directory into one target.

    Each relative path of the source tree appears in exactly one of the
    three lists, in enumeration order.

    Attributes:
        created: Paths written because the target did not exist.
        updated: Paths overwritten because ``force`` was set.
        skipped: Paths left untouched because the target existed.
    """

    created: list[str] = []
    updated: list[str] = []
    skipped: list[str] = []

    model_config = {"frozen": True}

    def record(self, path: str, action: SyncAction) -> SyncResult:
        """Return a new result with *path* appended under *action*."""
        bucket = action.value
        return self.model_copy(
            update={bucket: [*getattr(self, bucket), path]}
        )

    @property
    def total(self) -> int:
        """Number of source files covered by this result."""
        return len(self.created) + len(self.updated) + len(self.skipped)

    def counts(self) -> dict[str, int]:
        """Counts keyed by ``created``, ``updated`` and ``skipped``."""
        return {
            "created": len(self.created),
            "updated": len(self.updated),
            "skipped": len(self.skipped),
        }


class ProviderDirResult(BaseModel):
    """Tree sync outcome for one provider's auxiliary directory.

    Attributes:
        provider: Provider identifier (e.g. ``claude``).
        directory: Directory name relative to the package/target root.
        result: Created/updated/skipped breakdown.
    """

    provider: str
    directory: str
    result: SyncResult

    model_config = {"frozen": True}


class ProviderReport(BaseModel):
    """Aggregate results for all enabled providers.

    Attributes:
        enabled: Enabled provider identifiers, in registry order.
        wrappers_created: Wrapper files written from scratch.
        wrappers_merged: Wrapper files whose managed block was merged.
        directories: Per-directory tree sync results.
    """

    enabled: list[str] = []
    wrappers_created: list[str] = []
    wrappers_merged: list[str] = []
    directories: list[ProviderDirResult] = []

    model_config = {"frozen": True}


class InitReport(BaseModel):
    """Aggregate report for a full ``init`` run.

    Attributes:
        target: Absolute target project path.
        dry_run: Whether this was a dry-run (no files written).
        force: Whether existing tree files were overwritten.
        core: Mandatory directory label -> sync result, in run order.
        providers: Provider install results.
        started_at: ISO 8601 timestamp when the run started.
        completed_at: ISO 8601 timestamp when the run completed.
    """

    target: str
    dry_run: bool = False
    force: bool = False
    core: dict[str, SyncResult] = Field(default_factory=dict)
    providers: ProviderReport = Field(default_factory=ProviderReport)
    started_at: str
    completed_at: str | None = None

    model_config = {"frozen": True}

    @property
    def files_written(self) -> int:
        """Files created, updated or merged (would be, for a dry-run)."""
        tree_results = list(self.core.values()) + [
            d.result for d in self.providers.directories
        ]
        written = sum(
            len(r.created) + len(r.updated) for r in tree_results
        )
        return (
            written
            + len(self.providers.wrappers_created)
            + len(self.providers.wrappers_merged)
        )
