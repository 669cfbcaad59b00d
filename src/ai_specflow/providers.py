"""Provider registry.

A provider is a downstream agent convention.  Each one contributes
wrapper files (merged at the target root) and auxiliary directories
(mirrored with the tree synchroniser).  Registry order is the order
providers are installed and reported in.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel

from ai_specflow.errors import UsageError


class Provider(BaseModel):
    """Files and directories contributed by one provider.

    Attributes:
        name: Provider identifier, also used in ``--with-<name>``.
        wrappers: Root-level wrapper file names.
        directories: Auxiliary directory names copied wholesale.
        description: One-line help text.
    """

    name: str
    wrappers: tuple[str, ...] = ()
    directories: tuple[str, ...] = ()
    description: str = ""

    model_config = {"frozen": True}


PROVIDERS: dict[str, Provider] = {
    p.name: p
    for p in (
        Provider(
            name="claude",
            wrappers=("CLAUDE.md",),
            directories=(".claude",),
            description="Include CLAUDE.md and .claude/",
        ),
        Provider(
            name="cursor",
            wrappers=("AGENTS.md",),
            directories=(".cursor",),
            description="Include AGENTS.md and .cursor/",
        ),
        Provider(
            name="codex",
            wrappers=("codex.md",),
            description="Include codex.md",
        ),
        Provider(
            name="gemini",
            wrappers=("GEMINI.md",),
            description="Include GEMINI.md",
        ),
    )
}

PROVIDER_NAMES: tuple[str, ...] = tuple(PROVIDERS)


def resolve_providers(names: Iterable[str]) -> list[Provider]:
    """Map provider names to ``Provider`` objects in registry order.

    Duplicates collapse; order of *names* is irrelevant.

    Raises:
        UsageError: If a name is not a known provider.
    """
    wanted = set()
    for name in names:
        key = name.strip().lower()
        if key not in PROVIDERS:
            raise UsageError(
                f"Unknown provider '{name}'. "
                f"Valid providers: {', '.join(PROVIDER_NAMES)}"
            )
        wanted.add(key)
    return [PROVIDERS[n] for n in PROVIDER_NAMES if n in wanted]
