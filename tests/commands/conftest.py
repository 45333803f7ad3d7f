"""
Shared fixtures for command tests
"""

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from skillpath.loader import CommandLoader
from skillpath.models import SourceTier
from skillpath.registry import CommandRegistry
from skillpath.resolver import CommandResolver


@pytest.fixture
def tier_dirs(tmp_path) -> Dict[SourceTier, Path]:
    """One existing commands directory per tier."""
    dirs = {
        SourceTier.PROJECT: tmp_path / "project" / ".claude" / "commands",
        SourceTier.ORGANIZATION: tmp_path / "org" / "commands",
        SourceTier.BUILTIN: tmp_path / "builtin",
    }
    for directory in dirs.values():
        directory.mkdir(parents=True)
    return dirs


@pytest.fixture
def write_command():
    """Write a command file in the flat or skill-directory layout."""

    def _write(
        directory: Path,
        name: str,
        body: str = "",
        description: Optional[str] = None,
        layout: str = "flat",
        extra: str = "",
    ) -> Path:
        if layout == "flat":
            path = directory / f"{name}.md"
        else:
            path = directory / name / "SKILL.md"
            path.parent.mkdir(parents=True, exist_ok=True)

        content = ""
        if description is not None or extra:
            content += "---\n"
            if description is not None:
                content += f'description: "{description}"\n'
            content += extra
            content += "---\n\n"
        content += body or f"# {name}\n\nInstructions for {name}.\n"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_resolver(tier_dirs):
    """Build a resolver over the tier directories (or custom locations)."""

    def _make(locations: Optional[Dict[SourceTier, List[Path]]] = None) -> CommandResolver:
        if locations is None:
            locations = {tier: [path] for tier, path in tier_dirs.items()}
        return CommandResolver(CommandRegistry(CommandLoader(locations)))

    return _make
