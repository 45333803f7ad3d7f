"""
Unit tests for CommandRegistry.

Tests one-time loading, candidate ordering and formatting.
"""

from pathlib import Path
from unittest.mock import Mock

import pytest

from skillpath.loader import CommandLoader
from skillpath.models import RegistryEntry, SourceTier
from skillpath.registry import CommandRegistry


@pytest.fixture
def sample_commands(tier_dirs, write_command):
    """arc-audit in project and organization, arc-workflow in project, help built-in."""
    write_command(tier_dirs[SourceTier.PROJECT], "arc-audit", description="Project audit")
    write_command(tier_dirs[SourceTier.ORGANIZATION], "arc-audit", description="Org audit")
    write_command(tier_dirs[SourceTier.PROJECT], "arc-workflow", description="Workflow")
    write_command(tier_dirs[SourceTier.BUILTIN], "help")
    return tier_dirs


@pytest.fixture
def registry(sample_commands):
    loader = CommandLoader({tier: [d] for tier, d in sample_commands.items()})
    return CommandRegistry(loader)


class TestCommandRegistry:
    """Test CommandRegistry class."""

    def test_names(self, registry):
        assert registry.names() == ["arc-audit", "arc-workflow", "help"]

    def test_len_and_contains(self, registry):
        assert len(registry) == 3
        assert "arc-audit" in registry
        assert "nonexistent-skill" not in registry

    def test_candidates_in_priority_order(self, registry):
        candidates = registry.candidates("arc-audit")
        assert [c.tier for c in candidates] == [
            SourceTier.PROJECT,
            SourceTier.ORGANIZATION,
        ]

    def test_candidates_unknown_name(self, registry):
        assert registry.candidates("nonexistent-skill") == []

    def test_candidates_returns_copy(self, registry):
        registry.candidates("arc-audit").clear()
        assert len(registry.candidates("arc-audit")) == 2

    def test_entries_are_effective(self, registry):
        entries = {e.name: e for e in registry.entries()}
        assert entries["arc-audit"].description == "Project audit"
        assert entries["help"].tier is SourceTier.BUILTIN

    def test_loads_only_once(self):
        entry = RegistryEntry(name="help", tier=SourceTier.BUILTIN, path=Path("help.md"))
        loader = Mock(spec=CommandLoader)
        loader.load_all.return_value = {"help": [entry]}

        registry = CommandRegistry(loader)
        registry.names()
        registry.candidates("help")
        assert "help" in registry

        loader.load_all.assert_called_once()

    def test_sorts_unordered_loader_output(self):
        builtin = RegistryEntry(name="x", tier=SourceTier.BUILTIN, path=Path("b.md"))
        project = RegistryEntry(name="x", tier=SourceTier.PROJECT, path=Path("p.md"))
        loader = Mock(spec=CommandLoader)
        loader.load_all.return_value = {"x": [builtin, project]}

        registry = CommandRegistry(loader)

        assert registry.candidates("x") == [project, builtin]

    def test_formatted_commands_list(self, registry):
        formatted = registry.get_formatted_commands_list()
        lines = formatted.split("\n")
        assert lines[0] == '"/arc-audit": Project audit (project)'
        assert '"/help": No description (builtin)' in lines

    def test_commands_info(self, registry):
        info = {item["name"]: item for item in registry.get_commands_info()}
        assert info["arc-audit"]["tier"] == "project"
        assert info["arc-audit"]["shadowed"] == ["organization"]
        assert info["arc-workflow"]["shadowed"] == []

    def test_empty_registry(self, tmp_path):
        registry = CommandRegistry(CommandLoader({SourceTier.PROJECT: [tmp_path / "none"]}))
        assert registry.names() == []
        assert registry.get_formatted_commands_list() == ""
