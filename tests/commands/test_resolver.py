"""
Unit tests for CommandResolver and invocation parsing.
"""

import pytest

from skillpath.loader import CommandLoadError
from skillpath.models import SourceTier
from skillpath.resolver import (
    CommandNotFoundError,
    InvalidInvocationError,
    parse_invocation,
)


class TestParseInvocation:
    """Test parse_invocation."""

    def test_name_only(self):
        invocation = parse_invocation("/arc-android-architecture")
        assert invocation.name == "arc-android-architecture"
        assert invocation.arguments == ""

    def test_with_arguments(self):
        invocation = parse_invocation("  /arc-audit   src/main  --strict ")
        assert invocation.name == "arc-audit"
        assert invocation.arguments == "src/main  --strict"

    @pytest.mark.parametrize("text", ["arc-audit", "", "/", "/ arc-audit"])
    def test_invalid(self, text):
        with pytest.raises(InvalidInvocationError):
            parse_invocation(text)

    def test_invalid_is_value_error(self):
        with pytest.raises(ValueError):
            parse_invocation("no-slash")


class TestResolve:
    """Test tier precedence during resolution."""

    def test_single_tier_project(self, tier_dirs, write_command, make_resolver):
        write_command(tier_dirs[SourceTier.PROJECT], "arc-workflow")

        entry = make_resolver().resolve("arc-workflow")

        assert entry.tier is SourceTier.PROJECT
        assert entry.path == tier_dirs[SourceTier.PROJECT] / "arc-workflow.md"

    @pytest.mark.parametrize("tier", list(SourceTier))
    def test_single_tier_any(self, tier, tier_dirs, write_command, make_resolver):
        write_command(tier_dirs[tier], "only-here")
        assert make_resolver().resolve("only-here").tier is tier

    def test_project_beats_organization(self, tier_dirs, write_command, make_resolver):
        write_command(tier_dirs[SourceTier.PROJECT], "arc-audit")
        write_command(tier_dirs[SourceTier.ORGANIZATION], "arc-audit")

        entry = make_resolver().resolve("arc-audit")

        assert entry.tier is SourceTier.PROJECT
        assert entry.path == tier_dirs[SourceTier.PROJECT] / "arc-audit.md"

    def test_organization_beats_builtin(self, tier_dirs, write_command, make_resolver):
        write_command(tier_dirs[SourceTier.ORGANIZATION], "help")
        write_command(tier_dirs[SourceTier.BUILTIN], "help")

        assert make_resolver().resolve("help").tier is SourceTier.ORGANIZATION

    def test_all_tiers(self, tier_dirs, write_command, make_resolver):
        for directory in tier_dirs.values():
            write_command(directory, "arc-audit")

        assert make_resolver().resolve("arc-audit").tier is SourceTier.PROJECT

    def test_not_found(self, tier_dirs, write_command, make_resolver):
        write_command(tier_dirs[SourceTier.PROJECT], "arc-workflow")

        with pytest.raises(CommandNotFoundError) as exc_info:
            make_resolver().resolve("nonexistent-skill")

        assert exc_info.value.name == "nonexistent-skill"
        assert exc_info.value.available == ["arc-workflow"]
        assert "nonexistent-skill" in str(exc_info.value)

    def test_not_found_is_lookup_error(self, make_resolver):
        with pytest.raises(LookupError):
            make_resolver().resolve("nonexistent-skill")

    def test_leading_slash_tolerated(self, tier_dirs, write_command, make_resolver):
        write_command(tier_dirs[SourceTier.PROJECT], "arc-workflow")
        assert make_resolver().resolve("/arc-workflow").name == "arc-workflow"

    @pytest.mark.parametrize("name", ["", "   ", "/", None])
    def test_empty_name(self, name, make_resolver):
        with pytest.raises(ValueError):
            make_resolver().resolve(name)

    def test_missing_tier_location_does_not_hide_others(
        self, tmp_path, tier_dirs, write_command, make_resolver
    ):
        write_command(tier_dirs[SourceTier.BUILTIN], "help")
        resolver = make_resolver(
            {
                SourceTier.PROJECT: [tmp_path / "missing"],
                SourceTier.ORGANIZATION: [tmp_path / "also-missing"],
                SourceTier.BUILTIN: [tier_dirs[SourceTier.BUILTIN]],
            }
        )
        assert resolver.resolve("help").tier is SourceTier.BUILTIN

    def test_shadowed(self, tier_dirs, write_command, make_resolver):
        for directory in tier_dirs.values():
            write_command(directory, "arc-audit")

        shadowed = make_resolver().shadowed("arc-audit")

        assert [e.tier for e in shadowed] == [SourceTier.ORGANIZATION, SourceTier.BUILTIN]


class TestLoadAndInvoke:
    """Test loading resolved commands."""

    def test_load(self, tier_dirs, write_command, make_resolver):
        write_command(tier_dirs[SourceTier.PROJECT], "arc-audit", body="Project audit")
        write_command(tier_dirs[SourceTier.ORGANIZATION], "arc-audit", body="Org audit")

        command = make_resolver().load("arc-audit")

        assert command.tier is SourceTier.PROJECT
        assert command.instructions == "Project audit"

    def test_load_unreadable_resolved_file(self, tier_dirs, write_command, make_resolver):
        path = write_command(tier_dirs[SourceTier.PROJECT], "arc-audit")
        resolver = make_resolver()
        resolver.resolve("arc-audit")
        path.write_text("---\ndescription: [unclosed\n---\nbody")

        with pytest.raises(CommandLoadError):
            resolver.load("arc-audit")

    def test_invoke_renders_arguments(self, tier_dirs, write_command, make_resolver):
        write_command(
            tier_dirs[SourceTier.PROJECT],
            "arc-audit",
            body="Audit the module at $ARGUMENTS.",
        )

        rendered = make_resolver().invoke("/arc-audit feature/login")

        assert rendered == "Audit the module at feature/login."

    def test_invoke_not_found(self, make_resolver):
        with pytest.raises(CommandNotFoundError):
            make_resolver().invoke("/nonexistent-skill")
