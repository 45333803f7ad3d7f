"""
Command Loader for skillpath.

Discovers commands across the source tiers. Two layouts are recognised in
every location:
- flat command files: <location>/<name>.md
- skill directories:  <location>/<name>/SKILL.md

Discovery only reads frontmatter. The instruction body is read when a
command is resolved and loaded.
"""

import logging
import re
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import yaml
from pydantic import ValidationError

from skillpath.models import (
    Command,
    CommandFrontmatter,
    RegistryEntry,
    SourceTier,
    is_valid_command_name,
)

logger = logging.getLogger(__name__)

COMMAND_SUFFIX = ".md"
SKILL_FILE = "SKILL.md"

_FRONTMATTER_RE = re.compile(
    r"^---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|$)", re.DOTALL
)


class CommandError(Exception):
    """Base exception for command errors."""

    pass


class CommandLoadError(CommandError):
    """Raised when a command file cannot be read."""

    pass


class InvalidCommandError(CommandLoadError):
    """Raised when a command file has invalid frontmatter."""

    pass


def split_frontmatter(content: str) -> Tuple[Optional[str], str]:
    """Split a document into (frontmatter_text, body).

    frontmatter_text is None when the document has no frontmatter block
    and "" when the block is empty.
    """
    match = _FRONTMATTER_RE.match(content)
    if not match:
        return None, content.strip()
    return match.group(1) or "", content[match.end():].strip()


def parse_frontmatter(
    frontmatter_text: Optional[str], path: Path
) -> CommandFrontmatter:
    """Parse and validate a frontmatter block.

    Raises:
        InvalidCommandError: If the YAML is malformed or fails validation
    """
    if frontmatter_text is None:
        return CommandFrontmatter()

    try:
        data = yaml.safe_load(frontmatter_text)
    except yaml.YAMLError as e:
        raise InvalidCommandError(f"{path}: Invalid YAML: {e}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidCommandError(f"{path}: Frontmatter must be a mapping")

    bad_keys = [key for key in data if not isinstance(key, str)]
    if bad_keys:
        raise InvalidCommandError(
            f"{path}: Frontmatter keys must be strings, got {bad_keys!r}"
        )

    try:
        return CommandFrontmatter.model_validate(data)
    except ValidationError as e:
        raise InvalidCommandError(f"{path}: Validation error: {e}")


class CommandLoader:
    """Scan the configured locations of every tier for commands.

    Locations are plain directories. A location that is missing or cannot
    be listed contributes no entries; the scan carries on with the rest.
    """

    def __init__(self, locations: Mapping[SourceTier, Sequence[Path]]):
        """Initialize the command loader.

        Args:
            locations: Directories to scan per tier, in scan order.
                       Example: {SourceTier.PROJECT: [Path(".claude/commands")]}
        """
        self.locations: Dict[SourceTier, List[Path]] = {
            tier: [Path(p) for p in locations.get(tier, ())]
            for tier in SourceTier.ordered()
        }

    def load_all(self) -> Dict[str, List[RegistryEntry]]:
        """Discover commands in every tier.

        Returns:
            Dict mapping command name -> candidate entries, one per tier
            the name was found in, highest priority first
        """
        candidates: Dict[str, List[RegistryEntry]] = {}

        for tier in SourceTier.ordered():
            tier_entries = self.load_tier(tier)
            for name, entry in tier_entries.items():
                candidates.setdefault(name, []).append(entry)

        logger.debug(
            "Discovered %d commands across %d tiers",
            len(candidates),
            len(self.locations),
        )
        return candidates

    def load_tier(self, tier: SourceTier) -> Dict[str, RegistryEntry]:
        """Discover commands in a single tier.

        When the same name shows up twice within the tier the later one
        replaces the earlier one.
        """
        entries: Dict[str, RegistryEntry] = {}

        for location in self.locations.get(tier, []):
            for entry in self._scan_location(location, tier):
                previous = entries.get(entry.name)
                if previous is not None:
                    logger.warning(
                        "Duplicate %s command '%s': %s overrides %s",
                        tier.label,
                        entry.name,
                        entry.path,
                        previous.path,
                    )
                entries[entry.name] = entry

        return entries

    def _scan_location(
        self, location: Path, tier: SourceTier
    ) -> Iterator[RegistryEntry]:
        location = location.expanduser()
        try:
            if not location.exists():
                logger.debug("Skipping missing %s location %s", tier.label, location)
                return
            if not location.is_dir():
                logger.warning(
                    "Skipping %s location %s: not a directory", tier.label, location
                )
                return
            children = sorted(location.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.warning(
                "Skipping unreadable %s location %s: %s", tier.label, location, e
            )
            return

        flat_files: List[Tuple[str, Path]] = []
        skill_dirs: List[Tuple[str, Path]] = []
        for child in children:
            try:
                if (
                    child.suffix == COMMAND_SUFFIX
                    and child.name != SKILL_FILE
                    and child.is_file()
                ):
                    flat_files.append((child.stem, child))
                elif child.is_dir() and (child / SKILL_FILE).is_file():
                    skill_dirs.append((child.name, child / SKILL_FILE))
            except OSError as e:
                logger.warning("Skipping unreadable entry %s: %s", child, e)

        for name, path in flat_files + skill_dirs:
            if not is_valid_command_name(name):
                logger.debug("Ignoring %s: '%s' is not a valid command name", path, name)
                continue
            try:
                entry = self._parse_entry(name, path, tier)
            except CommandLoadError as e:
                logger.warning("Failed to load %s: %s", path, e)
                continue
            yield entry

    def _parse_entry(self, name: str, path: Path, tier: SourceTier) -> RegistryEntry:
        frontmatter, _ = self._read(path)
        if frontmatter.name is not None and frontmatter.name != name:
            raise InvalidCommandError(
                f"{path}: frontmatter name '{frontmatter.name}' "
                f"does not match '{name}'"
            )
        return RegistryEntry(
            name=name,
            tier=tier,
            path=path,
            description=frontmatter.description,
        )

    def load_command(self, entry: RegistryEntry) -> Command:
        """Load the full instruction body of a discovered command.

        Raises:
            CommandLoadError: If the file can no longer be read
            InvalidCommandError: If its frontmatter is invalid
        """
        frontmatter, instructions = self._read(entry.path)
        return Command(entry=entry, frontmatter=frontmatter, instructions=instructions)

    @staticmethod
    def _read(path: Path) -> Tuple[CommandFrontmatter, str]:
        try:
            content = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise CommandLoadError(f"{path}: Cannot read file: {e}")

        frontmatter_text, body = split_frontmatter(content)
        return parse_frontmatter(frontmatter_text, path), body
