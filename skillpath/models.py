"""
Command data models for skillpath.

Defines:
- SourceTier: priority level of the location a command was found in
- CommandFrontmatter: optional YAML frontmatter of a command file
- RegistryEntry: a discovered (name, tier, path) triple
- Command: a resolved entry with its instruction body loaded
"""

import re
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

COMMAND_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
MAX_COMMAND_NAME_LENGTH = 64
ARGUMENTS_PLACEHOLDER = "$ARGUMENTS"


def is_valid_command_name(name: str) -> bool:
    """Check whether a string can be used as a command name."""
    return (
        bool(name)
        and len(name) <= MAX_COMMAND_NAME_LENGTH
        and COMMAND_NAME_PATTERN.match(name) is not None
    )


class SourceTier(IntEnum):
    """Where a command was discovered. Lower value wins."""

    PROJECT = 0
    ORGANIZATION = 1
    BUILTIN = 2

    @classmethod
    def ordered(cls) -> List["SourceTier"]:
        """Tiers in priority order (highest priority first)."""
        return sorted(cls)

    @property
    def label(self) -> str:
        return self.name.lower()


class CommandFrontmatter(BaseModel):
    """YAML frontmatter parsed from a command file.

    Every field is optional; a command file without frontmatter is valid
    and gets the defaults below.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: Optional[str] = Field(
        None,
        description="Command name; must match the file-derived name when given",
    )
    description: str = Field(
        default="",
        description="What the command does. Shown when listing commands.",
    )
    argument_hint: Optional[str] = Field(
        default=None,
        alias="argument-hint",
        description="Hint for the arguments the command expects",
    )
    allowed_tools: Optional[str] = Field(
        default=None,
        alias="allowed-tools",
        description="Comma-separated list of tools the command may use",
    )
    model: Optional[str] = Field(
        default=None,
        description="Model override while the command is active",
    )
    disable_model_invocation: bool = Field(
        default=False,
        alias="disable-model-invocation",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        """Validate command name format."""
        if v is not None and not is_valid_command_name(v):
            raise ValueError(
                f"Command name must match {COMMAND_NAME_PATTERN.pattern} "
                f"and be at most {MAX_COMMAND_NAME_LENGTH} characters"
            )
        return v

    @field_validator("description", mode="before")
    @classmethod
    def coerce_description(cls, v):
        return "" if v is None else v

    def get_allowed_tools_list(self) -> Optional[List[str]]:
        """Parse allowed_tools string into list."""
        if not self.allowed_tools:
            return None
        tools = [t.strip() for t in self.allowed_tools.split(",")]
        return [t for t in tools if t] or None


@dataclass(frozen=True)
class RegistryEntry:
    """A command discovered in one tier.

    At most one entry exists per (name, tier) pair.
    """

    name: str  # "arc-workflow"
    tier: SourceTier
    path: Path  # the .md file holding the instructions
    description: str = ""


class Command(BaseModel):
    """A resolved command with its instruction body loaded."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    entry: RegistryEntry
    frontmatter: CommandFrontmatter
    instructions: str  # Markdown content after the frontmatter

    @property
    def name(self) -> str:
        return self.entry.name

    @property
    def tier(self) -> SourceTier:
        return self.entry.tier

    @property
    def path(self) -> Path:
        return self.entry.path

    def render(self, arguments: str = "") -> str:
        """Return the instructions with $ARGUMENTS substituted."""
        return self.instructions.replace(ARGUMENTS_PLACEHOLDER, arguments)


@dataclass(frozen=True)
class CommandInvocation:
    """A parsed `/<command-name> [arguments]` invocation."""

    name: str
    arguments: str = ""
