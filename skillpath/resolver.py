"""
Command Resolver for skillpath.

Maps a command name to the single entry that should be used for it:
project overrides organization, organization overrides built-in.
"""

import logging
from typing import List

from skillpath.loader import CommandError
from skillpath.models import Command, CommandInvocation, RegistryEntry
from skillpath.registry import CommandRegistry

logger = logging.getLogger(__name__)

COMMAND_PREFIX = "/"


class CommandNotFoundError(CommandError, LookupError):
    """Raised when no tier provides the requested command."""

    def __init__(self, name: str, available: List[str]):
        self.name = name
        self.available = available
        message = f"Command '{name}' not found."
        if available:
            message += f" Available commands: {', '.join(available)}"
        super().__init__(message)


class InvalidInvocationError(CommandError, ValueError):
    """Raised when text is not a `/<command-name>` invocation."""

    pass


def parse_invocation(text: str) -> CommandInvocation:
    """Parse `/<command-name> [arguments...]`.

    Args:
        text: Raw invocation text, e.g. "/arc-audit src/main"

    Returns:
        CommandInvocation with the name and the remaining argument string

    Raises:
        InvalidInvocationError: If text does not start with "/" or names nothing
    """
    stripped = text.strip() if isinstance(text, str) else ""
    if not stripped.startswith(COMMAND_PREFIX):
        raise InvalidInvocationError(
            f"Invocation must start with '{COMMAND_PREFIX}': {text!r}"
        )

    rest = stripped[len(COMMAND_PREFIX):]
    if not rest or rest[0].isspace():
        raise InvalidInvocationError(f"Invocation has no command name: {text!r}")

    parts = rest.split(None, 1)
    arguments = parts[1].strip() if len(parts) > 1 else ""
    return CommandInvocation(name=parts[0], arguments=arguments)


class CommandResolver:
    """Resolve command names against a CommandRegistry."""

    def __init__(self, registry: CommandRegistry):
        self.registry = registry

    @staticmethod
    def _normalize(name: str) -> str:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Command name must be a non-empty string")
        name = name.strip()
        if name.startswith(COMMAND_PREFIX):
            name = name[len(COMMAND_PREFIX):]
        if not name:
            raise ValueError("Command name must be a non-empty string")
        return name

    def resolve(self, name: str) -> RegistryEntry:
        """Return the effective entry for a command name.

        Args:
            name: Command name, with or without the leading "/"

        Returns:
            The candidate from the highest-priority tier

        Raises:
            ValueError: If name is empty
            CommandNotFoundError: If no tier provides the command
        """
        name = self._normalize(name)
        candidates = self.registry.candidates(name)
        if not candidates:
            raise CommandNotFoundError(name, self.registry.names())
        return min(candidates, key=lambda entry: entry.tier)

    def shadowed(self, name: str) -> List[RegistryEntry]:
        """Entries for name that are overridden by the resolved one."""
        winner = self.resolve(name)
        return [e for e in self.registry.candidates(winner.name) if e != winner]

    def load(self, name: str) -> Command:
        """Resolve a name and load the full command.

        Raises:
            CommandNotFoundError: If no tier provides the command
            CommandLoadError: If the resolved file cannot be read or parsed
        """
        entry = self.resolve(name)
        command = self.registry.loader.load_command(entry)
        logger.info(
            "Resolved /%s to %s command at %s", entry.name, entry.tier.label, entry.path
        )
        return command

    def invoke(self, text: str) -> str:
        """Resolve an invocation and return the rendered instructions."""
        invocation = parse_invocation(text)
        return self.load(invocation.name).render(invocation.arguments)

    def list_available_commands(self) -> List[str]:
        return self.registry.names()
