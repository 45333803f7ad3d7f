"""
skillpath: resolve agent commands across source tiers.

A command (or skill) is a named Markdown instruction document, invoked as
`/<command-name>`. The same name may exist in several places; the first
tier that has it wins:

1. Project:      .claude/commands/<name>.md, .claude/skills/<name>/SKILL.md
2. Organization: ~/.config/skillpath/commands, ~/.config/skillpath/skills
3. Built-in:     commands bundled with this package

Components:
- CommandLoader: Scan tier locations for commands
- CommandRegistry: Read-only view of discovered commands
- CommandResolver: Map a name to its effective entry
- CommandMessageFormatter: Build messages handing a command to an agent
- create_command_tool: LangChain tool wrapping the resolver
"""

from skillpath.command_tool import CommandInvocationInput, create_command_tool
from skillpath.formatter import CommandMessageFormatter
from skillpath.loader import (
    CommandError,
    CommandLoader,
    CommandLoadError,
    InvalidCommandError,
)
from skillpath.models import (
    Command,
    CommandFrontmatter,
    CommandInvocation,
    RegistryEntry,
    SourceTier,
)
from skillpath.registry import CommandRegistry
from skillpath.resolver import (
    CommandNotFoundError,
    CommandResolver,
    InvalidInvocationError,
    parse_invocation,
)

__version__ = "0.1.0"

__all__ = [
    # Models
    "SourceTier",
    "CommandFrontmatter",
    "RegistryEntry",
    "Command",
    "CommandInvocation",
    # Core components
    "CommandLoader",
    "CommandRegistry",
    "CommandResolver",
    "CommandMessageFormatter",
    "parse_invocation",
    # Tool
    "create_command_tool",
    "CommandInvocationInput",
    # Exceptions
    "CommandError",
    "CommandLoadError",
    "InvalidCommandError",
    "CommandNotFoundError",
    "InvalidInvocationError",
]
