"""
Command meta-tool for LangChain agents.

Exposes command resolution as a single "invoke_command" tool. The tool
description lists every available command so the agent can pick one; the
tool result carries the messages to inject into the conversation.
"""

import logging
from typing import Any, Callable, Dict, Optional

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from skillpath.formatter import CommandMessageFormatter
from skillpath.loader import CommandError
from skillpath.resolver import CommandResolver

logger = logging.getLogger(__name__)


class CommandInvocationInput(BaseModel):
    """Input schema for command invocation."""

    command_name: str = Field(
        description="Name of the command to invoke, with or without the leading '/'."
    )
    arguments: str = Field(
        default="",
        description="Optional arguments passed to the command.",
    )


def create_command_tool(resolver: Optional[CommandResolver]) -> Optional[StructuredTool]:
    """
    Create a meta-tool that wraps every available command.

    Args:
        resolver: CommandResolver backed by a loaded registry

    Returns:
        StructuredTool instance, or None if no commands are available
    """
    if resolver is None or not resolver.list_available_commands():
        logger.info("No commands available, skipping command tool creation")
        return None

    description = _build_command_description(
        resolver.registry.get_formatted_commands_list()
    )

    tool = StructuredTool.from_function(
        name="invoke_command",
        description=description,
        func=_invoke_command_wrapper(resolver),
        args_schema=CommandInvocationInput,
    )

    logger.info(
        "Created command meta-tool with %d commands",
        len(resolver.list_available_commands()),
    )
    return tool


def _build_command_description(commands_list: str) -> str:
    return f"""Invoke a command to load specialized instructions for a task.

Commands are named instruction documents. Project commands override
organization commands, which override built-in ones.

**Available Commands:**

{commands_list}

Only invoke a command when the user's request clearly matches its purpose,
then follow the instructions it returns.
"""


def _invoke_command_wrapper(
    resolver: CommandResolver,
) -> Callable[..., Dict[str, Any]]:
    formatter = CommandMessageFormatter()

    def _invoke(command_name: str, arguments: str = "") -> Dict[str, Any]:
        """Resolve a command and return the messages to inject."""
        try:
            command = resolver.load(command_name)
        except (CommandError, ValueError) as e:
            logger.error("Failed to invoke command '%s': %s", command_name, e)
            return {
                "command_name": command_name,
                "tier": None,
                "path": None,
                "messages": [],
                "context_modifier": {},
                "success": False,
                "error": str(e),
            }

        messages = formatter.create_messages(command, arguments)
        logger.info(
            "Invoked command '/%s': %d messages prepared", command.name, len(messages)
        )
        return {
            "command_name": command.name,
            "tier": command.tier.label,
            "path": str(command.path),
            "messages": messages,
            "context_modifier": formatter.create_context_modifier(command),
            "success": True,
            "error": None,
        }

    return _invoke


__all__ = [
    "create_command_tool",
    "CommandInvocationInput",
]
