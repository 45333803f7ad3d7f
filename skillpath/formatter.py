"""
Formatter for skillpath.

Builds the messages that hand a resolved command to the invoking agent.
"""

from typing import Any, Dict, Optional

from skillpath.models import Command


class CommandMessageFormatter:
    """Format command-related messages for agent consumption."""

    @staticmethod
    def create_metadata_message(command: Command) -> Dict[str, Any]:
        """Create the visible message announcing which command is loading.

        Args:
            command: The resolved command

        Returns:
            Message dict with role and content
        """
        content = (
            f'<command-message>The "{command.name}" command is loading '
            f"from the {command.tier.label} tier</command-message>\n"
            f"<command-name>/{command.name}</command-name>"
        )

        return {
            "role": "user",
            "content": content,
            "isMeta": False,  # Visible to user
        }

    @staticmethod
    def create_instruction_message(
        command: Command, arguments: str = ""
    ) -> Dict[str, Any]:
        """Create the hidden message carrying the command's instructions.

        Args:
            command: The resolved command
            arguments: Invocation arguments substituted for $ARGUMENTS

        Returns:
            Message dict with role and content
        """
        return {
            "role": "user",
            "content": command.render(arguments),
            "isMeta": True,  # Hidden from user, sent to API
        }

    @staticmethod
    def create_permissions_message(command: Command) -> Optional[Dict[str, Any]]:
        """Create tool permissions message if the command has allowed-tools.

        Returns:
            Message dict with permissions, or None if no allowed-tools
        """
        allowed_tools = command.frontmatter.get_allowed_tools_list()
        if not allowed_tools:
            return None

        return {
            "role": "user",
            "content": {
                "type": "command_permissions",
                "allowed_tools": allowed_tools,
                "model": command.frontmatter.model,
            },
            "isMeta": True,
        }

    @staticmethod
    def create_context_modifier(command: Command) -> Dict[str, Any]:
        """Create execution context modifier for the command."""
        modifier: Dict[str, Any] = {}

        allowed_tools = command.frontmatter.get_allowed_tools_list()
        if allowed_tools:
            modifier["allowed_tools"] = allowed_tools

        if command.frontmatter.model:
            modifier["model"] = command.frontmatter.model

        if command.frontmatter.disable_model_invocation:
            modifier["disable_model_invocation"] = True

        return modifier

    @classmethod
    def create_messages(cls, command: Command, arguments: str = "") -> list:
        """All messages to inject for one invocation, in order."""
        messages = [
            cls.create_metadata_message(command),
            cls.create_instruction_message(command, arguments),
        ]
        permissions_msg = cls.create_permissions_message(command)
        if permissions_msg:
            messages.append(permissions_msg)
        return messages

    @staticmethod
    def format_command_for_debug(command: Command) -> str:
        """Format command info for debug output."""
        fm = command.frontmatter
        lines = [
            f"Command: /{command.name}",
            f"  Tier: {command.tier.label}",
            f"  Path: {command.path}",
            f"  Description: {fm.description or 'N/A'}",
            f"  Argument Hint: {fm.argument_hint or 'N/A'}",
            f"  Allowed Tools: {fm.allowed_tools or 'None'}",
            f"  Model Override: {fm.model or 'None'}",
        ]
        return "\n".join(lines)
