"""
Command Registry for skillpath.

Holds the commands discovered by the loader. The registry is populated
once, on first access, and is read-only afterwards.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from skillpath.loader import CommandLoader
from skillpath.models import RegistryEntry


class CommandRegistry:
    """Read-only view over every discovered command.

    Candidates for a name are kept in tier priority order, so the first
    candidate is always the effective one.
    """

    def __init__(self, loader: CommandLoader):
        """Initialize the command registry.

        Args:
            loader: CommandLoader used for the one-time discovery scan
        """
        self.loader = loader
        self._candidates: Optional[Mapping[str, Tuple[RegistryEntry, ...]]] = None

    def _get_candidates(self) -> Mapping[str, Tuple[RegistryEntry, ...]]:
        if self._candidates is None:
            loaded = self.loader.load_all()
            self._candidates = MappingProxyType(
                {
                    name: tuple(sorted(entries, key=lambda e: e.tier))
                    for name, entries in loaded.items()
                }
            )
        return self._candidates

    def candidates(self, name: str) -> List[RegistryEntry]:
        """All entries registered under a name, highest priority first.

        Returns:
            List of entries, empty if the name is unknown
        """
        return list(self._get_candidates().get(name, ()))

    def names(self) -> List[str]:
        """List all command names.

        Returns:
            Sorted list of command names
        """
        return sorted(self._get_candidates().keys())

    def entries(self) -> List[RegistryEntry]:
        """Effective entry of every command, sorted by name."""
        candidates = self._get_candidates()
        return [candidates[name][0] for name in self.names()]

    def __contains__(self, name: object) -> bool:
        return name in self._get_candidates()

    def __len__(self) -> int:
        return len(self._get_candidates())

    def get_formatted_commands_list(self) -> str:
        """Format commands for an agent's system prompt.

        Returns:
            Formatted string like:
            '"/arc-workflow": Branching and commit workflow (project)'
        """
        lines: List[str] = []
        for entry in self.entries():
            description = entry.description or "No description"
            lines.append(f'"/{entry.name}": {description} ({entry.tier.label})')
        return "\n".join(lines)

    def get_commands_info(self) -> List[Dict[str, object]]:
        """Get detailed info about all commands.

        Returns:
            List of dictionaries with command information
        """
        info: List[Dict[str, object]] = []
        for name in self.names():
            effective, *shadowed = self.candidates(name)
            info.append(
                {
                    "name": name,
                    "description": effective.description,
                    "tier": effective.tier.label,
                    "path": str(effective.path),
                    "shadowed": [e.tier.label for e in shadowed],
                }
            )
        return info
