"""Per-invocation command state shared by the output helpers."""

import argparse
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..types import TableFieldDefinition
from .config import get_profile_config
from .table_generator import TableGenerator, table_generator_for


@dataclass
class CommandFlags:
    """Input/output flags common to API commands."""
    json: bool = False
    yaml: bool = False
    indent: Optional[int] = None
    output: Optional[str] = None
    input: Optional[str] = None
    compact: bool = False
    expanded: bool = False


@dataclass
class CommandContext:
    """
    Everything the output helpers need to know about the running command.

    Commands fill in the table-related attributes to describe how their
    results render in the common format.
    """
    flags: CommandFlags = field(default_factory=CommandFlags)
    profile_name: Optional[str] = None
    profile_config: Dict[str, Any] = field(default_factory=dict)
    table_generator: Optional[TableGenerator] = None
    verbose: bool = False

    item_name: Optional[str] = None
    plural_item_name: Optional[str] = None
    primary_key_name: Optional[str] = None
    sort_key_name: Optional[str] = None
    table_field_definitions: Optional[List[TableFieldDefinition]] = None
    list_table_field_definitions: Optional[List[TableFieldDefinition]] = None
    build_table_output: Optional[Callable[[Any], str]] = None
    build_list_table_output: Optional[Callable[[List[Any]], str]] = None

    def __post_init__(self) -> None:
        if self.table_generator is None:
            self.table_generator = table_generator_for(
                compact=self.flags.compact,
                expanded=self.flags.expanded,
                profile_config=self.profile_config,
            )

    @classmethod
    def from_args(cls, args: argparse.Namespace, **kwargs: Any) -> "CommandContext":
        """Build a context from parsed command line arguments."""
        flags = CommandFlags(
            json=getattr(args, "json", False),
            yaml=getattr(args, "yaml", False),
            indent=getattr(args, "indent", None),
            output=getattr(args, "output", None),
            input=getattr(args, "input", None),
            compact=getattr(args, "compact", False),
            expanded=getattr(args, "expanded", False),
        )
        profile_name = getattr(args, "profile", None)
        return cls(
            flags=flags,
            profile_name=profile_name,
            profile_config=get_profile_config(profile_name),
            verbose=getattr(args, "verbose", False),
            **kwargs,
        )
