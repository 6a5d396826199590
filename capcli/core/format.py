"""Format-and-write helpers used by API commands."""

from typing import Any, Optional, Sequence

from ..types import OutputFormatter
from .command import CommandContext
from .io_util import IOFormat
from .output import item_table_formatter, list_table_formatter, no_items_message, write_output
from .output_builder import build_output_formatter


def _item_common_formatter(command: CommandContext) -> OutputFormatter:
    if command.build_table_output:
        return command.build_table_output
    return item_table_formatter(command.table_generator, command.table_field_definitions or [])


def _list_common_formatter(command: CommandContext, items: Sequence[Any],
                           include_index: bool) -> OutputFormatter:
    if not items:
        message = no_items_message(command.item_name, command.plural_item_name)
        return lambda _: message
    if command.build_list_table_output:
        return command.build_list_table_output
    return list_table_formatter(
        command.table_generator,
        command.list_table_field_definitions,
        include_index,
        item_name=command.item_name,
        plural_item_name=command.plural_item_name,
        sort_key_name=command.sort_key_name,
        primary_key_name=command.primary_key_name,
    )


def format_and_write_item(command: CommandContext, item: Any,
                          input_format: Optional[IOFormat] = None) -> None:
    """Format a single result and write it where the flags say."""
    formatter = build_output_formatter(command, input_format, _item_common_formatter(command))
    write_output(formatter(item), command.flags.output)


def format_and_write_list(command: CommandContext, items: Sequence[Any],
                          include_index: bool = False) -> None:
    """Format a list of results and write it where the flags say."""
    formatter = build_output_formatter(command, None, _list_common_formatter(command, items, include_index))
    write_output(formatter(items), command.flags.output)
