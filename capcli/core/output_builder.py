"""Output format resolution."""

from typing import Optional

from ..types import OutputFormatter
from .command import CommandContext
from .io_util import IOFormat, format_from_filename
from .output import json_formatter, yaml_formatter

DEFAULT_YAML_INDENT = 2
DEFAULT_JSON_INDENT = 4


def resolve_output_format(command: CommandContext, input_format: Optional[IOFormat] = None) -> IOFormat:
    """
    Decide which format a command writes.

    Precedence: --json, --yaml, the extension of --output, the format the
    input was read in, and finally the common (table) format.
    """
    flags = command.flags
    if flags.json:
        return IOFormat.JSON
    if flags.yaml:
        return IOFormat.YAML
    if flags.output:
        return format_from_filename(flags.output)
    if input_format:
        return input_format
    return IOFormat.COMMON


def build_output_formatter(command: CommandContext,
                           input_format: Optional[IOFormat] = None,
                           common_formatter: Optional[OutputFormatter] = None) -> OutputFormatter:
    """Build the formatter for a command's result."""
    output_format = resolve_output_format(command, input_format)

    indent = command.flags.indent or command.profile_config.get("indent")
    if output_format == IOFormat.COMMON and common_formatter:
        return common_formatter
    if output_format == IOFormat.JSON:
        return json_formatter(indent or DEFAULT_JSON_INDENT)
    return yaml_formatter(indent or DEFAULT_YAML_INDENT)
