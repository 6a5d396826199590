"""Capabilities commands - create, list and inspect capabilities."""

import argparse
import sys
from typing import Any, Dict

from ..core.command import CommandContext
from ..core.config import get_api_url, get_token
from ..core.flags import add_input_output_arguments, add_output_arguments
from ..core.format import format_and_write_item, format_and_write_list
from ..core.io_util import read_data_file
from ..core.output import sort
from ..core.table_generator import TableGenerator
from ..services.api_client import ApiError, CapabilitiesClient
from ..services.capability_builder import capability_from_dict, validate_capability_create
from ..services.capability_wizard import run_wizard
from ..services.prompter import ConsolePrompter

NAMESPACE_FIELDS = ["name", "ownerType", "ownerId"]
CAPABILITY_LIST_FIELDS = ["id", "version", "status"]


def _value_constraints(schema: Dict[str, Any]) -> str:
    parts = []
    for key in ("minimum", "maximum", "maxLength"):
        if key in schema:
            parts.append(f"{key}: {schema[key]}")
    return ", ".join(parts)


def capability_table(table_generator: TableGenerator, capability: Dict[str, Any]) -> str:
    """Render a capability with its attributes and commands."""
    sections = [table_generator.build_table_from_item(capability, [
        ("Id", "id"), ("Version", "version"), ("Name", "name"), ("Status", "status"),
    ])]

    attributes = capability.get("attributes") or {}
    if attributes:
        rows = []
        for name, attribute in attributes.items():
            value = ((attribute.get("schema") or {}).get("properties") or {}).get("value") or {}
            enum_commands = ", ".join(
                f"{enum.get('command')}={enum.get('value')}" for enum in attribute.get("enumCommands") or []
            )
            rows.append([name, value.get("type", ""), _value_constraints(value),
                         attribute.get("setter") or "", enum_commands])
        sections.append(table_generator.new_output_table(
            rows, ["Attribute", "Type", "Constraints", "Setter", "Enum Commands"]))
    else:
        sections.append("No attributes")

    commands = capability.get("commands") or {}
    if commands:
        rows = []
        for name, command in commands.items():
            arguments = ", ".join(
                f"{arg.get('name')}: {(arg.get('schema') or {}).get('type', '')}"
                f"{' (optional)' if arg.get('optional') else ''}"
                for arg in command.get("arguments") or []
            )
            rows.append([name, arguments])
        sections.append(table_generator.new_output_table(rows, ["Command", "Arguments"]))
    else:
        sections.append("No commands")

    return "\n\n".join(sections)


def _client(command: CommandContext) -> CapabilitiesClient:
    return CapabilitiesClient(get_api_url(command.profile_config), get_token(command.profile_config))


def _capability_context(args: argparse.Namespace) -> CommandContext:
    command = CommandContext.from_args(args, item_name="capability", plural_item_name="capabilities")
    command.build_table_output = lambda item: capability_table(command.table_generator, item)
    return command


def cmd_create(args: argparse.Namespace) -> int:
    """Create a capability from a file or through the interactive wizard."""
    command = _capability_context(args)

    input_format = None
    if command.flags.input:
        body, input_format = read_data_file(command.flags.input)
        validation = validate_capability_create(capability_from_dict(body))
        if not validation.status:
            print(f"Validation failed: {validation.reason}", file=sys.stderr)
            return 1
    else:
        body = run_wizard(ConsolePrompter()).to_dict()

    if command.verbose:
        print(f"Creating capability {body.get('name')!r}", file=sys.stderr)

    try:
        with _client(command) as client:
            created = client.create(body)
    except ApiError as exc:
        print(f"caught error {exc}", file=sys.stderr)
        return 1

    format_and_write_item(command, created, input_format)
    if command.flags.output:
        print(f"file created: {command.flags.output}", file=sys.stderr)
    return 0


def cmd_list_namespaces(args: argparse.Namespace) -> int:
    """List the capability namespaces available to the user."""
    command = CommandContext.from_args(
        args,
        item_name="namespace",
        list_table_field_definitions=NAMESPACE_FIELDS,
    )
    try:
        with _client(command) as client:
            namespaces = client.list_namespaces()
    except ApiError as exc:
        print(f"caught error {exc}", file=sys.stderr)
        return 1

    format_and_write_list(command, sort(namespaces, "name"), include_index=True)
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List capabilities, optionally limited to one namespace."""
    command = CommandContext.from_args(
        args,
        item_name="capability",
        plural_item_name="capabilities",
        list_table_field_definitions=CAPABILITY_LIST_FIELDS,
    )
    try:
        with _client(command) as client:
            capabilities = client.list(args.namespace)
    except ApiError as exc:
        print(f"caught error {exc}", file=sys.stderr)
        return 1

    format_and_write_list(command, sort(capabilities, "id", "version"), include_index=True)
    return 0


def cmd_get(args: argparse.Namespace) -> int:
    """Show a single capability."""
    command = _capability_context(args)
    try:
        with _client(command) as client:
            capability = client.get(args.id, args.capability_version)
    except ApiError as exc:
        print(f"caught error {exc}", file=sys.stderr)
        return 1

    format_and_write_item(command, capability)
    return 0


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register the capabilities command group."""
    parser = subparsers.add_parser(
        "capabilities",
        help="Manage capabilities"
    )
    actions = parser.add_subparsers(
        dest="capabilities_action",
        help="Capability actions",
        required=True
    )

    create = actions.add_parser(
        "create",
        help="Create a capability for a user"
    )
    add_input_output_arguments(create)
    create.set_defaults(func=cmd_create)

    namespaces = actions.add_parser(
        "list-namespaces",
        help="List all capability namespaces currently available in a user account"
    )
    add_output_arguments(namespaces)
    namespaces.set_defaults(func=cmd_list_namespaces)

    list_parser = actions.add_parser(
        "list",
        help="List capabilities"
    )
    list_parser.add_argument(
        "--namespace", "-n",
        help="Only list capabilities in this namespace"
    )
    add_output_arguments(list_parser)
    list_parser.set_defaults(func=cmd_list)

    get = actions.add_parser(
        "get",
        help="Show a capability"
    )
    get.add_argument("id", help="Capability id")
    get.add_argument(
        "capability_version",
        nargs="?",
        type=int,
        default=1,
        metavar="VERSION",
        help="Capability version (default: 1)"
    )
    add_output_arguments(get)
    get.set_defaults(func=cmd_get)
