"""Output formatters and the final output writer."""

import json
import sys
from typing import Any, List, Optional, Sequence

import yaml

from ..types import OutputFormatter, PathLike, TableFieldDefinition
from .io_util import write_file
from .table_generator import TableGenerator, field_value, get_value, resolve_field

INDEX_LABEL = "#"


def json_formatter(indent: int) -> OutputFormatter:
    """Build a formatter rendering data as JSON."""
    def formatter(data: Any) -> str:
        return json.dumps(data, indent=indent)
    return formatter


def yaml_formatter(indent: int) -> OutputFormatter:
    """Build a formatter rendering data as YAML."""
    def formatter(data: Any) -> str:
        return yaml.safe_dump(data, indent=indent, sort_keys=False, allow_unicode=True)
    return formatter


def _sort_key(value: Any) -> str:
    return "" if value is None else str(value).lower()


def sort(items: Sequence[Any], *field_names: str) -> List[Any]:
    """
    Return a new list of items ordered case-insensitively by the named fields.

    Later fields break ties left by earlier ones. The sort is stable, so items
    that compare equal keep their original relative order. With no field
    names, items are compared by their own string value.
    """
    if not field_names:
        return sorted(items, key=_sort_key)
    return sorted(items, key=lambda item: tuple(_sort_key(get_value(item, name)) for name in field_names))


def item_table_formatter(table_generator: TableGenerator,
                         fields: Sequence[TableFieldDefinition]) -> OutputFormatter:
    """Build a formatter that renders a single record as a table."""
    def formatter(item: Any) -> str:
        return table_generator.build_table_from_item(item, fields)
    return formatter


def no_items_message(item_name: Optional[str] = None, plural_item_name: Optional[str] = None) -> str:
    """Message shown in place of an empty table."""
    if plural_item_name:
        return f"no {plural_item_name} found"
    if item_name:
        return f"no {item_name}s found"
    return "no items found"


def default_list_fields(items: Sequence[Any], sort_key_name: Optional[str] = None,
                        primary_key_name: Optional[str] = None) -> List[TableFieldDefinition]:
    """Columns used when a command declares no list fields of its own."""
    if sort_key_name and primary_key_name:
        return [sort_key_name, primary_key_name]
    first = items[0] if items else None
    return list(first.keys()) if isinstance(first, dict) else []


def list_table_formatter(table_generator: TableGenerator,
                         fields: Optional[Sequence[TableFieldDefinition]] = None,
                         include_index: bool = False,
                         *,
                         item_name: Optional[str] = None,
                         plural_item_name: Optional[str] = None,
                         sort_key_name: Optional[str] = None,
                         primary_key_name: Optional[str] = None) -> OutputFormatter:
    """
    Build a formatter that renders a list of records as a table.

    With ``include_index`` a ``#`` column numbers the rows from 1. Empty lists
    render as a "no items found" message naming the item type.
    """
    def formatter(items: Sequence[Any]) -> str:
        if not items:
            return no_items_message(item_name, plural_item_name)
        columns = fields if fields is not None else default_list_fields(items, sort_key_name, primary_key_name)
        if not include_index:
            return table_generator.build_table_from_list(items, columns)
        # numbering restarts with every call
        indexed = [(index, item) for index, item in enumerate(items, start=1)]
        index_field = (INDEX_LABEL, lambda entry: entry[0])
        item_fields = [_unwrap_field(field) for field in columns]
        return table_generator.build_table_from_list(indexed, [index_field] + item_fields)
    return formatter


def _unwrap_field(field: TableFieldDefinition) -> TableFieldDefinition:
    """Adapt a field definition to read from the item half of an (index, item) pair."""
    label, accessor = resolve_field(field)
    return label, lambda entry: field_value(entry[1], accessor)


def write_output(data: str, filename: Optional[PathLike] = None) -> None:
    """Write formatted output to a file, or to stdout with a trailing newline."""
    if filename:
        write_file(filename, data)
        return
    sys.stdout.write(data)
    if not data.endswith("\n"):
        sys.stdout.write("\n")
