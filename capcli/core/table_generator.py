"""
Table rendering for the common (human-readable) output format.

Tables are laid out by tabulate; this module only decides which values go in
which cells and which table style to use.
"""

import re
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from tabulate import tabulate

from ..types import TableFieldDefinition

# Style with a rule between every body row, and one without
GROUPED_TABLE_FORMAT = "grid"
COMPACT_TABLE_FORMAT = "outline"


def humanize(name: str) -> str:
    """Turn a field name such as ``ownerType`` into a header such as ``Owner Type``."""
    last = name.rsplit(".", 1)[-1]
    words = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", last).replace("_", " ").split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def get_value(item: Any, key: str) -> Any:
    """Look up a (possibly dotted) key on a mapping or an object."""
    value = item
    for part in key.split("."):
        if value is None:
            return None
        if isinstance(value, dict):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def resolve_field(field: TableFieldDefinition) -> Tuple[str, Any]:
    """Split a field definition into its header label and its accessor."""
    if isinstance(field, str):
        return humanize(field), field
    label, accessor = field
    return label, accessor


def field_value(item: Any, accessor: Any) -> Any:
    """Extract a cell value; empty values render as blank cells."""
    value = accessor(item) if callable(accessor) else get_value(item, accessor)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return value


class TableGenerator:
    """Interface for building tables out of records."""

    def new_output_table(self, rows: Iterable[Sequence[Any]], headers: Sequence[str] = ()) -> str:
        raise NotImplementedError

    def build_table_from_item(self, item: Any, fields: Sequence[TableFieldDefinition]) -> str:
        raise NotImplementedError

    def build_table_from_list(self, items: Sequence[Any], fields: Sequence[TableFieldDefinition]) -> str:
        raise NotImplementedError


class DefaultTableGenerator(TableGenerator):
    """Table generator backed by tabulate."""

    def __init__(self, group_rows: bool = True):
        self.group_rows = group_rows

    @property
    def table_format(self) -> str:
        return GROUPED_TABLE_FORMAT if self.group_rows else COMPACT_TABLE_FORMAT

    def new_output_table(self, rows: Iterable[Sequence[Any]], headers: Sequence[str] = ()) -> str:
        return tabulate(list(rows), headers=list(headers), tablefmt=self.table_format,
                        disable_numparse=True)

    def build_table_from_item(self, item: Any, fields: Sequence[TableFieldDefinition]) -> str:
        rows = []
        for field in fields:
            label, accessor = resolve_field(field)
            rows.append([label, field_value(item, accessor)])
        return self.new_output_table(rows)

    def build_table_from_list(self, items: Sequence[Any], fields: Sequence[TableFieldDefinition]) -> str:
        resolved: List[Tuple[str, Any]] = [resolve_field(field) for field in fields]
        rows = [[field_value(item, accessor) for _, accessor in resolved] for item in items]
        return self.new_output_table(rows, [label for label, _ in resolved])


def table_generator_for(compact: bool = False, expanded: bool = False,
                        profile_config: Optional[dict] = None) -> DefaultTableGenerator:
    """Pick the row grouping from flags, then profile config, defaulting to grouped."""
    if expanded:
        return DefaultTableGenerator(group_rows=True)
    if compact:
        return DefaultTableGenerator(group_rows=False)
    group_rows = (profile_config or {}).get("groupTableOutputRows", True)
    return DefaultTableGenerator(group_rows=bool(group_rows))
