"""File I/O and serialization helpers for capcli."""

import enum
import json
import pathlib
from typing import Any, Tuple

import yaml

from ..types import PathLike


class IOFormat(str, enum.Enum):
    """Serialization formats understood on input and output."""
    JSON = "json"
    YAML = "yaml"
    COMMON = "common"


def format_from_filename(filename: PathLike) -> IOFormat:
    """Infer a format from a file extension."""
    suffix = pathlib.Path(filename).suffix.lower()
    if suffix == ".json":
        return IOFormat.JSON
    if suffix in {".yaml", ".yml"}:
        return IOFormat.YAML
    return IOFormat.COMMON


def read_file(path: PathLike) -> str:
    """Read the full text of a file."""
    return pathlib.Path(path).read_text(encoding="utf-8")


def write_file(path: PathLike, content: str) -> None:
    """Write text to a file, replacing anything already there."""
    path = pathlib.Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def parse_input(content: str, input_format: IOFormat = IOFormat.YAML) -> Any:
    """Parse JSON or YAML text; anything not marked as JSON is read as YAML."""
    if input_format == IOFormat.JSON:
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise ValueError(f"could not parse input: {exc}") from exc
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ValueError(f"could not parse input: {exc}") from exc


def read_data_file(path: PathLike) -> Tuple[Any, IOFormat]:
    """Read and parse a data file, returning the data and its format."""
    input_format = format_from_filename(path)
    if input_format == IOFormat.COMMON:
        input_format = IOFormat.YAML
    return parse_input(read_file(path), input_format), input_format
