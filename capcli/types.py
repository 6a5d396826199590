"""Common type definitions for capcli."""

from typing import Any, Callable, Dict, List, Tuple, Union
import pathlib

# Common type aliases
PathLike = Union[str, pathlib.Path]
JsonValue = Union[str, int, float, bool, None, Dict[str, Any], List[Any]]
JsonDict = Dict[str, JsonValue]
OutputFormatter = Callable[[Any], str]
TableFieldDefinition = Union[str, Tuple[str, Union[str, Callable[[Any], Any]]]]
