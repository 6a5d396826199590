"""
Capability definition values and the functions that assemble them.

Every entity is an immutable value built in one step; adding an attribute or
command to a definition returns a new definition.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from ..types import JsonDict

INTEGER = "integer"
NUMBER = "number"
STRING = "string"
BOOLEAN = "boolean"
PRIMITIVE_TYPES = (INTEGER, NUMBER, STRING, BOOLEAN)
NUMERIC_TYPES = (INTEGER, NUMBER)

SETTER_ARGUMENT_NAME = "value"


@dataclass(frozen=True)
class ValueSchema:
    """JSON schema of a single primitive value."""
    type: str
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    max_length: Optional[int] = None

    def to_dict(self) -> JsonDict:
        result: JsonDict = {"type": self.type}
        if self.minimum is not None:
            result["minimum"] = self.minimum
        if self.maximum is not None:
            result["maximum"] = self.maximum
        if self.max_length is not None:
            result["maxLength"] = self.max_length
        return result


@dataclass(frozen=True)
class EnumCommand:
    command: str
    value: Any

    def to_dict(self) -> JsonDict:
        return {"command": self.command, "value": self.value}


@dataclass(frozen=True)
class Argument:
    name: str
    optional: bool
    schema: ValueSchema

    def to_dict(self) -> JsonDict:
        return {"name": self.name, "optional": self.optional, "schema": self.schema.to_dict()}


@dataclass(frozen=True)
class Command:
    name: str
    arguments: Tuple[Argument, ...] = ()

    def to_dict(self) -> JsonDict:
        return {"name": self.name, "arguments": [arg.to_dict() for arg in self.arguments]}


@dataclass(frozen=True)
class Attribute:
    value_schema: ValueSchema
    setter: Optional[str] = None
    enum_commands: Tuple[EnumCommand, ...] = ()

    def to_dict(self) -> JsonDict:
        result: JsonDict = {
            "schema": {
                "type": "object",
                "properties": {"value": self.value_schema.to_dict()},
                "additionalProperties": False,
                "required": ["value"],
            },
        }
        if self.setter:
            result["setter"] = self.setter
        if self.enum_commands:
            result["enumCommands"] = [enum.to_dict() for enum in self.enum_commands]
        return result


@dataclass(frozen=True)
class CapabilityDefinition:
    """A capability being authored: a name plus its attributes and commands."""
    name: str = ""
    attributes: Mapping[str, Attribute] = field(default_factory=dict)
    commands: Mapping[str, Command] = field(default_factory=dict)

    def with_name(self, name: str) -> "CapabilityDefinition":
        return replace(self, name=name)

    def with_attribute(self, name: str, attribute: Attribute) -> "CapabilityDefinition":
        attributes = dict(self.attributes)
        attributes[name] = attribute
        return replace(self, attributes=attributes)

    def with_command(self, name: str, command: Command) -> "CapabilityDefinition":
        commands = dict(self.commands)
        commands[name] = command
        return replace(self, commands=commands)

    def to_dict(self) -> JsonDict:
        result: JsonDict = {"name": self.name}
        if self.attributes:
            result["attributes"] = {name: attr.to_dict() for name, attr in self.attributes.items()}
        if self.commands:
            result["commands"] = {name: cmd.to_dict() for name, cmd in self.commands.items()}
        return result


@dataclass(frozen=True)
class ValidationResponse:
    status: bool
    reason: Optional[str] = None


def validate_capability_create(capability: CapabilityDefinition) -> ValidationResponse:
    """Check that a capability has something in it before it is created."""
    if not capability.attributes and not capability.commands:
        return ValidationResponse(status=False, reason="At least one attribute or capability is required")
    return ValidationResponse(status=True)


def build_value_schema(value_type: str,
                       minimum: Optional[float] = None,
                       maximum: Optional[float] = None,
                       max_length: Optional[int] = None) -> ValueSchema:
    """Value schema carrying only the constraints that apply to its type."""
    if value_type in NUMERIC_TYPES:
        return ValueSchema(type=value_type, minimum=minimum, maximum=maximum)
    if value_type == STRING:
        return ValueSchema(type=value_type, max_length=max_length)
    return ValueSchema(type=value_type)


def build_argument(name: str, value_type: str, optional: bool = False) -> Argument:
    return Argument(name=name, optional=bool(optional), schema=ValueSchema(type=value_type))


def build_setter_argument(value_schema: ValueSchema) -> Argument:
    """The single required argument of a setter, constrained like its attribute."""
    return Argument(name=SETTER_ARGUMENT_NAME, optional=False, schema=value_schema)


def build_command(name: str, arguments: Tuple[Argument, ...] = ()) -> Command:
    return Command(name=name, arguments=tuple(arguments))


def build_attribute(value_schema: ValueSchema,
                    setter: Optional[str] = None,
                    enum_commands: Tuple[EnumCommand, ...] = ()) -> Attribute:
    return Attribute(value_schema=value_schema, setter=setter, enum_commands=tuple(enum_commands))


def setter_command_name(attribute_name: str) -> str:
    """Name of the setter for an attribute: ``level`` -> ``setLevel``."""
    return f"set{attribute_name[:1].upper()}{attribute_name[1:]}"


def capability_from_dict(data: Dict[str, Any]) -> CapabilityDefinition:
    """
    Build a definition from a parsed input document.

    Raises ValueError naming the offending attribute or command when the
    document does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise ValueError("capability definition must be a mapping")
    attributes = {}
    for name, attr in _mapping(data.get("attributes"), "attributes").items():
        attr = _mapping(attr, f"attribute {name!r}", required=True)
        schema = _mapping(attr.get("schema"), f"attribute {name!r} schema")
        properties = _mapping(schema.get("properties"), f"attribute {name!r} properties")
        value = _mapping(properties.get("value"), f"attribute {name!r} value schema")
        attributes[name] = build_attribute(
            _schema_from_dict(value, f"attribute {name!r}"),
            setter=attr.get("setter"),
            enum_commands=tuple(_enum_command_from_dict(e, name) for e in attr.get("enumCommands") or []),
        )
    commands = {}
    for name, cmd in _mapping(data.get("commands"), "commands").items():
        cmd = _mapping(cmd, f"command {name!r}", required=True)
        commands[name] = build_command(
            cmd.get("name", name),
            tuple(_argument_from_dict(arg, name) for arg in cmd.get("arguments") or []),
        )
    return CapabilityDefinition(name=data.get("name", ""), attributes=attributes, commands=commands)


def _mapping(value: Any, what: str, required: bool = False) -> Dict[str, Any]:
    if value is None and not required:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a mapping")
    return value


def _enum_command_from_dict(data: Any, attribute_name: str) -> EnumCommand:
    if not isinstance(data, dict) or "command" not in data:
        raise ValueError(f"attribute {attribute_name!r} has an enum command without a command name")
    return EnumCommand(data["command"], data.get("value"))


def _argument_from_dict(data: Any, command_name: str) -> Argument:
    if not isinstance(data, dict) or not data.get("name"):
        raise ValueError(f"command {command_name!r} has an argument without a name")
    where = f"argument {data['name']!r} of command {command_name!r}"
    return Argument(
        name=data["name"],
        optional=bool(data.get("optional", False)),
        schema=_schema_from_dict(_mapping(data.get("schema"), f"{where} schema"), where),
    )


def _schema_from_dict(schema: Dict[str, Any], where: str) -> ValueSchema:
    value_type = schema.get("type", STRING)
    if value_type not in PRIMITIVE_TYPES:
        raise ValueError(f"{where} has unsupported type {value_type!r}")
    return ValueSchema(
        type=value_type,
        minimum=schema.get("minimum"),
        maximum=schema.get("maximum"),
        max_length=schema.get("maxLength"),
    )
