"""
Interactive capability authoring.

The wizard is a finite state machine. ``question_for`` describes the question
asked in the current state and ``advance`` applies an answer, returning the
next context. Neither performs I/O; ``run_wizard`` is the loop that hands each
question to a prompter and feeds the answer back in.
"""

import enum
import math
import re
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional, Protocol, Tuple, Union

from .capability_builder import (
    BOOLEAN, INTEGER, NUMBER, NUMERIC_TYPES, STRING, SETTER_ARGUMENT_NAME,
    Argument, CapabilityDefinition, EnumCommand,
    build_argument, build_attribute, build_command, build_setter_argument,
    build_value_schema, setter_command_name, validate_capability_create,
)

CAPABILITY_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9 ]{1,35}$")


class WizardStateError(RuntimeError):
    """Raised when the wizard reaches a state it has no way to handle."""


class InvalidAnswerError(ValueError):
    """Raised when an answer fails the validation of its question."""


class State(enum.Enum):
    CAPABILITY_NAME = "capabilityName"
    ACTION = "action"
    ATTRIBUTE_NAME = "attributeName"
    ATTRIBUTE_TYPE = "attributeType"
    ARGUMENT_TYPE = "argumentType"
    MIN_VALUE = "schemaMinValue"
    MAX_VALUE = "schemaMaxValue"
    MAX_LENGTH = "schemaMaxLength"
    SETTER = "attributeSetter"
    BASIC_COMMANDS = "basicCommands"
    COMMAND_NAME = "commandName"
    BASIC_COMMAND_NAME = "basicCommandName"
    COMMAND_VALUE = "commandValue"
    COMMAND_ARGUMENT = "commandArgument"
    ARGUMENT_NAME = "argumentName"
    OPTIONAL_ARGUMENT = "optionalArgument"
    FINISHED = "finished"


class Action(str, enum.Enum):
    ATTRIBUTE = "Add an attribute"
    COMMAND = "Add a command"
    FINISH = "Finish & Create"


class AttributeType(str, enum.Enum):
    INTEGER = INTEGER
    NUMBER = NUMBER
    STRING = STRING
    BOOLEAN = BOOLEAN


INPUT = "input"
LIST = "list"
CONFIRM = "confirm"

BOOLEAN_CHOICES = ("True", "False")

Validator = Callable[[str], Union[bool, str]]


@dataclass(frozen=True)
class Question:
    """A single question for a prompter to ask."""
    kind: str
    name: str
    message: str
    choices: Tuple[str, ...] = ()
    validator: Optional[Validator] = None

    def validate(self, answer: str) -> Union[bool, str]:
        """True when the answer is acceptable, otherwise an error message."""
        if self.validator is None:
            return True
        return self.validator(answer)


class Prompter(Protocol):
    """Anything that can put a question to the user and return the raw answer."""

    def ask(self, question: Question) -> Any:
        ...


@dataclass(frozen=True)
class Answers:
    """Everything the user has answered so far in the current wizard run."""
    attribute_name: Optional[str] = None
    attribute_type: Optional[str] = None
    schema_min_value: Optional[float] = None
    schema_max_value: Optional[float] = None
    schema_max_length: Optional[int] = None
    attribute_setter: bool = False
    command_name: Optional[str] = None
    argument_name: Optional[str] = None
    argument_type: Optional[str] = None
    argument_optional: bool = False
    basic_command_value: Any = None

    def cleared_schema(self) -> "Answers":
        """Drop the constraints of the last attribute so the next one starts clean."""
        return replace(self, schema_min_value=None, schema_max_value=None, schema_max_length=None)


@dataclass(frozen=True)
class WizardContext:
    state: State = State.CAPABILITY_NAME
    capability: CapabilityDefinition = field(default_factory=CapabilityDefinition)
    answers: Answers = field(default_factory=Answers)
    # not yet committed to a command / attribute
    command_arguments: Tuple[Argument, ...] = ()
    enum_commands: Tuple[EnumCommand, ...] = ()
    # messages produced by the most recent transition
    notices: Tuple[str, ...] = ()

    def update(self, **answers: Any) -> "WizardContext":
        return replace(self, answers=replace(self.answers, **answers))

    def goto(self, state: State) -> "WizardContext":
        return replace(self, state=state)

    def notify(self, message: str) -> "WizardContext":
        return replace(self, notices=self.notices + (message,))


def start_context() -> WizardContext:
    return WizardContext()


# Answer parsing and validation

def is_numeric(text: str) -> bool:
    try:
        return math.isfinite(float(text))
    except (TypeError, ValueError):
        return False


def parse_number(text: str) -> Union[int, float]:
    try:
        return int(text)
    except ValueError:
        return float(text)


def _optional_number(text: str) -> Union[bool, str]:
    return len(text) == 0 or is_numeric(text) or "Please enter a numeric value"


def _non_empty(message: str) -> Validator:
    return lambda text: len(text) > 0 or message


def _capability_name(text: str) -> Union[bool, str]:
    return bool(CAPABILITY_NAME_PATTERN.match(text)) or "Invalid capability name"


def _numeric_value_validator(answers: Answers) -> Validator:
    def validate(text: str) -> Union[bool, str]:
        if not is_numeric(text):
            return "Please enter a numeric value"
        value = parse_number(text)
        if answers.attribute_type == INTEGER and not float(value).is_integer():
            return "Please enter an integer value"
        if answers.schema_min_value is not None and value < answers.schema_min_value:
            return "Number below given minimum value"
        if answers.schema_max_value is not None and value > answers.schema_max_value:
            return "Number above given maximum value"
        return True
    return validate


def _string_value_validator(answers: Answers) -> Validator:
    def validate(text: str) -> Union[bool, str]:
        if answers.schema_max_length is not None and len(text) > answers.schema_max_length:
            return "String longer than given maximum length"
        return True
    return validate


def _command_value_question(answers: Answers) -> Question:
    if answers.attribute_type in NUMERIC_TYPES:
        return Question(INPUT, "basicCommandValue", "Command Value: ",
                        validator=_numeric_value_validator(answers))
    if answers.attribute_type == STRING:
        return Question(INPUT, "basicCommandValue", "Command Value: ",
                        validator=_string_value_validator(answers))
    if answers.attribute_type == BOOLEAN:
        return Question(LIST, "basicCommandValue", "Command Value: ", choices=BOOLEAN_CHOICES)
    raise WizardStateError(f"no command value prompt for attribute type {answers.attribute_type!r}")


def _typed_command_value(attribute_type: Optional[str], answer: str) -> Any:
    if attribute_type in NUMERIC_TYPES:
        value = parse_number(answer)
        return int(value) if attribute_type == INTEGER else value
    if attribute_type == STRING:
        return answer
    if attribute_type == BOOLEAN:
        return answer == "True"
    raise WizardStateError(f"no command value for attribute type {attribute_type!r}")


def question_for(context: WizardContext) -> Question:
    """Describe the question asked in the context's current state."""
    state = context.state
    if state == State.CAPABILITY_NAME:
        return Question(INPUT, "capabilityName", "Capability Name: ", validator=_capability_name)
    if state == State.ACTION:
        return Question(LIST, "action", "Select an action...", choices=tuple(a.value for a in Action))
    if state == State.ATTRIBUTE_NAME:
        return Question(INPUT, "attributeName", "Attribute Name: ",
                        validator=_non_empty("Invalid attribute name"))
    if state in (State.ATTRIBUTE_TYPE, State.ARGUMENT_TYPE):
        kind = "attribute" if state == State.ATTRIBUTE_TYPE else "argument"
        return Question(LIST, "type", f"Select an {kind} type...",
                        choices=tuple(t.value for t in AttributeType))
    if state == State.MIN_VALUE:
        return Question(INPUT, "schemaMinValue", "Minimum value (default: no minimum): ",
                        validator=_optional_number)
    if state == State.MAX_VALUE:
        return Question(INPUT, "schemaMaxValue", "Maximum value (default: no maximum): ",
                        validator=_optional_number)
    if state == State.MAX_LENGTH:
        return Question(INPUT, "schemaMaxLength", "Maximum length (default: no max length): ",
                        validator=_optional_number)
    if state == State.SETTER:
        return Question(CONFIRM, "addSetter", "Add a setter command?")
    if state == State.BASIC_COMMANDS:
        message = "Include basic commands?" if not context.enum_commands else "Add another basic command?"
        return Question(CONFIRM, "addBasicCommands", message)
    if state in (State.COMMAND_NAME, State.BASIC_COMMAND_NAME):
        return Question(INPUT, "commandName", "Command Name: ",
                        validator=_non_empty("Invalid command name"))
    if state == State.COMMAND_VALUE:
        return _command_value_question(context.answers)
    if state == State.COMMAND_ARGUMENT:
        message = "Add an argument?" if not context.command_arguments else "Add another argument?"
        return Question(CONFIRM, "addArgument", message)
    if state == State.ARGUMENT_NAME:
        return Question(INPUT, "argumentName", "Argument Name: ",
                        validator=_non_empty("Argument name is a required field"))
    if state == State.OPTIONAL_ARGUMENT:
        return Question(CONFIRM, "optionalArgument", "Is this argument optional?")
    raise WizardStateError(f"no question in state {state}")


# Commit steps

def commit_command(context: WizardContext, basic: bool = False, setter: bool = False) -> WizardContext:
    """Add the command named in the answers, taking the pending arguments with it."""
    name = context.answers.command_name
    if not name:
        raise WizardStateError("expected command name")
    command = build_command(name, context.command_arguments)
    context = replace(context, capability=context.capability.with_command(name, command),
                      command_arguments=())
    if setter:
        # the attribute being committed picks up from here
        return context
    context = context.notify("Command added!")
    return context.goto(State.BASIC_COMMANDS if basic else State.ACTION)


def commit_argument(context: WizardContext, setter: bool = False) -> WizardContext:
    """Add an argument to the pending command."""
    answers = context.answers
    if setter:
        schema = build_value_schema(answers.argument_type, answers.schema_min_value,
                                    answers.schema_max_value, answers.schema_max_length)
        argument = build_setter_argument(schema)
        context = replace(context, command_arguments=context.command_arguments + (argument,))
        return commit_command(context, setter=True)
    argument = build_argument(answers.argument_name, answers.argument_type, answers.argument_optional)
    context = replace(context, command_arguments=context.command_arguments + (argument,))
    return context.notify("Argument added!").goto(State.COMMAND_ARGUMENT)


def commit_enum_command(context: WizardContext) -> WizardContext:
    """Record a fixed-value command for the pending attribute and add the command itself."""
    answers = context.answers
    enum_command = EnumCommand(command=answers.command_name, value=answers.basic_command_value)
    context = replace(context, enum_commands=context.enum_commands + (enum_command,))
    return commit_command(context, basic=True)


def commit_attribute(context: WizardContext) -> WizardContext:
    """Add the attribute described by the answers, with its setter and enum commands."""
    answers = context.answers
    if not answers.attribute_name:
        raise WizardStateError("expected attribute name")
    schema = build_value_schema(answers.attribute_type, answers.schema_min_value,
                                answers.schema_max_value, answers.schema_max_length)

    setter = None
    if answers.attribute_setter:
        setter = setter_command_name(answers.attribute_name)
        context = context.update(command_name=setter, argument_name=SETTER_ARGUMENT_NAME,
                                 argument_type=answers.attribute_type, argument_optional=False)
        context = commit_argument(context, setter=True)

    attribute = build_attribute(schema, setter, context.enum_commands)
    context = replace(
        context,
        capability=context.capability.with_attribute(answers.attribute_name, attribute),
        enum_commands=(),
        answers=context.answers.cleared_schema(),
    )
    return context.notify("Attribute added!").goto(State.ACTION)


def finish(context: WizardContext) -> WizardContext:
    validation = validate_capability_create(context.capability)
    if validation.status:
        return context.goto(State.FINISHED)
    return context.notify(f"Validation failed: {validation.reason}").goto(State.ACTION)


# Transitions

def _on_capability_name(context: WizardContext, answer: str) -> WizardContext:
    return replace(context, capability=context.capability.with_name(answer)).goto(State.ACTION)


def _on_action(context: WizardContext, answer: str) -> WizardContext:
    if answer == Action.ATTRIBUTE:
        return context.goto(State.ATTRIBUTE_NAME)
    if answer == Action.COMMAND:
        return context.goto(State.COMMAND_NAME)
    return finish(context)


def _on_attribute_name(context: WizardContext, answer: str) -> WizardContext:
    return context.update(attribute_name=answer).goto(State.ATTRIBUTE_TYPE)


def _on_attribute_type(context: WizardContext, answer: str) -> WizardContext:
    context = context.update(attribute_type=answer)
    if answer in NUMERIC_TYPES:
        return context.goto(State.MIN_VALUE)
    if answer == STRING:
        return context.goto(State.MAX_LENGTH)
    return context.goto(State.SETTER)


def _on_argument_type(context: WizardContext, answer: str) -> WizardContext:
    return context.update(argument_type=answer).goto(State.OPTIONAL_ARGUMENT)


def _on_min_value(context: WizardContext, answer: str) -> WizardContext:
    value = parse_number(answer) if answer else None
    return context.update(schema_min_value=value).goto(State.MAX_VALUE)


def _on_max_value(context: WizardContext, answer: str) -> WizardContext:
    value = parse_number(answer) if answer else None
    return context.update(schema_max_value=value).goto(State.SETTER)


def _on_max_length(context: WizardContext, answer: str) -> WizardContext:
    value = int(parse_number(answer)) if answer else None
    return context.update(schema_max_length=value).goto(State.SETTER)


def _on_setter(context: WizardContext, answer: bool) -> WizardContext:
    return context.update(attribute_setter=answer).goto(State.BASIC_COMMANDS)


def _on_basic_commands(context: WizardContext, answer: bool) -> WizardContext:
    if answer:
        return context.goto(State.BASIC_COMMAND_NAME)
    return commit_attribute(context)


def _on_command_name(context: WizardContext, answer: str) -> WizardContext:
    return context.update(command_name=answer).goto(State.COMMAND_ARGUMENT)


def _on_basic_command_name(context: WizardContext, answer: str) -> WizardContext:
    return context.update(command_name=answer).goto(State.COMMAND_VALUE)


def _on_command_value(context: WizardContext, answer: str) -> WizardContext:
    value = _typed_command_value(context.answers.attribute_type, answer)
    return commit_enum_command(context.update(basic_command_value=value))


def _on_command_argument(context: WizardContext, answer: bool) -> WizardContext:
    if answer:
        return context.goto(State.ARGUMENT_NAME)
    return commit_command(context)


def _on_argument_name(context: WizardContext, answer: str) -> WizardContext:
    return context.update(argument_name=answer).goto(State.ARGUMENT_TYPE)


def _on_optional_argument(context: WizardContext, answer: bool) -> WizardContext:
    return commit_argument(context.update(argument_optional=answer))


_TRANSITIONS: Dict[State, Callable[[WizardContext, Any], WizardContext]] = {
    State.CAPABILITY_NAME: _on_capability_name,
    State.ACTION: _on_action,
    State.ATTRIBUTE_NAME: _on_attribute_name,
    State.ATTRIBUTE_TYPE: _on_attribute_type,
    State.ARGUMENT_TYPE: _on_argument_type,
    State.MIN_VALUE: _on_min_value,
    State.MAX_VALUE: _on_max_value,
    State.MAX_LENGTH: _on_max_length,
    State.SETTER: _on_setter,
    State.BASIC_COMMANDS: _on_basic_commands,
    State.COMMAND_NAME: _on_command_name,
    State.BASIC_COMMAND_NAME: _on_basic_command_name,
    State.COMMAND_VALUE: _on_command_value,
    State.COMMAND_ARGUMENT: _on_command_argument,
    State.ARGUMENT_NAME: _on_argument_name,
    State.OPTIONAL_ARGUMENT: _on_optional_argument,
}


def check_answer(question: Question, answer: Any) -> Any:
    """Normalize an answer to its question's kind, raising InvalidAnswerError if it does not fit."""
    if question.kind == CONFIRM:
        return bool(answer)
    if question.kind == LIST:
        if answer not in question.choices:
            raise InvalidAnswerError(f"Please choose one of: {', '.join(question.choices)}")
        # plain string, even when given an enum member
        return question.choices[question.choices.index(answer)]
    if answer is None:
        answer = ""
    elif not isinstance(answer, str):
        answer = str(answer)
    result = question.validate(answer)
    if result is not True:
        raise InvalidAnswerError(result)
    return answer


def advance(context: WizardContext, answer: Any) -> WizardContext:
    """Apply an answer to the current question and return the next context."""
    transition = _TRANSITIONS.get(context.state)
    if transition is None:
        raise WizardStateError(f"no transition out of state {context.state}")
    answer = check_answer(question_for(context), answer)
    return transition(replace(context, notices=()), answer)


def run_wizard(prompter: Prompter, echo: Callable[[str], None] = print) -> CapabilityDefinition:
    """Ask questions until the capability is complete, then return it."""
    context = start_context()
    while context.state != State.FINISHED:
        question = question_for(context)
        answer = prompter.ask(question)
        try:
            context = advance(context, answer)
        except InvalidAnswerError as exc:
            echo(str(exc))
            continue
        for notice in context.notices:
            echo(notice)
    return context.capability
