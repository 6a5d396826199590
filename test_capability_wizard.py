"""Tests for the capability authoring wizard."""

import pytest

from capcli.services.capability_builder import ValueSchema
from capcli.services.capability_wizard import (
    Action, Answers, AttributeType, InvalidAnswerError, State, WizardContext, WizardStateError,
    advance, commit_attribute, question_for, run_wizard, start_context,
)


def drive(answers, context=None):
    context = context or start_context()
    for answer in answers:
        context = advance(context, answer)
    return context


SWITCH_LEVEL = [
    "Switch Level",
    Action.ATTRIBUTE, "level", "integer", "0", "100", True, False,
    Action.FINISH,
]


def test_switch_level_with_setter():
    context = drive(SWITCH_LEVEL)

    assert context.state == State.FINISHED
    capability = context.capability.to_dict()
    level = capability["attributes"]["level"]
    assert level["schema"]["properties"]["value"] == {"type": "integer", "minimum": 0, "maximum": 100}
    assert level["setter"] == "setLevel"
    assert capability["commands"]["setLevel"] == {
        "name": "setLevel",
        "arguments": [
            {"name": "value", "optional": False, "schema": {"type": "integer", "minimum": 0, "maximum": 100}},
        ],
    }


def test_attribute_commit_notices_and_returns_to_action():
    context = drive(SWITCH_LEVEL[:-1])

    assert context.state == State.ACTION
    assert context.notices == ("Attribute added!",)


def test_attribute_types_branch_to_their_constraint_questions():
    base = drive(["Thing", Action.ATTRIBUTE, "a"])

    assert advance(base, "number").state == State.MIN_VALUE
    assert advance(base, "string").state == State.MAX_LENGTH
    assert advance(base, "boolean").state == State.SETTER


def test_string_attribute_with_basic_commands():
    context = drive([
        "Mode",
        Action.ATTRIBUTE, "mode", "string", "4", False,
        True, "auto", "auto",
        True, "off", "off",
    ])
    assert question_for(context).message == "Add another basic command?"

    context = advance(context, False)
    capability = context.capability.to_dict()

    assert capability["attributes"]["mode"] == {
        "schema": {
            "type": "object",
            "properties": {"value": {"type": "string", "maxLength": 4}},
            "additionalProperties": False,
            "required": ["value"],
        },
        "enumCommands": [{"command": "auto", "value": "auto"}, {"command": "off", "value": "off"}],
    }
    assert capability["commands"] == {
        "auto": {"name": "auto", "arguments": []},
        "off": {"name": "off", "arguments": []},
    }
    assert context.enum_commands == ()


def test_basic_command_first_message():
    context = drive(["Mode", Action.ATTRIBUTE, "mode", "boolean", False])

    assert context.state == State.BASIC_COMMANDS
    assert question_for(context).message == "Include basic commands?"


def test_boolean_command_value_is_a_choice():
    context = drive(["Switch", Action.ATTRIBUTE, "switch", "boolean", False, True, "on"])

    question = question_for(context)
    assert question.kind == "list"
    assert question.choices == ("True", "False")

    context = drive(["True", False], context)
    assert context.capability.attributes["switch"].enum_commands[0].value is True


def test_numeric_command_value_respects_range():
    context = drive(["Level", Action.ATTRIBUTE, "level", "integer", "0", "10", False, True, "min"])

    with pytest.raises(InvalidAnswerError, match="below given minimum"):
        advance(context, "-1")
    with pytest.raises(InvalidAnswerError, match="above given maximum"):
        advance(context, "11")
    with pytest.raises(InvalidAnswerError, match="numeric"):
        advance(context, "low")
    with pytest.raises(InvalidAnswerError, match="integer"):
        advance(context, "2.5")

    context = advance(context, "0")
    assert context.state == State.BASIC_COMMANDS
    assert context.enum_commands[0].value == 0


def test_string_command_value_respects_max_length():
    context = drive(["Mode", Action.ATTRIBUTE, "mode", "string", "3", False, True, "long"])

    with pytest.raises(InvalidAnswerError, match="longer than given maximum length"):
        advance(context, "toolong")


def test_invalid_answer_does_not_advance():
    context = start_context()

    for name in ("", "a", " leading space", "bad!name", "x" * 37):
        with pytest.raises(InvalidAnswerError):
            advance(context, name)

    assert drive(["ab"]).capability.name == "ab"


def test_constraints_do_not_leak_into_next_attribute():
    context = drive([
        "Levels",
        Action.ATTRIBUTE, "first", "integer", "1", "5", False, False,
        Action.ATTRIBUTE, "second", "integer", "", "", False, False,
    ])

    assert context.capability.attributes["first"].value_schema == ValueSchema("integer", 1, 5)
    assert context.capability.attributes["second"].value_schema == ValueSchema("integer")
    assert context.answers.schema_min_value is None
    assert context.answers.schema_max_value is None


def test_commit_attribute_resets_constraints():
    context = WizardContext(
        state=State.BASIC_COMMANDS,
        answers=Answers(attribute_name="size", attribute_type="string", schema_max_length=8),
    )

    context = commit_attribute(context)

    assert context.capability.attributes["size"].value_schema == ValueSchema("string", max_length=8)
    assert context.answers.schema_max_length is None


def test_command_with_arguments():
    context = drive([
        "Mover",
        Action.COMMAND, "move",
        True, "x", "integer", False,
    ])
    assert context.notices == ("Argument added!",)
    assert context.state == State.COMMAND_ARGUMENT
    assert question_for(context).message == "Add another argument?"

    context = drive([True, "speed", "number", True, False], context)

    assert context.state == State.ACTION
    assert context.notices == ("Command added!",)
    assert context.command_arguments == ()
    assert context.capability.to_dict()["commands"]["move"] == {
        "name": "move",
        "arguments": [
            {"name": "x", "optional": False, "schema": {"type": "integer"}},
            {"name": "speed", "optional": True, "schema": {"type": "number"}},
        ],
    }


def test_first_argument_message():
    context = drive(["Beeper", Action.COMMAND, "beep"])
    assert question_for(context).message == "Add an argument?"


def test_finish_without_content_returns_to_action():
    context = drive(["Empty", Action.FINISH])

    assert context.state == State.ACTION
    assert context.notices == ("Validation failed: At least one attribute or capability is required",)


def test_finish_keeps_collected_data_after_failed_validation():
    context = drive(["Later", Action.FINISH, Action.COMMAND, "beep", False, Action.FINISH])

    assert context.state == State.FINISHED
    assert list(context.capability.commands) == ["beep"]


def test_action_must_be_a_listed_choice():
    context = drive(["Thing"])

    with pytest.raises(InvalidAnswerError):
        advance(context, "Delete everything")


def test_list_answers_are_stored_as_plain_strings():
    context = drive(["Thing", Action.ATTRIBUTE, "a", AttributeType.BOOLEAN])
    assert type(context.answers.attribute_type) is str


def test_command_value_for_unknown_type_is_an_error():
    context = WizardContext(state=State.COMMAND_VALUE, answers=Answers(attribute_type="object"))

    with pytest.raises(WizardStateError):
        question_for(context)


def test_finished_wizard_cannot_advance():
    context = drive(SWITCH_LEVEL)

    with pytest.raises(WizardStateError):
        advance(context, "anything")


def test_run_wizard_reasks_invalid_answers(scripted_prompter):
    prompter = scripted_prompter(["!", "Switch Level"] + SWITCH_LEVEL[1:])
    echoed = []

    capability = run_wizard(prompter, echoed.append)

    assert capability.attributes["level"].setter == "setLevel"
    assert echoed == ["Invalid capability name", "Attribute added!"]
    assert [q.name for q in prompter.questions[:3]] == ["capabilityName", "capabilityName", "action"]
