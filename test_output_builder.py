"""Tests for output format resolution, table generation and format helpers."""

import argparse
import json

import pytest
import yaml

from capcli.core.command import CommandContext, CommandFlags
from capcli.core.format import format_and_write_item, format_and_write_list
from capcli.core.io_util import IOFormat, format_from_filename, read_data_file
from capcli.core.output_builder import build_output_formatter, resolve_output_format
from capcli.core.table_generator import (
    DefaultTableGenerator, get_value, humanize, table_generator_for,
)


def context(**flags):
    return CommandContext(flags=CommandFlags(**flags))


def common(data):
    return "common output"


def test_format_from_filename():
    assert format_from_filename("x.json") == IOFormat.JSON
    assert format_from_filename("x.YAML") == IOFormat.YAML
    assert format_from_filename("x.yml") == IOFormat.YAML
    assert format_from_filename("x.txt") == IOFormat.COMMON


def test_json_flag_wins_over_output_filename():
    assert resolve_output_format(context(json=True, output="x.yaml")) == IOFormat.JSON
    assert resolve_output_format(context(json=True, yaml=True)) == IOFormat.JSON


def test_yaml_flag_wins_over_output_filename():
    assert resolve_output_format(context(yaml=True, output="x.json")) == IOFormat.YAML


def test_output_filename_extension_decides():
    assert resolve_output_format(context(output="x.yaml")) == IOFormat.YAML
    assert resolve_output_format(context(output="x.json"), IOFormat.YAML) == IOFormat.JSON


def test_input_format_used_without_flags():
    assert resolve_output_format(context(), IOFormat.JSON) == IOFormat.JSON
    assert resolve_output_format(context()) == IOFormat.COMMON


def test_common_formatter_used_when_supplied():
    assert build_output_formatter(context(), None, common) is common


def test_falls_back_to_yaml_without_common_formatter():
    output = build_output_formatter(context())({"a": {"b": 1}})
    assert output == "a:\n  b: 1\n"


def test_json_default_indent_is_four():
    output = build_output_formatter(context(json=True), None, common)({"a": 1})
    assert output == '{\n    "a": 1\n}'


def test_indent_flag_and_profile_indent():
    assert build_output_formatter(context(json=True, indent=2))({"a": 1}) == '{\n  "a": 1\n}'

    command = CommandContext(flags=CommandFlags(yaml=True), profile_config={"indent": 4})
    assert build_output_formatter(command)({"a": {"b": 1}}) == "a:\n    b: 1\n"


def test_humanize():
    assert humanize("ownerType") == "Owner Type"
    assert humanize("id") == "Id"
    assert humanize("schema.maxLength") == "Max Length"


def test_get_value_follows_dotted_paths():
    item = {"a": {"b": {"c": 3}}}
    assert get_value(item, "a.b.c") == 3
    assert get_value(item, "a.x.c") is None


def test_item_table_contains_labels_and_values():
    table = DefaultTableGenerator().build_table_from_item(
        {"name": "Switch", "enabled": True, "owner": None},
        ["name", ("Is Enabled", "enabled"), ("Owner", "owner")],
    )
    assert "Name" in table
    assert "Switch" in table
    assert "Is Enabled" in table
    assert "true" in table


def test_table_style_selection():
    assert table_generator_for().group_rows is True
    assert table_generator_for(compact=True).group_rows is False
    assert table_generator_for(expanded=True, profile_config={"groupTableOutputRows": False}).group_rows is True
    assert table_generator_for(profile_config={"groupTableOutputRows": False}).table_format == "outline"


def test_command_context_from_args():
    args = argparse.Namespace(json=False, yaml=True, indent=3, output="out.yaml", compact=True,
                              expanded=False, profile=None, verbose=True)
    command = CommandContext.from_args(args, item_name="thing")

    assert command.flags.yaml is True
    assert command.flags.indent == 3
    assert command.flags.input is None
    assert command.item_name == "thing"
    assert command.verbose is True
    assert command.table_generator.group_rows is False


def test_read_data_file(tmp_path):
    path = tmp_path / "capability.json"
    path.write_text('{"name": "Switch Level"}')

    data, input_format = read_data_file(path)

    assert data == {"name": "Switch Level"}
    assert input_format == IOFormat.JSON


def test_read_data_file_accepts_tab_indented_json(tmp_path):
    path = tmp_path / "capability.json"
    path.write_text(json.dumps({"name": "Switch Level", "attributes": {}}, indent="\t"))

    data, input_format = read_data_file(path)

    assert data == {"name": "Switch Level", "attributes": {}}
    assert input_format == IOFormat.JSON


def test_read_data_file_reports_bad_json(tmp_path):
    path = tmp_path / "capability.json"
    path.write_text('{"name": ')

    with pytest.raises(ValueError, match="could not parse input"):
        read_data_file(path)


def test_read_data_file_unknown_extension_is_yaml(tmp_path):
    path = tmp_path / "capability.txt"
    path.write_text("name: Switch Level\n")

    data, input_format = read_data_file(path)

    assert data == {"name": "Switch Level"}
    assert input_format == IOFormat.YAML


def test_format_and_write_item_uses_build_table_output(capsys):
    command = context()
    command.build_table_output = lambda item: f"table for {item['name']}"

    format_and_write_item(command, {"name": "x"})

    assert capsys.readouterr().out == "table for x\n"


def test_format_and_write_item_uses_table_field_definitions(capsys):
    command = context()
    command.table_field_definitions = ["name"]

    format_and_write_item(command, {"name": "Switch", "hidden": "secret"})

    out = capsys.readouterr().out
    assert "Switch" in out
    assert "secret" not in out


def test_format_and_write_item_follows_input_format(capsys):
    format_and_write_item(context(), {"name": "x"}, IOFormat.JSON)

    assert json.loads(capsys.readouterr().out) == {"name": "x"}


def test_format_and_write_item_to_yaml_file(tmp_path):
    target = tmp_path / "output.yaml"

    format_and_write_item(context(output=str(target)), {"name": "x", "version": 1})

    assert yaml.safe_load(target.read_text()) == {"name": "x", "version": 1}


def test_format_and_write_list_empty_messages(capsys):
    command = context()
    command.item_name = "thing"
    format_and_write_list(command, [])
    assert capsys.readouterr().out == "no things found\n"

    command = context()
    command.plural_item_name = "candies"
    format_and_write_list(command, [], include_index=True)
    assert capsys.readouterr().out == "no candies found\n"

    format_and_write_list(context(), [])
    assert capsys.readouterr().out == "no items found\n"


def test_format_and_write_list_uses_sort_and_primary_keys(capsys):
    command = context()
    command.sort_key_name = "str"
    command.primary_key_name = "num"

    format_and_write_list(command, [{"str": "abc", "num": 5, "extra": "hidden"}])

    out = capsys.readouterr().out
    assert "Str" in out
    assert "Num" in out
    assert "hidden" not in out


def test_format_and_write_list_uses_build_list_table_output(capsys):
    command = context()
    command.build_list_table_output = lambda items: f"{len(items)} things"

    format_and_write_list(command, [{"a": 1}, {"a": 2}], include_index=True)

    assert capsys.readouterr().out == "2 things\n"


def test_format_and_write_list_json(capsys):
    items = [{"a": 1}]
    format_and_write_list(context(json=True), items)

    assert json.loads(capsys.readouterr().out) == items
