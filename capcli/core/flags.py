"""Reusable argparse flag groups for API commands."""

import argparse


def add_common_io_arguments(parser: argparse.ArgumentParser) -> None:
    """Flags selecting the serialization format."""
    parser.add_argument(
        "--json", "-j",
        action="store_true",
        help="Use JSON format of input and/or output"
    )
    parser.add_argument(
        "--yaml", "-y",
        action="store_true",
        help="Use YAML format of input and/or output"
    )
    parser.add_argument(
        "--indent",
        type=int,
        metavar="N",
        help="Specify indentation for formatting JSON or YAML output"
    )


def add_output_arguments(parser: argparse.ArgumentParser) -> None:
    """Flags controlling where and how output is written."""
    add_common_io_arguments(parser)
    parser.add_argument(
        "--output", "-o",
        metavar="FILE",
        help="Specify output file"
    )
    table_group = parser.add_mutually_exclusive_group()
    table_group.add_argument(
        "--compact",
        action="store_true",
        help="Use compact table format with no lines between body rows"
    )
    table_group.add_argument(
        "--expanded",
        action="store_true",
        help="Use expanded table format with a line between each body row"
    )


def add_input_output_arguments(parser: argparse.ArgumentParser) -> None:
    """Output flags plus an input file."""
    add_output_arguments(parser)
    parser.add_argument(
        "--input", "-i",
        metavar="FILE",
        help="Specify input file"
    )
