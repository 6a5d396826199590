"""Command implementations for capcli."""

import argparse


def setup_commands(subparsers: argparse._SubParsersAction) -> None:
    """Set up all registered commands."""
    from . import capabilities
    capabilities.register(subparsers)
