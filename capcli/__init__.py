"""
capcli - command-line management of device capabilities.

This package provides commands for authoring, creating and inspecting
capability definitions against the platform API, and the output formatting
(JSON, YAML or tables) those commands share.
"""

__version__ = "1.0.0"

from .cli import main

__all__ = ["main"]
