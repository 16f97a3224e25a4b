"""
Unified test infrastructure for bdt.

Modules:
- file_utils: Utilities for creating files and directories
- context_builders: ResolutionContext builders
- cli_utils: CLI runners
"""

from .file_utils import write, write_json, write_yaml
from .context_builders import make_context
from .cli_utils import run_cli, jload

__all__ = [
    "write", "write_json", "write_yaml",
    "make_context",
    "run_cli", "jload",
]
