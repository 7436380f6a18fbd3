"""Namesweep - two-pass identifier renaming for obfuscated source using LLMs."""

__version__ = "0.1.0"
__author__ = "namesweep"

from namesweep.config import Config
from namesweep.core.pipeline import run_pass1, run_pass2
from namesweep.core.renamer import apply_rename_mapping

__all__ = [
    "__version__",
    "Config",
    "run_pass1",
    "run_pass2",
    "apply_rename_mapping",
]
