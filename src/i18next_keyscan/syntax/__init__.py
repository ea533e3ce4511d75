"""Syntax tree model, scope analysis and static evaluation."""

from .estree import load_program, load_program_file
from .evaluation import evaluate_if_confident, evaluate_string
from .scope import Binding, ImportOrigin, Scope, analyze, import_origin

__all__ = [
    "Binding",
    "ImportOrigin",
    "Scope",
    "analyze",
    "evaluate_if_confident",
    "evaluate_string",
    "import_origin",
    "load_program",
    "load_program_file",
]
