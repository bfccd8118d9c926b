"""Backends for depth check output (text reports, DOT graphs)."""

from .dot_generator import DotMode, generate_dot, save_dot_file
from .text_report import format_report, format_violation

__all__ = ["DotMode", "generate_dot", "save_dot_file", "format_report", "format_violation"]
