"""Shared utilities for CLI commands."""

from rich.console import Console

# Initialize Rich console for colored output
console = Console()


def format_mb(size: int) -> str:
    return f"{size / 1024 / 1024:.2f}MB"
