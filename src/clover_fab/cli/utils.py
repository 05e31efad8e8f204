"""Shared utilities for CLI commands."""

from __future__ import annotations

import json
import sys
import traceback
from pathlib import Path
from typing import TYPE_CHECKING, Any, Union

from clover_fab.exceptions import CloverFabError, ValidationError
from clover_fab.schema import BoardSpecs, Design

if TYPE_CHECKING:
    from rich.console import Console

__all__ = ["format_error", "print_error", "get_error_console", "load_json", "load_board"]

# Module-level console for error output, created lazily
_error_console: Console | None = None


def get_error_console() -> Console:
    """Get or create the Rich console for error output (stderr)."""
    global _error_console
    if _error_console is None:
        from rich.console import Console

        _error_console = Console(stderr=True, force_terminal=None)
    return _error_console


def print_error(
    e: Exception,
    verbose: bool = False,
    use_rich: bool | None = None,
) -> None:
    """
    Print an exception with Rich formatting on a terminal.

    Falls back to plain text for non-TTY output (pipes, JSON mode).

    Args:
        e: The exception to print
        verbose: If True, include full stack trace
        use_rich: Override automatic TTY detection (None = auto-detect)
    """
    console = get_error_console()

    if use_rich is None:
        use_rich = console.is_terminal

    if verbose:
        print(traceback.format_exc(), file=sys.stderr)
        return

    if use_rich and isinstance(e, CloverFabError):
        console.print(e)
    else:
        print(format_error(e), file=sys.stderr)


def format_error(e: Exception) -> str:
    """Format an exception as a one-block plain-text message."""
    if isinstance(e, CloverFabError):
        return f"Error: {e}"
    return f"Error: {type(e).__name__}: {e}"


def load_json(path: Union[str, Path]) -> Any:
    """
    Read a JSON input file.

    Raises:
        ValidationError: If the file is missing or not valid JSON
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise ValidationError([f"file not found: {path}"]) from e
    except json.JSONDecodeError as e:
        raise ValidationError(
            [f"invalid JSON at line {e.lineno} column {e.colno}: {e.msg}"],
            context={"file": str(path)},
        ) from e


def load_board(path: Union[str, Path]) -> Union[BoardSpecs, Design]:
    """
    Load either a full design or bare board specs from a JSON file.

    A document with a ``name`` or ``specs`` key is a design; anything else
    is read as board specs.
    """
    data = load_json(path)
    if not isinstance(data, dict):
        raise ValidationError(
            ["expected a JSON object with board specs or a design"], context={"file": str(path)}
        )
    try:
        if "name" in data or "specs" in data:
            return Design.from_dict(data)
        return BoardSpecs.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError([f"malformed input: {e}"], context={"file": str(path)}) from e
