"""Verbose logger for Tripreplay."""

from typing import Any
from rich.console import Console

# Global instance
_console = Console()
_verbose = False

# Trip values (coordinates, counts, paths) are short; anything longer is clipped
MAX_PARAM_LEN = 40
MAX_RESULT_LEN = 60


def set_verbose(enabled: bool) -> None:
    """Enable or disable verbose mode."""
    global _verbose
    _verbose = enabled


def is_verbose() -> bool:
    """Return whether verbose mode is on."""
    return _verbose


def log_call(service: str, method: str, **kwargs: Any) -> None:
    """Log a service call with its parameters.

    Args:
        service: Service name (e.g. "StopDetector")
        method: Method name (e.g. "classify")
        **kwargs: Call parameters
    """
    if not _verbose:
        return

    params = []
    for key, value in kwargs.items():
        if value is None:
            continue
        str_value = str(value)
        if len(str_value) > MAX_PARAM_LEN:
            str_value = str_value[: MAX_PARAM_LEN - 3] + "..."
        params.append(f"{key}={str_value}")

    params_str = ", ".join(params)
    _console.print(f"  [dim]→ {service}.{method}({params_str})[/dim]")


def log_result(service: str, method: str, result: Any) -> None:
    """Log the result of a service call.

    Args:
        service: Service name
        method: Method name
        result: Call result
    """
    if not _verbose:
        return

    str_result = str(result)
    if len(str_result) > MAX_RESULT_LEN:
        str_result = str_result[: MAX_RESULT_LEN - 3] + "..."
    _console.print(f"  [dim]← {service}.{method} = {str_result}[/dim]")


def log_info(message: str) -> None:
    """Log an informational message (verbose only)."""
    if _verbose:
        _console.print(f"  [dim]{message}[/dim]")


def log_warning(message: str) -> None:
    """Log a warning. Warnings are always printed."""
    _console.print(f"  [yellow]⚠ {message}[/yellow]")
