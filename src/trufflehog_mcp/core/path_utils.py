"""
Path validation utilities for scan targets and output files.

Validation is deliberately narrow: paths are resolved to absolute form and
NUL bytes are rejected. Existence and symlink targets are not checked; the
engine reports missing targets itself.
"""

from pathlib import Path

from trufflehog_mcp.core.errors import ValidationError


def validate_path(path: str | Path) -> str:
    """
    Resolve a caller-supplied path to an absolute path string.

    Args:
        path: Path to validate (string or Path object).

    Returns:
        The absolute, normalized path.

    Raises:
        ValidationError: If the path is empty or contains a NUL byte.
    """
    raw = str(path)
    if not raw.strip():
        raise ValidationError("Invalid path: path is empty")
    if "\0" in raw:
        raise ValidationError("Invalid path: contains null bytes")

    try:
        return str(Path(raw).expanduser().resolve())
    except (OSError, RuntimeError) as e:
        raise ValidationError(f"Invalid path '{raw}': {e}") from e
