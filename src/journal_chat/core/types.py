"""Shared type aliases used across journal-chat."""

from pathlib import Path

# Path types
PathLike = str | Path
