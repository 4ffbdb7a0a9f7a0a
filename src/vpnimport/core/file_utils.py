from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from ..exceptions import ConfigError


def _walk_upwards(start_dir: Path, marker: str) -> Path | None:
    """Return the first parent directory containing ``marker`` or ``None``."""

    current_dir = start_dir
    while True:
        if (current_dir / marker).exists():
            return current_dir
        if current_dir == current_dir.parent:
            return None
        current_dir = current_dir.parent


def find_config_file(
    file_name: str, start_points: Optional[Iterable[Path]] = None
) -> Path | None:
    """Locate ``file_name`` in the working directory or one of its parents."""

    for start in start_points or (Path.cwd(),):
        directory = _walk_upwards(start.resolve(), file_name)
        if directory is not None:
            return directory / file_name
    return None


def read_config_text(path: Path, max_bytes: int) -> str:
    """
    Read an uploaded configuration file as text.

    Undecodable bytes are replaced.

    Raises:
        ConfigError: If the file is larger than ``max_bytes``.
    """

    size = path.stat().st_size
    if size > max_bytes:
        raise ConfigError(
            f"Configuration file is {size} bytes, larger than the {max_bytes} byte limit"
        )
    return path.read_text(encoding="utf-8", errors="replace")
