from __future__ import annotations

import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Union

import platformdirs

from ..core.exceptions import ConfigurationError, DocumentError

logger = logging.getLogger(__name__)


def _candidates(override: Optional[Union[str, Path]]) -> List[Path]:
    out: List[Path] = []
    if override:
        out.append(Path(override).expanduser())
    out.append(Path(platformdirs.user_downloads_dir()))
    home = os.environ.get("HOME")
    if home:
        out.append(Path(home) / "Downloads")
    profile = os.environ.get("USERPROFILE")
    if profile:
        out.append(Path(profile) / "Downloads")
    return out


def get_downloads_dir(override: Optional[Union[str, Path]] = None) -> Path:
    """First existing Downloads directory, trying the configured override first."""
    for path in _candidates(override):
        if path.is_dir():
            return path
    raise ConfigurationError("Could not find Downloads directory")


def file_manager_command(target: str, platform: Optional[str] = None) -> List[str]:
    platform = platform or sys.platform
    if platform.startswith("win"):
        return ["explorer", target]
    if platform == "darwin":
        return ["open", target]
    return ["xdg-open", target]


def open_in_file_manager(path: Union[str, Path]) -> None:
    target = str(path)
    command = file_manager_command(target)
    try:
        subprocess.Popen(command)
    except OSError as e:
        raise DocumentError(f"Failed to open folder: {e}") from e
    logger.info("Opened %s with %s", target, command[0])
