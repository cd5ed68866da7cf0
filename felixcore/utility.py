"""Small shared helpers: audio samples and whole-file reading."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AudioSample:
    """One stereo audio sample as signed 16-bit channel values."""

    left: int = 0
    right: int = 0


def read_file(path: str | os.PathLike[str]) -> bytes:
    """Return the whole content of ``path``, or empty bytes if it is missing or empty."""
    file_path = Path(path)
    if not file_path.exists():
        return b""
    if file_path.stat().st_size == 0:
        return b""
    return file_path.read_bytes()