from __future__ import annotations

from pathlib import Path
from typing import Iterable

ALIAS_MARKER = "alias ll="
ALIAS_BLOCK = ("", "# Custom aliases", "alias ll='ls -al'")


def has_marker(path: Path, marker: str) -> bool:
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return False
    return any(marker in line for line in text.splitlines())


def ensure_block(path: Path, marker: str, lines: Iterable[str]) -> bool:
    """
    Append `lines` to `path` unless a line already contains `marker`.

    Returns True when the file was changed.
    """
    if has_marker(path, marker):
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as f:
        for line in lines:
            f.write(f"{line}\n")
    return True
