from __future__ import annotations

from pathlib import Path


def enforce_retention(log_dir: Path, keep: int, *, prefix: str = "") -> list[Path]:
    """
    Keep the newest `keep` logs named `<prefix>*.log`; return what was removed.
    keep <= 0 disables pruning.
    """
    if keep <= 0:
        return []

    logs = sorted(
        log_dir.glob(f"{prefix}*.log"),
        key=lambda p: p.stat().st_mtime,
        reverse=True,
    )

    removed: list[Path] = []
    for old in logs[keep:]:
        old.unlink(missing_ok=True)
        removed.append(old)
    return removed
