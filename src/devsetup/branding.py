from __future__ import annotations

from typing import Iterable

# --------------------------------------------------
# Layout constants
# --------------------------------------------------

DEFAULT_WIDTH = 60


# --------------------------------------------------
# Banner
# --------------------------------------------------

DEVSETUP_BANNER = r"""
     _                      _
  __| | _____   _____  ___| |_ _   _ _ __
 / _` |/ _ \ \ / / __|/ _ \ __| | | | '_ \
| (_| |  __/\ V /\__ \  __/ |_| |_| | |_) |
 \__,_|\___| \_/ |___/\___|\__|\__,_| .__/
                                    |_|
"""


# --------------------------------------------------
# Headers / sections
# --------------------------------------------------


def DEVSETUP_HEADER(title: str, *, width: int = DEFAULT_WIDTH) -> str:
    rule = "=" * width
    return f"\n{rule}\n  {title.strip()}\n{rule}"


def DEVSETUP_STEP(title: str) -> str:
    return f">>> {title.strip()}"


# --------------------------------------------------
# Boxed blocks (highlight sections)
# --------------------------------------------------


def DEVSETUP_BOX(
    lines: Iterable[str],
    *,
    title: str | None = None,
    width: int = DEFAULT_WIDTH,
) -> str:
    lines = list(lines)
    # grow to fit the longest line instead of truncating
    w = max(width, max((len(x) + 3 for x in lines), default=0))
    inner = w - 2

    out: list[str] = []
    out.append(f"╔{'═' * inner}╗")

    if title:
        out.append(f"║{title.center(inner)}║")
        out.append(f"╟{'─' * inner}╢")

    for line in lines:
        out.append(f"║ {line.ljust(inner - 1)}║")

    out.append(f"╚{'═' * inner}╝")
    return "\n".join(out)


# --------------------------------------------------
# Symbols
# --------------------------------------------------


class SYMBOLS:
    OK = "✓"
    FAIL = "✗"
    WARN = "⚠"
