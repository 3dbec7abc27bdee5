from __future__ import annotations

import argparse

from rich.table import Table

from devsetup.logger import UI_CONSOLE
from devsetup.model import Step
from devsetup.steps import steps


def build_steps_parser(subparsers: argparse._SubParsersAction) -> None:
    subparsers.add_parser("steps", help="List the provisioning steps in run order")


def build_steps_table(catalogue: list[Step]) -> Table:
    table = Table(title="Provisioning steps")
    table.add_column("#", justify="right")
    table.add_column("Section")
    table.add_column("Step")
    table.add_column("Required")
    table.add_column("Needs")
    table.add_column("Description")

    for i, s in enumerate(catalogue, start=1):
        table.add_row(
            str(i),
            s.section,
            s.name,
            "yes" if s.required else "",
            s.depends_on or "",
            s.description,
        )
    return table


def handle_steps(args: argparse.Namespace) -> int:
    UI_CONSOLE.print(build_steps_table(steps()))
    return 0
