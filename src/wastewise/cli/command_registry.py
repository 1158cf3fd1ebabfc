#!/usr/bin/env python3
from __future__ import annotations

import typer

from .commands import (
    measure as measure_command,
    paginate as paginate_command,
    render as render_command,
)


def register(app: typer.Typer) -> None:
    paginate_command.register(app)
    measure_command.register(app)
    render_command.register(app)
