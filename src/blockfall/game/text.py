from __future__ import annotations

import numpy as np


def format_grid(state: np.ndarray) -> str:
    """Render a grid matrix as text: ``.`` empty, ``#`` locked, ``@`` falling piece."""
    lines = []
    for row in state:
        lines.append("".join("@" if cell < 0 else "#" if cell else "." for cell in row))
    return "\n".join(lines)


def print_grid(state: np.ndarray) -> None:
    print(format_grid(state))
