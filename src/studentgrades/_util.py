"""Private helper utilities."""

import math
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Optional


def format_fixed(x: float, places: int) -> str:
    """Format a float with a fixed number of decimals, rounding half up.

    Rounding is applied to the shortest decimal representation of the float,
    so 8.125 becomes "8.13" and 1.005 becomes "1.01".

    Non-finite values are returned as "nan", "inf" or "-inf".

    """
    if not math.isfinite(x):
        return repr(float(x))

    # the caller's decimal context is ignored; precision covers every digit kept
    exact = Decimal(repr(float(x)))
    context = Context(prec=max(exact.adjusted(), 0) + places + 2, rounding=ROUND_HALF_UP)
    quantum = Decimal(1).scaleb(-places, context=context)
    return str(exact.quantize(quantum, context=context))


def parse_number(s: str) -> Optional[float]:
    """Parse a formatted number, returning None if it is malformed or not finite."""
    try:
        x = float(s)
    except (TypeError, ValueError):
        return None

    if not math.isfinite(x):
        return None
    return x


def in_jupyter_notebook() -> bool:
    """Determine if the code is being run in a Jupyter notebook."""
    try:
        shell = get_ipython().__class__.__name__  # pyright: ignore
        if shell == "ZMQInteractiveShell":
            return True  # Jupyter notebook or qtconsole
        else:
            return False  # Terminal IPython or something else
    except NameError:
        return False

