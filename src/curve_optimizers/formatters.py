"""Number formatting for loss read-outs."""

import re


def scientific_notation(value: float, decimals: int = 4) -> str:
    """
    Format a number in scientific notation with explicit signs on both the
    mantissa and the exponent, e.g. 0.565 -> '+5.6500e-01'.
    """
    text = f"{value:.{decimals}e}"
    if not re.search(r"e[+-]", text):
        return text  # inf / nan
    return text if text.startswith("-") else "+" + text
