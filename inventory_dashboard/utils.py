import math
from datetime import datetime
from decimal import Decimal


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def number_to_text(value: float) -> str:
    """
    Renders a number the way a browser prints it, e.g. 3300.0 -> '3300', 1.5 -> '1.5'.
    Search matches against this text, so whole numbers must not carry a '.0'.
    """
    if not math.isfinite(value):
        return repr(float(value))
    if value == int(value) and abs(value) < 1e21:
        return str(int(value))
    # Browsers only switch to exponent form below 1e-6
    if abs(value) >= 1e-6:
        return format(Decimal(repr(float(value))), "f")
    return repr(float(value))


def format_currency(amount: float) -> str:
    """Peso amount with thousands separators, e.g. 'PHP 2,290.20'."""
    return f"PHP {amount or 0:,.2f}"


def format_weight(kg: float) -> str:
    return f"{kg or 0:.3f} kg"
