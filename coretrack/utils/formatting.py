"""Human readable rendering helpers shared by messages and activity text."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP


def format_currency(value: float | int | str | Decimal | None) -> str:
    """Render ``value`` as dollars: ``$1,000`` when integral, else ``$12.50``."""

    if value is None:
        return "$0"
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return f"${value}"
    sign = "-" if amount < 0 else ""
    amount = abs(amount)
    if amount == amount.to_integral_value():
        return f"{sign}${int(amount):,}"
    rounded = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{sign}${rounded:,.2f}"


def past_tense(verb: str) -> str:
    """Naive past tense used only for display fallbacks."""

    word = verb.replace("_", " ").strip()
    if not word:
        return "changed"
    if word.endswith("ed"):
        return word
    if word.endswith("e"):
        return f"{word}d"
    return f"{word}ed"


__all__ = ["format_currency", "past_tense"]
