from __future__ import annotations

from typing import Iterable

_CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "CAD": "CA$",
    "AUD": "A$",
}


def split_csv(raw: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def unique_tags(tags: Iterable[str]) -> tuple[str, ...]:
    """Trim tags and drop blanks and repeats, keeping first-seen order."""
    seen: list[str] = []
    for tag in tags:
        cleaned = tag.strip()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return tuple(seen)


def format_money(amount: int, currency: str = "USD") -> str:
    symbol = _CURRENCY_SYMBOLS.get(currency.upper())
    if symbol is None:
        return f"{currency.upper()} {amount:,}"
    return f"{symbol}{amount:,}"


def format_salary(
    salary_min: int | None,
    salary_max: int | None,
    currency: str = "USD",
) -> str:
    # Zero is treated as "not given", matching how salaries are entered.
    if not salary_min and not salary_max:
        return "Salary not specified"
    if salary_min and salary_max:
        return f"{format_money(salary_min, currency)} - {format_money(salary_max, currency)}"
    if salary_min:
        return f"{format_money(salary_min, currency)}+"
    return f"Up to {format_money(salary_max or 0, currency)}"
