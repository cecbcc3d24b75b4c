"""Quotation reference numbers (``SBI-PI-YY-NNN``)."""

from dataclasses import dataclass
from datetime import date


@dataclass
class ReferenceCounter:
    """Per-year running count of issued reference numbers."""

    year: int = 0
    count: int = 0


def next_reference_number(
    counter: ReferenceCounter,
    today: date,
    prefix: str = "SBI-PI",
    width: int = 3,
) -> tuple[str, ReferenceCounter]:
    """
    Issue the next reference number.

    The count restarts at 1 when ``today`` falls in a different year than the
    counter. Returns the reference number and the advanced counter; the
    caller persists the counter.
    """
    if counter.year != today.year:
        advanced = ReferenceCounter(year=today.year, count=1)
    else:
        advanced = ReferenceCounter(year=counter.year, count=counter.count + 1)

    year_suffix = str(advanced.year)[-2:]
    return f"{prefix}-{year_suffix}-{str(advanced.count).zfill(width)}", advanced
