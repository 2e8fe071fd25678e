"""Document totals arithmetic.

All rounding is to the cent, half-up toward +infinity (the rule the web editor applies), not
Python's default half-to-even. Grand totals are accumulated in cents to avoid drift.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from src.documents.schema import LineItem, Section, Subsection, Totals


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def round_cents(amount: float) -> float:
    """Round an euro amount to the cent."""

    return round_half_up(amount * 100) / 100


def calculate_line_total(quantity: float, unit_price_ht: float) -> float:
    return round_cents(quantity * unit_price_ht)


def calculate_subsection_total(lines: Iterable[LineItem]) -> float:
    return round_cents(sum(line.total_ht for line in lines))


def calculate_section_total(subsections: Iterable[Subsection]) -> float:
    return round_cents(sum(sub.total_ht for sub in subsections))


def calculate_totals(
        sections: Sequence[Section],
        global_vat_rate: float,
        deposit: float = 0,
) -> Totals:
    """Compute HT, VAT and TTC totals for a document.

    VAT is computed per line with the line's own rate, falling back to `global_vat_rate`. The
    deposit already paid is subtracted from the TTC total.
    """

    total_ht_cents = 0
    vat_cents = 0.0

    for section in sections:
        for subsection in section.subsections:
            for line in subsection.lines:
                line_cents = round_half_up(line.total_ht * 100)
                rate = line.vat_rate if line.vat_rate is not None else global_vat_rate
                total_ht_cents += line_cents
                vat_cents += round_half_up(line_cents * rate) / 100

    vat_total_cents = round_half_up(vat_cents)
    deposit_cents = round_half_up(deposit * 100)
    total_ttc_cents = total_ht_cents + vat_total_cents - deposit_cents

    return Totals(
        total_ht=total_ht_cents / 100,
        vat_amount=vat_total_cents / 100,
        total_ttc=total_ttc_cents / 100,
    )


def recalculate_all_totals(sections: Sequence[Section]) -> list[Section]:
    """Return copies of the sections with every line, subsection and section total recomputed."""

    updated_sections: list[Section] = []
    for section in sections:
        updated_subsections: list[Subsection] = []
        for subsection in section.subsections:
            updated_lines = [
                line.model_copy(
                    update={"total_ht": calculate_line_total(line.quantity, line.unit_price_ht)}
                )
                for line in subsection.lines
            ]
            updated_subsections.append(
                subsection.model_copy(
                    update={
                        "lines": updated_lines,
                        "total_ht": calculate_subsection_total(updated_lines),
                    }
                )
            )
        updated_sections.append(
            section.model_copy(
                update={
                    "subsections": updated_subsections,
                    "total_ht": calculate_section_total(updated_subsections),
                }
            )
        )
    return updated_sections
