"""Subscription plans, payment-processor price ids and monthly document quotas."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class PlanType(StrEnum):
    standard = "standard"
    pro = "pro"


class BillingCycle(StrEnum):
    monthly = "monthly"
    yearly = "yearly"


STRIPE_PRICE_IDS: dict[PlanType, dict[BillingCycle, str]] = {
    PlanType.standard: {
        BillingCycle.monthly: "price_1SqXMaBaT1g3foMXaaiK6v5J",
        BillingCycle.yearly: "price_1SqXZABaT1g3foMXZ4lhgrm5",
    },
    PlanType.pro: {
        BillingCycle.monthly: "price_1SqXPJBaT1g3foMXbwDerd0y",
        BillingCycle.yearly: "price_1SqXbDBaT1g3foMX5n6lI4dK",
    },
}

# Documents (quotes + invoices) allowed per month.
PLAN_QUOTAS: dict[PlanType, int] = {
    PlanType.standard: 50,
    PlanType.pro: 100,
}


@dataclass(frozen=True)
class PlanSelection:
    """A plan and billing cycle resolved from a price id."""

    plan: PlanType
    billing_cycle: BillingCycle


def get_price_id(plan: PlanType, billing_cycle: BillingCycle) -> str:
    return STRIPE_PRICE_IDS[plan][billing_cycle]


def get_plan_from_price_id(price_id: str) -> PlanSelection | None:
    """Reverse lookup of a price id; `None` for ids that belong to no known plan."""

    for plan, cycles in STRIPE_PRICE_IDS.items():
        for cycle, known_id in cycles.items():
            if known_id == price_id:
                return PlanSelection(plan=plan, billing_cycle=cycle)
    return None


def remaining_quota(plan: PlanType, documents_this_month: int) -> int:
    """Number of documents still allowed this month (never negative)."""

    return max(PLAN_QUOTAS[plan] - documents_this_month, 0)
