"""Human-readable risk factors, mitigations and savings actions per contract."""

from renewals.scoring.models import Contract, Volatility
from renewals.scoring.rates import canonical_category, rates_for

CATEGORY_RISK_FACTORS = {
    "Marketing": [
        "Campaign performance variability",
        "Seasonal demand fluctuations",
        "Vendor dependency on creative quality",
    ],
    "Services": [
        "Service delivery quality variations",
        "Resource availability constraints",
        "Scope creep potential",
    ],
    "Software": [
        "Technology obsolescence risk",
        "Vendor lock-in concerns",
        "License compliance issues",
    ],
    "Hardware": [
        "Equipment failure and maintenance costs",
        "Technology advancement depreciation",
        "Supply chain disruptions",
    ],
}

CATEGORY_MITIGATIONS = {
    "Marketing": [
        "Implement performance-based pricing models",
        "Diversify across multiple marketing vendors",
        "Establish clear ROI measurement criteria",
    ],
    "Services": [
        "Define detailed service level agreements",
        "Implement regular vendor performance reviews",
        "Maintain backup vendor relationships",
    ],
    "Software": [
        "Negotiate data portability clauses",
        "Request multi-vendor integration options",
        "Establish technology roadmap alignment",
    ],
    "Hardware": [
        "Negotiate comprehensive warranty coverage",
        "Establish equipment refresh schedules",
        "Request vendor maintenance guarantees",
    ],
}

CATEGORY_SAVINGS_ACTIONS = {
    "Marketing": [
        "Request competitive bids from 3+ marketing agencies",
        "Negotiate performance-based pricing models",
        "Consolidate marketing tools to reduce vendor count",
        "Leverage seasonal pricing for campaign timing",
    ],
    "Services": [
        "Define clear service level agreements (SLAs)",
        "Negotiate volume discounts for bundled services",
        "Consider outsourcing vs. in-house alternatives",
        "Request fixed-price contracts vs. hourly billing",
    ],
    "Software": [
        "Audit current license usage and optimize seat count",
        "Negotiate multi-year contracts for better rates",
        "Request feature-based pricing vs. all-inclusive plans",
        "Explore vendor consolidation opportunities",
    ],
    "Hardware": [
        "Request competitive quotes from multiple vendors",
        "Negotiate bulk purchase discounts",
        "Consider leasing vs. purchasing options",
        "Request extended warranty and support packages",
    ],
}

DEFAULT_SAVINGS_ACTIONS = [
    "Conduct market research for competitive pricing",
    "Negotiate payment terms and contract length",
    "Request volume discounts and loyalty benefits",
    "Consider alternative vendors for comparison",
]


def risk_factors(contract: Contract) -> list[str]:
    factors = []
    if contract.auto_renewal:
        factors += [
            "Automatic renewal without price review",
            "Potential for unexpected rate increases",
            "Limited negotiation window",
        ]
    if contract.value > 100_000:
        factors.append("High financial exposure requires careful planning")
    if contract.notice_period_days is not None and contract.notice_period_days < 30:
        factors.append("Short notice period limits flexibility")
    if rates_for(contract.category).volatility is Volatility.HIGH:
        factors.append("Volatile market conditions increase uncertainty")

    factors += CATEGORY_RISK_FACTORS.get(canonical_category(contract.category), [])
    return factors


def mitigation_actions(contract: Contract) -> list[str]:
    actions = []
    if contract.auto_renewal:
        actions += [
            "Disable auto-renewal and set manual review dates",
            "Negotiate price protection clauses",
            "Establish 90-day notice requirements",
        ]
    actions += CATEGORY_MITIGATIONS.get(canonical_category(contract.category), [])
    if contract.value > 50_000:
        actions += [
            "Engage procurement team early in process",
            "Consider multi-vendor competitive bidding",
        ]
    return actions


def savings_actions(contract: Contract) -> list[str]:
    actions = list(
        CATEGORY_SAVINGS_ACTIONS.get(canonical_category(contract.category), DEFAULT_SAVINGS_ACTIONS)
    )
    if contract.value > 10_000:
        actions.append("Leverage high-value relationship for executive-level negotiations")
    elif contract.value > 5_000:
        actions.append("Request dedicated account management and priority support")
    return actions
