"""
Credit-card rewards engine — category-weighted point accrual and travel-goal progress.
"""
from __future__ import annotations

import logging

from finportal.calculators.common.schemas import CalculationInputError, money
from finportal.calculators.rewards.schemas import (
    CreditCardProfile,
    GoalProgress,
    RewardsComparison,
    RewardsConfig,
    RewardsInput,
    RewardsResult,
    TravelGoal,
)

logger = logging.getLogger(__name__)

FALLBACK_CARDS: list[CreditCardProfile] = [
    CreditCardProfile(
        card_id="finwise-infinity",
        name="FinWise Infinity",
        reward_rate=5,
        point_value=1,
        annual_fee=5000,
        lounge_access=True,
        category_multipliers={"dining": 2, "travel": 3, "shopping": 1, "fuel": 1, "groceries": 1.5},
        benefits=["Unlimited Lounge", "Travel Insurance", "Concierge"],
    ),
    CreditCardProfile(
        card_id="reward-max-pro",
        name="Reward Max Pro",
        reward_rate=2,
        point_value=0.25,
        annual_fee=1000,
        category_multipliers={"dining": 1.5, "travel": 1, "shopping": 2, "fuel": 1, "groceries": 2},
        benefits=["Milestone Vouchers", "Fuel Surcharge Waiver"],
    ),
    CreditCardProfile(
        card_id="traveler-select",
        name="Traveler Select",
        reward_rate=4,
        point_value=0.7,
        annual_fee=2500,
        lounge_access=True,
        category_multipliers={"dining": 1, "travel": 5, "shopping": 1, "fuel": 1, "groceries": 1},
        benefits=["Priority Pass", "Foreign Markup 1.99%"],
    ),
]

FALLBACK_GOALS: list[TravelGoal] = [
    TravelGoal(goal_id="dubai", name="Dubai Package", points_required=50_000, estimated_value=45_000),
    TravelGoal(goal_id="singapore", name="Singapore Gateway", points_required=75_000, estimated_value=65_000),
    TravelGoal(goal_id="thailand", name="Thailand Retreat", points_required=40_000, estimated_value=35_000),
]


def monthly_points(card: CreditCardProfile, spending: dict[str, float]) -> float:
    """Σ spend/100 × reward_rate × multiplier over every category."""
    total = 0.0
    for category, amount in spending.items():
        if amount < 0:
            raise CalculationInputError(f"monthly_spending.{category}", "must be >= 0")
        total += (amount / 100) * card.reward_rate * card.multiplier(category)
    return total


def goal_progress(annual_points: float, goal: TravelGoal) -> GoalProgress:
    return GoalProgress(
        goal_id=goal.goal_id,
        name=goal.name,
        points_required=goal.points_required,
        estimated_value=goal.estimated_value,
        progress_pct=money(min(100.0, annual_points / goal.points_required * 100)),
    )


def calculate_card_rewards(
    card: CreditCardProfile,
    spending: dict[str, float],
    goals: list[TravelGoal],
) -> RewardsResult:
    points = monthly_points(card, spending)
    annual_points = points * 12
    cash_value = points * card.point_value

    return RewardsResult(
        card_id=card.card_id,
        name=card.name,
        monthly_points=points,
        annual_points=annual_points,
        cash_value=money(cash_value),
        net_annual_benefit=money(cash_value * 12 - card.annual_fee),
        annual_fee=card.annual_fee,
        lounge_access=card.lounge_access,
        benefits=list(card.benefits),
        goal_progress=[goal_progress(annual_points, goal) for goal in goals],
    )


def compare_cards(rewards: RewardsInput, config: RewardsConfig | None = None) -> RewardsComparison:
    """
    Card and goal catalogues resolve independently: request, then content
    store, then the built-in catalogue.
    """
    config = config or RewardsConfig()

    cards = rewards.cards or config.cards
    if not cards:
        logger.debug("No cards supplied or configured, using built-in catalogue")
        cards = FALLBACK_CARDS

    goals = rewards.goals or config.goals or FALLBACK_GOALS

    results = [calculate_card_rewards(card, rewards.monthly_spending, goals) for card in cards]
    best = max(results, key=lambda r: r.net_annual_benefit) if results else None

    return RewardsComparison(
        monthly_spend=money(sum(rewards.monthly_spending.values())),
        results=results,
        best_card_id=best.card_id if best is not None else None,
    )
