"""
schemas.py — credit-card rewards contracts.

Spend categories are free-form keys ("dining", "travel", ...). A card's
multiplier for a category it does not list is 1.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MONTHLY_SPENDING: Dict[str, float] = {
    "dining": 5000,
    "travel": 10000,
    "shopping": 15000,
    "fuel": 3000,
    "groceries": 7000,
}


class CreditCardProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    card_id: str = Field(..., alias="cardId")
    name: str
    reward_rate: float = Field(..., ge=0, alias="rewardRate", description="Points per ₹100 spent.")
    point_value: float = Field(..., ge=0, alias="pointValue", description="₹ per point.")
    annual_fee: float = Field(default=0, ge=0, alias="annualFee")
    category_multipliers: Dict[str, float] = Field(default_factory=dict, alias="categoryMultipliers")
    lounge_access: bool = Field(default=False, alias="loungeAccess")
    benefits: List[str] = Field(default_factory=list)

    def multiplier(self, category: str) -> float:
        return self.category_multipliers.get(category, 1.0)


class TravelGoal(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    goal_id: str = Field(..., alias="goalId")
    name: str
    points_required: float = Field(..., gt=0, alias="pointsRequired")
    estimated_value: Optional[float] = Field(default=None, ge=0, alias="estimatedValue")


class RewardsInput(BaseModel):
    """
    Cards and goals are optional: when omitted the configured catalogue
    (content store, else built-in) is used.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    monthly_spending: Dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_MONTHLY_SPENDING))
    cards: Optional[List[CreditCardProfile]] = None
    goals: Optional[List[TravelGoal]] = None


class RewardsConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    cards: List[CreditCardProfile] = Field(default_factory=list)
    goals: List[TravelGoal] = Field(default_factory=list, alias="travelGoals")


class GoalProgress(BaseModel):
    goal_id: str
    name: str
    points_required: float
    estimated_value: Optional[float] = None
    progress_pct: float              # capped at 100


class RewardsResult(BaseModel):
    card_id: str
    name: str
    monthly_points: float
    annual_points: float
    cash_value: float                # monthly ₹ value of the points
    net_annual_benefit: float        # cash_value × 12 − annual_fee
    annual_fee: float
    lounge_access: bool = False
    benefits: List[str] = []
    goal_progress: List[GoalProgress] = []


class RewardsComparison(BaseModel):
    monthly_spend: float
    results: List[RewardsResult]
    best_card_id: Optional[str] = None   # highest net_annual_benefit; first wins ties


__all__ = [
    "DEFAULT_MONTHLY_SPENDING",
    "CreditCardProfile",
    "TravelGoal",
    "RewardsInput",
    "RewardsConfig",
    "GoalProgress",
    "RewardsResult",
    "RewardsComparison",
]
