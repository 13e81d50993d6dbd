"""
content.py — typed adapter over headless content-store entries.

The store publishes calculator entries whose `config` field is a JSON string,
credit-card entries with a JSON `reward_structure` string, travel goals and
cloud regions. Fetching is someone else's job: these helpers take the raw
entry dicts and return the models the calculators consume.

Malformed entries never raise here. They are logged at WARNING and either
skipped or replaced with documented defaults.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from finportal.calculators.carbon.schemas import CloudRegion
from finportal.calculators.registry import UnknownCalculatorError, get_calculator
from finportal.calculators.rewards.schemas import CreditCardProfile, TravelGoal

logger = logging.getLogger(__name__)

# calculatorType (content store) → registry kind
CALCULATOR_TYPE_KINDS: dict[str, str] = {
    "NPS": "nps",
    "INCOME_TAX": "income_tax",
    "AWS_COST": "aws_cost",
    "AZURE_COST": "azure_cost",
    "GCP_COST": "gcp_cost",
    "CARBON_FOOTPRINT": "carbon_footprint",
}

# Used when a card's reward_structure is missing, unparseable or zero
DEFAULT_REWARD_RATE = 2.0
DEFAULT_POINT_VALUE = 0.25


# ---------------------------------------------------------------------------
# Calculator entries
# ---------------------------------------------------------------------------

class InputRange(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    min: Optional[float] = None
    max: Optional[float] = None
    default: Any = None


class CalculatorEntry(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    title: str
    key: str
    summary: Optional[str] = None
    disclaimer: Optional[str] = None
    enabled: bool = True
    config: Optional[str] = None     # JSON string

    def parsed_config(self) -> dict[str, Any]:
        if not self.config:
            return {}
        try:
            parsed = json.loads(self.config)
        except json.JSONDecodeError as exc:
            logger.warning("Calculator entry %s has malformed config JSON: %s", self.key, exc)
            return {}
        if not isinstance(parsed, dict):
            logger.warning("Calculator entry %s config is not a JSON object", self.key)
            return {}
        return parsed

    @property
    def calculator_type(self) -> Optional[str]:
        return self.parsed_config().get("calculatorType")

    def kind(self) -> str:
        return kind_for_calculator_type(self.calculator_type or "")

    def typed_config(self) -> Optional[BaseModel]:
        """
        The entry's config validated into the calculator's config model.
        None when the calculator takes no config or the config is invalid.
        """
        calculator = get_calculator(self.kind())
        if calculator.config_model is None:
            return None
        try:
            return calculator.config_model.model_validate(self.parsed_config())
        except ValidationError as exc:
            logger.warning(
                "Calculator entry %s config failed validation, using defaults: %s",
                self.key, exc,
            )
            return None


def kind_for_calculator_type(calculator_type: str) -> str:
    try:
        return CALCULATOR_TYPE_KINDS[calculator_type.upper()]
    except KeyError:
        raise UnknownCalculatorError(calculator_type) from None


def _is_range(node: Mapping[str, Any]) -> bool:
    return "default" in node or "min" in node or "max" in node


def input_defaults(config: Mapping[str, Any]) -> dict[str, Any]:
    """
    Default value of every input in a calculator config's `inputs` block.

    Inputs may be grouped (carbon: transportation/energy/lifestyle); groups
    are returned as nested dicts. Nodes without a default are skipped.
    """
    def walk(node: Mapping[str, Any]) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for name, spec in node.items():
            if not isinstance(spec, Mapping):
                continue
            if _is_range(spec):
                if "default" in spec:
                    out[name] = spec["default"]
            else:
                nested = walk(spec)
                if nested:
                    out[name] = nested
        return out

    inputs = config.get("inputs") or {}
    return walk(inputs) if isinstance(inputs, Mapping) else {}


def clamp_to_range(value: float, input_range: InputRange | Mapping[str, Any]) -> float:
    """Clamp a slider value into [min, max]; either bound may be absent."""
    if not isinstance(input_range, InputRange):
        input_range = InputRange.model_validate(input_range)
    if input_range.min is not None and value < input_range.min:
        return input_range.min
    if input_range.max is not None and value > input_range.max:
        return input_range.max
    return value


# ---------------------------------------------------------------------------
# Credit cards and travel goals
# ---------------------------------------------------------------------------

def _parse_reward_structure(raw: Any, card_key: str) -> dict[str, Any]:
    if raw is None or raw == "":
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    try:
        parsed = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        logger.warning(
            "Card %s has malformed reward_structure, using rate %.2f / point value %.2f: %s",
            card_key, DEFAULT_REWARD_RATE, DEFAULT_POINT_VALUE, exc,
        )
        return {}
    return parsed if isinstance(parsed, dict) else {}


def card_from_entry(entry: Mapping[str, Any]) -> CreditCardProfile:
    """
    Build a card profile from a content-store credit-card entry.

    Zero or missing rewardRate/pointValue fall back to the defaults, as a
    card that earns nothing is never what the store means.
    """
    card_key = str(entry.get("key") or entry.get("uid") or entry.get("title") or "card")
    structure = _parse_reward_structure(
        entry.get("reward_structure", entry.get("rewardStructure")), card_key,
    )
    return CreditCardProfile(
        card_id=card_key,
        name=entry.get("name") or entry.get("title") or card_key,
        reward_rate=structure.get("rewardRate") or DEFAULT_REWARD_RATE,
        point_value=structure.get("pointValue") or DEFAULT_POINT_VALUE,
        annual_fee=entry.get("annual_fee", entry.get("annualFee")) or 0,
        category_multipliers=structure.get("categoryMultipliers") or {},
        lounge_access=bool(structure.get("loungeAccess", False)),
        benefits=structure.get("benefits") or [],
    )


_NUMBER_RE = re.compile(r"[\d,]+(?:\.\d+)?")


def _points(value: Any) -> Optional[float]:
    """Accepts 50000 or display strings like '50,000 pts'."""
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = _NUMBER_RE.search(value)
        if match:
            return float(match.group().replace(",", ""))
    return None


def travel_goal_from_entry(entry: Mapping[str, Any]) -> Optional[TravelGoal]:
    goal_key = str(entry.get("key") or entry.get("uid") or entry.get("title") or "goal")
    points = _points(entry.get("points_required", entry.get("pointsRequired")))
    if not points:
        logger.warning("Travel goal %s has no usable points_required, skipping", goal_key)
        return None
    return TravelGoal(
        goal_id=goal_key,
        name=entry.get("name") or entry.get("title") or goal_key,
        points_required=points,
        estimated_value=_points(entry.get("estimated_value", entry.get("estimatedValue"))),
    )


def travel_goals_from_entries(entries: Iterable[Mapping[str, Any]]) -> list[TravelGoal]:
    goals = (travel_goal_from_entry(e) for e in entries)
    return [g for g in goals if g is not None]


# ---------------------------------------------------------------------------
# Cloud regions
# ---------------------------------------------------------------------------

def cloud_regions_from_entries(entries: Iterable[Mapping[str, Any]]) -> list[CloudRegion]:
    """Active region entries with a carbon intensity; inactive or malformed ones are dropped."""
    regions: list[CloudRegion] = []
    for entry in entries:
        if entry.get("active") is False:
            continue
        try:
            regions.append(CloudRegion.model_validate(entry))
        except ValidationError as exc:
            logger.warning("Skipping malformed cloud region entry %r: %s", entry.get("region_code"), exc)
    return regions


__all__ = [
    "CALCULATOR_TYPE_KINDS",
    "InputRange",
    "CalculatorEntry",
    "kind_for_calculator_type",
    "input_defaults",
    "clamp_to_range",
    "card_from_entry",
    "travel_goal_from_entry",
    "travel_goals_from_entries",
    "cloud_regions_from_entries",
]
