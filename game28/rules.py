"""Validation schema for configurable 28 rules."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

RULES_ENV_VAR = "GAME28_RULES"
TOTAL_POINTS = 28


class RuleSet(BaseModel):
    min_bid: int = Field(14, description="Lowest legal opening bid.")
    max_bid: int = Field(28, description="Highest legal bid; equals the deck's total points.")
    trick_display_delay: float = Field(
        10.0,
        description="Seconds a completed trick stays on the table before it is cleared.",
    )
    trump_lead_rule: Literal["all_trump_hand", "trump_card_only"] = Field(
        "all_trump_hand",
        description=(
            "Which trump-suit leads the bid winner may make while trump is hidden. "
            "'all_trump_hand': no trump-suit lead unless the whole hand is trump suit. "
            "'trump_card_only': only the designated trump card is held back while "
            "another card of its suit remains."
        ),
    )

    @field_validator("min_bid", "max_bid")
    @classmethod
    def validate_bid_bounds(cls, value: int) -> int:
        if value < 0 or value > TOTAL_POINTS:
            raise ValueError(f"Bids must lie within 0..{TOTAL_POINTS}.")
        return value

    @field_validator("trick_display_delay")
    @classmethod
    def validate_delay(cls, value: float) -> float:
        if value < 0:
            raise ValueError("Trick display delay cannot be negative.")
        return value

    @model_validator(mode="after")
    def validate_range(self) -> "RuleSet":
        if self.min_bid > self.max_bid:
            raise ValueError("min_bid must not exceed max_bid.")
        return self


DEFAULT_RULES = RuleSet()


def load_rules(path: Union[str, Path]) -> RuleSet:
    with open(path, "r", encoding="utf-8") as handle:
        payload = json.load(handle)
    return RuleSet.model_validate(payload)


def rules_from_env(environ: Optional[dict] = None) -> RuleSet:
    """Load rules from the file named by ``GAME28_RULES``, or the defaults."""
    env = os.environ if environ is None else environ
    path = env.get(RULES_ENV_VAR)
    if not path:
        return DEFAULT_RULES
    return load_rules(path)
