"""
Tests for investment-goal parsing, tiers and context carry-over.
"""

import pytest

from marketminds.application.assistant.investment_goal import (
    assess_goal,
    goal_tier,
    investment_advice,
    parse_goal,
)
from marketminds.domain.entities.conversation import ConversationContext


class TestParseGoal:
    """Tests for parse_goal()."""

    def test_have_and_turn_into(self) -> None:
        assert parse_goal("I have 100 dollars, turn it into 1000") == (100, 1000)

    def test_double_multiplier(self) -> None:
        assert parse_goal("double my 50 euros") == (50, 100)

    def test_explicit_range(self) -> None:
        assert parse_goal("from 200 to 5000 euros") == (200, 5000)

    def test_thousands_separators(self) -> None:
        assert parse_goal("I have $1,000 and want to reach 10,000") == (1000, 10000)

    def test_falls_back_to_context(self) -> None:
        context = ConversationContext(last_amount=300, last_target=3000)
        assert parse_goal("what about that", context) == (300, 3000)

    def test_defaults_when_nothing_known(self) -> None:
        """Amount defaults to 10 and a missing target to 10x the amount."""
        assert parse_goal("make me rich") == (10, 100)


class TestTiers:
    """Tests for goal_tier() and assess_goal()."""

    @pytest.mark.parametrize(
        "amount, multiplier, tier",
        [
            (20, 2, "too small"),
            (100, 30, "extremely unrealistic"),
            (100, 10, "very aggressive"),
            (100, 3, "achievable"),
            (100, 1.5, "modest"),
        ],
    )
    def test_tier_thresholds(self, amount: float, multiplier: float, tier: str) -> None:
        assert goal_tier(amount, multiplier) == tier

    def test_reference_goal(self) -> None:
        goal = assess_goal("I have 100 dollars, turn it into 1000")
        assert goal.multiplier == 10.0
        assert goal.tier == "very aggressive"
        assert goal.currency == "$"

    def test_euro_is_default_currency(self) -> None:
        assert assess_goal("double my 50 euros").currency == "€"


class TestInvestmentAdvice:
    """Tests for investment_advice()."""

    def test_context_remembers_goal(self) -> None:
        text, context = investment_advice("I have 100 dollars, turn it into 1000", ConversationContext())
        assert "$100 → $1000" in text
        assert (context.last_amount, context.last_target) == (100, 1000)

    def test_follow_up_reuses_target(self) -> None:
        """A follow-up with only a new amount keeps the remembered target."""
        context = ConversationContext(last_amount=100, last_target=1000)
        _, updated = investment_advice("what about with 500 euros", context)
        assert (updated.last_amount, updated.last_target) == (500, 1000)
