"""
Action executor: turns explicit commands in free text into watchlist and
portfolio mutations requested through host-supplied callbacks.

Templates are tried in a fixed order and the first match wins:
  add_watchlist, remove_watchlist, add_portfolio, show_watchlist,
  show_portfolio, create_watchlist, themed_portfolio.
A template whose callback the host did not supply is skipped, so the
message falls through to analysis. Invalid input (unknown symbol, zero
quantity) is reported in the reply text, never raised.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Callable

from marketminds.application.assistant.vocabulary import (
    ACTION_PLACEHOLDERS,
    DEFAULT_THEME,
    DEFAULT_THEME_SYMBOLS,
    LIST_STOP_WORDS,
    PORTFOLIO_THEMES,
    STOP_WORDS,
    THEME_EMOJIS,
)
from marketminds.domain.entities.intent import ActionCommand
from marketminds.domain.entities.portfolio import AssistantCapabilities

logger = logging.getLogger(__name__)

ADD_WATCHLIST = "add_watchlist"
REMOVE_WATCHLIST = "remove_watchlist"
ADD_PORTFOLIO = "add_portfolio"
SHOW_WATCHLIST = "show_watchlist"
SHOW_PORTFOLIO = "show_portfolio"
CREATE_WATCHLIST = "create_watchlist"
THEMED_PORTFOLIO = "themed_portfolio"

_ADD_WATCHLIST = [
    re.compile(r"\b(?:add|put|include|track|watch)\s+([a-z]{1,5})\s+(?:to|in|on)\s*(?:my\s*)?(?:watchlist|watch\s*list)\b"),
    re.compile(r"\b(?:watchlist|watch)\s+(?:add|track)\s+([a-z]{1,5})\b"),
]
_REMOVE_WATCHLIST = re.compile(
    r"\b(?:remove|delete|drop|unwatch)\s+([a-z]{1,5})\s+(?:from|off)\s*(?:my\s*)?(?:watchlist|watch\s*list)\b"
)
_ADD_PORTFOLIO = [
    re.compile(r"\b(?:add|buy|purchase)\s+(\d+\.?\d*)\s*(?:shares?\s+(?:of\s+)?)?([a-z]{1,5})\s+(?:to|in)\s*(?:my\s*)?portfolio\b"),
    re.compile(r"\bportfolio\s+(?:add|buy)\s+(\d+\.?\d*)\s+([a-z]{1,5})\b"),
]
# Bare "buy 10 aapl"; the token must not be an ordinary word.
_ADD_PORTFOLIO_LOOSE = re.compile(r"\b(?:buy|add)\s+(\d+\.?\d*)\s+(?:shares?\s+(?:of\s+)?)?([a-z]{1,5})\b")
_CREATE_WATCHLIST = re.compile(r"\b(?:create|make|build|start)\s+(?:a\s+)?watchlist\s+(?:with|of|containing)\s+(.+)")
_THEMED = re.compile(r"\b(?:make|create|build|give|start)\b.*(?:portfolio|watchlist|investments)")
_LIST_TOKEN = re.compile(r"\b[A-Z]{1,5}\b")
_INT = re.compile(r"\d+")
_YEAR = re.compile(r"\b(20[2-9]\d)\b")

DEFAULT_GOAL_YEARS = 5


@dataclass(frozen=True)
class GoalRealism:
    budget: int
    goal: int
    years: int
    target_year: int | None
    multiplier: float
    required_return: float

    @property
    def has_goal(self) -> bool:
        return self.budget > 0 and self.goal > self.budget

    @property
    def is_gated(self) -> bool:
        return self.multiplier > 5 and self.budget < 100


def assess_realism(message: str, today: date) -> GoalRealism:
    """Budget/goal/years from the numbers in *message*; years 2020-2099 are read as a target year."""
    year_match = _YEAR.search(message)
    target_year = int(year_match.group(1)) if year_match else None
    years = max(1, target_year - today.year) if target_year else DEFAULT_GOAL_YEARS
    amounts = sorted(n for n in (int(x) for x in _INT.findall(message)) if n < 2020 or n > 2099)
    budget = amounts[0] if amounts else 0
    goal = amounts[-1] if len(amounts) >= 2 else 0
    multiplier = goal / budget if budget > 0 and goal > budget else 0.0
    required = (multiplier ** (1 / years) - 1) * 100 if multiplier > 1 else 0.0
    return GoalRealism(budget, goal, years, target_year, multiplier, required)


class ActionExecutor:
    def __init__(self, today: Callable[[], date] = date.today) -> None:
        self._today = today

    def parse(
        self, message: str, capabilities: AssistantCapabilities | None = None
    ) -> ActionCommand | None:
        """Match *message* against the action templates.

        With *capabilities* given, templates whose callback is missing are
        skipped; without it every template is eligible.
        """
        text = (message or "").lower()

        def can(*callbacks: str) -> bool:
            if capabilities is None:
                return True
            return any(getattr(capabilities, name) is not None for name in callbacks)

        if can("add_to_watchlist"):
            for pattern in _ADD_WATCHLIST:
                match = pattern.search(text)
                if match:
                    return ActionCommand(ADD_WATCHLIST, (match.group(1).upper(),))

        if can("remove_from_watchlist"):
            match = _REMOVE_WATCHLIST.search(text)
            if match:
                return ActionCommand(REMOVE_WATCHLIST, (match.group(1).upper(),))

        if can("add_to_portfolio"):
            for pattern in _ADD_PORTFOLIO:
                match = pattern.search(text)
                if match:
                    return ActionCommand(ADD_PORTFOLIO, (match.group(2).upper(),), float(match.group(1)))
            match = _ADD_PORTFOLIO_LOOSE.search(text)
            if match and match.group(2).upper() not in STOP_WORDS:
                return ActionCommand(ADD_PORTFOLIO, (match.group(2).upper(),), float(match.group(1)))

        if ("show" in text and "watchlist" in text) or "my watchlist" in text:
            return ActionCommand(SHOW_WATCHLIST)
        if ("show" in text and "portfolio" in text) or "my portfolio" in text:
            return ActionCommand(SHOW_PORTFOLIO)

        if can("add_to_watchlist"):
            match = _CREATE_WATCHLIST.search(text)
            if match:
                tokens = _LIST_TOKEN.findall(match.group(1).upper())
                symbols = tuple(dict.fromkeys(t for t in tokens if t not in LIST_STOP_WORDS))
                return ActionCommand(CREATE_WATCHLIST, symbols)

        if can("add_to_watchlist", "add_to_portfolio") and _THEMED.search(text):
            theme, symbols = _match_theme(text)
            return ActionCommand(THEMED_PORTFOLIO, tuple(symbols), theme=theme)

        return None

    def execute(
        self, command: ActionCommand, message: str, capabilities: AssistantCapabilities
    ) -> str | None:
        """Run a parsed command; None when the host lacks the callback it needs."""
        handler = getattr(self, f"_{command.kind}")
        return handler(command, message, capabilities)

    def try_execute(self, message: str, capabilities: AssistantCapabilities) -> str | None:
        command = self.parse(message, capabilities)
        if command is None:
            return None
        logger.info("Executing action %s %s", command.kind, ",".join(command.symbols))
        return self.execute(command, message, capabilities)

    def _add_watchlist(self, command, message, caps):
        if caps.add_to_watchlist is None:
            return None
        symbol = command.symbols[0]
        if symbol in ACTION_PLACEHOLDERS:
            return '❌ Which stock do you mean? Try: "Add NVDA to watchlist".'
        if symbol in caps.watchlist:
            return f"📋 **{symbol}** is already in your watchlist!"
        caps.add_to_watchlist(symbol)
        return (
            f"✅ **{symbol}** has been added to your watchlist!\n\n"
            f"You can view it in the Watchlist tab. Your watchlist now has {len(caps.watchlist) + 1} stocks."
        )

    def _remove_watchlist(self, command, message, caps):
        if caps.remove_from_watchlist is None:
            return None
        symbol = command.symbols[0]
        if symbol not in caps.watchlist:
            return f"❌ **{symbol}** is not in your watchlist."
        caps.remove_from_watchlist(symbol)
        return f"🗑️ **{symbol}** has been removed from your watchlist."

    def _add_portfolio(self, command, message, caps):
        if caps.add_to_portfolio is None:
            return None
        if command.quantity <= 0:
            return "❌ Please specify a valid quantity greater than 0."
        symbol = command.symbols[0]
        caps.add_to_portfolio(symbol, command.quantity)
        return (
            f"✅ Added **{command.quantity:g} shares of {symbol}** to your portfolio!\n\n"
            "View your holdings in the Portfolio tab."
        )

    def _show_watchlist(self, command, message, caps):
        if not caps.watchlist:
            return '📋 **Your Watchlist is Empty**\n\nSay "add AAPL to watchlist" to start tracking stocks!'
        entries = "\n".join(f"• {s}" for s in caps.watchlist)
        return (
            f"📋 **Your Watchlist ({len(caps.watchlist)} stocks)**\n\n{entries}\n\n"
            '**Commands:**\n• "Add NVDA to watchlist"\n• "Remove AAPL from watchlist"'
        )

    def _show_portfolio(self, command, message, caps):
        holdings = caps.holdings()
        if not holdings:
            return (
                "💼 **Your Portfolio is Empty**\n\n"
                'Say "buy 10 AAPL" or "add 5 shares NVDA to portfolio" to add holdings!'
            )
        lines = "\n".join(
            f"• {symbol} ({qty:g} shares)" if qty else f"• {symbol}" for symbol, qty in holdings.items()
        )
        return f"💼 **Your Portfolio**\n\n{lines}\n\nView details in the Portfolio tab."

    def _create_watchlist(self, command, message, caps):
        if caps.add_to_watchlist is None:
            return None
        if not command.symbols:
            return '❌ No valid stock symbols found. Try: "Create watchlist with AAPL, NVDA, MSFT"'
        for symbol in command.symbols:
            caps.add_to_watchlist(symbol)
        entries = "\n".join(f"• {s}" for s in command.symbols)
        return f"✅ **Watchlist Created!**\n\nAdded {len(command.symbols)} stocks:\n{entries}\n\nView them in the Watchlist tab!"

    def _themed_portfolio(self, command, message, caps):
        if caps.add_to_watchlist is None and caps.add_to_portfolio is None:
            return None
        today = self._today()
        realism = assess_realism(message.lower(), today)
        if realism.is_gated:
            return _realism_caution(realism)

        for symbol in command.symbols:
            if caps.add_to_watchlist is not None:
                caps.add_to_watchlist(symbol)
            if caps.add_to_portfolio is not None:
                caps.add_to_portfolio(symbol, 1)

        emoji = THEME_EMOJIS.get(command.theme, "📋")
        lines = [
            f"✅ **{emoji} {command.theme.capitalize()} Portfolio Created!**",
            "",
            "I've added these to your watchlist:",
            *(f"• **{s}**" for s in command.symbols),
            "",
        ]
        if realism.has_goal:
            lines += _realism_report(realism, today)
        lines.append(
            "📍 **Go to Watchlist tab** to track live prices, and Portfolio tab to see positions (1 share each)."
        )
        return "\n".join(lines)


def _match_theme(text: str) -> tuple[str, list[str]]:
    for theme, symbols in PORTFOLIO_THEMES.items():
        if theme in text:
            return theme, symbols
    return DEFAULT_THEME, DEFAULT_THEME_SYMBOLS


def _realism_caution(r: GoalRealism) -> str:
    realistic = round(r.budget * 1.08 ** r.years)
    return f"""⚠️ **Let's Be Real Here**

**Your Goal:** €{r.budget} → €{r.goal} ({r.multiplier:.0f}x) in {r.years} years
**Required Return:** {r.required_return:.0f}% per year

**The Hard Truth:**
• The S&P 500 averages 7-10% yearly over decades
• Even the best hedge funds average 15-20%
• Warren Buffett averages ~20% and he's a legend
• You're asking for {r.required_return:.0f}% which is {r.required_return / 10:.0f}x the market average

**What Actually Happens:**
• 90% of people trying to get rich quick lose money
• Small amounts + unrealistic expectations = gambling, not investing
• €{r.budget} in fees alone could wipe your gains

**My Honest Advice:**
1. With €{r.budget}, focus on **learning** not earning
2. Paper trade (fake money) for 6 months
3. Save €50-100/month until you have €500+
4. Then invest in ETFs like VOO or QQQ
5. Expect 7-10% yearly returns (€{r.budget} → €{realistic} in {r.years} years realistically)

**Want me to create a learning-focused watchlist instead?**
Say: "Create a beginner portfolio" for safer picks to study."""


def _realism_report(r: GoalRealism, today: date) -> list[str]:
    by_year = r.target_year or today.year + r.years
    lines = [
        "📊 **Your Goal Analysis:**",
        f"• Target: €{r.budget} → €{r.goal} ({r.multiplier:.0f}x) by {by_year}",
        f"• Required: {r.required_return:.0f}% annual return",
        "",
    ]
    if r.required_return > 50:
        lines += [
            "🚨 **Warning:** This is extremely unlikely.",
            f"• Realistic (8%/yr): €{r.budget} → €{round(r.budget * 1.08 ** r.years)}",
            f"• Optimistic (15%/yr): €{r.budget} → €{round(r.budget * 1.15 ** r.years)}",
            "• Your goal needs hedge fund returns consistently.",
        ]
    elif r.required_return > 20:
        lines += [
            "⚠️ **Challenging:** Possible but risky.",
            "• This beats most professional investors.",
            "• Consider more realistic expectations.",
        ]
    elif r.required_return > 10:
        lines.append("📈 **Ambitious but doable** with growth stocks.")
    else:
        lines.append("✅ **Realistic!** Achievable with consistent investing.")
    lines.append("")
    return lines
