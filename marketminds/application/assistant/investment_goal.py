"""
Investment-goal feasibility: parse an amount/target pair from free text,
bucket the implied multiplier and render the advice.

Parsing order:
  1. explicit range "X to Y"
  2. "I have / with / starting X" for the amount, "into / reach / to Y" for the target
  3. smallest number as amount, largest as target (when two or more numbers)
  4. multiplier words ("double", "10x") override the target as amount * factor
Whatever the message does not supply is taken from the conversation context;
amount defaults to 10 and a missing or non-increasing target to amount * 10.
"""

import re
from dataclasses import dataclass

from marketminds.application.assistant.vocabulary import MULTIPLIER_WORDS
from marketminds.domain.entities.conversation import ConversationContext

DEFAULT_AMOUNT = 10.0

_NUMBER = re.compile(r"\d+\.?\d*")
_THOUSANDS = re.compile(r"(?<=\d),(?=\d{3}\b)")
_RANGE = re.compile(r"(\d+\.?\d*)\s*(?:to|into|→|->)\s*(\d+\.?\d*)", re.I)
_HAS_AMOUNT = re.compile(r"(?:i have|got|with|start|starting)\s*[$€]?\s*(\d+\.?\d*)", re.I)
_TARGET = re.compile(r"(?:into|make|become|get|reach|to)\s*[$€]?\s*(\d+\.?\d*)", re.I)
_MULTIPLIER = re.compile(r"\b(double|triple|quadruple|100x|50x|20x|10x|5x|3x|2x)\b", re.I)

_QUICK_MONEY = re.compile(r"(quick|fast|easy|rapid|overnight|week|month)\s*(money|cash|profit|rich|gains)", re.I)
_GAMBLING = re.compile(r"(gamble|bet|casino|lottery|luck)", re.I)
_BEGINNER = re.compile(r"(beginner|\bnew\b|start|first time|never traded|learning)", re.I)
_CRYPTO = re.compile(r"(crypto|bitcoin|\bbtc\b|\beth\b|altcoin|\bcoin)", re.I)
_DAY_TRADE = re.compile(r"(day\s*trad|scalp|intraday)", re.I)


@dataclass(frozen=True)
class GoalAssessment:
    amount: float
    target: float
    multiplier: float
    tier: str
    currency: str


def parse_goal(message: str, context: ConversationContext | None = None) -> tuple[float, float]:
    """Return (amount, target) for *message*, falling back to *context* per field."""
    context = context or ConversationContext()
    text = _THOUSANDS.sub("", message.lower())
    numbers = [float(n) for n in _NUMBER.findall(text)]

    amount = 0.0
    target = 0.0
    range_match = _RANGE.search(text)
    if range_match:
        amount = float(range_match.group(1))
        target = float(range_match.group(2))
    else:
        has_amount = _HAS_AMOUNT.search(text)
        if has_amount:
            amount = float(has_amount.group(1))
        elif numbers:
            amount = min(numbers)

        target_match = _TARGET.search(text)
        if target_match:
            target = float(target_match.group(1))
        elif len(numbers) >= 2:
            target = max(numbers)

    multiplier_match = _MULTIPLIER.search(text)
    if multiplier_match and amount > 0:
        target = amount * MULTIPLIER_WORDS[multiplier_match.group(1).lower()]

    if amount <= 0:
        amount = context.last_amount or DEFAULT_AMOUNT
    if target <= 0:
        target = context.last_target
    if target <= amount:
        target = amount * 10
    return amount, target


def goal_tier(amount: float, multiplier: float) -> str:
    if amount < 50:
        return "too small"
    if multiplier >= 25:
        return "extremely unrealistic"
    if multiplier >= 10:
        return "very aggressive"
    if multiplier >= 2:
        return "achievable"
    return "modest"


def assess_goal(message: str, context: ConversationContext | None = None) -> GoalAssessment:
    amount, target = parse_goal(message, context)
    multiplier = target / amount
    lowered = message.lower()
    currency = "$" if "dollar" in lowered or "$" in lowered else "€"
    return GoalAssessment(
        amount=amount,
        target=target,
        multiplier=multiplier,
        tier=goal_tier(amount, multiplier),
        currency=currency,
    )


def _money(value: float) -> str:
    return f"{value:g}"


def render_goal(message: str, goal: GoalAssessment) -> str:
    c = goal.currency
    mult = goal.multiplier
    lines = [
        "💰 **Investment Analysis**",
        "",
        f"**Your Goal:** {c}{_money(goal.amount)} → {c}{_money(goal.target)} ({mult:.1f}x return)",
        "",
    ]

    if _QUICK_MONEY.search(message):
        lines += ["⚠️ **Reality Check:** \"Quick money\" usually means quick losses. "
                  "Markets reward patience, not speed.", ""]
    if _GAMBLING.search(message):
        lines += ["🎰 **Warning:** Investing isn't gambling. If you're looking to gamble, "
                  "the casino has better odds than uninformed trading.", ""]

    if goal.tier == "too small":
        lines += [
            f"📚 **With {c}{_money(goal.amount)}, here's my honest take:**",
            "",
            "This amount is too small for meaningful traditional investing (fees would eat your gains). Instead:",
            "",
            "1. **Learn first** - Use paper trading apps (free)",
            f"2. **Save more** - Aim for {c}500+ before real investing",
            "3. **If you must try:**",
            "   • Crypto on Binance/Coinbase (can buy tiny amounts)",
            "   • Fractional shares on Robinhood/eToro",
            "",
        ]
    elif goal.tier == "extremely unrealistic":
        lines += [
            f"🚨 **{mult:.0f}x is extremely unrealistic:**",
            "",
            "• 99% of people attempting this **lose everything**",
            "• Even the best traders average 20-30% yearly",
            "• This would require perfect timing + massive risk",
            "",
            "**Only possible (not probable) through:**",
            "• Lottery-tier crypto bets (99% fail)",
            "• Options trading (90% of retail loses)",
            "• Pure luck (not a strategy)",
            "",
        ]
    elif goal.tier == "very aggressive":
        lines += [
            f"⚠️ **{mult:.0f}x is very aggressive:**",
            "",
            "**High-risk paths:**",
            "• Volatile small-cap stocks",
            "• Leveraged ETFs (TQQQ, SOXL)",
            "• Crypto during bull markets",
            "• Options (if you really know what you're doing)",
            "",
            "**Realistic timeframe:** 2-5 years with significant risk",
            "",
        ]
    elif goal.tier == "achievable":
        lines += [
            f"✅ **{mult:.0f}x is achievable but takes time:**",
            "",
            "**Realistic approaches:**",
            "• S&P 500 (SPY): ~7-10 years to double",
            "• Growth stocks (NVDA, AMZN): 2-5 years possible",
            "• Mix of crypto + stocks: 1-3 years possible",
            "",
        ]
    else:
        lines += [
            f"🟢 **{mult:.1f}x is a modest goal:** a broad index fund (VOO, VTI) held for a few years "
            "is usually enough.",
            "",
        ]

    if _CRYPTO.search(message):
        lines += [
            "**🪙 Crypto-specific advice:**",
            "• Only invest what you can lose 100%",
            "• Stick to BTC/ETH for lower risk",
            "• Altcoins can 10x but usually go to 0",
            "",
        ]
    if _DAY_TRADE.search(message):
        lines += [
            "**📊 Day trading reality:**",
            "• 90% of day traders lose money",
            f"• You need {c}25,000+ for US pattern day trading",
            "• It's a full-time job, not easy money",
            "",
        ]
    if _BEGINNER.search(message):
        lines += [
            "**🎓 Beginner's path:**",
            "1. Learn basics (Investopedia, YouTube)",
            "2. Paper trade for 3-6 months",
            "3. Start small with index funds (SPY, QQQ)",
            "4. Only risk money you can lose",
            "",
        ]

    if mult >= 10:
        bottom = f"A {mult:.0f}x return requires extraordinary luck or skill. Most people lose trying."
    else:
        bottom = "Focus on consistent growth over time. Compound interest is the real wealth builder."
    lines.append(f"💡 **Bottom line:** {bottom}")
    return "\n".join(lines)


def investment_advice(
    message: str, context: ConversationContext | None = None
) -> tuple[str, ConversationContext]:
    """Render goal advice for *message* and return it with the updated context."""
    context = context or ConversationContext()
    goal = assess_goal(message, context)
    return render_goal(message, goal), context.remember(goal.amount, goal.target)
