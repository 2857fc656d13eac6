"""
Fixed assistant texts: welcome, help, clarification and the connection-issue fallback.
"""

import random

TRADING_TIPS = [
    "Never invest more than you can afford to lose.",
    "Diversification reduces risk but also limits gains.",
    "The best time to buy is when others are fearful.",
    "Set stop-losses before entering any trade.",
    "Past performance doesn't guarantee future results.",
    "Compound interest is the 8th wonder of the world.",
    "Buy the rumor, sell the news.",
    "Time in the market beats timing the market.",
]

WELCOME_MESSAGE_ID = "welcome"

WELCOME_TEXT = """👋 **Welcome to Stockie!**

I can help you with market analysis AND manage your lists:

**📊 Analysis:**
• "How's the market?" - Market overview
• "Analyze NVDA" - Deep stock analysis
• "Compare AAPL vs MSFT" - Stock comparison

**🎬 Actions I can do:**
• "Add AAPL to watchlist" - Track stocks
• "Remove TSLA from watchlist" - Untrack stocks
• "Show my watchlist" - See your tracked stocks
• "Create watchlist with NVDA, AMD, GOOGL"

**💡 Learning:**
• "What is an ETF?" - Definitions
• "How to start investing?" - Guides

Try: **"Add NVDA to my watchlist"**"""

HELP_HEADER = """👋 How can I help you today?

**Try asking:**
• "How's the market?" - Get market overview
• "Analyze AAPL" - Deep stock analysis
• "Add NVDA to watchlist" - Track a stock
• "Make a tech portfolio" - Get stock suggestions
• "What is an ETF?" - Learn concepts
• "I have $100, where to invest?" - Get advice"""

CLARIFICATION_TEXT = """🤔 I need more details! What would you like me to do?

**Examples:**
• "Make a tech portfolio"
• "Add AAPL to watchlist"
• "Show market overview"
• "Analyze NVDA"

What would you like?"""

FALLBACK_HEADER = """🔄 **Connection Issue**

I'm having trouble fetching live market data right now. This could be due to:
• Market hours (some data limited outside trading hours)
• API rate limits
• Network issues

**What you can try:**
• Ask about specific stocks: "Analyze AAPL"
• Ask general questions: "How does momentum trading work?"
• Wait a moment and try again"""


def random_tip(rng: random.Random | None = None) -> str:
    return (rng or random).choice(TRADING_TIPS)


def help_text(rng: random.Random | None = None) -> str:
    return f"{HELP_HEADER}\n\n💡 **Tip:** {random_tip(rng)}"


def fallback_text(rng: random.Random | None = None) -> str:
    return f"{FALLBACK_HEADER}\n\n**Trading Tip:** {random_tip(rng)}"
