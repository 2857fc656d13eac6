"""
Strategy / portfolio-theme suggestions.

A message may match several themes; every matched section is rendered in
table order. "cheap" and "safe" share the budget section.
"""

import re

from marketminds.application.assistant.vocabulary import STRATEGY_THEMES

_PORTFOLIO_REQUEST = re.compile(
    r"(make|create|build|suggest|recommend|give)\s*(me\s*)?(a\s*)?(portfolio|stocks|investments)", re.I
)
_STRATEGY_KEYWORDS = re.compile(
    r"(cheap|budget|low.?cost|affordable|european|europe|asian|asia|tech|growth|dividend|safe|"
    r"conservative|aggressive|risky|beginner)",
    re.I,
)

_SECTIONS: list[tuple[tuple[str, ...], str]] = [
    (("european",), (
        "🇪🇺 **European Investment Options:**\n\n"
        "**ETFs (easiest way):**\n"
        "• **VGK** - Vanguard FTSE Europe ETF\n"
        "• **EZU** - iShares MSCI Eurozone ETF\n"
        "• **FEZ** - Euro STOXX 50 ETF\n\n"
        "**Individual European Stocks:**\n"
        "• **ASML** - Dutch semiconductor giant\n"
        "• **SAP** - German software company\n"
        "• **NVO** - Novo Nordisk (Danish pharma)\n"
        "• **LVMHF** - LVMH (French luxury)\n"
        "• **TTE** - TotalEnergies (French oil)\n\n"
        "**EU Trading Platforms:**\n"
        "• eToro, DEGIRO, Trading 212, Interactive Brokers\n\n"
    )),
    (("cheap", "safe"), (
        "💰 **Budget-Friendly Options:**\n\n"
        "**Low-cost ETFs (best for small budgets):**\n"
        "• **VOO** - S&P 500 (expense ratio 0.03%)\n"
        "• **VTI** - Total US Market\n"
        "• **SCHD** - Dividend ETF\n\n"
        "**Fractional Shares:** Most brokers let you buy $1 worth of any stock\n\n"
        "**Tip:** Avoid penny stocks - they're cheap for a reason (usually bad companies)\n\n"
    )),
    (("asian",), (
        "🌏 **Asian Market Options:**\n\n"
        "**ETFs:**\n"
        "• **VWO** - Emerging Markets\n"
        "• **EWT** - Taiwan (semiconductors)\n"
        "• **EWJ** - Japan\n"
        "• **KWEB** - China Internet\n\n"
        "**Stocks:**\n"
        "• **TSM** - Taiwan Semiconductor\n"
        "• **BABA** - Alibaba\n"
        "• **SONY** - Sony\n\n"
    )),
    (("tech",), (
        "💻 **Tech Portfolio:**\n\n"
        "**Big Tech (safer):**\n"
        "• AAPL, MSFT, GOOGL, AMZN, META\n\n"
        "**AI/Semiconductors (higher growth):**\n"
        "• NVDA, AMD, AVGO, TSM\n\n"
        "**Tech ETFs:**\n"
        "• **QQQ** - Nasdaq 100\n"
        "• **SMH** - Semiconductors\n"
        "• **XLK** - Tech Select\n\n"
    )),
    (("dividend",), (
        "💵 **Dividend Portfolio:**\n\n"
        "**High Dividend Stocks:**\n"
        "• **O** - Realty Income (monthly dividend!)\n"
        "• **KO** - Coca-Cola\n"
        "• **JNJ** - Johnson & Johnson\n"
        "• **VZ** - Verizon\n"
        "• **PG** - Procter & Gamble\n\n"
        "**Dividend ETFs:**\n"
        "• **SCHD** - Quality dividend\n"
        "• **VYM** - High dividend yield\n"
        "• **JEPI** - Income with options\n\n"
    )),
    (("growth",), (
        "🚀 **Growth Portfolio (High Risk/Reward):**\n\n"
        "**High Growth Stocks:**\n"
        "• NVDA, TSLA, AMD, PLTR\n\n"
        "**Growth ETFs:**\n"
        "• **QQQ** - Nasdaq 100\n"
        "• **ARKK** - ARK Innovation (very volatile)\n"
        "• **VUG** - Vanguard Growth\n\n"
        "⚠️ High growth = high volatility. Be prepared for big swings.\n\n"
    )),
    (("green",), (
        "🌱 **Green/Sustainable Portfolio:**\n\n"
        "**Clean Energy:**\n"
        "• **ICLN** - Clean Energy ETF\n"
        "• **TAN** - Solar ETF\n"
        "• **ENPH** - Enphase (solar)\n"
        "• **TSLA** - Tesla (EVs)\n\n"
        "**ESG ETFs:**\n"
        "• **ESGU** - ESG Leaders\n"
        "• **SUSA** - Sustainable USA\n\n"
    )),
    (("crypto",), (
        "🪙 **Crypto Portfolio:**\n\n"
        "**Core (lower risk):**\n"
        "• 60% Bitcoin (BTC)\n"
        "• 30% Ethereum (ETH)\n\n"
        "**Altcoins (higher risk):**\n"
        "• SOL, MATIC, LINK, AVAX\n\n"
        "⚠️ Only invest 1-5% of total portfolio in crypto\n\n"
    )),
]

_BALANCED = (
    "**Balanced Starter Portfolio:**\n\n"
    "• 40% - **VOO** (S&P 500)\n"
    "• 20% - **QQQ** (Tech/Nasdaq)\n"
    "• 20% - **VEA** (International Developed)\n"
    "• 10% - **BND** (Bonds for stability)\n"
    "• 10% - **Cash** (for opportunities)\n\n"
)

_TIPS = (
    "💡 **Tips:**\n"
    "• Diversify across sectors and regions\n"
    "• Start with ETFs, add individual stocks as you learn\n"
    "• Invest regularly (dollar-cost averaging)\n"
    "• This is educational - always do your own research!"
)


def is_strategy_request(message: str) -> bool:
    return bool(_PORTFOLIO_REQUEST.search(message) or _STRATEGY_KEYWORDS.search(message))


def detect_themes(message: str) -> tuple[str, ...]:
    """Matched theme names in table-registration order."""
    return tuple(name for name, pattern in STRATEGY_THEMES.items() if pattern.search(message))


def render_strategy(themes: tuple[str, ...]) -> str:
    selected = set(themes)
    parts = ["📋 **Portfolio Suggestions**\n\n"]
    for keys, section in _SECTIONS:
        if selected.intersection(keys):
            parts.append(section)
    if not selected:
        parts.append(_BALANCED)
    parts.append(_TIPS)
    return "".join(parts)
