"""
Analysis engine: renders the assistant's reply for every non-action intent.

Holds a per-session quote snapshot and a per-symbol 1M history cache. Both
live as long as the engine and have no TTL; the snapshot is refreshed
explicitly before every market-data generator. A failed refresh keeps the
stale snapshot (the QuoteService reports it as a FetchResult error, it
never raises). Anything else that goes wrong propagates to the caller,
which owns the connection-issue fallback.
"""

import logging
import re
from datetime import date
from typing import Callable

from marketminds.application.assistant import knowledge, metrics, replies, strategy
from marketminds.application.assistant.investment_goal import investment_advice
from marketminds.application.assistant.vocabulary import TECH_SECTOR
from marketminds.application.market.catalog import TRACKED_SYMBOLS
from marketminds.application.market.quote_service import QuoteService
from marketminds.domain.entities.conversation import ConversationContext
from marketminds.domain.entities.intent import (
    CompareStocks,
    DynamicAnalysis,
    Help,
    Intent,
    InvestmentGoal,
    Knowledge,
    NeedsClarification,
    SingleStockAnalysis,
    StrategyQuery,
    Topical,
)
from marketminds.domain.entities.market import HistoryPoint, Quote
from marketminds.domain.entities.portfolio import AssistantCapabilities

logger = logging.getLogger(__name__)

ANALYSIS_RANGE = "1M"
DEFAULT_COMPARISON = ("AAPL", "MSFT", "GOOGL")

_AMOUNT = re.compile(r"\d+")
_HAS_MONEY = re.compile(r"euro|dollar|€|\$|\bhave\b.*\d+|\d+.*\bhave\b", re.I)
_ASKS_WHAT_TO_DO = re.compile(r"what.*do|what.*should|should.*i|where.*put|how.*invest|can.*i", re.I)
_WANTS_ANALYSIS = re.compile(r"(analyze|analysis|look at|check|tell.*about|how.*doing|how.*is|market)", re.I)
_ASKS_WHY = re.compile(r"why|reason|cause|explain", re.I)


def _icon(positive: bool) -> str:
    return "📈" if positive else "📉"


class AnalysisEngine:
    def __init__(
        self,
        quote_service: QuoteService,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._quotes = quote_service
        self._today = today
        self.snapshot: dict[str, Quote] = {}
        self.history_cache: dict[str, list[HistoryPoint]] = {}

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #

    def respond(
        self,
        intent: Intent,
        message: str,
        context: ConversationContext,
        capabilities: AssistantCapabilities | None = None,
    ) -> tuple[str, ConversationContext]:
        """Render the reply for *intent*; only goal questions change the context."""
        if isinstance(intent, Help):
            return replies.help_text(), context
        if isinstance(intent, NeedsClarification):
            return replies.CLARIFICATION_TEXT, context
        if isinstance(intent, InvestmentGoal):
            return investment_advice(message, context)
        if isinstance(intent, StrategyQuery):
            return strategy.render_strategy(intent.themes), context
        if isinstance(intent, Knowledge):
            return knowledge.answer(intent.topic), context

        self.refresh()
        if isinstance(intent, SingleStockAnalysis):
            holdings = capabilities.holdings() if capabilities else {}
            return self.deep_stock_analysis(intent.symbol, holdings), context
        if isinstance(intent, CompareStocks):
            return self.compare_stocks(list(intent.symbols)), context
        if isinstance(intent, Topical):
            return self._topical(intent.tag), context
        if isinstance(intent, DynamicAnalysis):
            return self.dynamic_analysis(message), context
        raise TypeError(f"Unsupported intent for analysis: {intent!r}")

    def _topical(self, tag: str) -> str:
        if tag == "market":
            return self.smart_market_overview()
        if tag == "opportunities":
            return self.find_opportunities()
        if tag == "risk":
            return self.smart_risk_analysis()
        if tag == "crypto":
            return self.smart_crypto_analysis()
        return self.smart_sector_analysis(TECH_SECTOR, "Technology")

    # ------------------------------------------------------------------ #
    # Data access
    # ------------------------------------------------------------------ #

    def refresh(self) -> None:
        """Refresh the tracked-symbol snapshot, keeping stale quotes on failure."""
        result = self._quotes.get_quotes(TRACKED_SYMBOLS)
        for quote in result.value.data:
            self.snapshot[quote.symbol.upper()] = quote
        if not result.ok:
            logger.warning("Market refresh degraded, using cached snapshot: %s", result.error.reason)

    def quote(self, symbol: str) -> Quote | None:
        key = symbol.upper()
        if key not in self.snapshot:
            result = self._quotes.get_quotes([key])
            if result.value.data:
                self.snapshot[key] = result.value.data[0]
        return self.snapshot.get(key)

    def history(self, symbol: str) -> list[HistoryPoint]:
        """1M history, cached for the engine's lifetime once non-empty."""
        key = symbol.upper()
        if key not in self.history_cache:
            history = self._quotes.get_history(key, ANALYSIS_RANGE).value.history
            if not history:
                return []
            self.history_cache[key] = history
        return self.history_cache[key]

    def _market_state(self) -> tuple[metrics.MarketState, list[Quote], list[Quote], float]:
        quotes = list(self.snapshot.values())
        gainers, losers = metrics.breadth(quotes)
        bias = len(gainers) / (len(quotes) or 1)
        vix = metrics.vix_level(self.snapshot.get("VIX"))
        return metrics.market_state(bias, vix), gainers, losers, vix

    # ------------------------------------------------------------------ #
    # Symbol analysis
    # ------------------------------------------------------------------ #

    def deep_stock_analysis(self, symbol: str, holdings: dict[str, float] | None = None) -> str:
        stock = self.quote(symbol)
        if stock is None:
            return f'❌ Could not find data for "{symbol}". Check if it\'s a valid ticker.'

        history = self.history(symbol)
        vol = metrics.volatility(history)
        trend = metrics.trend(history)
        levels = metrics.support_resistance(history)
        mom = metrics.momentum(stock, history)
        price = stock.price_value

        to_support = (price - levels.support) / price * 100 if levels.support > 0 and price else None
        to_resistance = (levels.resistance - price) / price * 100 if levels.resistance > 0 and price else None

        def pct(value: float | None) -> str:
            return f"{value:.1f}" if value is not None else "N/A"

        trend_icon = "🟢" if "up" in trend else "🔴" if "down" in trend else "🟡"
        vol_label = "⚠️ High" if vol > 2.5 else "Normal" if vol > 1 else "Low"
        lines = [
            f"🔍 **{stock.symbol} - Deep Analysis**",
            "",
            f"**{stock.display_name}**",
            f"Price: **${stock.price}** ({stock.percent_change})",
            "",
        ]

        quantity = (holdings or {}).get(stock.symbol)
        if quantity:
            lines += [f"**Your Position:** {quantity:g} shares (≈ ${quantity * price:,.2f})", ""]

        lines += [
            "**📊 Technical Indicators:**",
            f"• Trend: {trend_icon} {trend}",
            f"• Momentum: {'🟢' if mom > 0 else '🔴'} {mom:.2f} ({'Strong' if abs(mom) > 3 else 'Moderate'})",
            f"• Volatility: {vol:.2f}% {vol_label}",
            "",
            "**🎯 Price Levels (from 1M data):**",
            f"• Support: ${levels.support:.2f} ({pct(to_support)}% away)",
            f"• Resistance: ${levels.resistance:.2f} ({pct(to_resistance)}% away)",
            "",
            "**💡 My Analysis:**",
        ]

        if "uptrend" in trend and mom > 0:
            insight = f"{stock.symbol} shows strength with {trend} and positive momentum. "
            if to_resistance is not None and to_resistance < 3:
                insight += f"Price is near resistance (${levels.resistance:.2f}) - watch for breakout or rejection."
            else:
                insight += "There's room to run before hitting resistance."
        elif "downtrend" in trend:
            insight = f"{stock.symbol} is in a {trend}. "
            if to_support is not None and to_support < 3:
                insight += f"Approaching support at ${levels.support:.2f} - could bounce or break down."
            else:
                insight += "Wait for stabilization before considering entry."
        else:
            insight = (
                f"{stock.symbol} is consolidating. Watch for a decisive break above "
                f"${levels.resistance:.2f} or below ${levels.support:.2f}."
            )
        lines.append(insight)
        return "\n".join(lines)

    def compare_stocks(self, symbols: list[str]) -> str:
        if len(symbols) < 2:
            symbols = list(DEFAULT_COMPARISON)

        rows = []
        for symbol in symbols:
            stock = self.quote(symbol)
            if stock is None:
                continue
            history = self.history(symbol)
            rows.append((
                stock,
                metrics.momentum(stock, history),
                metrics.volatility(history),
                metrics.trend(history),
            ))

        if not rows:
            return f"❌ Could not find data for {', '.join(symbols)}."

        rows.sort(key=lambda row: row[1], reverse=True)
        medals = ["🥇", "🥈", "🥉"]
        lines = ["📊 **Stock Comparison**", ""]
        for i, (stock, mom, vol, trend) in enumerate(rows):
            medal = medals[i] if i < len(medals) else "•"
            lines.append(f"{medal} **{stock.symbol}**: ${stock.price} ({stock.percent_change})")
            lines.append(f"   Momentum: {mom:.1f} | Vol: {vol:.1f}% | {trend}")
            lines.append("")

        best, best_mom, best_vol, _ = rows[0]
        verdict = f"**💡 Verdict:** {best.symbol} currently shows the strongest momentum at {best_mom:.1f}."
        if best_vol > 2.5:
            verdict += " However, higher volatility means more risk."
        lines.append(verdict)
        return "\n".join(lines)

    # ------------------------------------------------------------------ #
    # Market-wide generators
    # ------------------------------------------------------------------ #

    def smart_market_overview(self) -> str:
        sp500 = self.snapshot.get("S&P 500")
        nasdaq = self.snapshot.get("NASDAQ COMPOSITE")
        quotes = list(self.snapshot.values())
        gainers, _ = metrics.breadth(quotes)
        health = len(gainers) / (len(quotes) or 1) * 100
        vix = metrics.vix_level(self.snapshot.get("VIX"))
        fear = "High Fear" if vix > 25 else "Moderate Caution" if vix > 18 else "Low Fear (Greed)"
        health_icon = "🟢" if health > 60 else "🟡" if health > 40 else "🔴"

        def index_line(label: str, quote: Quote | None) -> str:
            if quote is None:
                return f"• {label}: $N/A (N/A)"
            return f"• {label}: ${quote.price} ({quote.percent_change})"

        lines = [
            f"📊 **Market Analysis - {self._today().isoformat()}**",
            "",
            "**Major Indices:**",
            index_line("S&P 500", sp500),
            index_line("NASDAQ", nasdaq),
            "",
            f"**Market Health:** {health_icon} {health:.0f}% of tracked assets are up",
            f"**VIX (Fear Index):** {vix:.2f} - {fear}",
            "",
            "**💡 My Take:**",
        ]
        if health > 65 and vix < 18:
            lines.append(
                "Markets show broad strength with low fear. Good conditions for growth positions, "
                "but don't chase - look for pullbacks."
            )
        elif health < 35 or vix > 25:
            lines.append(
                "Elevated caution warranted. Consider defensive positions or raising cash. "
                "Look for quality names at discount."
            )
        else:
            lines.append(
                "Mixed signals today. Be selective - focus on individual stock strength rather than broad market bets."
            )
        return "\n".join(lines)

    def find_opportunities(self) -> str:
        found = []
        for stock in list(self.snapshot.values())[:10]:
            history = self.history(stock.symbol)
            mom = metrics.momentum(stock, history)
            trend = metrics.trend(history)
            vol = metrics.volatility(history)
            if mom > 1 and "uptrend" in trend and vol < 4:
                found.append((stock, mom, f"{trend}, momentum {mom:.1f}, vol {vol:.1f}%"))

        found.sort(key=lambda item: item[1], reverse=True)
        lines = ["🎯 **Opportunity Scan**", ""]
        if not found:
            lines += [
                "No strong opportunities found right now. Markets may be choppy or extended.",
                "",
                "**Suggestion:** Wait for pullbacks in quality names or look at specific sectors.",
            ]
            return "\n".join(lines)

        lines += [f"Found {len(found)} potential opportunities:", ""]
        for i, (stock, _, reason) in enumerate(found[:5], start=1):
            lines += [f"{i}. **{stock.symbol}** (${stock.price})", f"   {reason}", ""]
        lines.append("⚠️ Always do your own research. These are based on momentum, not fundamentals.")
        return "\n".join(lines)

    def smart_risk_analysis(self) -> str:
        vix_quote = self.snapshot.get("VIX")
        vix = metrics.vix_level(vix_quote)
        vix_change = vix_quote.percent_value if vix_quote else 0.0

        sample = list(self.snapshot.values())[:8]
        vols = [metrics.volatility(self.history(stock.symbol)) for stock in sample]
        avg_vol = sum(vols) / len(vols) if vols else 2.0

        lines = [
            "⚠️ **Risk Assessment**",
            "",
            f"**VIX:** {vix:.2f} ({'↑' if vix_change > 0 else '↓'} {vix_quote.percent_change if vix_quote else '0%'})",
            f"**Avg Asset Volatility:** {avg_vol:.2f}%",
            "",
        ]
        if vix > 25 or avg_vol > 3:
            lines += ["**Risk Level:** 🔴 **HIGH**",
                      "Markets are volatile. Reduce position sizes, tighten stops, consider hedging."]
        elif vix > 18 or avg_vol > 2:
            lines += ["**Risk Level:** 🟡 **MODERATE**",
                      "Normal market conditions. Standard risk management applies."]
        else:
            lines += ["**Risk Level:** 🟢 **LOW**",
                      "Calm markets. Good for position building, but complacency can be dangerous."]
        lines += [
            "",
            "**💡 Risk Tips:**",
            "• Never risk more than 2% of portfolio on one trade",
            "• Use stop-losses on all positions",
            "• Higher VIX = smaller position sizes",
        ]
        return "\n".join(lines)

    def smart_crypto_analysis(self) -> str:
        btc = self.snapshot.get("BTC-USD")
        eth = self.snapshot.get("ETH-USD")
        btc_history = self.history("BTC-USD") if btc else []
        eth_history = self.history("ETH-USD") if eth else []
        btc_trend = metrics.trend(btc_history)
        eth_trend = metrics.trend(eth_history)
        btc_vol = metrics.volatility(btc_history)

        lines = [
            "₿ **Crypto Analysis**",
            "",
            f"**Bitcoin:** ${btc.price if btc else 'N/A'} ({btc.percent_change if btc else 'N/A'})",
            f"  Trend: {btc_trend} | Volatility: {btc_vol:.1f}%",
            "",
            f"**Ethereum:** ${eth.price if eth else 'N/A'} ({eth.percent_change if eth else 'N/A'})",
            f"  Trend: {eth_trend}",
            "",
            "**💡 Analysis:**",
        ]
        insight = ""
        if "uptrend" in btc_trend:
            insight = "Bitcoin showing strength. Altcoins typically follow BTC's lead. "
        elif "downtrend" in btc_trend:
            insight = "Bitcoin weak - be cautious with crypto exposure. "
        level = "very high" if btc_vol > 5 else "elevated" if btc_vol > 3 else "moderate"
        lines.append(f"{insight}Crypto volatility is {level} - size positions accordingly.")
        return "\n".join(lines)

    def smart_sector_analysis(self, symbols: list[str], sector: str) -> str:
        rows = []
        for symbol in symbols:
            stock = self.quote(symbol)
            if stock is not None:
                rows.append((stock, metrics.momentum(stock, self.history(symbol))))
        if not rows:
            return f"💻 **{sector} Sector Analysis**\n\nNo live data available for {sector} right now."

        rows.sort(key=lambda row: row[1], reverse=True)
        avg = sum(mom for _, mom in rows) / len(rows)
        lines = [f"💻 **{sector} Sector Analysis**", ""]
        for stock, mom in rows:
            lines.append(
                f"{'🟢' if mom > 0 else '🔴'} **{stock.symbol}**: ${stock.price} ({stock.percent_change}) | Mom: {mom:.1f}"
            )
        lines += ["", f"**Sector Momentum:** {'🟢' if avg > 0 else '🔴'} {avg:.2f}", ""]
        leader = rows[0][0].symbol
        if avg > 2:
            insight = f"{sector} showing strength. {leader} leads the pack."
        elif avg < -2:
            insight = f"{sector} under pressure. Wait for stabilization."
        else:
            insight = f"Mixed signals in {sector}. Be selective - {leader} looks best."
        lines.append(f"**💡 Insight:** {insight}")
        return "\n".join(lines)

    # ------------------------------------------------------------------ #
    # Free-form questions
    # ------------------------------------------------------------------ #

    def dynamic_analysis(self, message: str) -> str:
        """Re-derive what a free-form question is after: advice, analysis, or a why."""
        text = message.lower()
        state, gainers, losers, vix = self._market_state()
        amounts = [n for n in (int(x) for x in _AMOUNT.findall(text)) if 0 < n < 100000]
        amount = amounts[0] if amounts else 0

        if amount > 0 and (_ASKS_WHAT_TO_DO.search(text) or _HAS_MONEY.search(text)):
            return self.generate_investment_advice(amount, state, gainers, losers, vix)
        if _WANTS_ANALYSIS.search(text):
            return self.generate_market_analysis(state, gainers, losers, vix)
        if _ASKS_WHY.search(text):
            return self.explain_market_movement(state, gainers, losers)
        if len(text) > 10:
            return self.generate_market_analysis(state, gainers, losers, vix)
        return self.smart_market_overview()

    def generate_investment_advice(
        self,
        amount: int,
        state: metrics.MarketState,
        gainers: list[Quote],
        losers: list[Quote],
        vix: float,
    ) -> str:
        top = sorted(gainers, key=lambda q: q.percent_value, reverse=True)[:3]
        mood = "calm" if vix < 18 else "cautious" if vix < 25 else "fearful"
        lines = [
            f"💰 **What To Do With €{amount}**",
            "",
            "**Right Now (Live Data):**",
            f"• Market mood: {state.mood.upper()}",
            f"• Fear index (VIX): {vix:.1f} - {mood}",
            f"• Winners today: {len(gainers)} | Losers: {len(losers)}",
        ]
        if top:
            lines.append("• Hot today: " + ", ".join(f"{q.symbol} ({q.percent_change})" for q in top))
        lines += ["", "**My Take Based On Current Conditions:**"]

        if state.is_bearish or vix > 25:
            lines += [
                "🔴 Market is weak right now. I'd wait for better entry or buy defensive assets.",
                "• Safe options: BND (bonds), GLD (gold)",
                "• Or just hold cash and watch",
            ]
        elif state.is_bullish and vix < 20:
            lines += [
                "🟢 Conditions look decent for buying.",
                f"• With €{amount}: Consider VOO or QQQ (broad market)",
                "• Fractional shares let you buy any amount",
            ]
        else:
            lines += [
                "🟡 Mixed signals. No strong conviction either way.",
                f"• Maybe put half in (€{round(amount / 2)}) and wait with the rest",
                "• Dollar-cost averaging reduces timing risk",
            ]
        lines += ["", f"**With €{amount} specifically:**"]
        if amount < 100:
            lines += [
                "• Best for learning (small losses = cheap lessons)",
                "• Use fee-free brokers (eToro, Trading 212)",
                "• Consider crypto apps for small amounts (Coinbase, Binance)",
            ]
        elif amount < 500:
            lines += [
                "• Enough for 2-3 positions",
                "• Suggested split: 60% ETF, 40% one stock you researched",
            ]
        else:
            lines += [
                "• Good starting amount for a real portfolio",
                "• Diversify: 50% index ETFs, 30% growth, 20% cash",
            ]
        return "\n".join(lines)

    def generate_market_analysis(
        self,
        state: metrics.MarketState,
        gainers: list[Quote],
        losers: list[Quote],
        vix: float,
    ) -> str:
        sp500 = self.snapshot.get("S&P 500")
        nasdaq = self.snapshot.get("NASDAQ COMPOSITE")
        btc = self.snapshot.get("BTC-USD")

        lines = ["📊 **Live Market Analysis**", "", "**Indices:**"]
        if sp500:
            lines.append(f"• S&P 500: ${sp500.price} ({sp500.percent_change}) {_icon(sp500.is_positive)}")
        if nasdaq:
            lines.append(f"• NASDAQ: ${nasdaq.price} ({nasdaq.percent_change}) {_icon(nasdaq.is_positive)}")

        if vix < 15:
            gauge = "Very Low Fear - markets complacent"
        elif vix < 20:
            gauge = "Low Fear - normal conditions"
        elif vix < 25:
            gauge = "Moderate Fear - caution advised"
        elif vix < 30:
            gauge = "High Fear - elevated volatility"
        else:
            gauge = "Extreme Fear - crisis mode"
        total = len(gainers) + len(losers)
        breadth = len(gainers) / total * 100 if total else 0.0
        lines += [
            "",
            "**Risk Gauge:**",
            f"• VIX: {vix:.1f} ({gauge})",
            "",
            "**Market Breadth:**",
            f"• {len(gainers)} advancing, {len(losers)} declining",
            f"• {breadth:.0f}% of tracked assets are up",
            f"• Overall: {state.mood.upper()}",
            "",
        ]
        if gainers:
            best = max(gainers, key=lambda q: q.percent_value)
            lines.append(f"**Top Gainer:** {best.symbol} {best.percent_change}")
        if losers:
            worst = min(losers, key=lambda q: q.percent_value)
            lines.append(f"**Top Loser:** {worst.symbol} {worst.percent_change}")
        lines.append("")
        if btc:
            lines += [f"**Crypto:** BTC ${btc.price} ({btc.percent_change})", ""]

        if state.is_bullish and vix < 20:
            read = "Conditions favor risk-on. Consider growth positions."
        elif state.is_bearish or vix > 25:
            read = "Defensive stance recommended. Reduce exposure or hedge."
        else:
            read = "Mixed signals. Be selective, focus on quality."
        lines.append(f"**My Read:** {read}")
        return "\n".join(lines)

    def explain_market_movement(
        self, state: metrics.MarketState, gainers: list[Quote], losers: list[Quote]
    ) -> str:
        tech = [self.snapshot[s] for s in TECH_SECTOR if s in self.snapshot]
        tech_up = sum(1 for q in tech if q.is_positive)

        lines = [
            "🔍 **Why Is The Market Moving?**",
            "",
            f"**Current State:** {state.mood.upper()}",
            "",
            "**What I'm Seeing:**",
            f"• {len(gainers)} assets up, {len(losers)} down",
        ]
        if tech_up >= 4:
            lines.append(f"• Tech sector showing strength ({tech_up}/{len(tech)} up)")
        elif tech_up <= 2 and tech:
            lines.append(f"• Tech sector weak ({tech_up}/{len(tech)} up)")

        lines += ["", "**Possible Drivers:**"]
        if state.is_bullish:
            lines += ["• Positive sentiment/momentum", "• Possibly: good economic data, earnings, Fed news"]
        elif state.is_bearish:
            lines += ["• Risk-off sentiment", "• Possibly: economic concerns, geopolitics, profit-taking"]
        else:
            lines += ["• No clear catalyst", "• Market digesting recent moves"]
        lines += ["", "*Note: For specific news, check financial news sites.*"]
        return "\n".join(lines)
