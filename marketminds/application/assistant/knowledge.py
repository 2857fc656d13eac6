"""
Knowledge FAQ: an ordered table of (question phrasing, topic keyword) pairs
mapped to fixed educational answers. The first matching row wins.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class KnowledgeEntry:
    topic: str
    question: re.Pattern
    keyword: re.Pattern
    answer: str


_WHAT_IS = re.compile(r"(what is|what are|what's|explain|define)", re.I)
_HOW_TO = re.compile(r"(how to|how do|how can)", re.I)
_WHEN = re.compile(r"(when|best time)", re.I)
_WHY = re.compile(r"why", re.I)
_BEST = re.compile(r"(best|top|worst)", re.I)
_SHOULD = re.compile(r"(should i|is it worth)", re.I)
_DIFFERENCE = re.compile(r"(difference|\bvs\b|versus)", re.I)


def _entry(topic: str, question: re.Pattern, keyword: str, answer: str) -> KnowledgeEntry:
    return KnowledgeEntry(topic, question, re.compile(keyword, re.I), answer)


KNOWLEDGE_BASE: list[KnowledgeEntry] = [
    _entry("stock", _WHAT_IS, r"stock|share", (
        "📚 **What is a Stock?**\n\n"
        "A stock (or share) is a piece of ownership in a company. When you buy stock, you become a partial owner.\n\n"
        "**Key points:**\n"
        "• Stock price goes up = you profit\n"
        "• Some stocks pay dividends (cash payments)\n"
        "• Stocks are traded on exchanges (NYSE, NASDAQ)\n"
        "• You can buy fractional shares on most platforms\n\n"
        "**Example:** If you buy 1 AAPL share at $180, you own a tiny piece of Apple Inc."
    )),
    _entry("etf", _WHAT_IS, r"etf", (
        "📚 **What is an ETF?**\n\n"
        "ETF = Exchange-Traded Fund. It's a basket of stocks you can buy as one.\n\n"
        "**Popular ETFs:**\n"
        "• **SPY** - Tracks S&P 500 (top 500 US companies)\n"
        "• **QQQ** - Tracks NASDAQ 100 (tech-heavy)\n"
        "• **VTI** - Total US stock market\n\n"
        "**Why ETFs are great for beginners:**\n"
        "• Instant diversification\n"
        "• Lower risk than single stocks\n"
        "• Low fees\n"
        "• Easy to buy/sell"
    )),
    _entry("dividend", _WHAT_IS, r"dividend", (
        "📚 **What are Dividends?**\n\n"
        "Dividends are cash payments companies give to shareholders.\n\n"
        "**How it works:**\n"
        "• Company earns profit → shares some with you\n"
        "• Usually paid quarterly\n"
        "• Dividend yield = annual dividend ÷ stock price\n\n"
        "**High dividend stocks:** KO (Coca-Cola), JNJ, PG\n"
        "**Dividend yield example:** 4% yield on $1000 = $40/year"
    )),
    _entry("options", _WHAT_IS, r"option|\bcall|\bput\b", (
        "📚 **What are Options?**\n\n"
        "Options are contracts that give you the right to buy/sell a stock at a specific price.\n\n"
        "**Two types:**\n"
        "• **Call** - Bet stock goes UP\n"
        "• **Put** - Bet stock goes DOWN\n\n"
        "**Warning:** ⚠️ Options are complex and risky\n"
        "• Can lose 100% of investment\n"
        "• 90% of retail traders lose money\n"
        "• Not for beginners\n\n"
        "Learn paper trading first before trying options."
    )),
    _entry("crypto", _WHAT_IS, r"crypto|bitcoin|blockchain", (
        "📚 **What is Cryptocurrency?**\n\n"
        "Crypto is digital money that uses blockchain technology.\n\n"
        "**Top cryptos:**\n"
        "• **Bitcoin (BTC)** - Digital gold, most established\n"
        "• **Ethereum (ETH)** - Smart contracts platform\n\n"
        "**Key facts:**\n"
        "• Extremely volatile (can move 10%+ daily)\n"
        "• Not backed by any government\n"
        "• Can buy fractions (0.001 BTC)\n"
        "• Trade 24/7 unlike stocks\n\n"
        "⚠️ Only invest what you can afford to lose 100%"
    )),
    _entry("bull-bear", _WHAT_IS, r"bear|bull", (
        "📚 **Bull vs Bear Market**\n\n"
        "🐂 **Bull Market:** Prices rising, optimism high\n"
        "• Good time to buy growth stocks\n"
        "• Everyone making money\n\n"
        "🐻 **Bear Market:** Prices falling 20%+, fear high\n"
        "• Stocks \"on sale\"\n"
        "• Good for long-term buying\n"
        "• Can last months or years\n\n"
        "**Remember:** Bull markets climb stairs, bear markets fall out windows."
    )),
    _entry("short-selling", _WHAT_IS, r"short|shorting", (
        "📚 **What is Short Selling?**\n\n"
        "Shorting = betting a stock will go DOWN.\n\n"
        "**How it works:**\n"
        "1. Borrow shares from broker\n"
        "2. Sell them immediately\n"
        "3. Buy back later (hopefully cheaper)\n"
        "4. Return shares, keep difference\n\n"
        "**Risks:** ⚠️\n"
        "• Unlimited loss potential (stock can go up forever)\n"
        "• Must pay interest while borrowing\n"
        "• Can get \"squeezed\" (GME situation)\n\n"
        "Not recommended for beginners."
    )),
    _entry("leverage", _WHAT_IS, r"leverage|margin", (
        "📚 **What is Leverage/Margin?**\n\n"
        "Leverage = using borrowed money to invest.\n\n"
        "**Example:** With 2x leverage:\n"
        "• You put $100, broker lends $100\n"
        "• You control $200 worth of stock\n"
        "• Gains AND losses are doubled\n\n"
        "**Risks:** ⚠️\n"
        "• **Margin call** - Broker forces you to sell\n"
        "• Can lose more than you invested\n"
        "• Interest charges\n\n"
        "Leveraged ETFs: TQQQ (3x Nasdaq), SOXL (3x semiconductors)"
    )),
    _entry("pe-ratio", _WHAT_IS, r"pe ratio|p/e", (
        "📚 **What is P/E Ratio?**\n\n"
        "P/E = Price ÷ Earnings per Share\n\n"
        "Tells you how \"expensive\" a stock is relative to profits.\n\n"
        "**Interpretation:**\n"
        "• **Low P/E (<15):** Possibly undervalued or slow growth\n"
        "• **High P/E (>30):** Expensive or high growth expected\n"
        "• **Negative P/E:** Company is losing money\n\n"
        "**Example:** AAPL at P/E 28 means you pay $28 for every $1 of earnings."
    )),
    _entry("getting-started", _HOW_TO, r"start|begin|first", (
        "🎓 **How to Start Investing**\n\n"
        "**Step 1: Learn basics (1-2 weeks)**\n"
        "• YouTube: \"stock market for beginners\"\n"
        "• Investopedia.com for definitions\n\n"
        "**Step 2: Choose a broker**\n"
        "• US: Robinhood, Fidelity, Charles Schwab\n"
        "• EU: eToro, DEGIRO, Trading 212\n"
        "• Crypto: Coinbase, Binance\n\n"
        "**Step 3: Paper trade first**\n"
        "• Practice with fake money\n"
        "• Most brokers have simulators\n\n"
        "**Step 4: Start small**\n"
        "• Begin with $50-100\n"
        "• Buy ETFs (SPY, QQQ) first\n"
        "• Don't risk what you can't lose"
    )),
    _entry("charts", _HOW_TO, r"read chart|technical analysis|chart", (
        "📊 **How to Read Charts**\n\n"
        "**Basic elements:**\n"
        "• **Candlesticks:** Green=up, Red=down\n"
        "• **Volume:** Bars at bottom showing trading activity\n"
        "• **Moving averages:** Lines showing trend\n\n"
        "**Key patterns:**\n"
        "• **Support:** Price level that holds\n"
        "• **Resistance:** Price level that blocks\n"
        "• **Trend:** Higher highs = uptrend\n\n"
        "**Indicators for beginners:**\n"
        "• RSI (overbought/oversold)\n"
        "• MACD (momentum)\n"
        "• 50/200 day moving averages\n\n"
        "📚 Learn more: TradingView has free charts"
    )),
    _entry("stock-picking", _HOW_TO, r"pick stock|choose stock|find stock", (
        "🎯 **How to Pick Stocks**\n\n"
        "**Fundamental analysis:**\n"
        "• Is the company profitable?\n"
        "• Is revenue growing?\n"
        "• Is debt manageable?\n"
        "• Do you understand the business?\n\n"
        "**Technical analysis:**\n"
        "• Is it in an uptrend?\n"
        "• Is volume increasing?\n"
        "• Near support (good entry)?\n\n"
        "**Simple strategy for beginners:**\n"
        "1. Start with companies you know (AAPL, AMZN)\n"
        "2. Check they're profitable\n"
        "3. Buy on dips, not all-time highs\n"
        "4. Diversify across 5-10 stocks"
    )),
    _entry("risk-management", _HOW_TO, r"stop.?loss|protect|risk manage", (
        "🛡️ **How to Manage Risk**\n\n"
        "**Rule 1: Position sizing**\n"
        "• Never put >5% in one stock\n"
        "• Never risk >2% on one trade\n\n"
        "**Rule 2: Stop-losses**\n"
        "• Set automatic sell orders\n"
        "• Typically 5-10% below entry\n"
        "• Protects from big losses\n\n"
        "**Rule 3: Diversify**\n"
        "• Different sectors\n"
        "• Different asset types\n"
        "• Different geographies\n\n"
        "**Rule 4: Cash is a position**\n"
        "• Keep 10-20% in cash\n"
        "• Dry powder for opportunities"
    )),
    _entry("when-to-buy", _WHEN, r"\bbuy|enter", (
        "⏰ **When to Buy**\n\n"
        "**Good times to buy:**\n"
        "• Market pullbacks/corrections\n"
        "• Stock at support level\n"
        "• After earnings beat (sometimes)\n"
        "• When VIX is high (fear = opportunity)\n\n"
        "**Avoid buying:**\n"
        "• At all-time highs (unless breakout)\n"
        "• Before major events (earnings, Fed)\n"
        "• When everyone is euphoric\n"
        "• Stocks you don't understand\n\n"
        "**Best approach:** Dollar-cost averaging\n"
        "• Buy same amount regularly\n"
        "• Removes timing stress"
    )),
    _entry("when-to-sell", _WHEN, r"sell|exit|take profit", (
        "⏰ **When to Sell**\n\n"
        "**Sell signals:**\n"
        "• Hit your profit target (set one!)\n"
        "• Fundamentals change\n"
        "• Better opportunity elsewhere\n"
        "• You need the money\n\n"
        "**Don't sell because:**\n"
        "• Small daily drops\n"
        "• News panic (usually overblown)\n"
        "• To \"lock in\" tiny gains\n\n"
        "**Strategy:** Sell in portions\n"
        "• Sell 25% at +20%\n"
        "• Sell 25% at +50%\n"
        "• Let rest run with trailing stop"
    )),
    _entry("market-hours", _WHEN, r"market open|market close|trading hours", (
        "🕐 **Market Hours**\n\n"
        "**US Stock Market (NYSE/NASDAQ):**\n"
        "• Open: 9:30 AM - 4:00 PM ET\n"
        "• Pre-market: 4:00 AM - 9:30 AM\n"
        "• After-hours: 4:00 PM - 8:00 PM\n\n"
        "**Best times to trade:**\n"
        "• First hour (9:30-10:30) - Most volatile\n"
        "• Last hour (3:00-4:00) - Strong moves\n"
        "• Avoid: 11:00 AM - 2:00 PM (slow)\n\n"
        "**Crypto:** 24/7, never closes\n\n"
        "**Note:** Check your time zone!"
    )),
    _entry("why-stocks-drop", _WHY, r"stock.*(down|drop|fall|crash)", (
        "📉 **Why Stocks Drop**\n\n"
        "**Company reasons:**\n"
        "• Bad earnings report\n"
        "• Lost major customer\n"
        "• CEO departure\n"
        "• Scandal/fraud\n\n"
        "**Market reasons:**\n"
        "• Fed raising rates\n"
        "• Recession fears\n"
        "• Geopolitical events\n"
        "• Sector rotation\n\n"
        "**Remember:**\n"
        "• Drops are normal and healthy\n"
        "• Corrections (10%) happen yearly\n"
        "• Bear markets (20%+) every few years\n"
        "• Long-term trend is always up"
    )),
    _entry("why-traders-lose", _WHY, r"lose money|losing", (
        "💸 **Why Traders Lose Money**\n\n"
        "**Main reasons:**\n"
        "1. **No strategy** - Trading on emotion\n"
        "2. **Overleveraging** - Too much risk\n"
        "3. **No stop-losses** - Letting losers run\n"
        "4. **FOMO** - Buying at the top\n"
        "5. **Overtrading** - Too many trades\n\n"
        "**Statistics:**\n"
        "• 90% of day traders lose money\n"
        "• Average retail trader underperforms market\n\n"
        "**Solution:** Buy and hold index funds beats most active traders."
    )),
    _entry("brokers", _BEST, r"broker|platform|\bapp\b", (
        "📱 **Best Trading Platforms**\n\n"
        "**For beginners:**\n"
        "• **Robinhood** - Simple, commission-free\n"
        "• **Fidelity** - Great research, no minimums\n"
        "• **Charles Schwab** - Full service\n\n"
        "**For active traders:**\n"
        "• **TD Ameritrade** - Best tools\n"
        "• **Interactive Brokers** - Lowest fees\n\n"
        "**For crypto:**\n"
        "• **Coinbase** - Beginner friendly\n"
        "• **Binance** - Most coins, lower fees\n\n"
        "**For EU:**\n"
        "• **eToro** - Social trading\n"
        "• **DEGIRO** - Low fees\n"
        "• **Trading 212** - Free trades"
    )),
    _entry("stocks-to-consider", _BEST, r"stock.*buy|stock.*invest", (
        "🎯 **Stocks to Consider**\n\n"
        "**Blue chips (safer):**\n"
        "• AAPL, MSFT, GOOGL, AMZN\n"
        "• JNJ, PG, KO (defensive)\n\n"
        "**Growth (higher risk/reward):**\n"
        "• NVDA, AMD (AI/chips)\n"
        "• TSLA (EV)\n"
        "• META (social/VR)\n\n"
        "**ETFs (diversified):**\n"
        "• SPY (S&P 500)\n"
        "• QQQ (Nasdaq 100)\n"
        "• VTI (Total market)\n\n"
        "⚠️ **Not financial advice** - Always do your own research!"
    )),
    _entry("day-trading", _SHOULD, r"day trade", (
        "🤔 **Should You Day Trade?**\n\n"
        "**Probably not, because:**\n"
        "• 90% lose money\n"
        "• Need $25k minimum (US)\n"
        "• Very stressful full-time job\n"
        "• Taxes eat profits\n\n"
        "**Better alternatives:**\n"
        "• Swing trading (days to weeks)\n"
        "• Position trading (weeks to months)\n"
        "• Buy and hold (years)\n\n"
        "**If you still want to try:**\n"
        "• Paper trade for 6+ months first\n"
        "• Only use money you can lose\n"
        "• Start with small positions"
    )),
    _entry("crypto-investing", _SHOULD, r"crypto|bitcoin", (
        "🤔 **Should You Invest in Crypto?**\n\n"
        "**Pros:**\n"
        "• Huge upside potential\n"
        "• 24/7 markets\n"
        "• New technology\n\n"
        "**Cons:**\n"
        "• Extremely volatile\n"
        "• No fundamentals to analyze\n"
        "• Regulatory uncertainty\n"
        "• Many scams\n\n"
        "**My take:**\n"
        "• Only 1-5% of portfolio max\n"
        "• Stick to BTC/ETH\n"
        "• Use cold storage for safety\n"
        "• Be ready to lose it all"
    )),
    _entry("stocks-vs-etfs", _DIFFERENCE, r"stock.*etf", (
        "📊 **Stocks vs ETFs**\n\n"
        "**Stocks:**\n"
        "• Single company ownership\n"
        "• Higher risk/reward\n"
        "• You pick the winners\n"
        "• More research needed\n\n"
        "**ETFs:**\n"
        "• Basket of many stocks\n"
        "• Instant diversification\n"
        "• Lower risk\n"
        "• Set and forget\n\n"
        "**Verdict:** Beginners should start with ETFs, add individual stocks as you learn."
    )),
    _entry("investing-vs-trading", _DIFFERENCE, r"invest.*trad|trading.*invest", (
        "📊 **Investing vs Trading**\n\n"
        "**Investing:**\n"
        "• Long-term (years)\n"
        "• Buy and hold\n"
        "• Focus on fundamentals\n"
        "• Less stress, less time\n"
        "• Most successful approach\n\n"
        "**Trading:**\n"
        "• Short-term (days/weeks)\n"
        "• Buy and sell frequently\n"
        "• Focus on technicals\n"
        "• Very stressful, time-consuming\n"
        "• Most people lose\n\n"
        "**My advice:** Start as investor, trade only with money you can lose."
    )),
]

_BY_TOPIC = {entry.topic: entry for entry in KNOWLEDGE_BASE}


def match_topic(message: str) -> str | None:
    """Topic key of the first row whose question phrasing and keyword both match."""
    for entry in KNOWLEDGE_BASE:
        if entry.question.search(message) and entry.keyword.search(message):
            return entry.topic
    return None


def answer(topic: str) -> str:
    return _BY_TOPIC[topic].answer
