"""
Static keyword tables used by the intent router and the action executor.

Kept as plain data so the tables can be tested independently of the
routing logic. STOP_WORDS is load-bearing: any word listed here is never
treated as a ticker, even when it is upper-case and 3-5 letters long.
"""

import re

FILLER_WORDS: frozenset[str] = frozenset({
    "ok", "yes", "no", "sure", "yep", "nope", "yeah", "nah", "fine", "cool",
    "nice", "great", "thanks", "thx", "ty", "k", "kk",
})

STOP_WORDS: frozenset[str] = frozenset({
    # two-letter words
    "IT", "IS", "IN", "ON", "AT", "TO", "OF", "OR", "AN", "AS", "BY", "DO", "GO", "HE", "IF", "ME", "MY", "NO",
    "OK", "SO", "UP", "US", "WE", "AM", "BE", "HA", "HI", "HM", "ID", "IM", "LA", "LO", "MA", "OH", "OW", "OX",
    # basic english
    "THE", "AND", "FOR", "ARE", "BUT", "NOT", "YOU", "ALL", "CAN", "HAD", "HER", "HIS", "WAS", "ONE", "OUR", "OUT",
    "HOW", "BUY", "SELL", "NOW", "TODAY", "WHAT", "SHOULD", "ABOUT", "TELL", "SHOW", "MAKE", "HAVE", "WHERE", "WHY",
    "THEM", "INTO", "WANT", "WITH", "THIS", "THAT", "FROM", "WILL", "WOULD", "COULD", "JUST", "LIKE", "SOME", "ANY",
    "WHEN", "YOUR", "BEEN", "MORE", "ALSO", "THEY", "THAN", "THEN", "ONLY", "COME", "MADE", "FIND", "HERE", "THERE",
    "MANY", "GIVE", "GOOD", "MOST", "VERY", "OVER", "SUCH", "TAKE", "MUCH", "WELL", "BACK", "TURN", "EVEN", "STILL",
    "NEED", "HELP", "HIGH", "YEAR", "EACH", "DOES", "LOOK", "BEST", "KEEP", "MUST", "WENT", "KNOW", "LONG", "TIME",
    "ABLE", "AFTER", "BEFORE", "BEING", "BOTH", "CALL", "CASE", "DOWN", "FACT", "FEEL", "FEW",
    "GET", "GOT", "GREAT", "GROUP", "HAND", "HEAD", "HOME", "HOUSE", "IDEA", "KIND",
    "LAST", "LATE", "LEFT", "LET", "LIFE", "LINE", "LIVE", "LOVE", "MAN", "MAY", "MEAN", "MEN", "MIGHT", "MIND",
    "MOVE", "NAME", "NEW", "NEXT", "NIGHT", "NUMBER", "OFF", "OLD", "ONCE", "OPEN", "ORDER", "OTHER",
    "OWN", "PART", "PARTY", "PAST", "PAY", "PEOPLE", "PLACE", "PLAN", "PLAY", "POINT", "POWER", "PUT", "QUESTION",
    "READ", "REAL", "RIGHT", "RUN", "SAID", "SAME", "SAY", "SEE", "SEEM", "SET", "SHE", "SIDE", "SINCE", "SMALL",
    "SOMETHING", "STATE", "STORY", "STUDY", "SURE", "SYSTEM", "THESE", "THING", "THINK",
    "THOSE", "THOUGH", "THREE", "THROUGH", "TOO", "TRY", "TWO", "UNDER", "USE", "USED", "WAY", "WEEK",
    "WHILE", "WHO", "WORD", "WORK", "WORLD", "WRITE", "YEARS", "YES", "YET", "YOUNG",
    # question words
    "WHICH", "WHOSE", "WHOM", "WHATEVER", "WHENEVER", "WHEREVER", "WHETHER",
    # pronouns
    "MYSELF", "YOURSELF", "HIMSELF", "HERSELF", "ITSELF", "THEMSELVES", "SOMEONE", "ANYONE", "EVERYONE", "NOBODY",
    # investing vocabulary
    "CHEAP", "EURO", "EUROS", "DOLLAR", "DOLLARS", "POUND", "POUNDS", "YEN", "YUAN",
    "STOCK", "STOCKS", "TRADE", "TRADES", "TRADING", "TRADER", "TRADERS",
    "SAFE", "SAFER", "SAFEST", "RISK", "RISKS", "RISKY", "RISKIER",
    "GROW", "GROWS", "GROWTH", "GROWING", "GROWN",
    "INVEST", "INVESTS", "INVESTED", "INVESTING", "INVESTOR", "INVESTORS", "INVESTMENT", "INVESTMENTS",
    # geography
    "ASIA", "ASIAN", "EUROPE", "EUROPEAN", "AMERICA", "AMERICAN", "AFRICA", "AFRICAN",
    "CHINA", "CHINESE", "JAPAN", "JAPANESE", "KOREA", "KOREAN", "INDIA", "INDIAN",
    "BRAZIL", "BRAZILIAN", "MEXICO", "MEXICAN", "CANADA", "CANADIAN",
    "UK", "USA", "EU", "GERMAN", "GERMANY", "FRENCH", "FRANCE", "ITALY", "ITALIAN", "SPAIN", "SPANISH",
    "DUTCH", "SWISS", "AUSTRALIAN", "RUSSIA", "RUSSIAN",
    # finance terms
    "PORTFOLIO", "PORTFOLIOS", "MONEY", "CASH", "BUDGET", "BUDGETS",
    "PROFIT", "PROFITS", "PROFITABLE", "GAIN", "GAINS", "LOSS", "LOSSES", "LOSING",
    "PRICE", "PRICES", "PRICED", "PRICING", "COST", "COSTS", "COSTING",
    "BULL", "BULLS", "BULLISH", "BEAR", "BEARS", "BEARISH",
    "MARKET", "MARKETS", "TREND", "TRENDS", "TRENDING",
    "CHART", "CHARTS", "CHARTING", "VOLUME", "VOLUMES",
    "SHARE", "SHARES", "SHARING", "SHAREHOLDER",
    "DIVIDEND", "DIVIDENDS", "YIELD", "YIELDS", "YIELDING",
    "INCOME", "INCOMES", "RETURN", "RETURNS", "RETURNING",
    "VALUE", "VALUES", "VALUED", "VALUATION",
    "FEE", "FEES", "TAX", "TAXES", "TAXED",
    "SHORT", "HOLD", "HOLDING", "HOLDINGS", "HELD",
    "CALLS", "PUTS", "OPTION", "OPTIONS",
    "BOND", "BONDS", "FUND", "FUNDS", "FUNDING",
    "ASSET", "ASSETS", "EQUITY", "EQUITIES", "DEBT", "DEBTS",
    "MARGIN", "MARGINS", "LEVERAGE", "LEVERAGED",
    "FOREX", "CURRENCY", "CURRENCIES", "EXCHANGE", "EXCHANGES",
    # sectors
    "GREEN", "GREENER", "GREENEST", "CLEAN", "CLEANER", "CLEANEST",
    "ENERGY", "ENERGIES", "SOLAR", "WIND", "HYDRO", "NUCLEAR",
    "CRYPTO", "CRYPTOS", "COIN", "COINS", "TOKEN", "TOKENS", "BLOCKCHAIN",
    "TECH", "TECHNOLOGY", "TECHNOLOGIES", "TECHNICAL",
    "SOFTWARE", "HARDWARE", "CHIP", "CHIPS", "SEMICONDUCTOR", "SEMICONDUCTORS",
    "SECTOR", "SECTORS", "INDUSTRY", "INDUSTRIES", "INDUSTRIAL",
    "HEALTH", "HEALTHCARE", "PHARMA", "PHARMACEUTICAL", "BIOTECH",
    "BANK", "BANKS", "BANKING", "FINANCE", "FINANCIAL", "FINTECH",
    "ESTATE", "PROPERTY", "PROPERTIES", "REIT", "REITS",
    "RETAIL", "CONSUMER", "CONSUMERS", "LUXURY",
    "AUTO", "AUTOMOTIVE", "CAR", "CARS", "VEHICLE", "VEHICLES", "EV", "EVS",
    "OIL", "GAS", "PETROLEUM", "NATURAL",
    "GOLD", "SILVER", "COPPER", "METAL", "METALS", "MINING",
    "FOOD", "FOODS", "AGRICULTURE", "FARMING",
    # verbs
    "START", "STARTS", "STARTED", "STARTING", "STOP", "STOPS", "STOPPED",
    "BEGIN", "BEGINS", "BEGAN", "BEGINNING", "END", "ENDS", "ENDED", "ENDING",
    "FIRST", "SECOND", "THIRD", "FOURTH", "FIFTH",
    "LEARN", "LEARNS", "LEARNED", "LEARNING", "TEACH", "TEACHES", "TEACHING",
    "GUIDE", "GUIDES", "GUIDED", "GUIDING", "TIPS", "TIP", "ADVICE", "ADVISE",
    "CREATE", "CREATES", "CREATED", "CREATING", "BUILD", "BUILDS", "BUILT", "BUILDING",
    "SUGGEST", "SUGGESTS", "SUGGESTED", "SUGGESTION", "SUGGESTIONS",
    "RECOMMEND", "RECOMMENDS", "RECOMMENDED", "RECOMMENDATION",
    "LIST", "LISTS", "LISTED", "LISTING", "DISPLAY", "DISPLAYS", "DISPLAYED",
    "ADD", "ADDS", "ADDED", "ADDING", "REMOVE", "REMOVES", "REMOVED", "REMOVING",
    "WATCH", "WATCHES", "WATCHED", "WATCHING", "TRACK", "TRACKS", "TRACKED", "TRACKING",
    "ANALYZE", "ANALYZES", "ANALYZED", "ANALYSIS", "COMPARE", "COMPARES", "COMPARED", "COMPARISON",
    # adjectives
    "BETTER", "BAD", "WORSE", "WORST",
    "BIG", "BIGGER", "BIGGEST", "SMALLER", "SMALLEST",
    "HIGHER", "HIGHEST", "LOW", "LOWER", "LOWEST",
    "FAST", "FASTER", "FASTEST", "SLOW", "SLOWER", "SLOWEST",
    "EASY", "EASIER", "EASIEST", "HARD", "HARDER", "HARDEST",
    "QUICK", "QUICKER", "QUICKEST", "SIMPLE", "SIMPLER", "SIMPLEST",
    "NEWER", "NEWEST", "OLDER", "OLDEST",
    "TOP", "BOTTOM", "MIDDLE", "CENTER",
    "FREE", "PAID", "PREMIUM", "BASIC", "ADVANCED", "EXPERT",
    "POPULAR", "COMMON", "RARE", "UNIQUE", "SPECIAL",
    "STABLE", "VOLATILE", "STEADY", "AGGRESSIVE", "CONSERVATIVE", "PASSIVE", "ACTIVE",
    "MONTHLY", "WEEKLY", "DAILY", "YEARLY", "ANNUAL", "QUARTERLY",
    # misc
    "PLEASE", "THANK", "THANKS", "SORRY", "HELLO", "HEY", "BYE", "OKAY", "MAYBE",
    "WANTS", "WANTED", "WANTING", "NEEDS", "NEEDED", "NEEDING",
    "LIKES", "LIKED", "LIKING", "LOVES", "LOVED", "LOVING",
    "THINKS", "THOUGHT", "THINKING", "BELIEVE", "BELIEVES", "BELIEVED",
    "HOPE", "HOPES", "HOPED", "HOPING", "WISH", "WISHES", "WISHED", "WISHING",
    "LOOKING", "TRYING", "GETTING", "GOING", "COMING", "TAKING", "MAKING", "DOING",
    "TOMORROW", "YESTERDAY", "MONTH", "DAY",
    "LATER", "SOON", "NEVER", "ALWAYS", "SOMETIMES", "OFTEN", "RARELY",
    "AROUND", "BETWEEN", "DURING", "UNTIL",
    "REALLY", "ACTUALLY", "PROBABLY", "POSSIBLY", "DEFINITELY", "CERTAINLY", "PERHAPS",
})

# Tokens ignored when a watchlist is created from a free-form list.
LIST_STOP_WORDS: frozenset[str] = frozenset({"AND", "THE", "WITH", "FOR"})

# Tokens that look like a symbol slot in an action template but are pronouns.
ACTION_PLACEHOLDERS: frozenset[str] = frozenset({"IT", "THIS", "THAT", "THEM", "ONE", "SOME", "ALL"})

MULTIPLIER_WORDS: dict[str, float] = {
    "double": 2, "2x": 2, "triple": 3, "3x": 3, "quadruple": 4,
    "5x": 5, "10x": 10, "20x": 20, "50x": 50, "100x": 100,
}

# Theme -> symbols used when the assistant creates a themed portfolio.
# Matched by substring in registration order; the first hit wins.
PORTFOLIO_THEMES: dict[str, list[str]] = {
    "european": ["VGK", "EZU", "ASML", "SAP", "NVO"],
    "europe": ["VGK", "EZU", "ASML", "SAP", "NVO"],
    "cheap": ["VOO", "VTI", "SCHD"],
    "budget": ["VOO", "VTI", "SCHD"],
    "tech": ["AAPL", "MSFT", "NVDA", "GOOGL", "AMD"],
    "technology": ["AAPL", "MSFT", "NVDA", "GOOGL", "AMD"],
    "dividend": ["SCHD", "VYM", "O", "KO", "JNJ"],
    "income": ["SCHD", "VYM", "O", "KO", "JNJ"],
    "growth": ["NVDA", "TSLA", "AMD", "AMZN", "META"],
    "aggressive": ["NVDA", "TSLA", "AMD", "COIN", "PLTR"],
    "safe": ["VOO", "BND", "JNJ", "PG", "KO"],
    "conservative": ["VOO", "BND", "JNJ", "PG", "KO"],
    "beginner": ["VOO", "QQQ", "VTI"],
    "asian": ["VWO", "EWT", "TSM", "BABA", "SONY"],
    "asia": ["VWO", "EWT", "TSM", "BABA", "SONY"],
    "green": ["ICLN", "TAN", "TSLA", "ENPH"],
    "sustainable": ["ICLN", "TAN", "TSLA", "ENPH"],
    "crypto": ["COIN", "MSTR", "SQ"],
}

DEFAULT_THEME = "balanced"
DEFAULT_THEME_SYMBOLS: list[str] = ["VOO", "QQQ", "VEA", "SCHD", "BND"]

THEME_EMOJIS: dict[str, str] = {
    "european": "🇪🇺", "europe": "🇪🇺", "cheap": "💰", "budget": "💰",
    "tech": "💻", "technology": "💻", "dividend": "💵", "income": "💵",
    "growth": "🚀", "aggressive": "🚀", "safe": "🛡️", "conservative": "🛡️",
    "beginner": "🎓", "asian": "🌏", "asia": "🌏", "green": "🌱", "sustainable": "🌱",
    "crypto": "🪙", "balanced": "⚖️",
}

# Strategy-question themes, in the order their sections are rendered.
STRATEGY_THEMES: dict[str, re.Pattern] = {
    "european": re.compile(r"(europe|european|\beu\b|euro)", re.I),
    "asian": re.compile(r"(asia|asian|china|japan|korea)", re.I),
    "cheap": re.compile(r"(cheap|budget|low.?cost|affordable|penny|under\s*\$?\d+)", re.I),
    "tech": re.compile(r"(tech|technology|\bai\b|semiconductor|software)", re.I),
    "dividend": re.compile(r"(dividend|income|yield|passive)", re.I),
    "growth": re.compile(r"(growth|aggressive|high.?return)", re.I),
    "safe": re.compile(r"(safe|conservative|stable|low.?risk|beginner)", re.I),
    "crypto": re.compile(r"(crypto|bitcoin|ethereum)", re.I),
    "green": re.compile(r"(green|sustainable|esg|clean|energy)", re.I),
}

# Topical fallback buckets, checked in order.
TOPICAL_BUCKETS: list[tuple[str, re.Pattern]] = [
    ("market", re.compile(r"(market|overview|today|\bhow\b)", re.I)),
    ("opportunities", re.compile(r"(\bbuy\b|recommend|opportunit|\bpick)", re.I)),
    ("risk", re.compile(r"(risk|volatil|safe|danger)", re.I)),
    ("crypto", re.compile(r"(crypto|bitcoin|\bbtc\b|\beth\b)", re.I)),
    ("tech", re.compile(r"(tech|semiconductor|chip)", re.I)),
]

TECH_SECTOR: list[str] = ["AAPL", "MSFT", "GOOGL", "NVDA", "META", "AMD"]
