"""
Tagged intent variants produced by the intent router.
Zero external dependencies — pure Python dataclasses only.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Help:
    pass


@dataclass(frozen=True)
class NeedsClarification:
    pass


@dataclass(frozen=True)
class ActionCommand:
    """A parsed action template; *kind* names the template, *symbols* its targets."""

    kind: str
    symbols: tuple[str, ...] = ()
    quantity: float = 0.0
    theme: str = ""


@dataclass(frozen=True)
class InvestmentGoal:
    pass


@dataclass(frozen=True)
class StrategyQuery:
    themes: tuple[str, ...] = ()


@dataclass(frozen=True)
class Knowledge:
    topic: str


@dataclass(frozen=True)
class SingleStockAnalysis:
    symbol: str


@dataclass(frozen=True)
class CompareStocks:
    symbols: tuple[str, ...]


@dataclass(frozen=True)
class Topical:
    tag: str


@dataclass(frozen=True)
class DynamicAnalysis:
    pass


Intent = Union[
    Help,
    NeedsClarification,
    ActionCommand,
    InvestmentGoal,
    StrategyQuery,
    Knowledge,
    SingleStockAnalysis,
    CompareStocks,
    Topical,
    DynamicAnalysis,
]
