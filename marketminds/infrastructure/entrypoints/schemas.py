"""
Pydantic schemas for the HTTP surface.

Response models read straight from the domain dataclasses
(from_attributes); request models carry the input constraints.
No business logic belongs here.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class _FromEntity(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class SourceSchema(_FromEntity):
    title: str
    url: str


class QuoteSchema(_FromEntity):
    symbol: str
    display_name: str
    price: str
    absolute_change: str
    percent_change: str
    is_positive: bool
    last_updated: datetime


class QuoteListResponse(_FromEntity):
    data: list[QuoteSchema]
    sources: list[SourceSchema] = []


class CategoryResponse(BaseModel):
    category: str
    data: list[QuoteSchema]


class HistoryPointSchema(_FromEntity):
    label: str
    price: float


class HistoryResponseSchema(_FromEntity):
    symbol: str
    time_range: str
    history: list[HistoryPointSchema]
    sources: list[SourceSchema] = []
    synthetic: bool = False


class NewsItemSchema(_FromEntity):
    title: str
    source: str
    time: str
    url: str


class NewsResponseSchema(_FromEntity):
    news: list[NewsItemSchema]
    sources: list[SourceSchema] = []


class MessageSchema(_FromEntity):
    id: str
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime


class SendMessageRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=2000, description="User chat message")
    session_id: Optional[str] = Field(None, max_length=128, description="Tracing session id")


class TurnResponse(BaseModel):
    user_message: MessageSchema
    reply: MessageSchema
    failed: bool


class WatchlistRequest(BaseModel):
    symbol: str = Field(..., min_length=1, max_length=32)


class WatchlistResponse(BaseModel):
    watchlist: list[str]


class PositionRequest(BaseModel):
    symbol: str = Field(..., min_length=1, max_length=32)
    # validated by the workspace so the domain error handler shapes the response
    quantity: float


class PositionValuationSchema(_FromEntity):
    symbol: str
    quantity: float
    price: float
    value: float
    allocation: float


class PortfolioResponse(_FromEntity):
    total_value: float
    positions: list[PositionValuationSchema]
    largest: Optional[PositionValuationSchema] = None
    concentration: str = ""


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
