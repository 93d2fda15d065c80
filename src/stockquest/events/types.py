"""Event type definitions for the game.

This module contains all Pydantic payload models and the closed catalog that
binds each event identifier to its payload. Events are the primary way the
game modules communicate in a decoupled manner.

Adding an event means adding a payload model and one ``EVENT_CATALOG.register``
line below.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stockquest.event_bus.core import EventCatalog

TradeSide = Literal["buy", "sell"]
NewsImpact = Literal["positive", "negative", "neutral"]
NotificationType = Literal["info", "success", "warning", "error"]


class Payload(BaseModel):
    """Base class for event payloads.

    Payloads are immutable. Fields use snake_case names and accept their
    camelCase aliases, so records shaped like ``{"orderId": "1"}`` validate too.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


# Market events


class MarketTick(Payload):
    """Emitted once per simulated turn with the closing prices."""

    turn: int
    prices: dict[str, float] = Field(default_factory=dict)


class PriceChange(Payload):
    ticker: str
    old_price: float
    new_price: float
    change: float


# Order events


class OrderSubmitted(Payload):
    order_id: str
    ticker: str
    side: TradeSide
    quantity: int


class OrderFilled(Payload):
    """Emitted when an order executes, fully or partially."""

    order_id: str
    ticker: str
    price: float
    shares: int


class OrderCancelled(Payload):
    order_id: str


class OrderExpired(Payload):
    order_id: str


# Portfolio events


class PortfolioTrade(Payload):
    ticker: str
    side: TradeSide
    shares: int
    price: float


class PortfolioUpdate(Payload):
    cash: float
    total_value: float


class DividendPaid(Payload):
    ticker: str
    amount: float


# Game events


class GameStarted(Payload):
    mission_id: str


class GamePaused(Payload):
    pass


class GameResumed(Payload):
    pass


class GameEnded(Payload):
    success: bool
    score: int


class AchievementUnlocked(Payload):
    achievement_id: str
    name: str


# News and UI events


class NewsTriggered(Payload):
    """Emitted when a scheduled or random news story fires."""

    event_id: str
    headline: str
    impact: NewsImpact


class Notification(Payload):
    message: str
    type: NotificationType = "info"


EVENT_CATALOG = EventCatalog(version=1)

MARKET_TICK = EVENT_CATALOG.register("market:tick", MarketTick)
MARKET_PRICE_CHANGE = EVENT_CATALOG.register("market:priceChange", PriceChange)

ORDER_SUBMITTED = EVENT_CATALOG.register("order:submitted", OrderSubmitted)
ORDER_FILLED = EVENT_CATALOG.register("order:filled", OrderFilled)
ORDER_CANCELLED = EVENT_CATALOG.register("order:cancelled", OrderCancelled)
ORDER_EXPIRED = EVENT_CATALOG.register("order:expired", OrderExpired)

PORTFOLIO_TRADE = EVENT_CATALOG.register("portfolio:trade", PortfolioTrade)
PORTFOLIO_UPDATE = EVENT_CATALOG.register("portfolio:update", PortfolioUpdate)
PORTFOLIO_DIVIDEND = EVENT_CATALOG.register("portfolio:dividend", DividendPaid)

GAME_START = EVENT_CATALOG.register("game:start", GameStarted)
GAME_PAUSE = EVENT_CATALOG.register("game:pause", GamePaused)
GAME_RESUME = EVENT_CATALOG.register("game:resume", GameResumed)
GAME_END = EVENT_CATALOG.register("game:end", GameEnded)
GAME_ACHIEVEMENT = EVENT_CATALOG.register("game:achievement", AchievementUnlocked)

NEWS_TRIGGERED = EVENT_CATALOG.register("news:triggered", NewsTriggered)

UI_NOTIFICATION = EVENT_CATALOG.register("ui:notification", Notification)

EVENT_CATALOG.close()
