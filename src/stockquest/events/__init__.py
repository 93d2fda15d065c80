"""Game event catalog.

This module provides the payload models and event identifiers that the game
modules publish and subscribe to through the event bus.
"""

from stockquest.events.types import (
    EVENT_CATALOG,
    GAME_ACHIEVEMENT,
    GAME_END,
    GAME_PAUSE,
    GAME_RESUME,
    GAME_START,
    MARKET_PRICE_CHANGE,
    MARKET_TICK,
    NEWS_TRIGGERED,
    ORDER_CANCELLED,
    ORDER_EXPIRED,
    ORDER_FILLED,
    ORDER_SUBMITTED,
    PORTFOLIO_DIVIDEND,
    PORTFOLIO_TRADE,
    PORTFOLIO_UPDATE,
    UI_NOTIFICATION,
    AchievementUnlocked,
    DividendPaid,
    GameEnded,
    GamePaused,
    GameResumed,
    GameStarted,
    MarketTick,
    NewsTriggered,
    Notification,
    OrderCancelled,
    OrderExpired,
    OrderFilled,
    OrderSubmitted,
    Payload,
    PortfolioTrade,
    PortfolioUpdate,
    PriceChange,
)

__all__ = [
    "EVENT_CATALOG",
    "GAME_ACHIEVEMENT",
    "GAME_END",
    "GAME_PAUSE",
    "GAME_RESUME",
    "GAME_START",
    "MARKET_PRICE_CHANGE",
    "MARKET_TICK",
    "NEWS_TRIGGERED",
    "ORDER_CANCELLED",
    "ORDER_EXPIRED",
    "ORDER_FILLED",
    "ORDER_SUBMITTED",
    "PORTFOLIO_DIVIDEND",
    "PORTFOLIO_TRADE",
    "PORTFOLIO_UPDATE",
    "UI_NOTIFICATION",
    "AchievementUnlocked",
    "DividendPaid",
    "GameEnded",
    "GamePaused",
    "GameResumed",
    "GameStarted",
    "MarketTick",
    "NewsTriggered",
    "Notification",
    "OrderCancelled",
    "OrderExpired",
    "OrderFilled",
    "OrderSubmitted",
    "Payload",
    "PortfolioTrade",
    "PortfolioUpdate",
    "PriceChange",
]
