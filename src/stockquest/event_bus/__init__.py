"""Event Bus System for Decoupled Game Modules.

This module provides the in-process event bus that lets the market simulation,
order handling, portfolio and UI modules talk to each other without knowing
about each other. It supports:

- **Typed Events**: Each event identifier is bound to one Pydantic payload model
- **Synchronous Fan-out**: ``emit`` returns after every subscriber has run
- **Error Isolation**: Subscriber failures are logged, never propagated
- **One-shot Subscriptions**: ``subscribe_once`` fires at most once
- **Explicit Unsubscription**: ``subscribe`` returns an idempotent handle

## Quick Start

```python
from stockquest.event_bus import create_event_bus
from stockquest.events import ORDER_FILLED, OrderFilled

def on_fill(event: OrderFilled) -> None:
    print(f"Filled {event.shares} x {event.ticker} @ {event.price}")

bus = create_event_bus()
unsubscribe = bus.subscribe(ORDER_FILLED, on_fill)
bus.emit(ORDER_FILLED, OrderFilled(order_id="1", ticker="ZAP", price=150, shares=10))
unsubscribe()
```

For the catalog and class-based handlers, see `core.py`.
For the full API reference, see `bus.py`.

"""

from .bus import EventBus, create_event_bus, get_event_bus
from .core import (
    CatalogError,
    EventBusError,
    EventCatalog,
    EventEmissionError,
    EventHandler,
    EventId,
    HandlerRegistrationError,
    Unsubscribe,
    UnknownEventError,
)

__all__ = [
    "CatalogError",
    "EventBus",
    "EventBusError",
    "EventCatalog",
    "EventEmissionError",
    "EventHandler",
    "EventId",
    "HandlerRegistrationError",
    "Unsubscribe",
    "UnknownEventError",
    "create_event_bus",
    "get_event_bus",
]
