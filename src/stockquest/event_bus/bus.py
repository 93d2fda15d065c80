"""Event Bus Implementation.

This module provides the main EventBus class that handles subscription and
emission. Delivery is synchronous: ``emit`` calls every subscriber on the
caller's thread and returns once all of them have been attempted.

## Key Features

- **Typed Events**: Every event identifier is bound to one Pydantic payload model
- **Snapshot Delivery**: Subscribers added or removed during an emit do not
  affect that emit
- **Error Isolation**: A failing subscriber never blocks the others or the emitter
- **One-shot Subscriptions**: ``subscribe_once`` removes itself before firing
- **Default Instance**: Shared bus via ``get_event_bus`` (cached), independent
  buses via ``create_event_bus``

## Advanced Usage

```python
from stockquest.event_bus import get_event_bus
from stockquest.events import GAME_ACHIEVEMENT, ORDER_FILLED, OrderFilled

bus = get_event_bus()

def update_portfolio(event: OrderFilled) -> None:
    ...

unsubscribe = bus.subscribe(ORDER_FILLED, update_portfolio)
bus.subscribe_once(GAME_ACHIEVEMENT, lambda event: print(event.name))

bus.emit(ORDER_FILLED, OrderFilled(order_id="1", ticker="ZAP", price=150, shares=10))

# Plain mappings are validated against the payload model
bus.emit("order:filled", {"orderId": "2", "ticker": "ZAP", "price": 151, "shares": 5})

unsubscribe()
```

"""

from collections.abc import Callable, Mapping
from functools import lru_cache, partial
from typing import Any

from loguru import logger
from pydantic import BaseModel

from .core import (
    EventCatalog,
    EventEmissionError,
    EventId,
    HandlerRegistrationError,
    Listener,
    P,
    Subscription,
    Unsubscribe,
    UnknownEventError,
)


class EventBus:
    """In-process publish/subscribe bus for typed game events.

    Each instance owns its registry; independent buses never share
    subscribers. Callbacks run sequentially and must not block.

    Example:
        ```python
        bus = create_event_bus()
        unsubscribe = bus.subscribe(MARKET_TICK, on_tick)
        bus.emit(MARKET_TICK, MarketTick(turn=1, prices={"ZAP": 150.0}))
        unsubscribe()
        ```
    """

    def __init__(self, catalog: EventCatalog | None = None) -> None:
        """Initialize a new EventBus instance.

        Args:
            catalog: Catalog used to resolve bare event names. Without one,
                only ``EventId`` instances are accepted.
        """
        self._catalog = catalog
        self._subscriptions: dict[EventId[Any], list[Subscription]] = {}
        logger.debug(f"EventBus initialized (catalog={f'v{catalog.version}' if catalog is not None else None})")

    def subscribe(self, event: EventId[P] | str, listener: Callable[[P], Any]) -> Unsubscribe:
        """Register a listener for future emissions of ``event``.

        Subscribing the same listener to the same event twice keeps a single
        subscription; the second call returns a handle to the existing one.

        Args:
            event: The event identifier (or its catalog name)
            listener: Callable receiving the payload

        Returns:
            A zero-argument handle removing this subscription. Calling it more
            than once is a no-op.

        Raises:
            HandlerRegistrationError: If listener is not callable or the event is unknown
        """
        return self._add(event, listener, once=False)

    def subscribe_once(self, event: EventId[P] | str, listener: Callable[[P], Any]) -> Unsubscribe:
        """Register a listener for the next emission of ``event`` only.

        The subscription is removed right before the listener runs, so a
        listener emitting the same event again does not see its own emission.

        Returns:
            A handle that cancels the subscription if it has not fired yet.
        """
        return self._add(event, listener, once=True)

    def emit(self, event: EventId[P] | str, payload: P | Mapping[str, Any]) -> None:
        """Deliver ``payload`` to every current subscriber of ``event``.

        Subscribers are called in registration order over a snapshot taken at
        the start of the call. Exceptions raised by subscribers are logged and
        swallowed; delivery continues with the next subscriber.

        Args:
            event: The event identifier (or its catalog name)
            payload: Instance of the event's payload model, or a mapping
                validated into it

        Raises:
            EventEmissionError: If the payload does not match the event or the
                event is unknown
        """
        event_id = self._resolve(event, EventEmissionError)
        payload = event_id.validate(payload)

        subscriptions = self._subscriptions.get(event_id)
        if not subscriptions:
            logger.trace(f"No subscribers for {event_id}")
            return

        snapshot = tuple(subscriptions)
        logger.debug(f"Emitting {event_id} to {len(snapshot)} subscribers")

        attempted = failed = 0
        for subscription in snapshot:
            if subscription.once:
                # A one-shot subscription may sit in several snapshots when emits nest
                if subscription.fired:
                    continue
                subscription.fired = True
                self._remove(subscription)

            attempted += 1
            try:
                subscription.listener(payload)
            except Exception as e:
                failed += 1
                logger.opt(exception=e).error(f"Subscriber {subscription.listener!r} failed for {event_id}: {e}")

        if failed:
            logger.warning(f"Event {event_id}: {attempted - failed} successful, {failed} failed subscribers")

    def unsubscribe_all(self, event: EventId[Any] | str) -> None:
        """Remove every subscription for ``event``."""
        subscriptions = self._subscriptions.pop(event, None)
        if subscriptions is None:
            return

        for subscription in subscriptions:
            subscription.active = False
        logger.debug(f"Removed {len(subscriptions)} subscribers for {event}")

    def clear(self) -> None:
        """Remove every subscription for every event."""
        for subscriptions in self._subscriptions.values():
            for subscription in subscriptions:
                subscription.active = False
        self._subscriptions.clear()
        logger.debug("Cleared all subscribers")

    def subscriber_count(self, event: EventId[Any] | str) -> int:
        """Get the number of live subscriptions for ``event``."""
        return len(self._subscriptions.get(event, ()))

    def registered_events(self) -> list[EventId[Any]]:
        """Get all events that currently have at least one subscriber."""
        return list(self._subscriptions.keys())

    on = subscribe
    once = subscribe_once
    off = unsubscribe_all

    def _add(self, event: EventId[Any] | str, listener: Listener, *, once: bool) -> Unsubscribe:
        if not callable(listener):
            raise HandlerRegistrationError(f"Listener must be callable: {listener!r}")

        event_id = self._resolve(event, HandlerRegistrationError)
        subscriptions = self._subscriptions.setdefault(event_id, [])

        if not once:
            for existing in subscriptions:
                if not existing.once and existing.listener == listener:
                    logger.debug(f"Listener {listener!r} already subscribed to {event_id}")
                    return partial(self._remove, existing)

        subscription = Subscription(event_id, listener, once=once)
        subscriptions.append(subscription)
        logger.debug(f"Subscribed {'once ' if once else ''}to {event_id}: {listener!r}")
        return partial(self._remove, subscription)

    def _remove(self, subscription: Subscription) -> None:
        if not subscription.active:
            return
        subscription.active = False

        subscriptions = self._subscriptions.get(subscription.event)
        if subscriptions is None or subscription not in subscriptions:
            return

        subscriptions.remove(subscription)
        if not subscriptions:
            del self._subscriptions[subscription.event]
        logger.trace(f"Unsubscribed from {subscription.event}: {subscription.listener!r}")

    def _resolve(self, event: EventId[Any] | str, error: type[Exception]) -> EventId[Any]:
        if self._catalog is not None:
            try:
                return self._catalog.resolve(event)
            except UnknownEventError as e:
                raise error(str(e)) from e

        if isinstance(event, EventId):
            return event
        raise error(f"Event must be an EventId when the bus has no catalog, got: {event!r}")


def create_event_bus(catalog: EventCatalog | None = None) -> EventBus:
    """Create an independent EventBus bound to the game event catalog.

    Args:
        catalog: Catalog to bind instead of ``stockquest.events.EVENT_CATALOG``
    """
    if catalog is None:
        from stockquest.events import EVENT_CATALOG

        catalog = EVENT_CATALOG
    return EventBus(catalog)


@lru_cache
def get_event_bus() -> EventBus:
    """Get or create the shared EventBus instance.

    Returns:
        The EventBus instance

    Example:
        ```python
        bus = get_event_bus()
        bus.subscribe(MARKET_TICK, on_tick)
        bus.emit(MARKET_TICK, MarketTick(turn=1, prices={}))
        ```
    """
    return create_event_bus()
