"""Core Event Bus Components.

This module contains the fundamental abstractions the event bus is built on.
They have no knowledge of the game itself; the concrete event catalog lives in
``stockquest.events``.

## Key Components

- **EventId**: Event identifier bound to exactly one payload model
- **EventCatalog**: Closed, versioned table of event identifiers
- **Subscription**: A live binding between an event and a listener
- **EventHandler**: Base class for class-based subscribers
- **EventBusError**: Base exception for all event bus related errors

## Usage Example

```python
from pydantic import BaseModel

from stockquest.event_bus.core import EventCatalog, EventHandler

class OrderFilled(BaseModel):
    order_id: str
    shares: int

catalog = EventCatalog(version=1)
ORDER_FILLED = catalog.register("order:filled", OrderFilled)
catalog.close()

class FillCounter(EventHandler[OrderFilled]):
    def __init__(self):
        self.fills = 0

    def handle(self, event: OrderFilled) -> None:
        self.fills += event.shares
```

"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

P = TypeVar("P", bound=BaseModel)

Listener = Callable[[Any], Any]
Unsubscribe = Callable[[], None]


class EventBusError(Exception):
    """Base exception for all event bus related errors.

    Use this for catching any event bus related error:
        ```python
        try:
            bus.emit(ORDER_FILLED, payload)
        except EventBusError as e:
            logger.error(f"Event bus error: {e}")
        ```
    """


class HandlerRegistrationError(EventBusError):
    """Raised when a subscription cannot be registered.

    This occurs when:
    - The listener is not callable
    - The event name is not part of the bus catalog
    """


class EventEmissionError(EventBusError):
    """Raised when an emission is rejected before delivery.

    This occurs when:
    - The payload does not match the model bound to the event
    - The event name is not part of the bus catalog
    """


class CatalogError(EventBusError):
    """Raised when an event catalog is modified incorrectly."""


class UnknownEventError(EventBusError, KeyError):
    """Raised when an event name cannot be resolved through a catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown event: {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class EventId(str, Generic[P]):
    """Event identifier statically bound to one payload model.

    An ``EventId`` behaves like its plain name everywhere a string is expected
    (equality, hashing, formatting), so registries keyed by it can be queried
    with the bare name. The type parameter lets type checkers reject listeners
    and payloads that do not match the event.
    """

    payload_type: type[P]

    def __new__(cls, name: str, payload_type: type[P]) -> "EventId[P]":
        instance = super().__new__(cls, name)
        instance.payload_type = payload_type
        return instance

    def __getnewargs__(self) -> tuple[str, type[P]]:
        return str(self), self.payload_type

    def __repr__(self) -> str:
        return f"EventId({str.__repr__(self)}, {self.payload_type.__name__})"

    def validate(self, payload: Any) -> P:
        """Return ``payload`` as an instance of the bound payload model.

        Instances of the model are passed through untouched. Mappings are
        validated into the model, accepting field names or their aliases.

        Raises:
            EventEmissionError: If the payload does not fit the bound model
        """
        if isinstance(payload, self.payload_type):
            return payload

        if isinstance(payload, Mapping):
            try:
                return self.payload_type.model_validate(payload)
            except ValidationError as e:
                raise EventEmissionError(f"Invalid payload for {self}: {e}") from e

        raise EventEmissionError(
            f"Payload for {self} must be {self.payload_type.__name__}, got: {type(payload).__name__}"
        )


class EventCatalog:
    """Closed, versioned table of event identifiers.

    Identifiers are added with :meth:`register` while the catalog is open.
    Once :meth:`close` has been called the table is fixed for the lifetime of
    the process.
    """

    def __init__(self, version: int = 1) -> None:
        self.version = version
        self._events: dict[str, EventId[Any]] = {}
        self._closed = False

    def register(self, name: str, payload_type: type[P]) -> EventId[P]:
        """Bind ``name`` to ``payload_type`` and return the new identifier.

        Raises:
            CatalogError: If the catalog is closed, the name is taken or the
                payload type is not a Pydantic model
        """
        if self._closed:
            raise CatalogError(f"Catalog v{self.version} is closed, cannot register {name!r}")
        if name in self._events:
            raise CatalogError(f"Event {name!r} is already bound to {self._events[name].payload_type.__name__}")
        if not (isinstance(payload_type, type) and issubclass(payload_type, BaseModel)):
            raise CatalogError(f"Payload type must be a Pydantic BaseModel subclass, got: {payload_type}")

        event_id = EventId(name, payload_type)
        self._events[name] = event_id
        return event_id

    def close(self) -> None:
        """Freeze the catalog; further registrations are rejected."""
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def resolve(self, event: str) -> EventId[Any]:
        """Return the catalog identifier for an ``EventId`` or a bare name.

        Raises:
            UnknownEventError: If the name is not part of the catalog
        """
        try:
            return self._events[event]
        except KeyError:
            raise UnknownEventError(str(event)) from None

    def __contains__(self, event: object) -> bool:
        return event in self._events

    def __iter__(self) -> Iterator[EventId[Any]]:
        return iter(self._events.values())

    def __len__(self) -> int:
        return len(self._events)


@dataclass(eq=False)
class Subscription:
    """A live binding between an event and a listener.

    Subscriptions compare by identity: two registrations of the same listener
    are only ever the same subscription if the bus decided to reuse it.
    """

    event: EventId[Any]
    listener: Listener
    once: bool = False
    active: bool = True
    fired: bool = False


class EventHandler(ABC, Generic[P]):
    """Base class for class-based subscribers.

    Handlers inherit from this class and implement :meth:`handle`. Instances
    are callable, so they can be passed to ``EventBus.subscribe`` directly.
    The generic type parameter names the payload model the handler processes.
    """

    @abstractmethod
    def handle(self, event: P) -> Any:
        """Handle one delivered payload.

        Exceptions raised here are caught and logged by the event bus; they
        never reach the emitter.
        """

    def __call__(self, event: P) -> Any:
        return self.handle(event)
