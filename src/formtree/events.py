"""
Typed tree events and the per-node listener registry.

Each event is a frozen dataclass; listeners subscribe to an event class and
receive ``(event, listener_id, *args)``. The listener id lets a callback
unsubscribe itself while it is being dispatched.
"""

import itertools
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Tuple, Type

if TYPE_CHECKING:
    from formtree.container import Container
    from formtree.form import Form
    from formtree.node import Node

logger = logging.getLogger(__name__)

# Handles are unique across every EventHandler in the process
_listener_ids = itertools.count(1)


@dataclass(frozen=True)
class Event:
    """Base class for tree events."""


@dataclass(frozen=True)
class NameChanged(Event):
    node: 'Node'
    old_name: Optional[str]
    new_name: Optional[str]


@dataclass(frozen=True)
class ContainerChanged(Event):
    node: 'Node'
    old_container: Optional['Container']
    new_container: Optional['Container']


@dataclass(frozen=True)
class AttributeChanged(Event):
    node: 'Node'
    attribute: str
    old_value: Optional[str]
    new_value: Optional[str]


@dataclass(frozen=True)
class ContainerNameChanged(Event):
    container: 'Container'
    old_name: Optional[str]
    new_name: Optional[str]


@dataclass(frozen=True)
class NodeAdded(Event):
    container: 'Container'
    node: 'Node'


@dataclass(frozen=True)
class FormNodeAdded(Event):
    form: 'Form'
    container: 'Container'
    node: 'Node'


@dataclass(frozen=True)
class _Listener:
    listener_id: int
    event_type: Type[Event]
    callback: Callable[..., Any]
    args: Tuple[Any, ...]


class EventHandler:
    """Synchronous dispatcher owned by a single node."""

    def __init__(self):
        self._listeners: Dict[int, _Listener] = {}

    def add_listener(self, event_type: Type[Event], callback: Callable[..., Any], *args) -> int:
        """Subscribe callback to event_type (and its subclasses).

        Returns:
            Handle to pass to remove_listener()
        """
        listener_id = next(_listener_ids)
        self._listeners[listener_id] = _Listener(listener_id, event_type, callback, args)
        return listener_id

    def remove_listener(self, listener_id: int) -> None:
        """Unsubscribe a handle. Unknown handles are ignored."""
        self._listeners.pop(listener_id, None)

    def has_listeners(self, event_type: Type[Event]) -> bool:
        return self.count_listeners(event_type) > 0

    def count_listeners(self, event_type: Type[Event]) -> int:
        return sum(1 for listener in self._listeners.values()
                   if issubclass(event_type, listener.event_type))

    def trigger(self, event: Event) -> Event:
        """Dispatch event to matching listeners in registration order."""
        snapshot = [listener for listener in self._listeners.values()
                    if isinstance(event, listener.event_type)]
        for listener in snapshot:
            # Skip listeners removed by an earlier callback of this dispatch
            if listener.listener_id not in self._listeners:
                continue
            listener.callback(event, listener.listener_id, *listener.args)
        return event
