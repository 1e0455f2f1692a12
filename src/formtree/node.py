"""
Base class for everything that lives in a form tree.

A node stores its base name (what the caller asked for) and derives its
full name from it and its container. The container link is weak; the
container holds its children strongly.
"""

import logging
import weakref
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

from formtree.arrays import as_mapping, is_mapping_like, stringify
from formtree.errors import CannotSetOwnAncestor, ContainerMustAlreadyHaveChild, InvalidName, ReadonlyAttribute
from formtree.events import AttributeChanged, ContainerChanged, EventHandler, NameChanged
from formtree.ids import IdGenerator, get_default_generator
from formtree.name_tools import generate_name

if TYPE_CHECKING:
    from formtree.container import Container
    from formtree.data_sources import DataSource
    from formtree.form import Form

logger = logging.getLogger(__name__)

Filter = Tuple[Callable[..., Any], Tuple[Any, ...]]


class Node(ABC):
    """Abstract tree node: naming, ids, container link, filters, events."""

    # Attributes routed through set_name() and set_id()
    watched_attributes: Tuple[str, ...] = ('id', 'name')
    readonly_attributes: Tuple[str, ...] = ()

    def __init__(self, name: Optional[str] = None, *, id: Optional[str] = None,
                 data: Optional[Dict[str, Any]] = None,
                 id_generator: Optional[IdGenerator] = None,
                 attributes: Optional[Dict[str, Any]] = None):
        self._base_name: Optional[str] = None
        self._name: Optional[str] = None
        self._id: Optional[str] = None
        self._container_ref: Optional[weakref.ref] = None
        self._data: Dict[str, Any] = dict(data or {})
        self._attributes: Dict[str, str] = {}
        self._filters: List[Filter] = []
        self._recursive_filters: List[Filter] = []
        self._id_generator = id_generator if id_generator is not None else get_default_generator()
        self.event_handler = EventHandler()
        self.set_name(name)
        self.set_id(id)
        for attribute, value in (attributes or {}).items():
            attribute = attribute.lower()
            if attribute not in self.watched_attributes:
                self._attributes[attribute] = attribute if value is None else stringify(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, id={self._id!r})"

    # ------------------------------------------------------------------ names

    @property
    def base_name(self) -> Optional[str]:
        return self._base_name

    @property
    def name(self) -> Optional[str]:
        return self._name

    def is_name_nullable(self) -> bool:
        return False

    def set_name(self, name: Optional[str]) -> 'Node':
        if name is None and not self.is_name_nullable():
            raise InvalidName(f"{type(self).__name__} name cannot be None")
        if name == self._base_name:
            return self
        old_name = self._name
        self._base_name = name
        self._name = self._derive_name(self.container)
        if old_name != self._name:
            logger.debug(f"Renamed {type(self).__name__} {old_name!r} -> {self._name!r}")
            self.event_handler.trigger(NameChanged(self, old_name, self._name))
        self.update_value()
        return self

    def _derive_name(self, container: Optional['Container']) -> Optional[str]:
        return generate_name(self._base_name, container)

    def refresh_name(self) -> bool:
        """Re-derive the full name from the container; True if it changed."""
        old_name = self._name
        self._name = self._derive_name(self.container)
        if old_name == self._name:
            return False
        logger.debug(f"Re-derived name {old_name!r} -> {self._name!r}")
        self.event_handler.trigger(NameChanged(self, old_name, self._name))
        self.update_value()
        return True

    # -------------------------------------------------------------------- ids

    @property
    def id(self) -> Optional[str]:
        return self._id

    def set_id(self, id: Optional[str] = None) -> 'Node':
        """Set an explicit id, or generate one from the name when None."""
        if id is not None and id == self._id:
            return self
        if id is None:
            id = self._id_generator.generate(self._name)
        else:
            self._id_generator.reserve(id)
        self._id = id
        container = self.container
        if container is not None:
            container.invalidate_lookup()
        return self

    def get_id_generator(self) -> IdGenerator:
        return self._id_generator

    # -------------------------------------------------------------- container

    @property
    def container(self) -> Optional['Container']:
        return self._container_ref() if self._container_ref is not None else None

    def has_container_parent(self, container: Optional['Container']) -> bool:
        """True if self is container or one of its ancestors."""
        while container is not None:
            if container is self:
                return True
            container = container.container
        return False

    def set_container(self, container: Optional['Container']) -> 'Node':
        """
        Link this node to container (or unlink with None).

        The container must already list the node; use Container.append_child()
        and friends rather than calling this directly.
        """
        if container is not None:
            if self.has_container_parent(container):
                raise CannotSetOwnAncestor(
                    f"Cannot set {self!r} as a child of its own descendant {container!r}")
            if not container.has_child(self):
                raise ContainerMustAlreadyHaveChild(
                    f"{container!r} has to contain {self!r} before it can be set as its container")
        previous = self.container
        if previous is container:
            return self
        self._container_ref = weakref.ref(container) if container is not None else None
        old_name = self._name
        self._name = self._derive_name(container)
        logger.debug(f"Moved {self!r}: {previous!r} -> {container!r}")
        self.event_handler.trigger(ContainerChanged(self, previous, container))
        if old_name != self._name:
            self.event_handler.trigger(NameChanged(self, old_name, self._name))
        if container is not None:
            self.update_value()
        return self

    def get_nesting_depth(self) -> int:
        depth = 0
        container = self.container
        while container is not None:
            depth += 1
            container = container.container
        return depth

    def get_form(self) -> Optional['Form']:
        from formtree.form import Form

        node: Optional[Node] = self
        while node is not None:
            if isinstance(node, Form):
                return node
            node = node.container
        return None

    def get_data_sources(self) -> List['DataSource']:
        container = self.container
        return container.get_data_sources() if container is not None else []

    # ----------------------------------------------------------------- values

    @abstractmethod
    def get_raw_value(self) -> Any:
        """Value without filters applied."""

    @abstractmethod
    def set_value(self, value: Any) -> 'Node':
        """Set the node's value; returns self for chaining."""

    @abstractmethod
    def update_value(self) -> None:
        """Re-resolve the value from the form's data sources."""

    def get_value(self) -> Any:
        value = self.get_raw_value()
        if value is None:
            return None
        return self._apply_filters(value)

    def add_filter(self, callback: Callable[..., Any], *args) -> 'Node':
        """Filter applied to this node's value as a whole."""
        if not callable(callback):
            raise TypeError(f"Filter should be callable, got {type(callback).__name__}")
        self._filters.append((callback, args))
        return self

    def add_recursive_filter(self, callback: Callable[..., Any], *args) -> 'Node':
        """Filter applied to every leaf value at and below this node."""
        if not callable(callback):
            raise TypeError(f"Filter should be callable, got {type(callback).__name__}")
        self._recursive_filters.append((callback, args))
        return self

    def _apply_filters(self, value: Any) -> Any:
        for callback, args in self._filters:
            value = callback(value, *args)
        return value

    @staticmethod
    def _apply_recursive(value: Any, filters: List[Filter]) -> Any:
        if is_mapping_like(value):
            walked = {key: Node._apply_recursive(item, filters)
                      for key, item in as_mapping(value).items()}
            return list(walked.values()) if isinstance(value, (list, tuple)) else walked
        for callback, args in filters:
            value = callback(value, *args)
        return value

    # ----------------------------------------------------------------- events

    def on_name_changed(self, callback: Callable[..., Any], *args) -> int:
        return self.event_handler.add_listener(NameChanged, callback, *args)

    def on_container_changed(self, callback: Callable[..., Any], *args) -> int:
        return self.event_handler.add_listener(ContainerChanged, callback, *args)

    def on_attribute_changed(self, callback: Callable[..., Any], *args) -> int:
        return self.event_handler.add_listener(AttributeChanged, callback, *args)

    def remove_listener(self, listener_id: int) -> None:
        self.event_handler.remove_listener(listener_id)

    # ------------------------------------------------------------- attributes

    def get_attribute(self, name: str) -> Optional[str]:
        name = name.lower()
        if name == 'name':
            return self._name
        if name == 'id':
            return self._id
        return self._attributes.get(name)

    def get_attributes(self) -> Dict[str, str]:
        """All attributes, name and id included when set."""
        attributes: Dict[str, str] = {}
        if self._id is not None:
            attributes['id'] = self._id
        if self._name is not None:
            attributes['name'] = self._name
        attributes.update(self._attributes)
        return attributes

    def set_attribute(self, name: str, value: Any = None) -> 'Node':
        """
        Set an HTML attribute; a None value sets it to its own name.

        ``name`` and ``id`` go through set_name() and set_id(), so renaming
        by attribute cascades exactly like renaming by method. Listeners get
        AttributeChanged only when the stored value actually changes.
        """
        name = name.lower()
        new_value = name if value is None else stringify(value)
        old_value = self.get_attribute(name)
        if new_value == (self._base_name if name == 'name' else old_value):
            return self
        if name in self.readonly_attributes:
            raise ReadonlyAttribute(f"The attribute '{name}' of {self!r} is read-only")
        if name == 'name':
            self.set_name(new_value)
        elif name == 'id':
            self.set_id(new_value)
        else:
            self._attributes[name] = new_value
        self._attribute_changed(name, old_value)
        return self

    def remove_attribute(self, name: str) -> 'Node':
        """Remove an attribute; removing ``id`` generates a fresh one."""
        name = name.lower()
        old_value = self.get_attribute(name)
        if old_value is None:
            return self
        if name in self.readonly_attributes:
            raise ReadonlyAttribute(f"The attribute '{name}' of {self!r} is read-only")
        if name == 'name':
            self.set_name(None)
        elif name == 'id':
            self.set_id(None)
        else:
            del self._attributes[name]
        self._attribute_changed(name, old_value)
        return self

    def _attribute_changed(self, name: str, old_value: Optional[str]) -> None:
        new_value = self.get_attribute(name)
        if new_value != old_value:
            logger.debug(f"Attribute '{name}' of {self!r}: {old_value!r} -> {new_value!r}")
            self.event_handler.trigger(AttributeChanged(self, name, old_value, new_value))

    # ------------------------------------------------------------------- data

    @property
    def data(self) -> Dict[str, Any]:
        return self._data

    @property
    def label(self) -> Optional[str]:
        return self._data.get('label')

    def set_label(self, label: Optional[str]) -> 'Node':
        self._data['label'] = label
        return self
