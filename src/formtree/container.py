"""
Composite nodes.

A container keeps an ordered list of children, a lazily built id lookup
over all descendants, and turns its children's values into one nested
value map. Plain containers never prefix their children's names; see
formtree.group for containers that do.
"""

import logging
import weakref
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Optional

from formtree.arrays import array_merge, is_mapping_like, listify, normalize_key
from formtree.errors import ChildNotFound, CannotSetOwnAncestor
from formtree.events import ContainerNameChanged, NameChanged, NodeAdded
from formtree.name_tools import generate_name, name_tokens, parse_name, reduce_name
from formtree.node import Node

if TYPE_CHECKING:
    from formtree.elements import (
        InputButton,
        InputCheckbox,
        InputFile,
        InputHidden,
        InputRadio,
        InputText,
        Textarea,
    )
    from formtree.group import Fieldset, Group
    from formtree.value_walker import ValueWalker

logger = logging.getLogger(__name__)

__all__ = ['Container', 'InsertPosition', 'array_merge']


def _release_child(event, listener_id: int, container_ref: weakref.ref) -> None:
    # The child left the container for another one or for none
    event.node.remove_listener(listener_id)
    container = container_ref()
    if container is not None:
        container._discard_child(event.node)


class InsertPosition(Enum):
    APPEND = 'append'
    PREPEND = 'prepend'
    BEFORE = 'before'


class Container(Node):
    """Ordered collection of child nodes."""

    element_type = 'container'

    def __init__(self, name: Optional[str] = None, **kwargs):
        self._elements: List[Node] = []
        self._lookup: Optional[Dict[str, Node]] = None
        self._value_walker: Optional['ValueWalker'] = None
        self.previous_name: Optional[str] = None
        super().__init__(name, **kwargs)
        self.event_handler.add_listener(NameChanged, self._handle_own_name_changed)

    def get_type(self) -> str:
        return self.element_type

    def is_name_nullable(self) -> bool:
        return True

    def prepends_name(self) -> bool:
        """Whether children's names are prefixed with this container's name."""
        return False

    def receives_positional_values(self) -> bool:
        """
        Whether, when nameless, this container takes one positional entry
        of its parent's value rather than the whole of it.
        """
        return False

    def resolve_child_name(self, base_name: Optional[str]) -> Optional[str]:
        return generate_name(base_name, self)

    # -------------------------------------------------------------- children

    def get_elements(self) -> List[Node]:
        return list(self._elements)

    def get_container_elements(self) -> List['Container']:
        return [element for element in self._elements if isinstance(element, Container)]

    def get_group_elements(self) -> List['Group']:
        from formtree.group import Group

        return [element for element in self._elements if isinstance(element, Group)]

    def __iter__(self) -> Iterator[Node]:
        return iter(list(self._elements))

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, node: object) -> bool:
        return self.has_child(node)

    def has_child(self, node: object) -> bool:
        return any(element is node for element in self._elements)

    def iter_descendants(self) -> Iterator[Node]:
        """Depth-first, pre-order."""
        for element in list(self._elements):
            yield element
            if isinstance(element, Container):
                yield from element.iter_descendants()

    # ------------------------------------------------------------- structure

    def append_child(self, node: Node) -> Node:
        return self._insert_child(node, InsertPosition.APPEND)

    def prepend_child(self, node: Node) -> Node:
        return self._insert_child(node, InsertPosition.PREPEND)

    def insert_before(self, node: Node, reference: Optional[Node] = None) -> Node:
        """Insert node before reference; without a reference nothing happens."""
        return self._insert_child(node, InsertPosition.BEFORE, reference)

    def _index_of(self, node: Node) -> int:
        for index, element in enumerate(self._elements):
            if element is node:
                return index
        raise ChildNotFound(f"{node!r} was not found in {self!r}")

    def _insert_child(self, node: Node, position: InsertPosition,
                      reference: Optional[Node] = None) -> Node:
        if position is InsertPosition.BEFORE:
            if reference is None or reference is node:
                return node
            self._index_of(reference)
        if node.has_container_parent(self):
            raise CannotSetOwnAncestor(f"Cannot add {node!r} to its own descendant {self!r}")

        is_reorder = node.container is self and self.has_child(node)
        if is_reorder:
            self._elements = [element for element in self._elements if element is not node]
        if position is InsertPosition.APPEND:
            self._elements.append(node)
        elif position is InsertPosition.PREPEND:
            self._elements.insert(0, node)
        else:
            self._elements.insert(self._index_of(reference), node)
        self.invalidate_lookup()

        if not is_reorder:
            node.set_container(self)
            node.on_container_changed(_release_child, weakref.ref(self))
            self._trigger_node_added(node)
        logger.debug(f"{position.value} {node!r} into {self!r}")
        return node

    def remove_child(self, node: Node) -> Node:
        """Detach node. Removing a non-child is a silent no-op."""
        if self._discard_child(node):
            node.set_container(None)
        return node

    def _discard_child(self, node: Node) -> bool:
        if not self.has_child(node):
            return False
        self._elements = [element for element in self._elements if element is not node]
        self.invalidate_lookup()
        logger.debug(f"Removed {node!r} from {self!r}")
        return True

    def _handle_own_name_changed(self, event, listener_id: int) -> None:
        self.previous_name = event.old_name
        try:
            self.event_handler.trigger(ContainerNameChanged(self, event.old_name, event.new_name))
            for child in list(self._elements):
                child.refresh_name()
        finally:
            self.previous_name = None

    def _trigger_node_added(self, node: Node) -> None:
        self.event_handler.trigger(NodeAdded(self, node))
        form = self.get_form()
        if form is not None:
            form.handle_node_added(self, node)

    # ----------------------------------------------------------------- lookup

    def invalidate_lookup(self) -> None:
        container: Optional[Container] = self
        while container is not None:
            container._lookup = None
            container = container.container

    def _get_lookup(self) -> Dict[str, Node]:
        if self._lookup is None:
            lookup: Dict[str, Node] = {}
            for element in self._elements:
                lookup[element.id] = element
                if isinstance(element, Container):
                    lookup.update(element._get_lookup())
            self._lookup = lookup
        return self._lookup

    def get_element_by_id(self, id: str) -> Optional[Node]:
        return self._get_lookup().get(id)

    def get_element_by_name(self, name: str) -> Optional[Node]:
        full_name = self.resolve_child_name(name)
        for element in self._elements:
            if element.name == full_name:
                return element
        return None

    def get_elements_by_name(self, name: str) -> List[Node]:
        return [element for element in self.iter_descendants() if element.name == name]

    # ----------------------------------------------------------------- values

    def strip_container_name(self, element_name: Optional[str]) -> Optional[str]:
        """
        Remove the prefixes this container and its ancestors put on a name.

        ``<own name>[]`` maps to None: it addresses an unnamed child slot.
        """
        if element_name is None:
            return None
        parent = self.container
        if parent is not None:
            element_name = parent.strip_container_name(element_name)
        if element_name is None or not self.prepends_name() or self.name is None:
            return element_name
        own_name = parent.strip_container_name(self.name) if parent is not None else self.name
        own_segments = parse_name(own_name).segments
        if parse_name(element_name).segments == own_segments + ('',):
            return None
        stripped = element_name
        for segment in own_segments:
            reduced = reduce_name(stripped, segment)
            if reduced == stripped:
                return element_name
            stripped = reduced
        return stripped

    def get_child_values(self, filtered: bool = False) -> Dict[Any, Any]:
        """
        Nested value map built from every child's value.

        None values are skipped. Children of non-prefixing child containers
        are merged in directly; ``name[]`` children fill consecutive slots.
        """
        values: Dict[Any, Any] = {}
        force_keys: Dict[str, int] = {}
        for child in self._elements:
            value = child.get_value() if filtered else child.get_raw_value()
            if value is None:
                continue
            if isinstance(child, Container) and not child.prepends_name():
                values = array_merge(values, value)
            else:
                self._place_child_value(values, force_keys, child, value)
        return values

    @staticmethod
    def _place_child_value(values: Dict[Any, Any], force_keys: Dict[str, int],
                           child: Node, value: Any) -> None:
        """Store value at the path spelled by child's full name."""
        tokens = name_tokens(child.name)
        target = values
        for token in tokens[:-1]:
            key = normalize_key(token)
            if not isinstance(target.get(key), dict):
                target[key] = {}
            target = target[key]
        if tokens[-1] == '':
            key = force_keys.get(child.name, 0)
            force_keys[child.name] = key + 1
        else:
            key = normalize_key(tokens[-1])
        if is_mapping_like(value) and is_mapping_like(target.get(key)):
            target[key] = array_merge(target[key], value)
        else:
            target[key] = value

    def get_raw_value(self) -> Any:
        return listify(self.get_child_values())

    def get_value(self) -> Any:
        return self._apply_filters(listify(self.get_child_values(True)))

    def set_value(self, value: Any) -> 'Container':
        """Distribute a nested value map over the children."""
        from formtree.value_walker import ValueWalker

        if not is_mapping_like(value):
            logger.debug(f"Ignoring non-mapping value for {self!r}: {value!r}")
            return self
        self._value_walker = ValueWalker(self, value).walk()
        return self

    def get_last_value_walker(self) -> Optional['ValueWalker']:
        return self._value_walker

    def update_value(self) -> None:
        for child in list(self._elements):
            child.update_value()

    # --------------------------------------------------------------- factory

    def add_element(self, kind_or_node: Any, name: Optional[str] = None, **kwargs) -> Node:
        """Append an existing node, or create one of the given kind and append it."""
        if isinstance(kind_or_node, Node):
            return self.append_child(kind_or_node)
        from formtree.factory import create_element

        kwargs.setdefault('id_generator', self.get_id_generator())
        return self.append_child(create_element(kind_or_node, name, **kwargs))

    def add_text(self, name: str, **kwargs) -> 'InputText':
        return self.add_element('text', name, **kwargs)

    def add_hidden(self, name: str, **kwargs) -> 'InputHidden':
        return self.add_element('hidden', name, **kwargs)

    def add_textarea(self, name: str, **kwargs) -> 'Textarea':
        return self.add_element('textarea', name, **kwargs)

    def add_checkbox(self, name: str, **kwargs) -> 'InputCheckbox':
        return self.add_element('checkbox', name, **kwargs)

    def add_radio(self, name: str, **kwargs) -> 'InputRadio':
        return self.add_element('radio', name, **kwargs)

    def add_button(self, name: str, **kwargs) -> 'InputButton':
        return self.add_element('button', name, **kwargs)

    def add_file(self, name: str, **kwargs) -> 'InputFile':
        return self.add_element('file', name, **kwargs)

    def add_group(self, name: Optional[str] = None, **kwargs) -> 'Group':
        return self.add_element('group', name, **kwargs)

    def add_fieldset(self, **kwargs) -> 'Fieldset':
        return self.add_element('fieldset', None, **kwargs)

    # ----------------------------------------------------------------- events

    def on_node_added(self, callback: Callable[..., Any], *args) -> int:
        return self.event_handler.add_listener(NodeAdded, callback, *args)

    def on_container_name_changed(self, callback: Callable[..., Any], *args) -> int:
        return self.event_handler.add_listener(ContainerNameChanged, callback, *args)
