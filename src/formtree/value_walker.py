"""
Distributes a nested value map over a plain container's children.

Each child's name is stripped of its container prefixes and looked up in
the map. Nameless child groups take positional entries (keys 0, 1, ...)
in order, the last of them absorbing any surplus. A miss is recorded, not
raised; the element keeps its current value.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List

from formtree.arrays import array_merge, as_mapping, is_mapping_like, normalize_key
from formtree.elements import InputCheckable
from formtree.name_tools import ElementName, parse_name, reduce_name

if TYPE_CHECKING:
    from formtree.container import Container
    from formtree.node import Node

logger = logging.getLogger(__name__)

# Distinguishes "missing" from a stored None
_NOT_FOUND = object()


@dataclass(frozen=True)
class FoundValue:
    """An element that received a value during a walk."""
    element: 'Node'
    key: str
    value: Any


def is_transparent(node: 'Node') -> bool:
    """A container whose children read straight from its parent's value map."""
    from formtree.container import Container

    return (isinstance(node, Container) and not node.prepends_name()
            and not node.receives_positional_values())


def takes_positional_value(node: 'Node') -> bool:
    from formtree.container import Container

    return (isinstance(node, Container) and node.base_name is None
            and node.receives_positional_values())


class ValueWalker:
    """One-shot distribution of values over container's children."""

    def __init__(self, container: 'Container', values: Any):
        self._container = container
        self._values: Dict[Any, Any] = as_mapping(values) if is_mapping_like(values) else {}
        self._walked = False
        self._found: List[FoundValue] = []
        self._not_found: List['Node'] = []
        self._positional: Dict[int, Dict[Any, Any]] = {}
        self.index_count = self._count_indexes()
        self.depth = container.get_nesting_depth()

    def _count_indexes(self) -> int:
        count = 0
        while count in self._values:
            count += 1
        return count

    def walk(self) -> 'ValueWalker':
        """Distribute the values; calling it again is a no-op."""
        if self._walked:
            return self
        self._walked = True
        elements = self._container.get_elements()
        logger.debug(f"Walking {len(elements)} children of {self._container!r} "
                     f"(depth={self.depth}, positional={self.index_count})")
        self._assign_positional_slots(elements)
        for index, element in enumerate(elements):
            self._find_value_for(index, element)
        return self

    def _assign_positional_slots(self, elements: List['Node']) -> None:
        receivers = [index for index, element in enumerate(elements)
                     if takes_positional_value(element)]
        if not receivers:
            return
        for slot in range(self.index_count):
            entry = self._values[slot]
            if not is_mapping_like(entry):
                continue
            receiver = receivers[min(slot, len(receivers) - 1)]
            self._positional[receiver] = array_merge(self._positional.get(receiver, {}), entry)

    def _find_value_for(self, index: int, element: 'Node') -> None:
        if is_transparent(element):
            element.set_value(self._values)
            self._register_found(element, '', self._values)
            return
        name = self._container.strip_container_name(element.name)
        if name is not None:
            self._apply_string_key(element, name)
        elif takes_positional_value(element):
            self._apply_int_key(index, element)
        else:
            self._register_not_found(element)

    def _apply_int_key(self, index: int, element: 'Node') -> None:
        if index not in self._positional:
            self._register_not_found(element)
            return
        value = self._positional[index]
        element.set_value(value)
        self._register_found(element, str(index), value)

    def _apply_string_key(self, element: 'Node', name: str) -> None:
        parsed = self._reduce_by_nesting_depth(element, name)
        if isinstance(element, InputCheckable) and parsed.segments[-1] == '':
            selected = self._lookup(ElementName(parsed.segments[:-1])) \
                if parsed.has_sub_levels() else self._values
            if selected is _NOT_FOUND:
                self._register_not_found(element)
                return
            element.check_against(selected)
            self._register_found(element, name, selected)
            return
        value = self._lookup(parsed)
        if value is _NOT_FOUND:
            self._register_not_found(element)
            return
        element.set_value(value)
        self._register_found(element, name, value)

    def _lookup(self, parsed: ElementName) -> Any:
        key = normalize_key(parsed.head)
        if key not in self._values:
            return _NOT_FOUND
        return self._search_value(parsed, self._values[key])

    def _search_value(self, parsed: ElementName, value: Any) -> Any:
        if not parsed.has_sub_levels() or not is_mapping_like(value):
            return value
        reduced = parsed.reduce()
        mapping = as_mapping(value)
        key = normalize_key(reduced.head)
        if key not in mapping:
            return _NOT_FOUND
        return self._search_value(reduced, mapping[key])

    def _reduce_by_nesting_depth(self, element: 'Node', name: str) -> ElementName:
        if element.container is None or self.depth <= 1:
            return parse_name(name)
        # Only ever strips leading segments that match the container's own path
        prefix = parse_name(self._container.name).segments if self._container.name else ()
        reduced_name = name
        for segment in prefix[:self.depth]:
            reduced = reduce_name(reduced_name, segment)
            if reduced == reduced_name:
                break
            reduced_name = reduced
        if reduced_name != name:
            logger.debug(f"Reduced {name!r} by depth {self.depth} to {reduced_name!r}")
        return parse_name(reduced_name)

    def _register_found(self, element: 'Node', key: str, value: Any) -> None:
        logger.debug(f"Found value for {element!r} at {key!r}")
        self._found.append(FoundValue(element, key, value))

    def _register_not_found(self, element: 'Node') -> None:
        logger.debug(f"No value for {element!r}")
        self._not_found.append(element)

    def get_found(self) -> List[FoundValue]:
        return list(self._found)

    def get_not_found(self) -> List['Node']:
        return list(self._not_found)

    def has_found(self) -> bool:
        return bool(self._found)

    def has_not_found(self) -> bool:
        return bool(self._not_found)
