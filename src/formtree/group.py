"""
Groups: containers that prefix their name onto their children's names.

A group named ``g`` turns its child ``e`` into ``g[e]``. An unnamed group
nested in ``g`` is called ``g[]`` and addresses one positional entry of
g's value.

Group.set_value() distributes a value map in a single pass over the
value's entries:

1. Each child's name is tokenized and the group's own prefix dropped.
2. Checkboxes named ``...[]`` are checked iff their value attribute is
   among the values found at the path before the ``[]``.
3. For every ``(key, value)`` entry the children are tried in order; an
   empty token consumes the next positional index of the path walked so
   far, so ``a[]`` siblings and unnamed child groups take one entry each.
4. Child groups accumulate everything they matched and receive it at the
   end. Children that matched nothing receive None, so the call is total.
"""

import logging
from typing import Any, Dict, List, Optional, Set, Tuple

from formtree.arrays import array_merge, as_mapping, is_mapping_like, lookup_path, normalize_key
from formtree.container import Container
from formtree.elements import InputCheckable, InputRadio
from formtree.name_tools import name_tokens, parse_name
from formtree.node import Node
from formtree.value_walker import is_transparent

logger = logging.getLogger(__name__)

_NOT_FOUND = object()


class Group(Container):
    """A container whose (non-empty) name prefixes its children's names."""

    element_type = 'group'

    def prepends_name(self) -> bool:
        return bool(self.name)

    def receives_positional_values(self) -> bool:
        return True

    def get_separator(self) -> Any:
        return self.data.get('separator')

    def set_separator(self, separator: Any) -> 'Group':
        self.data['separator'] = separator
        return self

    def get_child_values(self, filtered: bool = False) -> Dict[Any, Any]:
        """
        Children's values relative to this group's own name.

        Prefixed children are placed under their full names and narrowed
        back to this group. Non-prefixing child containers (fieldsets)
        already report values relative to the group and are merged as is.
        """
        if not self.prepends_name():
            return super().get_child_values(filtered)
        values: Dict[Any, Any] = {}
        unprefixed: Dict[Any, Any] = {}
        force_keys: Dict[str, int] = {}
        for child in self.get_elements():
            value = child.get_value() if filtered else child.get_raw_value()
            if value is None:
                continue
            if isinstance(child, Container) and not child.prepends_name():
                unprefixed = array_merge(unprefixed, value)
            else:
                self._place_child_value(values, force_keys, child, value)
        current: Any = values
        for token in name_tokens(self.name):
            key = normalize_key(token)
            if not isinstance(current, dict) or key not in current:
                current = {}
                break
            current = current[key]
        narrowed = current if isinstance(current, dict) else {}
        return array_merge(narrowed, unprefixed)

    def set_value(self, value: Any) -> 'Group':
        if value is None:
            values: Dict[Any, Any] = {}
        elif is_mapping_like(value):
            values = as_mapping(value)
        else:
            values = {0: value}

        prefix_length = len(parse_name(self.name).segments) if self.prepends_name() else 0
        children = self.get_elements()
        name_parts: Dict[int, List[str]] = {}
        group_values: Dict[int, Dict[Any, Any]] = {}
        for index, child in enumerate(children):
            if is_transparent(child):
                group_values[index] = values
                continue
            name_parts[index] = name_tokens(child.name)[prefix_length:]
            if isinstance(child, Container):
                group_values[index] = {}

        for index in list(name_parts):
            child = children[index]
            tokens = name_parts[index]
            if isinstance(child, InputCheckable) and tokens and tokens[-1] == '':
                child.check_against(lookup_path(values, tokens[:-1]))
                del name_parts[index]

        counters: Dict[Tuple[Any, ...], int] = {}
        claimed: Set[int] = set()
        for key, val in values.items():
            # A name already matched by a non-radio child is not matched twice per entry
            taken: Set[Tuple[str, ...]] = set()
            for index in sorted(name_parts, key=lambda i: (i in claimed, i)):
                if index not in name_parts:
                    continue
                tokens = tuple(name_parts[index])
                if tokens in taken:
                    continue
                child = children[index]
                found, positional = self._match(name_parts[index], key, val, counters)
                if found is _NOT_FOUND:
                    continue
                if index in group_values:
                    if not is_mapping_like(found):
                        continue
                    group_values[index] = array_merge(group_values[index], found)
                    if positional:
                        claimed.add(index)
                else:
                    child.set_value(found)
                    del name_parts[index]
                if not positional and not isinstance(child, InputRadio):
                    taken.add(tokens)

        for index, child in enumerate(children):
            if index in group_values:
                child.set_value(group_values[index])
            elif index in name_parts:
                child.set_value(None)
        logger.debug(f"Distributed {len(values)} entries over {len(children)} children of {self!r}")
        return self

    @staticmethod
    def _match(tokens: List[str], key: Any, val: Any,
               counters: Dict[Tuple[Any, ...], int]) -> Tuple[Any, bool]:
        """
        Walk tokens through ``{key: val}``.

        Returns the value found (or _NOT_FOUND) and whether a positional
        index was consumed. Counters only advance on a full match.
        """
        current: Any = {key: val}
        path: Tuple[Any, ...] = ()
        consumed: List[Tuple[Any, ...]] = []
        for token in tokens:
            if not is_mapping_like(current):
                return _NOT_FOUND, False
            mapping = as_mapping(current)
            if token == '':
                step = counters.get(path, 0)
                consumed.append(path)
            else:
                step = normalize_key(token)
            if step not in mapping:
                return _NOT_FOUND, False
            current = mapping[step]
            path = path + (step,)
        for counter_path in consumed:
            counters[counter_path] = counters.get(counter_path, 0) + 1
        return current, bool(consumed)


class Fieldset(Group):
    """A visual grouping that never has a name and never prefixes one."""

    element_type = 'fieldset'

    def __init__(self, name: Optional[str] = None, **kwargs):
        super().__init__(None, **kwargs)

    def set_name(self, name: Optional[str]) -> Node:
        return self

    def _derive_name(self, container: Optional[Container]) -> Optional[str]:
        return None

    def prepends_name(self) -> bool:
        return False

    def receives_positional_values(self) -> bool:
        return False
