"""
Element id generation.

Generated ids are derived from element names: ``foo[bar][]`` becomes
``foo-bar-N``. Each generator remembers every id it issued or was told
about, so a tree sharing one generator never sees duplicates.
"""

import logging
import re
from typing import Dict, Optional, Set

from formtree.config import get_options
from formtree.errors import InvalidId

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r'\s')
_NUMBERED_ID = re.compile(r'^(.+)-(\d+)$')


def validate_id(element_id: str) -> None:
    if _WHITESPACE.search(element_id):
        raise InvalidId(f"The value of 'id' attribute should not contain space characters: {element_id!r}")


class IdGenerator:
    """Owns the per-base counters used for auto ids."""

    def __init__(self):
        self._counters: Dict[str, int] = {}
        self._issued: Set[str] = set()

    @staticmethod
    def base_id(element_name: Optional[str]) -> str:
        base = (element_name or '').replace('[', '-').replace(']', '').rstrip('-')
        base = _WHITESPACE.sub('', base)
        if not base:
            return get_options().auto_id_base
        if base[0].isdigit():
            return 'qf' + base
        return base

    def generate(self, element_name: Optional[str]) -> str:
        """Next unused id for an element called element_name."""
        base = self.base_id(element_name)
        if base not in self._counters:
            self._counters[base] = 0
            candidate = f"{base}-0" if get_options().id_force_append_index else base
        else:
            self._counters[base] += 1
            candidate = f"{base}-{self._counters[base]}"
        while candidate in self._issued:
            self._counters[base] += 1
            candidate = f"{base}-{self._counters[base]}"
        self._issued.add(candidate)
        logger.debug(f"Generated id '{candidate}' for name {element_name!r}")
        return candidate

    def reserve(self, explicit_id: str) -> None:
        """Record an explicitly set id so it is never generated later."""
        validate_id(explicit_id)
        if explicit_id in self._issued:
            logger.warning(f"Id '{explicit_id}' is already in use")
        self._issued.add(explicit_id)
        match = _NUMBERED_ID.match(explicit_id)
        if match is None:
            return
        base, number = match.group(1), int(match.group(2))
        if number > self._counters.get(base, -1):
            self._counters[base] = number

    def reset(self) -> None:
        self._counters.clear()
        self._issued.clear()


_default_generator = IdGenerator()


def get_default_generator() -> IdGenerator:
    """Generator used by nodes created without an explicit one."""
    return _default_generator
