"""
Data sources: where element values come from.

A source answers ``get_value(name)`` for a full bracketed element name.
A source that can tell "submitted as None" apart from "not submitted"
also implements ``has_value(name)``.
"""

from typing import Any, Dict, Optional, Protocol, Tuple, runtime_checkable

from formtree.arrays import as_mapping, is_mapping_like, normalize_key
from formtree.name_tools import name_tokens


@runtime_checkable
class DataSource(Protocol):
    def get_value(self, name: Optional[str]) -> Any:
        ...


@runtime_checkable
class NullAwareDataSource(DataSource, Protocol):
    def has_value(self, name: Optional[str]) -> bool:
        ...


def _find_by_name(values: Dict[Any, Any], name: Optional[str]) -> Tuple[bool, Any]:
    if name is None:
        return False, None
    current: Any = values
    for token in name_tokens(name):
        if not is_mapping_like(current):
            return False, None
        mapping = as_mapping(current)
        key = normalize_key(token)
        if key not in mapping:
            return False, None
        current = mapping[key]
    return True, current


class ArrayDataSource:
    """Values held in a nested dict, addressed by bracketed names."""

    def __init__(self, values: Optional[Dict[Any, Any]] = None):
        self._values: Dict[Any, Any] = dict(values or {})

    def get_values(self) -> Dict[Any, Any]:
        return self._values

    def set_values(self, values: Optional[Dict[Any, Any]]) -> None:
        self._values = dict(values or {})

    def get_value(self, name: Optional[str]) -> Any:
        found, value = _find_by_name(self._values, name)
        return value if found else None

    def has_value(self, name: Optional[str]) -> bool:
        return _find_by_name(self._values, name)[0]


class SubmitDataSource(ArrayDataSource):
    """
    Submitted request data (e.g. a parsed POST body).

    Uploaded files are kept apart from the ordinary values, nested the same
    way, with one upload record (a dict such as ``{'name': ..., 'size': ...}``)
    per file input.
    """

    def __init__(self, values: Optional[Dict[Any, Any]] = None,
                 uploads: Optional[Dict[Any, Any]] = None):
        super().__init__(values)
        self._uploads: Dict[Any, Any] = dict(uploads or {})

    def get_upload(self, name: Optional[str]) -> Optional[Dict[str, Any]]:
        found, upload = _find_by_name(self._uploads, name)
        return upload if found and isinstance(upload, dict) else None
