"""
Element factory keyed by element kind.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, Type, Union

from formtree.elements import (
    InputButton,
    InputCheckbox,
    InputFile,
    InputHidden,
    InputPassword,
    InputRadio,
    InputText,
    Textarea,
)
from formtree.errors import UnknownElementKind
from formtree.group import Fieldset, Group
from formtree.node import Node

logger = logging.getLogger(__name__)


class ElementKind(str, Enum):
    TEXT = 'text'
    HIDDEN = 'hidden'
    PASSWORD = 'password'
    TEXTAREA = 'textarea'
    CHECKBOX = 'checkbox'
    RADIO = 'radio'
    BUTTON = 'button'
    FILE = 'file'
    GROUP = 'group'
    FIELDSET = 'fieldset'


_registry: Dict[str, Type[Node]] = {
    ElementKind.TEXT.value: InputText,
    ElementKind.HIDDEN.value: InputHidden,
    ElementKind.PASSWORD.value: InputPassword,
    ElementKind.TEXTAREA.value: Textarea,
    ElementKind.CHECKBOX.value: InputCheckbox,
    ElementKind.RADIO.value: InputRadio,
    ElementKind.BUTTON.value: InputButton,
    ElementKind.FILE.value: InputFile,
    ElementKind.GROUP.value: Group,
    ElementKind.FIELDSET.value: Fieldset,
}


def _key(kind: Union[ElementKind, str]) -> str:
    return kind.value if isinstance(kind, ElementKind) else str(kind).lower()


def register_element_kind(kind: Union[ElementKind, str], cls: Type[Node]) -> None:
    """Register (or replace) the class created for kind."""
    if not (isinstance(cls, type) and issubclass(cls, Node)):
        raise TypeError(f"Element class must be a Node subclass, got {cls!r}")
    _registry[_key(kind)] = cls
    logger.debug(f"Registered element kind '{_key(kind)}' -> {cls.__name__}")


def get_element_class(kind: Union[ElementKind, str]) -> Type[Node]:
    try:
        return _registry[_key(kind)]
    except KeyError:
        raise UnknownElementKind(f"Element type '{_key(kind)}' is not known") from None


def create_element(kind: Union[ElementKind, str], name: Optional[str] = None, **kwargs: Any) -> Node:
    return get_element_class(kind)(name, **kwargs)
