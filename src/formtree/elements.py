"""
Leaf element kinds.

Text-like inputs hold a scalar. Checkable inputs hold a checked flag and
report their value attribute when checked.
"""

import logging
from typing import Any, Callable, Dict, Optional

from formtree.arrays import stringified_items, stringify
from formtree.data_sources import NullAwareDataSource, SubmitDataSource
from formtree.errors import FiltersNotSupported
from formtree.node import Node

logger = logging.getLogger(__name__)


class Element(Node):
    """Base class for leaf elements; names are required ('' is fine)."""

    element_type = 'element'

    def __init__(self, name: Optional[str] = None, value: Any = None, **kwargs):
        self._value: Any = None
        super().__init__(name, **kwargs)
        if value is not None:
            self.set_value(value)

    def get_type(self) -> str:
        return self.element_type

    def get_raw_value(self) -> Any:
        return self._value

    def set_value(self, value: Any) -> 'Element':
        self._value = value
        return self

    def get_value(self) -> Any:
        value = self.get_raw_value()
        if value is None:
            return None
        recursive = list(self._recursive_filters)
        container = self.container
        while container is not None:
            recursive = container._recursive_filters + recursive
            container = container.container
        if recursive:
            value = self._apply_recursive(value, recursive)
        return self._apply_filters(value)

    def update_value(self) -> None:
        """First data source that knows this element's name wins."""
        name = self.name
        for source in self.get_data_sources():
            value = source.get_value(name)
            if value is not None or (
                    isinstance(source, NullAwareDataSource) and source.has_value(name)):
                logger.debug(f"Resolved {name!r} from {type(source).__name__}: {value!r}")
                self.set_value(value)
                return


class InputText(Element):
    element_type = 'text'


class InputHidden(Element):
    element_type = 'hidden'


class InputPassword(Element):
    element_type = 'password'


class Textarea(Element):
    element_type = 'textarea'


class InputButton(Element):
    """
    Button; its value is only known when the form was submitted with it.

    set_value() is ignored. A submit (or untyped) button reports whatever a
    SubmitDataSource holds under its name, so a handler can tell which
    button was pressed.
    """

    element_type = 'button'

    def __init__(self, name: Optional[str] = None, button_type: str = 'submit',
                 disabled: bool = False, **kwargs):
        self._submit_value: Any = None
        self._disabled = bool(disabled)
        super().__init__(name, **kwargs)
        self._attributes.setdefault('type', button_type)
        if self.is_submit() and not self._attributes.get('value'):
            self._attributes['value'] = '1'

    def get_type(self) -> str:
        return self.get_attribute('type') or self.element_type

    def set_type(self, button_type: str) -> 'InputButton':
        self.set_attribute('type', button_type)
        return self

    def make_submit(self, value: str = '1') -> 'InputButton':
        self.set_type('submit')
        self.set_attribute('value', value)
        return self

    def is_submit(self) -> bool:
        return self.get_attribute('type') == 'submit'

    def is_disabled(self) -> bool:
        return self._disabled

    def set_disabled(self, disabled: bool) -> 'InputButton':
        self._disabled = bool(disabled)
        return self

    def get_raw_value(self) -> Any:
        if self._disabled:
            return None
        if not self.get_attribute('type') or self.is_submit():
            return self._submit_value
        return None

    def set_value(self, value: Any) -> 'InputButton':
        return self

    def update_value(self) -> None:
        name = self.name
        for source in self.get_data_sources():
            if isinstance(source, SubmitDataSource):
                value = source.get_value(name)
                if value is not None:
                    logger.debug(f"Button {name!r} was pressed: {value!r}")
                    self._submit_value = value
                    return
        self._submit_value = None


class InputFile(Element):
    """
    File upload input.

    The value is the upload record a SubmitDataSource holds for the input's
    name, or None. set_value() is ignored and filters are refused, since an
    upload record is not a user-editable value.
    """

    element_type = 'file'
    readonly_attributes = ('type',)

    def __init__(self, name: Optional[str] = None, **kwargs):
        self._upload: Optional[Dict[str, Any]] = None
        super().__init__(name, **kwargs)
        self._attributes['type'] = 'file'

    def get_raw_value(self) -> Optional[Dict[str, Any]]:
        return self._upload

    def get_value(self) -> Optional[Dict[str, Any]]:
        return self.get_raw_value()

    def set_value(self, value: Any) -> 'InputFile':
        return self

    def add_filter(self, callback: Callable[..., Any], *args) -> 'InputFile':
        raise FiltersNotSupported(f"{self!r}: file inputs do not support filters")

    def add_recursive_filter(self, callback: Callable[..., Any], *args) -> 'InputFile':
        raise FiltersNotSupported(f"{self!r}: file inputs do not support filters")

    def update_value(self) -> None:
        for source in self.get_data_sources():
            if isinstance(source, SubmitDataSource):
                upload = source.get_upload(self.name)
                if upload is not None:
                    self._upload = upload
                    return
        self._upload = None


class InputCheckable(Element):
    """An input that is either checked (reporting its value attribute) or not."""

    element_type = 'checkable'
    default_value_attribute: Optional[str] = None

    def __init__(self, name: Optional[str] = None, value_attribute: Optional[str] = None,
                 checked: bool = False, disabled: bool = False, **kwargs):
        self._checked = bool(checked)
        self._disabled = bool(disabled)
        if value_attribute is None:
            value_attribute = self.default_value_attribute
        self._value_attribute = None if value_attribute is None else stringify(value_attribute)
        super().__init__(name, **kwargs)

    @property
    def value_attribute(self) -> Optional[str]:
        return self._value_attribute

    def set_value_attribute(self, value_attribute: Optional[str]) -> 'InputCheckable':
        self._value_attribute = None if value_attribute is None else stringify(value_attribute)
        self.update_value()
        return self

    def is_checked(self) -> bool:
        return self._checked

    def set_checked(self, checked: bool) -> 'InputCheckable':
        self._checked = bool(checked)
        return self

    def is_disabled(self) -> bool:
        return self._disabled

    def set_disabled(self, disabled: bool) -> 'InputCheckable':
        self._disabled = bool(disabled)
        return self

    def get_raw_value(self) -> Any:
        """The value attribute when checked and enabled; None (not '') otherwise."""
        if self._checked and not self._disabled:
            return self._value_attribute
        return None

    def set_value(self, value: Any) -> 'InputCheckable':
        self._checked = (value is not None and self._value_attribute is not None
                         and stringify(value) == self._value_attribute)
        return self

    def check_against(self, values: Any) -> 'InputCheckable':
        """Check the box iff its value attribute is among values."""
        items = stringified_items(values)
        if items is None:
            return self.set_value(values)
        return self.set_checked(self._value_attribute in items)


class InputCheckbox(InputCheckable):
    """
    Checkbox; names ending in ``[]`` read a list of selected values.

    A submitted form that does not mention the box unchecks it, as browsers
    do not send unchecked boxes at all.
    """

    element_type = 'checkbox'
    default_value_attribute = '1'

    def update_value(self) -> None:
        name = self.name
        if name is not None and name.endswith('[]'):
            name = name[:-2]
        sources = self.get_data_sources()
        for source in sources:
            value = source.get_value(name)
            if value is not None or isinstance(source, SubmitDataSource) or (
                    isinstance(source, NullAwareDataSource) and source.has_value(name)):
                logger.debug(f"Resolved checkbox {name!r} from {type(source).__name__}: {value!r}")
                self.check_against(value)
                return
        if sources:
            self.set_checked(False)


class InputRadio(InputCheckable):
    """Radio button; several radios usually share one name."""

    element_type = 'radio'
