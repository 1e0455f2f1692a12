"""
formtree: name and value resolution for server-side HTML form trees.

Elements live in containers; groups prefix their names onto their
children (``g[e]``). Submitted values are distributed over the tree by
name and read back as one nested map.

Example:
    >>> from formtree import Form, ArrayDataSource
    >>> form = Form('login', data_sources=[ArrayDataSource({'user': {'name': 'ann'}})])
    >>> group = form.add_group('user')
    >>> group.add_text('name').get_value()
    'ann'
"""

from formtree.arrays import array_merge
from formtree.config import FormOptions, get_options, options_context, reset_options, set_options
from formtree.container import Container, InsertPosition
from formtree.data_sources import ArrayDataSource, DataSource, NullAwareDataSource, SubmitDataSource
from formtree.elements import (
    Element,
    InputButton,
    InputCheckable,
    InputCheckbox,
    InputFile,
    InputHidden,
    InputPassword,
    InputRadio,
    InputText,
    Textarea,
)
from formtree.errors import (
    CannotSetOwnAncestor,
    ChildNotFound,
    ContainerMustAlreadyHaveChild,
    EmptyReduction,
    FiltersNotSupported,
    FormTreeError,
    InvalidId,
    InvalidName,
    ReadonlyAttribute,
    UnknownElementKind,
)
from formtree.events import (
    AttributeChanged,
    ContainerChanged,
    ContainerNameChanged,
    Event,
    EventHandler,
    FormNodeAdded,
    NameChanged,
    NodeAdded,
)
from formtree.factory import ElementKind, create_element, register_element_kind
from formtree.form import Form
from formtree.group import Fieldset, Group
from formtree.ids import IdGenerator, get_default_generator
from formtree.name_tools import (
    ElementName,
    generate_name,
    get_container_name,
    join_segments,
    name_tokens,
    parse_name,
    reduce_name,
)
from formtree.node import Node
from formtree.renderer import ArrayRenderer
from formtree.value_walker import FoundValue, ValueWalker

__version__ = "1.0.0"

__all__ = [
    # Name algebra
    'ElementName',
    'parse_name',
    'get_container_name',
    'reduce_name',
    'generate_name',
    'join_segments',
    'name_tokens',
    # Tree
    'Node',
    'Element',
    'InputText',
    'InputHidden',
    'InputPassword',
    'Textarea',
    'InputCheckable',
    'InputCheckbox',
    'InputRadio',
    'InputButton',
    'InputFile',
    'Container',
    'InsertPosition',
    'Group',
    'Fieldset',
    'Form',
    'array_merge',
    # Values
    'ValueWalker',
    'FoundValue',
    'DataSource',
    'NullAwareDataSource',
    'ArrayDataSource',
    'SubmitDataSource',
    # Events
    'Event',
    'EventHandler',
    'NameChanged',
    'ContainerChanged',
    'ContainerNameChanged',
    'NodeAdded',
    'FormNodeAdded',
    'AttributeChanged',
    # Ids
    'IdGenerator',
    'get_default_generator',
    # Factory and rendering
    'ElementKind',
    'create_element',
    'register_element_kind',
    'ArrayRenderer',
    # Configuration
    'FormOptions',
    'get_options',
    'set_options',
    'reset_options',
    'options_context',
    # Errors
    'FormTreeError',
    'InvalidName',
    'InvalidId',
    'CannotSetOwnAncestor',
    'ContainerMustAlreadyHaveChild',
    'EmptyReduction',
    'ChildNotFound',
    'ReadonlyAttribute',
    'FiltersNotSupported',
    'UnknownElementKind',
]
