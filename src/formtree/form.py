"""
The root of a form tree: owns the data sources and the id generator.
"""

import logging
from typing import Any, Callable, Iterable, List, Optional

from formtree.container import Container
from formtree.data_sources import DataSource, SubmitDataSource
from formtree.events import FormNodeAdded
from formtree.ids import IdGenerator
from formtree.node import Node

logger = logging.getLogger(__name__)


class Form(Container):
    """
    Root container.

    Every node added anywhere below the form is reported through
    FormNodeAdded. Values are resolved from the data sources in order; the
    first source that knows a name wins.

    Args:
        form_id: Id of the form element
        data_sources: Initial data sources, highest priority first
        id_generator: Generator for ids of elements created through this form;
            the process-wide default when omitted
    """

    element_type = 'form'

    def __init__(self, form_id: str, data_sources: Optional[Iterable[DataSource]] = None,
                 id_generator: Optional[IdGenerator] = None, **kwargs):
        self._data_sources: List[DataSource] = list(data_sources or [])
        super().__init__(None, id=form_id, id_generator=id_generator, **kwargs)

    def get_data_sources(self) -> List[DataSource]:
        return list(self._data_sources)

    def add_data_source(self, data_source: DataSource) -> 'Form':
        """Append a lower-priority source and re-resolve all values."""
        self._data_sources.append(data_source)
        logger.debug(f"Added {type(data_source).__name__} to form '{self.id}'")
        self.update_value()
        return self

    def set_data_sources(self, data_sources: Iterable[DataSource]) -> 'Form':
        self._data_sources = list(data_sources)
        self.update_value()
        return self

    def is_submitted(self) -> bool:
        return any(isinstance(source, SubmitDataSource) for source in self._data_sources)

    def handle_node_added(self, container: Container, node: Node) -> None:
        """Called by containers in this tree whenever they gain a child."""
        self.event_handler.trigger(FormNodeAdded(self, container, node))

    def on_form_node_added(self, callback: Callable[..., Any], *args) -> int:
        return self.event_handler.add_listener(FormNodeAdded, callback, *args)
