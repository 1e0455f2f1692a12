"""
Renders a tree to nested dicts using read-only accessors only.
"""

from typing import Any, Dict

from formtree.container import Container
from formtree.elements import InputCheckable
from formtree.node import Node


class ArrayRenderer:
    """
    Tree -> nested dict.

    Each node becomes ``{'id', 'type', 'name', 'label', 'value'}``;
    containers add ``elements`` with their children in order, checkable
    inputs add ``checked``.
    """

    def render(self, node: Node) -> Dict[str, Any]:
        rendered: Dict[str, Any] = {
            'id': node.id,
            'type': node.get_type(),
            'name': node.name,
            'label': node.label,
            'value': node.get_value(),
        }
        if isinstance(node, InputCheckable):
            rendered['checked'] = node.is_checked()
        if isinstance(node, Container):
            rendered['elements'] = [self.render(child) for child in node]
        return rendered
