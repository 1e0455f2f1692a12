"""
Exception taxonomy for formtree.

Structural violations (cycles, out-of-order linking, malformed ids) raise
immediately. A value lookup that finds nothing is never an error: the
element simply keeps or clears its value.
"""


class FormTreeError(ValueError):
    """Base class for every error raised by formtree."""


class InvalidName(FormTreeError):
    """A None name was given to a node that requires one."""


class InvalidId(FormTreeError):
    """An explicit id contains whitespace."""


class CannotSetOwnAncestor(FormTreeError):
    """Linking would make a node its own ancestor."""


class ContainerMustAlreadyHaveChild(FormTreeError):
    """A container was assigned before it listed the node as a child."""


class EmptyReduction(FormTreeError):
    """ElementName.reduce() was called on a name without sub levels."""


class ChildNotFound(FormTreeError):
    """A reference node passed to insert_before is not a child."""


class UnknownElementKind(FormTreeError):
    """The element factory has no class registered for a kind."""


class ReadonlyAttribute(FormTreeError):
    """An attribute the element fixes itself was changed or removed."""


class FiltersNotSupported(FormTreeError):
    """A filter was added to an element whose value cannot be filtered."""
