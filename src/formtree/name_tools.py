"""
Bracket-notation name algebra.

A name like ``foo[bar][baz]`` addresses a slot in nested submitted data.
ElementName is the parsed, immutable form; the module functions are the
stateless helpers the tree uses to prefix, strip and compare names.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from formtree.errors import EmptyReduction

if TYPE_CHECKING:
    from formtree.container import Container


@dataclass(frozen=True)
class ElementName:
    """Parsed element name: ``a[b][]`` is ``('a', 'b', '')``."""
    segments: Tuple[str, ...]

    @classmethod
    def parse(cls, raw: Optional[str]) -> 'ElementName':
        if raw is None:
            raw = ''
        return cls(tuple(part.rstrip(']') for part in raw.split('[')))

    @property
    def head(self) -> str:
        return self.segments[0]

    @property
    def sub_levels(self) -> Tuple[str, ...]:
        return self.segments[1:]

    def has_sub_levels(self) -> bool:
        return len(self.segments) > 1

    def has_container(self) -> bool:
        return len(self.segments) > 1

    @property
    def container_name(self) -> Optional[str]:
        return self.segments[0] if self.has_container() else None

    def reduce(self) -> 'ElementName':
        """Drop the head segment.

        Raises:
            EmptyReduction: if the result would be an empty name
        """
        if len(self.segments) < 2:
            raise EmptyReduction(f"Cannot reduce '{self.name}': no sub levels left")
        return ElementName(self.segments[1:])

    @property
    def name(self) -> str:
        return join_segments(self.segments) or ''

    def get_name_path(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name


def join_segments(segments: Iterable[str]) -> Optional[str]:
    """Assemble ``head[s1][s2]`` from segments; None when there are none."""
    segments = list(segments)
    if not segments:
        return None
    return segments[0] + ''.join(f"[{segment}]" for segment in segments[1:])


def parse_name(name: Optional[str]) -> ElementName:
    return ElementName.parse(name)


def get_container_name(name: Optional[str]) -> Optional[str]:
    return ElementName.parse(name).container_name


def name_tokens(name: Optional[str]) -> List[str]:
    """Segments of a possibly-None name; None behaves like ''."""
    return list(ElementName.parse(name).segments)


def reduce_name(element_name: str, container_name: Optional[str] = None) -> str:
    """
    Strip the head of a bracketed name.

    The head is only stripped when the name has a container part and,
    if container_name is given, the head equals it. Anything else is
    returned unchanged.

    >>> reduce_name('foo[bar]', 'foo')
    'bar'
    >>> reduce_name('foo[bar]', 'baz')
    'foo[bar]'
    """
    parsed = ElementName.parse(element_name)
    if not parsed.has_container():
        return element_name
    if container_name is not None and parsed.container_name != container_name:
        return element_name
    return parsed.reduce().name


def generate_name(base_name: Optional[str],
                  container: Optional['Container'] = None) -> Optional[str]:
    """
    Full name of a node with base_name placed inside container.

    Only containers that prepend their name contribute a prefix. Under
    such a container a None base name becomes an empty segment, so an
    unnamed group inside ``foo`` is called ``foo[]``.
    """
    if container is None or not container.prepends_name():
        return base_name
    segments = list(ElementName.parse(container.name).segments)
    if base_name is None:
        segments.append('')
    else:
        segments.extend(ElementName.parse(base_name).segments)
    return join_segments(segments)
