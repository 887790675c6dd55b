"""
Composition of graph transforms.

A Transform is a pure function Graph -> Graph. A PartialTransform is a pure
function Graph -> Option[Graph] that may reject its input (e.g. ``add_edge``
with a missing target). Both compose into pipelines:

    build = sequential(add_vertex("1"), add_vertex("2"))
    link = sequential_partial(lift(build), add_edge("1", "2"))
    link(EMPTY)  # Some(Graph(adjacency={'1': ('2',), '2': ()}))

Transforms may carry a ``preserves`` attribute naming the properties they
keep invariant (see ``fpgraph.property``). Composition preserves the
intersection; ``identity`` preserves everything.
"""
from functools import reduce
from typing import Any, Callable, Set, Union

from .graph import Graph
from .option import Option, Some

Transform = Callable[[Graph], Graph]
PartialTransform = Callable[[Graph], Option[Graph]]

ALL_PROPERTIES = "ALL_PROPERTIES"


def attach_properties(transform: Callable, properties: Union[Set[Any], str]) -> Callable:
    """Mark ``transform`` as preserving ``properties``. Returns the same object."""
    transform.preserves = properties
    return transform


def _preserved(transform: Callable) -> Union[Set[Any], str]:
    return getattr(transform, "preserves", set())


def _intersect(a: Union[Set[Any], str], b: Union[Set[Any], str]) -> Union[Set[Any], str]:
    if a == ALL_PROPERTIES:
        return b
    if b == ALL_PROPERTIES:
        return a
    return set(a) & set(b)


def identity() -> Transform:
    """Transform returning its input unchanged."""
    def id_transform(graph: Graph) -> Graph:
        return graph
    return attach_properties(id_transform, ALL_PROPERTIES)


def compose(f: Transform, g: Transform) -> Transform:
    """
    compose(f, g) applies f first, then g.

    The result preserves only properties preserved by both.
    """
    def composed(graph: Graph) -> Graph:
        return g(f(graph))
    return attach_properties(composed, _intersect(_preserved(f), _preserved(g)))


def sequential(*transforms: Transform) -> Transform:
    """Chain transforms left to right. No arguments gives ``identity()``."""
    if not transforms:
        return identity()
    if len(transforms) == 1:
        return transforms[0]
    return reduce(compose, transforms)


def lift(transform: Transform) -> PartialTransform:
    """Turn a total transform into one that always succeeds."""
    def lifted(graph: Graph) -> 'Option[Graph]':
        return Some(transform(graph))
    return attach_properties(lifted, _preserved(transform))


def compose_partial(f: PartialTransform, g: PartialTransform) -> PartialTransform:
    """Run f, then g on its result. NOTHING from either aborts."""
    def composed(graph: Graph) -> 'Option[Graph]':
        return f(graph).chain(g)
    return attach_properties(composed, _intersect(_preserved(f), _preserved(g)))


def sequential_partial(*transforms: PartialTransform) -> PartialTransform:
    """Chain partial transforms left to right, stopping at the first NOTHING."""
    if not transforms:
        return lift(identity())
    return reduce(compose_partial, transforms)
