"""
Directed graph as an immutable adjacency mapping.

Graph IS the adjacency mapping: node id -> ordered tuple of neighbour ids.
Node identity is exactly its string key; edges exist only as membership in
a node's neighbour tuple. A unidirectional (undirected) edge is simulated by
pointing a -> b and b -> a.

Every operation returns a NEW Graph. The mapping held by an existing Graph
is never modified, so earlier references stay valid after later edits.

Operations come in two shapes:
1. Methods: ``graph.add_vertex("1")``
2. Transforms: ``add_vertex("1")(graph)``, curried so they compose with
   ``fpgraph.category`` and lift into state pipelines.

Example:
    graph = add_vertex("2")(add_vertex("1")(EMPTY))
    joined = unidirectional_join("1", "2")(graph)
    # Some(Graph(adjacency={'1': ('2',), '2': ('1',)}))

    add_edge("1", "3")(graph)
    # NOTHING ("3" is not a node)
"""
import dataclasses
import logging
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Iterator, Mapping, Tuple

from .option import NOTHING, Option, Some, from_predicate

logger = logging.getLogger(__name__)

Edge = Tuple[str, str]


@dataclasses.dataclass(frozen=True)
class Graph:
    """
    Immutable directed graph keyed by string node ids.

    Structure:
        adjacency: {node_id: (neighbour_id, ...)}

    Invariants:
        - Every key is a node.
        - Neighbour tuples are ordered and may reference ids that are not
          (yet) keys. Only ``add_edge`` checks that its target exists.
        - ``add_edge`` never introduces a duplicate neighbour; the union
          monoid may.
    """
    adjacency: Mapping[str, Tuple[str, ...]] = dataclasses.field(default_factory=dict)

    def __post_init__(self):
        # Read-only private copy: later writes to the caller's dict never show up here
        frozen = MappingProxyType({node: tuple(neighbours) for node, neighbours in self.adjacency.items()})
        object.__setattr__(self, 'adjacency', frozen)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return dict(self.adjacency) == dict(other.adjacency)

    def __hash__(self) -> int:
        return hash(frozenset(self.adjacency.items()))

    def __repr__(self) -> str:
        return f"Graph(adjacency={dict(self.adjacency)!r})"

    def __reduce__(self):
        return (Graph, (dict(self.adjacency),))

    @classmethod
    def from_dict(cls, mapping: Mapping[str, Iterable[str]]) -> 'Graph':
        """
        Build a graph from a plain dict of neighbour lists.

        Raises:
            TypeError: If a node id is not a string
        """
        adjacency = {}
        for node, neighbours in mapping.items():
            if not isinstance(node, str):
                raise TypeError(f"Node ids must be strings, got {type(node).__name__}: {node!r}")
            adjacency[node] = tuple(neighbours)
        return cls(adjacency=adjacency)

    def to_dict(self) -> Dict[str, list]:
        """Plain dict-of-lists copy of the adjacency mapping."""
        return {node: list(neighbours) for node, neighbours in self.adjacency.items()}

    def replace(self, **kwargs) -> 'Graph':
        return dataclasses.replace(self, **kwargs)

    def _with_neighbours(self, node: str, neighbours: Tuple[str, ...]) -> 'Graph':
        new_adjacency = dict(self.adjacency)
        new_adjacency[node] = neighbours
        return self.replace(adjacency=new_adjacency)

    # --- queries ---

    @property
    def nodes(self) -> Tuple[str, ...]:
        return tuple(self.adjacency)

    def neighbors(self, node: str) -> Tuple[str, ...]:
        return self.adjacency.get(node, ())

    def edges(self) -> Iterator[Edge]:
        """Yield every (from, to) pair in neighbour order."""
        for node, neighbours in self.adjacency.items():
            for neighbour in neighbours:
                yield (node, neighbour)

    def __contains__(self, node: object) -> bool:
        return node in self.adjacency

    def __len__(self) -> int:
        return len(self.adjacency)

    def __add__(self, other: 'Graph') -> 'Graph':
        return monoid.concat(self, other)

    def node_exists(self, node: str) -> bool:
        return node in self.adjacency

    def edge_exists(self, source: str, target: str) -> bool:
        """True iff ``source`` is a node whose neighbours contain ``target``."""
        return target in self.adjacency.get(source, ())

    def unidirectional_edge_exists(self, source: str, target: str) -> bool:
        """True iff both source -> target and target -> source exist."""
        return self.edge_exists(source, target) and self.edge_exists(target, source)

    # --- updates ---

    def add_vertex(self, node: str) -> 'Graph':
        """Insert ``node`` with no neighbours. Unchanged if it already exists."""
        if self.node_exists(node):
            return self
        return self._with_neighbours(node, ())

    def add_edge(self, source: str, target: str) -> 'Option[Graph]':
        """
        Add ``target`` as a neighbour of ``source``.

        Only the target is checked: if ``source`` is not a node the graph is
        returned unchanged, still wrapped in Some. Callers that need both
        endpoints to exist use ``unidirectional_join`` or check first.

        Args:
            source: Node the edge leaves from
            target: Node the edge points at (must exist)

        Returns:
            Some(new graph), or NOTHING if ``target`` is not a node
        """
        if not self.node_exists(target):
            logger.debug("add_edge rejected %s -> %s: target is not a node", source, target)
            return NOTHING
        if source not in self.adjacency:
            return Some(self)
        neighbours = self.adjacency[source]
        if target in neighbours:
            return Some(self)
        return Some(self._with_neighbours(source, neighbours + (target,)))

    def unidirectional_join(self, source: str, target: str) -> 'Option[Graph]':
        """Add source -> target and target -> source; NOTHING unless both exist."""
        return self.add_edge(source, target).chain(lambda g: g.add_edge(target, source))

    def remove_edge(self, source: str, target: str) -> 'Graph':
        """Remove the first occurrence of ``target`` from ``source``'s neighbours."""
        neighbours = self.adjacency.get(source)
        if neighbours is None or target not in neighbours:
            return self
        index = neighbours.index(target)
        return self._with_neighbours(source, neighbours[:index] + neighbours[index + 1:])

    def remove_vertex(self, node: str) -> 'Graph':
        """Delete ``node`` and every reference to it from remaining neighbours."""
        return self.replace(adjacency={
            key: tuple(n for n in neighbours if n != node)
            for key, neighbours in self.adjacency.items()
            if key != node
        })


class GraphMonoid:
    """
    Append-only union of graphs.

    Neighbour tuples are concatenated key-wise, so the same edge present in
    both operands appears twice in the result.
    """

    @property
    def empty(self) -> Graph:
        return EMPTY

    def concat(self, x: Graph, y: Graph) -> Graph:
        if not x.adjacency:
            return y
        if not y.adjacency:
            return x
        combined = dict(x.adjacency)
        for node, neighbours in y.adjacency.items():
            combined[node] = combined.get(node, ()) + neighbours
        return Graph(adjacency=combined)

    def concat_all(self, graphs: Iterable[Graph]) -> Graph:
        result = self.empty
        for graph in graphs:
            result = self.concat(result, graph)
        return result


EMPTY = Graph()
empty = EMPTY
monoid = GraphMonoid()


# --- curried transforms ---

def node_exists(node: str) -> Callable[[Graph], bool]:
    return lambda graph: graph.node_exists(node)


def edge_exists(source: str, target: str) -> Callable[[Graph], bool]:
    return lambda graph: graph.edge_exists(source, target)


def unidirectional_edge_exists(source: str, target: str) -> Callable[[Graph], bool]:
    return lambda graph: graph.unidirectional_edge_exists(source, target)


def add_vertex(node: str) -> Callable[[Graph], Graph]:
    return lambda graph: graph.add_vertex(node)


def add_edge(source: str, target: str) -> Callable[[Graph], 'Option[Graph]']:
    return lambda graph: graph.add_edge(source, target)


def unidirectional_join(source: str, target: str) -> Callable[[Graph], 'Option[Graph]']:
    return lambda graph: graph.unidirectional_join(source, target)


def remove_edge(source: str, target: str) -> Callable[[Graph], Graph]:
    return lambda graph: graph.remove_edge(source, target)


def remove_vertex(node: str) -> Callable[[Graph], Graph]:
    return lambda graph: graph.remove_vertex(node)


def require_node(node: str) -> Callable[[Graph], 'Option[Graph]']:
    """Some(graph) when ``node`` exists, else NOTHING."""
    return from_predicate(node_exists(node))
