"""
Graph edit pipelines over typed node and edge records.

GraphData keeps the id graph in sync with the records it was built from:

    graph: Graph              - ids only
    nodes: (N, ...)           - node records, newest first, unique by id
    edges: (E, ...)           - edge records, newest first, unique by id

GraphResolvers is the read-only environment that turns records into ids.
A StateGraph step reads resolvers with ``asks``, edits GraphData and may
abort the pipeline (e.g. connecting to a node that is not in the graph):

    pipeline = add_node(a).chain(lambda _: add_node(b)).chain(lambda _: join(a, b))
    run(pipeline, resolvers)  # Some(GraphData(...)) or NOTHING
"""
import dataclasses
import logging
from typing import Any, Callable, Generic, Optional, Tuple, TypeVar

from . import graph as GR
from . import reader_option as RO
from . import state_reader_option as SRO
from .category import sequential
from .option import Option, from_predicate
from .property import Property
from .state_reader_option import StateReaderOption

logger = logging.getLogger(__name__)

N = TypeVar('N')
E = TypeVar('E')
A = TypeVar('A')


@dataclasses.dataclass(frozen=True)
class GraphData(Generic[E, N]):
    graph: GR.Graph = GR.EMPTY
    edges: Tuple[E, ...] = ()
    nodes: Tuple[N, ...] = ()

    def replace(self, **kwargs) -> 'GraphData[E, N]':
        return dataclasses.replace(self, **kwargs)

    def update_graph(self, f: Callable[[GR.Graph], GR.Graph]) -> 'GraphData[E, N]':
        return self.replace(graph=f(self.graph))


@dataclasses.dataclass(frozen=True)
class GraphResolvers(Generic[N, E]):
    """Functions mapping records to graph ids."""
    from_edger: Callable[[GR.Edge], str]
    from_edge: Callable[[E], str]
    from_node: Callable[[N], str]


# StateGraph[E, N, A]: a step over GraphData[E, N] reading GraphResolvers[N, E], yielding A
StateGraph = StateReaderOption[GraphData[E, N], GraphResolvers[N, E], A]


def get() -> StateGraph[E, N, GraphData[E, N]]:
    return SRO.get()


def gets(f: Callable[[GraphData[E, N]], A]) -> StateGraph[E, N, A]:
    return SRO.gets(f)


def ask() -> StateGraph[E, N, GraphResolvers[N, E]]:
    return SRO.from_reader_option(RO.ask())


def asks(f: Callable[[GraphResolvers[N, E]], A]) -> StateGraph[E, N, A]:
    return SRO.from_reader_option(RO.asks(f))


def _modify_graph(f: Callable[[GR.Graph], GR.Graph]) -> StateGraph[E, N, None]:
    return SRO.modify(lambda data: data.update_graph(f))


def _try_modify_graph(f: Callable[[GR.Graph], Option[GR.Graph]]) -> StateGraph[E, N, None]:
    """Replace the graph with ``f(graph)``, aborting on NOTHING."""
    return SRO.get().chain(
        lambda data: SRO.from_option(f(data.graph)).chain(
            lambda graph: SRO.put(data.replace(graph=graph))
        )
    )


def _unique_by(key: Callable[[Any], str], items: Tuple[Any, ...]) -> Tuple[Any, ...]:
    seen = set()
    kept = []
    for item in items:
        item_id = key(item)
        if item_id not in seen:
            seen.add(item_id)
            kept.append(item)
    return tuple(kept)


def add_node(node: N) -> StateGraph[E, N, None]:
    """
    Add ``node``'s id to the graph and record the node.

    The node is placed first in ``nodes``; an older node with the same id
    is dropped.
    """
    def update(node_id: Callable[[N], str]) -> StateGraph[E, N, None]:
        logger.debug("add_node %s", node_id(node))
        return _modify_graph(GR.add_vertex(node_id(node))).chain(
            lambda _: SRO.modify(
                lambda data: data.replace(nodes=_unique_by(node_id, (node,) + data.nodes))
            )
        )
    return asks(lambda resolvers: resolvers.from_node).chain(update)


def remove_node(node_id: str) -> StateGraph[E, N, None]:
    """Remove the vertex ``node_id``, its incoming edges and its node records."""
    def update(from_node: Callable[[N], str]) -> StateGraph[E, N, None]:
        logger.debug("remove_node %s", node_id)
        return _modify_graph(GR.remove_vertex(node_id)).chain(
            lambda _: SRO.modify(
                lambda data: data.replace(
                    # Drop the removed id's records; records with other ids stay
                    nodes=tuple(n for n in data.nodes if from_node(n) != node_id)
                )
            )
        )
    return asks(lambda resolvers: resolvers.from_node).chain(update)


def connect(source: N, target: N) -> StateGraph[E, N, None]:
    """Add the edge source -> target. Aborts if ``target`` is not in the graph."""
    return asks(lambda resolvers: resolvers.from_node).chain(
        lambda node_id: _try_modify_graph(GR.add_edge(node_id(source), node_id(target)))
    )


def join(a: N, b: N) -> StateGraph[E, N, None]:
    """Add a -> b and b -> a. Aborts unless both are in the graph."""
    return asks(lambda resolvers: resolvers.from_node).chain(
        lambda node_id: _try_modify_graph(GR.unidirectional_join(node_id(a), node_id(b)))
    )


def disconnect(a: N, b: N) -> StateGraph[E, N, None]:
    """Remove a -> b and b -> a where present. Never aborts."""
    def update(node_id: Callable[[N], str]) -> StateGraph[E, N, None]:
        a_id, b_id = node_id(a), node_id(b)
        return _modify_graph(sequential(GR.remove_edge(a_id, b_id), GR.remove_edge(b_id, a_id)))
    return asks(lambda resolvers: resolvers.from_node).chain(update)


def add_edge(edge: E, source: N, target: N) -> StateGraph[E, N, None]:
    """
    Connect ``source`` to ``target`` and record ``edge``.

    The edge is placed first in ``edges``; an older edge with the same id is
    dropped. Aborts, recording nothing, if ``target`` is not in the graph.
    """
    return connect(source, target).chain(
        lambda _: asks(lambda resolvers: resolvers.from_edge)
    ).chain(
        lambda key: SRO.modify(
            lambda data: data.replace(edges=_unique_by(key, (edge,) + data.edges))
        )
    )


def edge_id(source: str, target: str) -> StateGraph[E, N, str]:
    """Id of the graph edge (source, target) according to ``from_edger``."""
    return asks(lambda resolvers: resolvers.from_edger((source, target)))


def require_node(node: N) -> StateGraph[E, N, None]:
    """Abort unless ``node``'s id is in the graph. State is left unchanged."""
    return asks(lambda resolvers: resolvers.from_node).chain(
        lambda node_id: _try_modify_graph(GR.require_node(node_id(node)))
    )


def require(prop: Property) -> StateGraph[E, N, None]:
    """
    Abort unless ``prop`` holds for the current graph.

    Placed between edits, this turns a graph invariant into a pipeline guard:

        add_node(a).chain(lambda _: join(a, b)).chain(lambda _: require(Symmetric()))
    """
    def guard(graph: GR.Graph) -> Option[GR.Graph]:
        result = from_predicate(prop.check)(graph)
        if result.is_nothing():
            logger.debug("require %r failed", prop)
        return result
    return _try_modify_graph(guard)


def run(
    pipeline: StateGraph[E, N, Any],
    resolvers: GraphResolvers[N, E],
    data: Optional[GraphData[E, N]] = None,
) -> Option[GraphData[E, N]]:
    """Execute ``pipeline`` from ``data`` (empty by default) and return the final state."""
    return pipeline.execute(data if data is not None else GraphData(), resolvers)
