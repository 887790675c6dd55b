"""
Property system for graph invariants.

Properties are predicates over graphs that can be checked and combined:
- ``p & q``: both hold
- ``p | q``: either holds
- ``~p``: p does not hold

They are used to state what a transform keeps invariant and to verify it:

    no_dangling = NoReferencesTo("1")
    assert no_dangling.check(remove_vertex("1")(graph))
"""
from typing import Optional, Set

from .category import ALL_PROPERTIES, Transform
from .graph import Graph


class Property:
    """
    A property is a predicate over graphs that can be checked.

    - Transforms preserve sets of properties
    - Composition of transforms preserves the intersection of properties
    """
    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.description = description

    def check(self, graph: Graph) -> bool:
        """
        Check if the graph satisfies this property.

        Returns:
            bool: True if the property holds, False otherwise
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def __and__(self, other: 'Property') -> 'Property':
        return ConjunctiveProperty(f"{self.name} AND {other.name}", [self, other])

    def __or__(self, other: 'Property') -> 'Property':
        return DisjunctiveProperty(f"{self.name} OR {other.name}", [self, other])

    def __invert__(self) -> 'Property':
        return NegatedProperty(f"NOT {self.name}", self)


class HasNode(Property):
    def __init__(self, node: str):
        super().__init__(f"HasNode({node})")
        self.node = node

    def check(self, graph: Graph) -> bool:
        return graph.node_exists(self.node)


class HasEdge(Property):
    def __init__(self, source: str, target: str):
        super().__init__(f"HasEdge({source}->{target})")
        self.source = source
        self.target = target

    def check(self, graph: Graph) -> bool:
        return graph.edge_exists(self.source, self.target)


class NoReferencesTo(Property):
    """No neighbour tuple mentions ``node``."""

    def __init__(self, node: str):
        super().__init__(f"NoReferencesTo({node})")
        self.node = node

    def check(self, graph: Graph) -> bool:
        return all(self.node not in neighbours for neighbours in graph.adjacency.values())


class NoDuplicateNeighbors(Property):
    def __init__(self):
        super().__init__("NoDuplicateNeighbors")

    def check(self, graph: Graph) -> bool:
        return all(len(set(n)) == len(n) for n in graph.adjacency.values())


class ClosedEdges(Property):
    """Every neighbour id is itself a node."""

    def __init__(self):
        super().__init__("ClosedEdges")

    def check(self, graph: Graph) -> bool:
        return all(target in graph for _, target in graph.edges())


class Symmetric(Property):
    """Every edge a -> b is matched by b -> a."""

    def __init__(self):
        super().__init__("Symmetric")

    def check(self, graph: Graph) -> bool:
        return all(graph.edge_exists(target, source) for source, target in graph.edges())


class ConservesNodes(Property):
    """
    Property checking that every node of a reference graph is still present.

    Must be bound to an initial graph before it can check anything.

    Example:
        conserved = ConservesNodes().bind(initial)
        assert conserved.check(add_vertex("new")(initial))
    """

    def __init__(self, reference: Optional[Set[str]] = None):
        super().__init__("ConservesNodes")
        self.reference = reference

    def bind(self, initial: Graph) -> 'ConservesNodes':
        """Return a new property bound to ``initial``'s node set."""
        return ConservesNodes(reference=set(initial.nodes))

    def check(self, graph: Graph) -> bool:
        """
        Raises:
            ValueError: If the property is not bound (call bind() first)
        """
        if self.reference is None:
            raise ValueError(
                "ConservesNodes property is not bound. "
                "Call bind(initial_graph) before checking."
            )
        return self.reference.issubset(graph.adjacency)


class ConjunctiveProperty(Property):
    """A property that is the conjunction of multiple properties."""

    def __init__(self, name: str, properties: list):
        super().__init__(name)
        self.properties = properties

    def check(self, graph: Graph) -> bool:
        return all(prop.check(graph) for prop in self.properties)


class DisjunctiveProperty(Property):
    """A property that is the disjunction of multiple properties."""

    def __init__(self, name: str, properties: list):
        super().__init__(name)
        self.properties = properties

    def check(self, graph: Graph) -> bool:
        return any(prop.check(graph) for prop in self.properties)


class NegatedProperty(Property):
    """A property that is the negation of another property."""

    def __init__(self, name: str, property: Property):
        super().__init__(name)
        self.property = property

    def check(self, graph: Graph) -> bool:
        return not self.property.check(graph)


class PropertyCategory:
    """Represents a subcategory of transforms preserving specific properties."""

    def __init__(self, name: str, properties: Set[str]):
        self.name = name
        self.properties = properties

    def contains(self, transform: Transform) -> bool:
        """Check if a transform belongs to this category."""
        preserves = getattr(transform, 'preserves', None)
        if preserves is None:
            return False
        if preserves == ALL_PROPERTIES:
            return True
        return all(p in preserves for p in self.properties)

    def __call__(self, transform: Transform) -> Transform:
        """Decorator that marks a transform as belonging to this category."""
        preserves = getattr(transform, 'preserves', set())
        if preserves != ALL_PROPERTIES:
            transform.preserves = set(preserves).union(self.properties)
        return transform
