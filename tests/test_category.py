"""
Tests for fpgraph.category - Transform composition operators.

Tests compose, sequential, identity, partial transforms and property attachment.
"""
from fpgraph import graph as G
from fpgraph.category import (
    ALL_PROPERTIES,
    attach_properties,
    compose,
    compose_partial,
    identity,
    lift,
    sequential,
    sequential_partial,
)
from fpgraph.graph import EMPTY, Graph
from fpgraph.option import NOTHING, Some


def create_test_graph() -> Graph:
    """Create a simple test graph."""
    return Graph.from_dict({"1": [], "2": [], "3": []})


class TestCompose:
    """Test compose function for chaining transforms."""

    def test_compose_order(self):
        """compose(f, g) applies f first, then g."""
        # Adding 4 then an edge to it only works in that order
        composed = compose(G.add_vertex("4"), lambda g: g.add_edge("1", "4").unwrap())
        result = composed(create_test_graph())
        assert result.neighbors("1") == ("4",)

    def test_compose_preserves_intersected_properties(self):
        """Composed transform preserves intersection of properties."""
        def f(graph: Graph) -> Graph:
            return graph

        def g(graph: Graph) -> Graph:
            return graph

        f.preserves = {"prop_a", "prop_b"}
        g.preserves = {"prop_b", "prop_c"}

        assert compose(f, g).preserves == {"prop_b"}

    def test_compose_with_identity_keeps_properties(self):
        """Identity does not narrow what the other side preserves."""
        f = attach_properties(G.remove_vertex("1"), {"symmetric"})
        assert compose(identity(), f).preserves == {"symmetric"}
        assert compose(f, identity()).preserves == {"symmetric"}


class TestSequential:
    """Test sequential composition of multiple transforms."""

    def test_sequential_empty_returns_identity(self):
        """sequential() with no args returns identity."""
        graph = create_test_graph()
        assert sequential()(graph) is graph

    def test_sequential_single_returns_same(self):
        """sequential(f) returns f."""
        f = G.add_vertex("9")
        assert sequential(f) is f

    def test_sequential_chains_multiple(self):
        """sequential(f, g, h) chains all in order."""
        pipeline = sequential(G.add_vertex("a"), G.add_vertex("b"), G.remove_vertex("a"))
        assert pipeline(EMPTY).to_dict() == {"b": []}

    def test_sequential_order_matters(self):
        """sequential applies transforms in order."""
        add_then_remove = sequential(G.add_vertex("x"), G.remove_vertex("x"))
        remove_then_add = sequential(G.remove_vertex("x"), G.add_vertex("x"))

        assert "x" not in add_then_remove(EMPTY)
        assert "x" in remove_then_add(EMPTY)


class TestIdentity:
    """Test identity transform."""

    def test_identity_returns_unchanged_graph(self):
        """Identity transform returns the graph unchanged."""
        graph = create_test_graph()
        assert identity()(graph) is graph

    def test_identity_preserves_all_properties(self):
        """Identity has special 'ALL_PROPERTIES' marker."""
        assert identity().preserves == ALL_PROPERTIES


class TestPartial:
    """Test composition of transforms that may fail."""

    def test_lift_always_succeeds(self):
        """Lifted total transforms wrap their result in Some."""
        assert lift(G.add_vertex("1"))(EMPTY) == Some(Graph.from_dict({"1": []}))

    def test_sequential_partial_builds_graph(self):
        """Partial pipeline succeeds when every step does."""
        build = sequential_partial(
            lift(sequential(G.add_vertex("1"), G.add_vertex("2"))),
            G.add_edge("1", "2"),
            G.unidirectional_join("2", "1"),
        )
        assert build(EMPTY) == Some(Graph.from_dict({"1": ["2"], "2": ["1"]}))

    def test_failure_aborts_remaining_steps(self):
        """The first NOTHING stops the pipeline."""
        calls = []

        def record(graph: Graph):
            calls.append(graph)
            return Some(graph)

        pipeline = compose_partial(G.add_edge("1", "missing"), record)
        assert pipeline(create_test_graph()) is NOTHING
        assert calls == []

    def test_sequential_partial_empty(self):
        """No steps means Some(input)."""
        graph = create_test_graph()
        assert sequential_partial()(graph) == Some(graph)


class TestAttachProperties:
    """Test property attachment to transforms."""

    def test_attach_properties_sets_preserves_attr(self):
        """attach_properties sets the preserves attribute."""
        def my_transform(graph: Graph) -> Graph:
            return graph

        props = {"no_duplicates", "closed"}
        result = attach_properties(my_transform, props)

        assert result.preserves == props
        # Same function object
        assert result is my_transform

    def test_attach_empty_properties(self):
        """Can attach empty property set."""
        def my_transform(graph: Graph) -> Graph:
            return graph

        assert attach_properties(my_transform, set()).preserves == set()


class TestTransformPurity:
    """Test that transforms follow pure function semantics."""

    def test_transform_does_not_mutate_input(self):
        """Transform should not modify input graph."""
        graph = create_test_graph()
        before = graph.to_dict()

        sequential(G.add_vertex("4"), G.remove_vertex("1"))(graph)

        assert graph.to_dict() == before
