"""
fpgraph: immutable directed graphs edited through fail-fast pipelines.

This package provides:
- Graph: Immutable adjacency mapping with vertex/edge point updates
- Option: Some / NOTHING results used for short-circuiting
- Category operations on graph transforms: compose, sequential, identity
- Property system: Graph invariants and verification
- ReaderOption: Environment readers that may produce no result
- StateReaderOption: State threaded through failing environment readers
- state_graph: Pipelines over typed node/edge records
"""

from . import graph, option, reader_option, state_graph, state_reader_option
from .graph import Graph, Edge, EMPTY, monoid
from .option import Some, NOTHING, Option, UnwrapError
from .category import Transform, PartialTransform, compose, sequential, identity, lift, attach_properties
from .property import Property, PropertyCategory
from .reader_option import ReaderOption
from .state_reader_option import StateReaderOption
from .state_graph import GraphData, GraphResolvers, StateGraph

__all__ = [
    # Modules
    'graph',
    'option',
    'reader_option',
    'state_reader_option',
    'state_graph',

    # Graph
    'Graph',
    'Edge',
    'EMPTY',
    'monoid',

    # Option
    'Some',
    'NOTHING',
    'Option',
    'UnwrapError',

    # Category
    'Transform',
    'PartialTransform',
    'compose',
    'sequential',
    'identity',
    'lift',
    'attach_properties',

    # Properties
    'Property',
    'PropertyCategory',

    # Pipelines
    'ReaderOption',
    'StateReaderOption',
    'GraphData',
    'GraphResolvers',
    'StateGraph',
]
