"""Dependency graph construction and merge ordering using NetworkX.

Nodes are document names carrying the parsed document, its profile and
its discovery index. An edge (A, B) means A must be merged after B.
"""

from __future__ import annotations

from collections.abc import Sequence

import networkx as nx

from gqlcompose.dependencies import is_dependent_on
from gqlcompose.documents import Document
from gqlcompose.exceptions import CycleError, DuplicateDocumentError
from gqlcompose.references import profile_document
from gqlcompose.utils.logging import logger


class DependencyGraph:
    """Documents and the ordering constraints between them."""

    def __init__(self):
        self.graph: nx.DiGraph = nx.DiGraph()

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def add_document(self, document: Document) -> None:
        """Add a node for ``document``.

        Raises:
            DuplicateDocumentError: A document with the same name was already added
        """
        if document.name in self.graph:
            raise DuplicateDocumentError(document.name)

        logger.info(f"Adding {document.name}")
        self.graph.add_node(
            document.name,
            document=document,
            profile=profile_document(document),
            index=len(self.graph),
        )

    def add_dependency(self, dependent: str, dependency: str) -> None:
        """Record that ``dependent`` must be merged after ``dependency``."""
        if dependent == dependency:
            raise ValueError(f"Document cannot depend on itself: {dependent}")
        self.graph.add_edge(dependent, dependency)

    def document(self, name: str) -> Document:
        return self.graph.nodes[name]["document"]

    def names(self) -> list[str]:
        """Document names in discovery order."""
        return sorted(self.graph.nodes, key=self.index)

    def index(self, name: str) -> int:
        return self.graph.nodes[name]["index"]

    def edges(self) -> list[tuple[str, str]]:
        """(dependent, dependency) pairs, sorted by discovery order."""
        return sorted(self.graph.edges, key=lambda edge: (self.index(edge[0]), self.index(edge[1])))

    def classify(self) -> int:
        """Add an edge for every ordered pair of documents that depend on each other.

        Every pair is compared; document counts are small enough that the
        quadratic cost is irrelevant.

        Returns:
            Number of edges in the graph
        """
        profiles = [self.graph.nodes[name]["profile"] for name in self.names()]

        for dependent in profiles:
            for dependency in profiles:
                if dependent.name == dependency.name:
                    continue
                if is_dependent_on(dependent, dependency):
                    logger.debug(f'"{dependent.name}" has a dependency on "{dependency.name}".')
                    self.add_dependency(dependent.name, dependency.name)

        return self.graph.number_of_edges()

    def find_cycles(self) -> list[list[str]]:
        """One representative cycle per strongly connected group of documents.

        Each cycle is listed starting at its earliest-discovered document and
        follows dependency edges.
        """
        cycles = []
        for component in nx.strongly_connected_components(self.graph):
            if len(component) < 2:
                continue
            start = min(component, key=self.index)
            subgraph = self.graph.subgraph(component)
            cycle = [edge[0] for edge in nx.find_cycle(subgraph, source=start)]
            first = cycle.index(min(cycle, key=self.index))
            cycles.append(cycle[first:] + cycle[:first])

        cycles.sort(key=lambda cycle: self.index(cycle[0]))
        return cycles

    def merge_order(self) -> list[str]:
        """Linearize the graph so every dependency precedes its dependents.

        Documents without a constraint between them keep discovery order,
        so the result depends on the graph alone.

        Raises:
            CycleError: Some documents require each other
        """
        try:
            return list(
                nx.lexicographical_topological_sort(self.graph.reverse(copy=False), key=self.index)
            )
        except nx.NetworkXUnfeasible as e:
            raise CycleError(self.find_cycles()) from e


def build_dependency_graph(documents: Sequence[Document]) -> DependencyGraph:
    """Add every document as a node, then classify all ordered pairs.

    Args:
        documents: Parsed documents in discovery order

    Returns:
        The populated graph
    """
    graph = DependencyGraph()
    for document in documents:
        graph.add_document(document)

    edge_count = graph.classify()
    logger.debug(f"Dependency graph: {len(graph)} documents, {edge_count} edges")
    return graph


def resolve_merge_order(documents: Sequence[Document]) -> list[Document]:
    """Build the dependency graph and return documents in merge order."""
    graph = build_dependency_graph(documents)
    return [graph.document(name) for name in graph.merge_order()]
