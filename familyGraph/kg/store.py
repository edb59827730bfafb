"""Set-of-triples store backed by :class:`rdflib.Graph`."""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

from rdflib import RDF, BNode, Graph, URIRef
from rdflib.term import Node

Triple = Tuple[Node, Node, Node]


def empty_graph() -> Graph:
    """Return a graph with only the core prefixes bound.

    rdflib can pre-bind dozens of well-known vocabularies; restricting the
    table to ``core`` keeps alias lookups limited to what the input declares.
    """

    return Graph(bind_namespaces="core")


class TripleStore:
    """Insert-only triple set with wildcard lookups.

    Inserting a triple that is already present has no effect. There is no
    removal operation; contradicting facts are stored side by side.
    """

    def __init__(self, graph: Graph | None = None) -> None:
        self._graph = graph if graph is not None else empty_graph()

    @property
    def graph(self) -> Graph:
        return self._graph

    def insert(self, triple: Triple) -> None:
        self._graph.add(triple)

    def match(
        self,
        subject: Optional[Node] = None,
        predicate: Optional[Node] = None,
        obj: Optional[Node] = None,
    ) -> Iterator[Triple]:
        """Yield stored triples matching every non-``None`` position.

        Each call starts a new scan, so results reflect the store as it is
        when iteration begins. No ordering is guaranteed.
        """

        return self._graph.triples((subject, predicate, obj))

    def create_anonymous_node(self) -> BNode:
        return BNode()

    def types_of(self, node: Node) -> set[Node]:
        return set(self._graph.objects(node, RDF.type))

    def bind(self, alias: str, namespace: str) -> None:
        self._graph.bind(alias, URIRef(namespace), override=True)

    def namespaces(self) -> dict[str, str]:
        return {prefix: str(ns) for prefix, ns in self._graph.namespaces()}

    def prefix_uri(self, alias: str) -> str | None:
        return self.namespaces().get(alias)

    def __len__(self) -> int:
        return len(self._graph)

    def __contains__(self, triple: Triple) -> bool:
        return triple in self._graph

    def __iter__(self) -> Iterator[Triple]:
        return iter(self._graph)


__all__ = ["Triple", "TripleStore", "empty_graph"]
