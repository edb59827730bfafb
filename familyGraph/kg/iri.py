from __future__ import annotations

"""Identifier registry: resolve ``alias:local`` pairs into IRIs.

Identifiers are the plain concatenation of a namespace string and a local
name. No quoting or normalisation is applied, so two identifiers are equal
exactly when their concatenated strings are equal.
"""

import logging
from typing import Mapping

from rdflib import URIRef

from familyGraph.errors import UnresolvedPrefixError

from .store import TripleStore

logger = logging.getLogger(__name__)


def join_iri(namespace: str, local_name: str) -> URIRef:
    return URIRef(f"{namespace}{local_name}")


class IdentifierRegistry:
    """Alias table snapshotted from a graph plus explicit registrations."""

    def __init__(self, bindings: Mapping[str, str] | None = None) -> None:
        self._bindings: dict[str, str] = dict(bindings or {})
        self._warned: set[str] = set()

    @classmethod
    def from_store(
        cls, store: TripleStore, extra: Mapping[str, str] | None = None
    ) -> "IdentifierRegistry":
        """Build a registry from the store's prefix table.

        ``extra`` holds hardcoded namespace strings; bindings read from the
        graph take precedence over them.
        """

        bindings = dict(extra or {})
        bindings.update(store.namespaces())
        return cls(bindings)

    def register(self, alias: str, namespace: str) -> None:
        self._bindings[alias] = namespace

    def lookup(self, alias: str) -> str | None:
        return self._bindings.get(alias)

    def resolve(self, local_name: str, alias: str) -> URIRef | None:
        """Return ``namespace + local_name`` or ``None`` if ``alias`` is unbound."""

        namespace = self.lookup(alias)
        if namespace is None:
            return None
        return join_iri(namespace, local_name)

    def resolve_or_empty(self, local_name: str, alias: str) -> URIRef:
        """Resolve leniently: an unbound alias yields an empty namespace."""

        iri = self.resolve(local_name, alias)
        if iri is not None:
            return iri
        if alias not in self._warned:
            self._warned.add(alias)
            logger.warning(
                "Namespace prefix %r is not bound; using an empty namespace", alias
            )
        return join_iri("", local_name)

    def require(self, local_name: str, alias: str) -> URIRef:
        iri = self.resolve(local_name, alias)
        if iri is None:
            raise UnresolvedPrefixError(alias)
        return iri

    def identifier(self, local_name: str, alias: str, *, strict: bool = False) -> URIRef:
        if strict:
            return self.require(local_name, alias)
        return self.resolve_or_empty(local_name, alias)

    def __contains__(self, alias: object) -> bool:
        return alias in self._bindings


__all__ = ["IdentifierRegistry", "join_iri"]
