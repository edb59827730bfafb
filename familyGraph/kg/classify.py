"""Derive age-group types from ``foaf:age`` values."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Tuple

from rdflib import RDF, Literal
from rdflib.term import Node

from familyGraph.errors import AgeValueError

from .iri import IdentifierRegistry
from .namespaces import FAMILY_ALIAS, FOAF_ALIAS, XSD
from .store import Triple, TripleStore

logger = logging.getLogger(__name__)

MINOR_BELOW = 18
INFANT_BELOW = 2
OLD_ABOVE = 70


@dataclass(frozen=True)
class AgeRule:
    class_name: str
    applies: Callable[[int], bool]


# Evaluated in order and independently; one age may fire several rules.
AGE_RULES: Tuple[AgeRule, ...] = (
    AgeRule("Minor", lambda age: age < MINOR_BELOW),
    AgeRule("Infant", lambda age: age < INFANT_BELOW),
    AgeRule("Old", lambda age: age > OLD_ABOVE),
)


def age_value(subject: Node, obj: Node) -> int:
    """Return the integer held by an age literal or raise :class:`AgeValueError`."""

    if not isinstance(obj, Literal):
        raise AgeValueError(subject, obj)
    value = obj.toPython()
    if isinstance(value, bool):
        raise AgeValueError(subject, obj)
    if isinstance(value, int):
        return value
    if obj.datatype in (None, XSD.string):
        try:
            return int(str(obj).strip())
        except ValueError:
            raise AgeValueError(subject, obj) from None
    raise AgeValueError(subject, obj)


class AgeClassifier:
    def __init__(
        self,
        registry: IdentifierRegistry,
        *,
        rules: Tuple[AgeRule, ...] = AGE_RULES,
        strict_prefixes: bool = False,
    ) -> None:
        self.registry = registry
        self.rules = rules
        self.strict_prefixes = strict_prefixes

    def derive(self, store: TripleStore) -> List[Triple]:
        """Return the type assertions implied by every age in ``store``.

        All ages are converted before anything is returned, so a malformed
        literal aborts the whole pass.
        """

        age_predicate = self.registry.identifier(
            "age", FOAF_ALIAS, strict=self.strict_prefixes
        )
        ages = [
            (subject, age_value(subject, obj))
            for subject, _, obj in store.match(None, age_predicate, None)
        ]
        derived: List[Triple] = []
        for subject, age in ages:
            logger.debug("%s has age %d", subject, age)
            for rule in self.rules:
                if rule.applies(age):
                    group = self.registry.identifier(
                        rule.class_name, FAMILY_ALIAS, strict=self.strict_prefixes
                    )
                    derived.append((subject, RDF.type, group))
        return derived

    def classify(self, store: TripleStore) -> int:
        """Insert derived types into ``store`` and return how many were new."""

        added = 0
        for triple in self.derive(store):
            if triple not in store:
                store.insert(triple)
                added += 1
        return added


__all__ = [
    "AgeRule",
    "AGE_RULES",
    "AgeClassifier",
    "age_value",
    "MINOR_BELOW",
    "INFANT_BELOW",
    "OLD_ABOVE",
]
