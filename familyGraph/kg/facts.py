"""Build person, marriage and parentage facts into a triple store."""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from rdflib import RDF, Literal, URIRef
from rdflib.term import Node

from familyGraph.errors import SeedFormatError, UnknownPersonError

from .iri import IdentifierRegistry
from .namespaces import FAMILY_ALIAS, FOAF, FOAF_ALIAS, PERSON_ALIAS, XSD
from .store import TripleStore


def person_local_name(full_name: str) -> str:
    """Return the first whitespace-delimited token of ``full_name``."""

    parts = full_name.split()
    if not parts:
        raise ValueError("full_name must contain at least one token")
    return parts[0]


class FactBuilder:
    """Insert family facts using identifiers from ``registry``.

    With ``strict_prefixes`` an unbound ``sim``/``fam`` alias raises
    :class:`~familyGraph.errors.UnresolvedPrefixError`; otherwise the
    identifier is built with an empty namespace.
    """

    def __init__(
        self,
        store: TripleStore,
        registry: IdentifierRegistry,
        *,
        strict_prefixes: bool = False,
    ) -> None:
        self.store = store
        self.registry = registry
        self.strict_prefixes = strict_prefixes

    def _iri(self, local_name: str, alias: str) -> URIRef:
        return self.registry.identifier(local_name, alias, strict=self.strict_prefixes)

    def add_person(self, full_name: str, age: Optional[int] = None) -> Node:
        person = self._iri(person_local_name(full_name), PERSON_ALIAS)
        self.store.insert((person, RDF.type, FOAF.Person))
        self.store.insert((person, FOAF.name, Literal(full_name)))
        if age is not None:
            age_predicate = self._iri("age", FOAF_ALIAS)
            self.store.insert((person, age_predicate, Literal(int(age), datatype=XSD.int)))
        return person

    def add_marriage(self, spouse_one: Node, spouse_two: Node) -> None:
        spouse = self._iri("hasSpouse", FAMILY_ALIAS)
        self.store.insert((spouse_one, spouse, spouse_two))
        self.store.insert((spouse_two, spouse, spouse_one))

    def add_father_to(self, father: Node, child: Node) -> None:
        self.store.insert((child, self._iri("hasFather", FAMILY_ALIAS), father))

    def apply(self, seed: "FamilySeed") -> Dict[str, Node]:
        """Insert every record of ``seed`` in order.

        Returns the node created for each person key. A relationship naming
        an unknown key raises :class:`UnknownPersonError`.
        """

        nodes: Dict[str, Node] = {}
        for person in seed.people:
            nodes[person.key] = self.add_person(person.full_name, person.age)
        for marriage in seed.marriages:
            self.add_marriage(
                _node(nodes, marriage.a, "marriages"), _node(nodes, marriage.b, "marriages")
            )
        for record in seed.fathers:
            if record.father is None:
                father = self.store.create_anonymous_node()
            else:
                father = _node(nodes, record.father, "fathers")
            self.add_father_to(father, _node(nodes, record.child, "fathers"))
        return nodes


def _node(nodes: Dict[str, Node], key: str, section: str) -> Node:
    try:
        return nodes[key]
    except KeyError:
        raise UnknownPersonError(key, section) from None


@dataclass
class PersonRecord:
    full_name: str
    age: Optional[int] = None
    key: str = ""

    def __post_init__(self) -> None:
        if not self.key:
            self.key = person_local_name(self.full_name).lower()


@dataclass
class MarriageRecord:
    a: str
    b: str


@dataclass
class FatherRecord:
    child: str
    father: Optional[str] = None


@dataclass
class FamilySeed:
    """Ordered person and relationship records."""

    people: List[PersonRecord] = field(default_factory=list)
    marriages: List[MarriageRecord] = field(default_factory=list)
    fathers: List[FatherRecord] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "FamilySeed":
        """Build records from parsed YAML.

        Malformed records raise :class:`SeedFormatError` naming the section
        and the index of the offending record.
        """

        data = data or {}
        if not isinstance(data, Mapping):
            raise SeedFormatError("seed", None, "top level must be a mapping")
        people = [
            _person_record(index, rec)
            for index, rec in enumerate(_section(data, "people"))
        ]
        marriages = [
            _marriage_record(index, rec)
            for index, rec in enumerate(_section(data, "marriages"))
        ]
        fathers = [
            _father_record(index, rec)
            for index, rec in enumerate(_section(data, "fathers"))
        ]
        return cls(people=people, marriages=marriages, fathers=fathers)

    @classmethod
    def load(cls, path: Path) -> "FamilySeed":
        raw = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        return cls.from_mapping(raw)

    def to_dict(self) -> dict[str, Any]:
        return {
            "people": [
                {"key": p.key, "name": p.full_name, "age": p.age} for p in self.people
            ],
            "marriages": [{"a": m.a, "b": m.b} for m in self.marriages],
            "fathers": [{"child": f.child, "father": f.father} for f in self.fathers],
        }


def _section(data: Mapping[str, Any], name: str) -> List[Any]:
    records = data.get(name) or []
    if not isinstance(records, list):
        raise SeedFormatError(name, None, "expected a list of records")
    return records


def _text(section: str, index: int, rec: Mapping[str, Any], field_name: str) -> str:
    value = rec.get(field_name)
    if value is None or isinstance(value, (list, dict)) or not str(value).strip():
        raise SeedFormatError(section, index, f"'{field_name}' is required")
    return str(value)


def _age(index: int, value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise SeedFormatError("people", index, f"age must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise SeedFormatError("people", index, f"age must be an integer, got {value!r}")


def _person_record(index: int, rec: Any) -> PersonRecord:
    if not isinstance(rec, Mapping):
        raise SeedFormatError("people", index, "expected a mapping")
    return PersonRecord(
        full_name=_text("people", index, rec, "name"),
        age=_age(index, rec.get("age")),
        key=str(rec.get("key") or ""),
    )


def _marriage_record(index: int, rec: Any) -> MarriageRecord:
    if isinstance(rec, Mapping):
        return MarriageRecord(
            a=_text("marriages", index, rec, "a"), b=_text("marriages", index, rec, "b")
        )
    if isinstance(rec, list) and len(rec) == 2:
        a, b = rec
        return MarriageRecord(a=str(a), b=str(b))
    raise SeedFormatError("marriages", index, "expected a pair of person keys")


def _father_record(index: int, rec: Any) -> FatherRecord:
    if not isinstance(rec, Mapping):
        raise SeedFormatError("fathers", index, "expected a mapping")
    father = rec.get("father")
    return FatherRecord(
        child=_text("fathers", index, rec, "child"),
        father=str(father) if father is not None else None,
    )


def load_default_seed() -> FamilySeed:
    """Load the packaged Simpsons seed data."""

    text = resources.files("familyGraph").joinpath("data/simpsons.yml").read_text(
        encoding="utf-8"
    )
    return FamilySeed.from_mapping(yaml.safe_load(text))


__all__ = [
    "FactBuilder",
    "FamilySeed",
    "PersonRecord",
    "MarriageRecord",
    "FatherRecord",
    "load_default_seed",
    "person_local_name",
]
