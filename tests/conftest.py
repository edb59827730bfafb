from __future__ import annotations

from pathlib import Path

import pytest

from familyGraph.kg.codec import FormatCodec
from familyGraph.kg.iri import IdentifierRegistry
from familyGraph.kg.namespaces import FAMILY_NS, FOAF_NS, PERSON_NS
from familyGraph.kg.store import TripleStore
from familyGraph.pipeline import build_registry

FIXTURES = Path(__file__).parent / "kg" / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def simpsons_store() -> TripleStore:
    return FormatCodec().read(FIXTURES / "simpsons.ttl")


@pytest.fixture
def bound_store() -> TripleStore:
    """Empty store carrying the sim/fam/foaf prefixes."""

    store = TripleStore()
    store.bind("sim", PERSON_NS)
    store.bind("fam", FAMILY_NS)
    store.bind("foaf", FOAF_NS)
    return store


@pytest.fixture
def registry(bound_store: TripleStore) -> IdentifierRegistry:
    return build_registry(bound_store)
