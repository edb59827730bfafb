"""Knowledge graph store, codec and rule helpers."""

__all__ = [
    "TripleStore",
    "IdentifierRegistry",
    "FormatCodec",
    "make_detector",
    "FactBuilder",
    "FamilySeed",
    "load_default_seed",
    "AgeClassifier",
]

from .store import TripleStore
from .iri import IdentifierRegistry
from .codec import FormatCodec, make_detector
from .facts import FactBuilder, FamilySeed, load_default_seed
from .classify import AgeClassifier
