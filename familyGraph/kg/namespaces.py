from __future__ import annotations

"""Namespace aliases and constants for the family knowledge graph.

The ``sim`` and ``fam`` aliases are read from the input graph's prefix table;
the strings below are only the values used by the bundled fixtures.
"""

from rdflib import Namespace
from rdflib.namespace import FOAF, RDF, XSD

# Aliases looked up in the parsed graph.
PERSON_ALIAS = "sim"
FAMILY_ALIAS = "fam"
FOAF_ALIAS = "foaf"

# Namespace strings used by the bundled fixtures.
PERSON_NS = "http://www.ifi.uio.no/INF3580/simpsons#"
FAMILY_NS = "http://www.ifi.uio.no/INF3580/family#"
FOAF_NS = str(FOAF)

SIM = Namespace(PERSON_NS)
FAM = Namespace(FAMILY_NS)

__all__ = [
    "PERSON_ALIAS",
    "FAMILY_ALIAS",
    "FOAF_ALIAS",
    "PERSON_NS",
    "FAMILY_NS",
    "FOAF_NS",
    "SIM",
    "FAM",
    "FOAF",
    "RDF",
    "XSD",
]
