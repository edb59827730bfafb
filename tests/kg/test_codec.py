from __future__ import annotations

from pathlib import Path

import pytest
from rdflib import RDF, BNode, Literal, URIRef
from rdflib.namespace import FOAF
from rdflib.compare import isomorphic

from familyGraph.errors import FormatError, GraphIOError
from familyGraph.kg.codec import (
    SUPPORTED_SYNTAXES,
    ExtensionTableDetector,
    FormatCodec,
    GuessingDetector,
    HybridDetector,
    make_detector,
    relative_iri,
)
from familyGraph.kg.facts import FactBuilder, load_default_seed
from familyGraph.kg.iri import IdentifierRegistry
from familyGraph.kg.store import TripleStore


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("family.ttl", "turtle"),
        ("family.rdf", "xml"),
        ("family.n3", "nt"),
        ("FAMILY.TTL", "turtle"),
        ("dir.with.dots/family.rdf", "xml"),
        ("family.txt", "turtle"),
        ("family", "turtle"),
    ],
)
def test_table_detection(filename: str, expected: str) -> None:
    codec = FormatCodec(ExtensionTableDetector())
    assert codec.detect_syntax(filename) == expected


def test_table_detection_uses_configured_default() -> None:
    codec = FormatCodec(ExtensionTableDetector(), default_syntax="xml")
    assert codec.detect_syntax("notes.unknown") == "xml"


def test_guess_detection_follows_rdflib() -> None:
    codec = FormatCodec(GuessingDetector())
    assert codec.detect_syntax("family.n3") == "n3"
    assert codec.detect_syntax("family.ttl") == "turtle"
    assert codec.detect_syntax("family.bogus") == "turtle"


def test_hybrid_prefers_table_then_guess() -> None:
    detector = HybridDetector(ExtensionTableDetector({"ttl": "turtle"}), GuessingDetector())
    assert detector.detect("family.ttl") == "turtle"
    assert detector.detect("family.rdf") == "xml"
    assert detector.detect("family.bogus") is None
    assert FormatCodec().detect_syntax("family.n3") == "nt"


def test_make_detector_rejects_unknown_strategy() -> None:
    assert isinstance(make_detector("table"), ExtensionTableDetector)
    with pytest.raises(ValueError):
        make_detector("sniff")


def test_unsupported_default_syntax_rejected() -> None:
    with pytest.raises(ValueError):
        FormatCodec(default_syntax="trig")


def test_read_fixtures_in_each_syntax(fixtures_dir: Path) -> None:
    codec = FormatCodec()
    ttl = codec.read(fixtures_dir / "simpsons.ttl")
    rdf = codec.read(fixtures_dir / "simpsons.rdf")
    n3 = codec.read(fixtures_dir / "simpsons.n3")
    assert len(ttl) == 17
    assert len(rdf) == 8
    assert len(n3) == 3


def test_parse_rejects_malformed_bytes() -> None:
    codec = FormatCodec()
    with pytest.raises(FormatError) as excinfo:
        codec.parse(b"this is not turtle", "turtle", source="bad.ttl")
    assert excinfo.value.syntax == "turtle"
    assert "bad.ttl" in str(excinfo.value)
    with pytest.raises(FormatError):
        codec.parse(b"<rdf:RDF", "xml")


def test_read_missing_file_raises_io_error(tmp_path: Path) -> None:
    with pytest.raises(GraphIOError) as excinfo:
        FormatCodec().read(tmp_path / "missing.ttl")
    assert isinstance(excinfo.value, OSError)
    assert excinfo.value.mode == "reading"


def test_write_to_missing_directory_raises_io_error(
    tmp_path: Path, bound_store: TripleStore
) -> None:
    with pytest.raises(GraphIOError) as excinfo:
        FormatCodec().write(bound_store, tmp_path / "nope" / "out.ttl")
    assert excinfo.value.mode == "writing"


def _seeded(store: TripleStore, registry: IdentifierRegistry) -> TripleStore:
    FactBuilder(store, registry).apply(load_default_seed())
    return store


@pytest.mark.parametrize("syntax", SUPPORTED_SYNTAXES)
def test_render_then_parse_preserves_triples(
    syntax: str, bound_store: TripleStore, registry: IdentifierRegistry
) -> None:
    store = _seeded(bound_store, registry)
    codec = FormatCodec()
    parsed = codec.parse(codec.render(store, syntax), syntax)
    assert len(parsed) == len(store)
    assert isomorphic(parsed.graph, store.graph)
    assert any(isinstance(o, BNode) for _, _, o in parsed.match())


def test_write_uses_output_extension(
    tmp_path: Path, bound_store: TripleStore, registry: IdentifierRegistry
) -> None:
    store = _seeded(bound_store, registry)
    codec = FormatCodec()
    out = tmp_path / "family.rdf"
    assert codec.write(store, out) == "xml"
    assert out.read_text(encoding="utf-8").lstrip().startswith("<?xml")
    assert isomorphic(codec.read(out).graph, store.graph)


@pytest.mark.parametrize("syntax", SUPPORTED_SYNTAXES)
def test_render_refuses_relative_iris(syntax: str) -> None:
    store = TripleStore()
    store.insert((URIRef("Maggie"), RDF.type, FOAF.Person))
    with pytest.raises(FormatError, match=r"relative IRI <Maggie>") as excinfo:
        FormatCodec().render(store, syntax)
    assert excinfo.value.action == "render"
    assert str(excinfo.value).startswith(f"Cannot render {syntax}")


def test_relative_iri_checks_every_position() -> None:
    store = TripleStore()
    assert relative_iri(store) is None
    store.insert((BNode(), FOAF.name, Literal("Maggie")))
    assert relative_iri(store) is None
    store.insert((BNode(), URIRef("hasSpouse"), BNode()))
    assert relative_iri(store) == URIRef("hasSpouse")


def test_write_leaves_no_file_when_render_fails(tmp_path: Path) -> None:
    store = TripleStore()
    store.insert((FOAF.Person, RDF.type, URIRef("Minor")))
    out = tmp_path / "out.rdf"
    with pytest.raises(FormatError):
        FormatCodec().write(store, out)
    assert not out.exists()


def test_render_wraps_serializer_failures() -> None:
    store = TripleStore()
    # RDF/XML cannot express a predicate without a splittable local name.
    store.insert((FOAF.Person, URIRef("urn:"), Literal("x")))
    with pytest.raises(FormatError) as excinfo:
        FormatCodec().render(store, "xml")
    assert excinfo.value.syntax == "xml"
    assert excinfo.value.__cause__ is not None
