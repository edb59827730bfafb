"""Detect, parse and render RDF serializations.

Syntax tags are rdflib format names. A :class:`FormatCodec` is built around
exactly one detection strategy, chosen when the codec is constructed:

* ``table``  - look the file extension up in a fixed table;
* ``guess``  - ask :func:`rdflib.util.guess_format`;
* ``hybrid`` - table first, then rdflib's guess.

Every strategy is total: a name nobody recognises maps to the default tag.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Mapping, Protocol
from urllib.parse import urlsplit

from rdflib import URIRef
from rdflib.util import guess_format

from familyGraph.errors import FormatError, GraphIOError

from .store import TripleStore, empty_graph

logger = logging.getLogger(__name__)

SUPPORTED_SYNTAXES = ("turtle", "xml", "nt", "n3", "json-ld")
DEFAULT_SYNTAX = "turtle"

# ``n3`` files are read as N-Triples, matching the fixtures this tool was
# written against.
EXTENSION_TABLE: Dict[str, str] = {
    "ttl": "turtle",
    "rdf": "xml",
    "n3": "nt",
    "owl": "xml",
    "xml": "xml",
    "nt": "nt",
    "jsonld": "json-ld",
}


def _extension(filename: str | Path) -> str:
    name = Path(str(filename)).name
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()


def relative_iri(store: TripleStore) -> URIRef | None:
    """Return some IRI in ``store`` that has no scheme, or ``None``.

    Such IRIs come from an unbound namespace prefix. No serializer can write
    them so that they read back unchanged.
    """

    for triple in store.match():
        for term in triple:
            if isinstance(term, URIRef) and not urlsplit(str(term)).scheme:
                return term
    return None


class SyntaxDetector(Protocol):
    def detect(self, filename: str | Path) -> str | None:
        ...


class ExtensionTableDetector:
    """Map file extensions to syntax tags through a lookup table."""

    def __init__(self, table: Mapping[str, str] | None = None) -> None:
        self.table = dict(EXTENSION_TABLE if table is None else table)

    def detect(self, filename: str | Path) -> str | None:
        return self.table.get(_extension(filename))


class GuessingDetector:
    """Delegate to rdflib's extension-based guesser."""

    def detect(self, filename: str | Path) -> str | None:
        guessed = guess_format(str(filename))
        if guessed in SUPPORTED_SYNTAXES:
            return guessed
        return None


class HybridDetector:
    def __init__(self, *detectors: SyntaxDetector) -> None:
        self.detectors = detectors or (ExtensionTableDetector(), GuessingDetector())

    def detect(self, filename: str | Path) -> str | None:
        for detector in self.detectors:
            tag = detector.detect(filename)
            if tag is not None:
                return tag
        return None


DETECTORS = {
    "table": ExtensionTableDetector,
    "guess": GuessingDetector,
    "hybrid": HybridDetector,
}


def make_detector(name: str) -> SyntaxDetector:
    try:
        factory = DETECTORS[name]
    except KeyError:
        raise ValueError(
            f"Unknown detection strategy {name!r}; expected one of {sorted(DETECTORS)}"
        ) from None
    return factory()


class FormatCodec:
    """Read and write triple stores in any supported syntax."""

    def __init__(
        self,
        detector: SyntaxDetector | None = None,
        *,
        default_syntax: str = DEFAULT_SYNTAX,
    ) -> None:
        if default_syntax not in SUPPORTED_SYNTAXES:
            raise ValueError(f"Unsupported default syntax: {default_syntax}")
        self.detector = detector or HybridDetector()
        self.default_syntax = default_syntax

    def detect_syntax(self, filename: str | Path) -> str:
        tag = self.detector.detect(filename)
        if tag is None:
            logger.debug(
                "No syntax known for %s; falling back to %s", filename, self.default_syntax
            )
            return self.default_syntax
        return tag

    def parse(self, data: bytes, syntax: str, *, source: str | None = None) -> TripleStore:
        """Parse ``data`` into a new store.

        Any parser failure surfaces as :class:`FormatError`.
        """

        graph = empty_graph()
        try:
            graph.parse(data=data, format=syntax)
        except Exception as exc:
            raise FormatError(syntax, str(exc), source=source) from exc
        return TripleStore(graph)

    def read(self, path: str | Path, syntax: str | None = None) -> TripleStore:
        """Read ``path`` from disk.

        Raises :class:`GraphIOError` when the file cannot be read and
        :class:`FormatError` when its contents do not parse.
        """

        path = Path(path)
        tag = syntax or self.detect_syntax(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise GraphIOError(path, "reading", exc.strerror or str(exc)) from exc
        store = self.parse(data, tag, source=str(path))
        logger.debug("Parsed %d triples from %s as %s", len(store), path, tag)
        return store

    def render(self, store: TripleStore, syntax: str) -> bytes:
        """Serialize ``store``; failures surface as :class:`FormatError`.

        A store holding relative IRIs is refused rather than written in a form
        that would parse back to different identifiers.
        """

        if syntax not in SUPPORTED_SYNTAXES:
            raise ValueError(f"Unsupported syntax: {syntax}")
        relative = relative_iri(store)
        if relative is not None:
            raise FormatError(
                syntax,
                f"relative IRI <{relative}> has no namespace; "
                "bind its prefix in the input graph",
                action="render",
            )
        try:
            return store.graph.serialize(format=syntax, encoding="utf-8")
        except Exception as exc:
            raise FormatError(syntax, str(exc), action="render") from exc

    def write(self, store: TripleStore, path: str | Path, syntax: str | None = None) -> str:
        """Render ``store`` to ``path`` and return the syntax tag used.

        Nothing is written when rendering fails.
        """

        path = Path(path)
        tag = syntax or self.detect_syntax(path)
        data = self.render(store, tag)
        try:
            with path.open("wb") as fh:
                fh.write(data)
        except OSError as exc:
            raise GraphIOError(path, "writing", exc.strerror or str(exc)) from exc
        return tag


__all__ = [
    "SUPPORTED_SYNTAXES",
    "DEFAULT_SYNTAX",
    "EXTENSION_TABLE",
    "SyntaxDetector",
    "ExtensionTableDetector",
    "GuessingDetector",
    "HybridDetector",
    "DETECTORS",
    "make_detector",
    "relative_iri",
    "FormatCodec",
]
