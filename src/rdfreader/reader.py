"""
Driver that reads an OWL ontology from its RDF serialisation.

The RDF is parsed by rdflib into a set of triples; the triples are then fed,
one at a time, to an ``OntologyAcceptor``. Triples handed back by a backtrack
are re-offered, in order, before the stream continues.
"""

import logging
import os
from collections import deque
from typing import BinaryIO, Dict, Iterable, Optional, Tuple, Union

from rdflib import Graph

from ontology import Build, Ontology

from .acceptor import BackTrack, Triple
from .config import ReaderConfig
from .errors import MalformedInputError
from .ontology_acceptor import OntologyAcceptor


logger = logging.getLogger(__name__)

Source = Union[str, bytes, os.PathLike, BinaryIO]
PrefixMapping = Dict[str, str]


def read_then_complete(triples: Iterable[Triple], build: Build, acceptor: OntologyAcceptor) -> Ontology:
    """
    Feed every triple to the acceptor, then finalise it.

    Args:
        triples: Triples in stream order
        build: Construction context
        acceptor: Ontology acceptor to drive

    Returns:
        The completed ontology
    """
    stream = iter(triples)
    pending = deque()
    offered = 0

    while True:
        if pending:
            triple = pending.popleft()
        else:
            triple = next(stream, None)
            if triple is None:
                break

        offered += 1
        state = acceptor.accept(build, triple)
        if isinstance(state, BackTrack):
            pending.extendleft(reversed(state.triples))

    logger.debug(f"Offered {offered} triples")
    return acceptor.complete(build, Ontology())


def read_triples(
    triples: Iterable[Triple],
    build: Optional[Build] = None,
    config: Optional[ReaderConfig] = None,
) -> Ontology:
    """Read an ontology from an already materialised triple sequence."""
    acceptor = OntologyAcceptor(config=config)
    return read_then_complete(triples, build or Build(), acceptor)


def parse_graph(source: Source, format: str) -> Graph:
    """
    Parse an RDF source with rdflib.

    Raises:
        MalformedInputError: If rdflib cannot parse the source
    """
    graph = Graph(bind_namespaces="none")
    try:
        if isinstance(source, (bytes, bytearray)):
            graph.parse(data=bytes(source), format=format)
        elif isinstance(source, os.PathLike):
            graph.parse(source=os.fspath(source), format=format)
        else:
            graph.parse(source=source, format=format)
    except Exception as e:
        raise MalformedInputError(f"Could not parse {format} input: {e}") from e

    logger.debug(f"Parsed {len(graph)} triples")
    return graph


def read_with_build(
    source: Source,
    build: Build,
    format: Optional[str] = None,
    config: Optional[ReaderConfig] = None,
) -> Tuple[Ontology, PrefixMapping]:
    """
    Read an ontology, interning IRIs through the given construction context.

    Args:
        source: Path, binary file object or bytes
        build: Construction context shared with the caller
        format: rdflib parser name; defaults to the configured format
        config: Reader configuration

    Returns:
        Tuple of (ontology, prefix mapping declared by the document)

    Raises:
        ReaderError: If the input is malformed or an axiom cannot be built
    """
    config = config or ReaderConfig()
    graph = parse_graph(source, format or config.rdf_format)
    prefixes = {prefix: str(namespace) for prefix, namespace in graph.namespaces()}

    ontology = read_triples(graph, build, config)
    return ontology, prefixes


def read(
    source: Source,
    format: Optional[str] = None,
    config: Optional[ReaderConfig] = None,
) -> Tuple[Ontology, PrefixMapping]:
    """Read an ontology with a fresh construction context."""
    return read_with_build(source, Build(), format=format, config=config)
