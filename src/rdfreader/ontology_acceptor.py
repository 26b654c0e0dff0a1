"""
Ontology-level acceptor.

The ontology acceptor owns the whole triple stream. It records the ontology
header itself and dispatches every other triple to a population of axiom
acceptors: first to those already in progress, then to fresh ones spawned from
the registry. When the stream is exhausted it finalises the population into an
``Ontology``.
"""

import itertools
import logging
from typing import List, Optional, Tuple

from rdflib import BNode, URIRef
from rdflib.namespace import OWL, RDF

from ontology import AnnotatedAxiom, Build, Ontology, OntologyID

from .acceptor import Accept, AcceptState, Acceptor, BackTrack, CompleteState, Return, Triple
from .config import ReaderConfig, UnmatchedPolicy
from .errors import IncompleteConstructError, UnrecognizedTripleError
from .registry import AcceptorRegistry


logger = logging.getLogger(__name__)


def _n3(triple: Triple) -> str:
    return " ".join(term.n3() for term in triple)


class OntologyAcceptor(Acceptor[Ontology]):
    """Top-level recogniser that assembles an ontology from a triple stream."""

    def __init__(self, registry: Optional[AcceptorRegistry] = None, config: Optional[ReaderConfig] = None):
        self.registry = registry or AcceptorRegistry()
        self.config = config or ReaderConfig()

        self.iri: Optional[URIRef] = None
        self.viri: Optional[URIRef] = None

        # (arrival, acceptor) pairs, arrival being the order of first acceptance
        self.incomplete: List[Tuple[int, Acceptor[AnnotatedAxiom]]] = []
        self.finished: List[Tuple[int, Acceptor[AnnotatedAxiom]]] = []
        self.unmatched: List[Triple] = []

        self._arrivals = itertools.count()

    def accept(self, build: Build, triple: Triple) -> AcceptState:
        s, p, o = triple

        if self.iri is None and p == RDF.type and o == OWL.Ontology and isinstance(s, URIRef):
            self.iri = s
            return Accept()

        if self.iri is not None and s == self.iri and p == OWL.versionIRI and isinstance(o, URIRef):
            self.viri = o
            return Accept()

        return self._dispatch(build, triple)

    def _dispatch(self, build: Build, triple: Triple) -> AcceptState:
        for index, (arrival, acceptor) in enumerate(self.incomplete):
            state = acceptor.accept(build, triple)
            if isinstance(state, Return):
                continue
            if isinstance(state, BackTrack):
                del self.incomplete[index]
                logger.debug(f"{acceptor!r} backtracked {len(state.triples)} triples")
                return state
            if acceptor.can_complete() == CompleteState.COMPLETE:
                del self.incomplete[index]
                self.finished.append((arrival, acceptor))
            return self._reconcile(build, triple, acceptor)

        for name, acceptor in self.registry.spawn():
            state = acceptor.accept(build, triple)
            if not isinstance(state, Accept):
                continue
            entry = (next(self._arrivals), acceptor)
            if acceptor.can_complete() == CompleteState.COMPLETE:
                self.finished.append(entry)
            else:
                self.incomplete.append(entry)
            logger.debug(f"{name} claimed {_n3(triple)}")
            return self._reconcile(build, triple, acceptor)

        return self._unmatched(triple)

    def _reconcile(self, build: Build, triple: Triple, owner: Acceptor) -> AcceptState:
        """Make other holders of the triple's blank node object release their fragments."""
        _, _, o = triple
        if not isinstance(o, BNode):
            return Accept()

        released = []
        for entry in list(self.incomplete):
            _, acceptor = entry
            if acceptor is owner or o not in acceptor.nodes():
                continue
            state = acceptor.accept(build, triple)
            if isinstance(state, BackTrack):
                self.incomplete.remove(entry)
                released.extend(t for t in state.triples if t != triple)
                logger.debug(f"{acceptor!r} released its fragment rooted at {o.n3()}")

        if released:
            return BackTrack(released)
        return Accept()

    def _unmatched(self, triple: Triple) -> AcceptState:
        if self.config.unmatched == UnmatchedPolicy.ERROR:
            raise UnrecognizedTripleError(triple)
        logger.warning(f"Unrecognized triple: {_n3(triple)}")
        self.unmatched.append(triple)
        return Return(triple)

    def _abandon(self, acceptor: Acceptor) -> None:
        if self.config.unmatched == UnmatchedPolicy.ERROR:
            raise IncompleteConstructError(f"Incomplete construct at end of input: {acceptor!r}")
        logger.warning(f"Dropping incomplete construct {acceptor!r}")
        self.unmatched.extend(acceptor.triples())

    def can_complete(self) -> CompleteState:
        return CompleteState.CAN_COMPLETE

    def _complete(self, build: Build, ontology: Ontology) -> Ontology:
        ontology.id = OntologyID(
            iri=build.iri(self.iri) if self.iri is not None else None,
            viri=build.iri(self.viri) if self.viri is not None else None,
        )

        candidates = list(self.finished)
        for entry in self.incomplete:
            if entry[1].can_complete() == CompleteState.NOT_COMPLETE:
                self._abandon(entry[1])
            else:
                candidates.append(entry)

        for _, acceptor in sorted(candidates, key=lambda entry: (entry[1].phase, entry[0])):
            annotated = acceptor.complete(build, ontology)
            if annotated.annotations:
                ontology.remove(AnnotatedAxiom(annotated.axiom))
            ontology.insert(annotated)

        if self.unmatched:
            logger.warning(f"{len(self.unmatched)} triples were not part of any axiom")
        logger.debug(f"Completed ontology {ontology.id.iri} with {len(ontology)} axioms")
        return ontology

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(iri={self.iri!r}, incomplete={len(self.incomplete)}, "
            f"finished={len(self.finished)}, unmatched={len(self.unmatched)})"
        )
