"""
Acceptor for annotated axioms.

An annotated axiom is serialised as the plain triple plus a reification node::

    _:x rdf:type owl:Axiom .
    _:x owl:annotatedSource A .
    _:x owl:annotatedProperty rdfs:subClassOf .
    _:x owl:annotatedTarget B .
    _:x rdfs:comment "..." .

The reification acceptor collects the node's triples and, once the ontology's
ordinary axioms are known, rebuilds the annotated triple's axiom through the
registry and attaches the annotations to it.
"""

from typing import Dict, List, Optional, Tuple

from rdflib import BNode, Literal as RDFLiteral, URIRef
from rdflib.namespace import OWL, RDF
from rdflib.term import Node

from ontology import AnnotatedAxiom, Build, Ontology
from ontology.domain import Annotation
from ontology.vocab import is_annotation_predicate

from .acceptor import Accept, AcceptState, Acceptor, CompleteState, Return, Triple
from .errors import UnsupportedConstructError
from .resolve import annotation_value


REIFICATION_PREDICATES = (OWL.annotatedSource, OWL.annotatedProperty, OWL.annotatedTarget)

REIFICATION_TYPES = (OWL.Axiom, OWL.Annotation)


class ReifiedAxiomAcceptor(Acceptor[AnnotatedAxiom]):
    """Collects one ``owl:Axiom`` node and its annotations."""

    phase = 2

    def __init__(self, registry):
        self.registry = registry
        self.node: Optional[BNode] = None
        self.type: Optional[URIRef] = None
        self.parts: Dict[URIRef, Node] = {}
        self.annotations: List[Tuple[URIRef, Node]] = []
        self.accepted: List[Triple] = []

    def nodes(self):
        return frozenset([self.node]) if self.node is not None else frozenset()

    def triples(self):
        return tuple(self.accepted)

    def accept(self, build: Build, triple: Triple) -> AcceptState:
        s, p, o = triple
        if not isinstance(s, BNode) or (self.node is not None and s != self.node):
            return Return(triple)

        if p == RDF.type and o in REIFICATION_TYPES and self.type is None:
            self.type = o
        elif p in REIFICATION_PREDICATES and p not in self.parts:
            self.parts[p] = o
        elif is_annotation_predicate(p) and isinstance(o, (URIRef, RDFLiteral)):
            self.annotations.append((p, o))
        else:
            return Return(triple)

        self.node = s
        self.accepted.append(triple)
        return Accept()

    def can_complete(self) -> CompleteState:
        if self.type is None or any(p not in self.parts for p in REIFICATION_PREDICATES):
            return CompleteState.NOT_COMPLETE
        if self.type == OWL.Axiom and isinstance(self.parts[OWL.annotatedTarget], BNode):
            # annotated anonymous expressions are not rebuilt
            return CompleteState.NOT_COMPLETE
        return CompleteState.CAN_COMPLETE

    def _complete(self, build: Build, ontology: Ontology) -> AnnotatedAxiom:
        if self.type == OWL.Annotation:
            raise UnsupportedConstructError(f"Annotations on annotations are not supported: {self.node!r}")

        annotated = tuple(self.parts[p] for p in REIFICATION_PREDICATES)
        inner = self.registry.complete_triple(build, ontology, annotated)
        annotations = frozenset(
            Annotation(build.annotation_property(p), annotation_value(build, o)) for p, o in self.annotations
        )
        return AnnotatedAxiom(inner.axiom, inner.annotations | annotations)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(node={self.node!r}, parts={len(self.parts)}, annotations={len(self.annotations)})"
