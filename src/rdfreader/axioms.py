"""
Axiom-level acceptors for constructs that are exactly one triple.

Each acceptor pattern-matches the triple shape of one family of axioms. The
triple alone fixes the shape, but not always the axiom: a ``rdfs:domain``
triple, for instance, only becomes an object, data or annotation property
domain once the ontology's declarations are known, so that decision is taken
in ``complete``.
"""

from abc import abstractmethod
from typing import Optional, Tuple

from rdflib import Literal as RDFLiteral, URIRef
from rdflib.namespace import OWL, RDF, RDFS

from ontology import AnnotatedAxiom, Build, Ontology
from ontology.domain import (
    AnnotationAssertion, AnnotationProperty, AnnotationPropertyDomain, AnnotationPropertyRange,
    Annotation, AsymmetricObjectProperty, ClassAssertion, DataProperty, DataPropertyAssertion,
    DataPropertyDomain, DataPropertyRange, Declaration, DifferentIndividuals, DisjointClasses,
    DisjointDataProperties, DisjointObjectProperties, EquivalentClasses, EquivalentDataProperties,
    EquivalentObjectProperties, FunctionalDataProperty, FunctionalObjectProperty, Import,
    InverseFunctionalObjectProperty, InverseObjectProperties, IrreflexiveObjectProperty,
    ObjectProperty, ObjectPropertyAssertion, ObjectPropertyDomain, ObjectPropertyRange,
    OntologyAnnotation, ReflexiveObjectProperty, SameIndividual, SubAnnotationPropertyOf,
    SubClassOf, SubDataPropertyOf, SubObjectPropertyOf, SymmetricObjectProperty,
    TransitiveObjectProperty,
)
from ontology.vocab import (
    BUILTIN_CLASSES, CHARACTERISTIC_TYPES, ENTITY_TYPES, is_annotation_predicate, is_reserved,
)

from .acceptor import Accept, AcceptState, Acceptor, CompleteState, Return, Triple
from .errors import UnsupportedConstructError
from .resolve import annotation_value, individual, literal, property_kind


class TripleAcceptor(Acceptor[AnnotatedAxiom]):
    """Base class for acceptors whose construct is a single triple."""

    def __init__(self):
        self.triple: Optional[Triple] = None

    @abstractmethod
    def matches(self, triple: Triple) -> bool:
        """True if the triple has the shape this acceptor recognises."""
        pass

    def accept(self, build: Build, triple: Triple) -> AcceptState:
        if self.triple is None and self.matches(triple):
            self.triple = triple
            return Accept()
        return Return(triple)

    def can_complete(self) -> CompleteState:
        if self.triple is None:
            return CompleteState.NOT_COMPLETE
        return CompleteState.COMPLETE

    def triples(self) -> Tuple[Triple, ...]:
        return (self.triple,) if self.triple is not None else ()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.triple!r})"


class DeclarationAcceptor(TripleAcceptor):
    """``S rdf:type owl:Class`` and the other entity-declaring types."""

    phase = 0

    def matches(self, triple: Triple) -> bool:
        s, p, o = triple
        return isinstance(s, URIRef) and p == RDF.type and o in ENTITY_TYPES

    def _complete(self, build: Build, ontology: Ontology) -> AnnotatedAxiom:
        s, _, o = self.triple
        entity = ENTITY_TYPES[o](build.iri(s))
        return AnnotatedAxiom(Declaration(entity))


CHARACTERISTICS = {
    OWL.InverseFunctionalProperty: InverseFunctionalObjectProperty,
    OWL.ReflexiveProperty: ReflexiveObjectProperty,
    OWL.IrreflexiveProperty: IrreflexiveObjectProperty,
    OWL.SymmetricProperty: SymmetricObjectProperty,
    OWL.AsymmetricProperty: AsymmetricObjectProperty,
    OWL.TransitiveProperty: TransitiveObjectProperty,
}


class CharacteristicAcceptor(TripleAcceptor):
    """``P rdf:type owl:TransitiveProperty`` and the other property characteristics."""

    def matches(self, triple: Triple) -> bool:
        s, p, o = triple
        return isinstance(s, URIRef) and p == RDF.type and o in CHARACTERISTIC_TYPES

    def _complete(self, build: Build, ontology: Ontology) -> AnnotatedAxiom:
        s, _, o = self.triple
        if o != OWL.FunctionalProperty:
            return AnnotatedAxiom(CHARACTERISTICS[o](build.object_property(s)))

        # functional is the one characteristic data properties share
        kind = property_kind(build, ontology, s)
        if kind is ObjectProperty:
            return AnnotatedAxiom(FunctionalObjectProperty(build.object_property(s)))
        if kind is DataProperty:
            return AnnotatedAxiom(FunctionalDataProperty(build.data_property(s)))
        raise UnsupportedConstructError(f"Annotation property {s} cannot be functional")


class ClassAssertionAcceptor(TripleAcceptor):
    """``i rdf:type C`` for a named class C."""

    def matches(self, triple: Triple) -> bool:
        s, p, o = triple
        return (
            isinstance(s, URIRef) and p == RDF.type and isinstance(o, URIRef)
            and (not is_reserved(o) or o in BUILTIN_CLASSES)
        )

    def _complete(self, build: Build, ontology: Ontology) -> AnnotatedAxiom:
        s, _, o = self.triple
        return AnnotatedAxiom(ClassAssertion(build.class_(o), build.named_individual(s)))


class ClassAxiomAcceptor(TripleAcceptor):
    """Subclass, equivalence and disjointness between two named classes."""

    PREDICATES = frozenset([RDFS.subClassOf, OWL.equivalentClass, OWL.disjointWith])

    def matches(self, triple: Triple) -> bool:
        s, p, o = triple
        return isinstance(s, URIRef) and p in self.PREDICATES and isinstance(o, URIRef)

    def _complete(self, build: Build, ontology: Ontology) -> AnnotatedAxiom:
        s, p, o = self.triple
        sub, sup = build.class_(s), build.class_(o)
        if p == RDFS.subClassOf:
            return AnnotatedAxiom(SubClassOf(sub, sup))
        if p == OWL.equivalentClass:
            return AnnotatedAxiom(EquivalentClasses([sub, sup]))
        return AnnotatedAxiom(DisjointClasses([sub, sup]))


class PropertyAxiomAcceptor(TripleAcceptor):
    """Property hierarchy, equivalence, disjointness, inverse, domain and range."""

    PREDICATES = frozenset([
        RDFS.subPropertyOf, OWL.equivalentProperty, OWL.propertyDisjointWith,
        OWL.inverseOf, RDFS.domain, RDFS.range,
    ])

    def matches(self, triple: Triple) -> bool:
        s, p, o = triple
        return isinstance(s, URIRef) and p in self.PREDICATES and isinstance(o, URIRef)

    def _complete(self, build: Build, ontology: Ontology) -> AnnotatedAxiom:
        s, p, o = self.triple
        if p == OWL.inverseOf:
            return AnnotatedAxiom(InverseObjectProperties(build.object_property(s), build.object_property(o)))

        kind = property_kind(build, ontology, s)
        if kind is ObjectProperty:
            axiom = self._object_axiom(build, s, p, o)
        elif kind is DataProperty:
            axiom = self._data_axiom(build, s, p, o)
        else:
            axiom = self._annotation_axiom(build, s, p, o)

        if axiom is None:
            raise UnsupportedConstructError(f"{p} is not supported for {kind.__name__} {s}")
        return AnnotatedAxiom(axiom)

    @staticmethod
    def _object_axiom(build: Build, s, p, o):
        op = build.object_property(s)
        if p == RDFS.subPropertyOf:
            return SubObjectPropertyOf(op, build.object_property(o))
        if p == OWL.equivalentProperty:
            return EquivalentObjectProperties([op, build.object_property(o)])
        if p == OWL.propertyDisjointWith:
            return DisjointObjectProperties([op, build.object_property(o)])
        if p == RDFS.domain:
            return ObjectPropertyDomain(op, build.class_(o))
        return ObjectPropertyRange(op, build.class_(o))

    @staticmethod
    def _data_axiom(build: Build, s, p, o):
        dp = build.data_property(s)
        if p == RDFS.subPropertyOf:
            return SubDataPropertyOf(dp, build.data_property(o))
        if p == OWL.equivalentProperty:
            return EquivalentDataProperties([dp, build.data_property(o)])
        if p == OWL.propertyDisjointWith:
            return DisjointDataProperties([dp, build.data_property(o)])
        if p == RDFS.domain:
            return DataPropertyDomain(dp, build.class_(o))
        return DataPropertyRange(dp, build.datatype(o))

    @staticmethod
    def _annotation_axiom(build: Build, s, p, o):
        ap = build.annotation_property(s)
        if p == RDFS.subPropertyOf:
            return SubAnnotationPropertyOf(ap, build.annotation_property(o))
        if p == RDFS.domain:
            return AnnotationPropertyDomain(ap, build.iri(o))
        if p == RDFS.range:
            return AnnotationPropertyRange(ap, build.iri(o))
        return None


class IndividualAxiomAcceptor(TripleAcceptor):
    """``owl:sameAs`` and ``owl:differentFrom`` between named individuals."""

    def matches(self, triple: Triple) -> bool:
        s, p, o = triple
        return isinstance(s, URIRef) and p in (OWL.sameAs, OWL.differentFrom) and isinstance(o, URIRef)

    def _complete(self, build: Build, ontology: Ontology) -> AnnotatedAxiom:
        s, p, o = self.triple
        individuals = [build.named_individual(s), build.named_individual(o)]
        if p == OWL.sameAs:
            return AnnotatedAxiom(SameIndividual(individuals))
        return AnnotatedAxiom(DifferentIndividuals(individuals))


class ImportAcceptor(TripleAcceptor):
    """``O owl:imports X``."""

    def matches(self, triple: Triple) -> bool:
        s, p, o = triple
        return isinstance(s, URIRef) and p == OWL.imports and isinstance(o, URIRef)

    def _complete(self, build: Build, ontology: Ontology) -> AnnotatedAxiom:
        _, _, o = self.triple
        return AnnotatedAxiom(Import(build.iri(o)))


class AssertionAcceptor(TripleAcceptor):
    """
    ``S P O`` for a user-defined or built-in annotation predicate P.

    Depending on what P is declared as this is an annotation, object property
    or data property assertion; annotations on the ontology IRI itself become
    ontology annotations.
    """

    def matches(self, triple: Triple) -> bool:
        s, p, o = triple
        return isinstance(s, URIRef) and is_annotation_predicate(p) and isinstance(o, (URIRef, RDFLiteral))

    def _complete(self, build: Build, ontology: Ontology) -> AnnotatedAxiom:
        s, p, o = self.triple
        kind = property_kind(build, ontology, p)

        if kind is AnnotationProperty:
            annotation = Annotation(build.annotation_property(p), annotation_value(build, o))
            subject = build.iri(s)
            if ontology.id.iri is not None and subject == ontology.id.iri:
                return AnnotatedAxiom(OntologyAnnotation(annotation))
            return AnnotatedAxiom(AnnotationAssertion(subject, annotation))

        if kind is ObjectProperty:
            if not isinstance(o, URIRef):
                raise UnsupportedConstructError(f"Object property {p} used with literal {o!r}")
            return AnnotatedAxiom(
                ObjectPropertyAssertion(build.object_property(p), individual(build, s), individual(build, o))
            )

        return AnnotatedAxiom(
            DataPropertyAssertion(build.data_property(p), individual(build, s), literal(build, o))
        )
