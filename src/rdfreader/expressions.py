"""
Acceptor for axioms whose operands are anonymous class expressions.

An anonymous class expression is a tree of blank nodes (restrictions, boolean
connectives, data ranges, RDF list cells) hanging off one anchor triple such as
``A rdfs:subClassOf _:x``. Axioms that RDF can only write as a typed blank node,
``owl:AllDisjointClasses``, ``owl:AllDifferent``, ``owl:AllDisjointProperties``
and ``owl:NegativePropertyAssertion``, are trees of the same kind whose root is
that node instead of an anchor.

The triples of a tree can arrive in any order, so several acceptors may each
start collecting a fragment of the same tree. An acceptor that discovers its
fragment's root is nested under a blank node it does not hold backtracks,
handing its triples back so that the acceptor owning the parent node can
absorb them.
"""

import logging
from typing import Dict, List, Optional, Set

from rdflib import BNode, URIRef
from rdflib.namespace import OWL, RDF, RDFS
from rdflib.term import Node

from ontology import AnnotatedAxiom, Build, Ontology
from ontology.domain import (
    ClassAssertion, DataAllValuesFrom, DataComplementOf, DataExactCardinality, DataHasValue,
    DataIntersectionOf, DataMaxCardinality, DataMinCardinality, DataOneOf, DataProperty,
    DataPropertyDomain, DataPropertyRange, DataSomeValuesFrom, DataUnionOf, DatatypeRestriction,
    DifferentIndividuals, DisjointClasses, DisjointDataProperties, DisjointObjectProperties,
    DisjointUnion, EquivalentClasses, FacetRestriction, HasKey, InverseObjectProperty,
    NegativeDataPropertyAssertion, NegativeObjectPropertyAssertion,
    ObjectAllValuesFrom, ObjectComplementOf, ObjectExactCardinality, ObjectHasValue,
    ObjectIntersectionOf, ObjectMaxCardinality, ObjectMinCardinality, ObjectOneOf,
    ObjectProperty, ObjectPropertyChain, ObjectPropertyDomain, ObjectPropertyRange,
    ObjectSomeValuesFrom, ObjectUnionOf, SubClassOf, SubObjectPropertyOf,
)
from ontology.vocab import FACETS

from .acceptor import Accept, AcceptState, Acceptor, BackTrack, CompleteState, Return, Triple
from .errors import IncompleteConstructError, UnsupportedConstructError
from .resolve import individual, literal, property_kind


logger = logging.getLogger(__name__)


# Predicates that describe a blank node inside a class expression tree
STRUCTURAL = frozenset([
    OWL.onProperty, OWL.someValuesFrom, OWL.allValuesFrom, OWL.hasValue,
    OWL.minCardinality, OWL.maxCardinality, OWL.cardinality,
    OWL.minQualifiedCardinality, OWL.maxQualifiedCardinality, OWL.qualifiedCardinality,
    OWL.onClass, OWL.onDataRange,
    OWL.intersectionOf, OWL.unionOf, OWL.complementOf, OWL.oneOf, OWL.inverseOf,
    OWL.datatypeComplementOf, OWL.onDatatype, OWL.withRestrictions,
    OWL.members, OWL.distinctMembers,
    OWL.sourceIndividual, OWL.assertionProperty, OWL.targetIndividual, OWL.targetValue,
    RDF.first, RDF.rest,
]) | FACETS

# Types of blank nodes that stand for a whole axiom
AXIOM_NODE_TYPES = frozenset([
    OWL.AllDisjointClasses, OWL.AllDifferent, OWL.AllDisjointProperties, OWL.NegativePropertyAssertion,
])

STRUCTURAL_TYPES = frozenset([OWL.Restriction, OWL.Class, RDFS.Datatype, RDF.List]) | AXIOM_NODE_TYPES

# Predicates linking a named subject to the root of a tree
ANCHORS = frozenset([
    RDFS.subClassOf, OWL.equivalentClass, OWL.disjointWith, RDF.type,
    OWL.disjointUnionOf, OWL.propertyChainAxiom, OWL.hasKey, RDFS.domain, RDFS.range,
])

# (unqualified, qualified, object constructor, data constructor)
CARDINALITIES = [
    (OWL.minCardinality, OWL.minQualifiedCardinality, ObjectMinCardinality, DataMinCardinality),
    (OWL.maxCardinality, OWL.maxQualifiedCardinality, ObjectMaxCardinality, DataMaxCardinality),
    (OWL.cardinality, OWL.qualifiedCardinality, ObjectExactCardinality, DataExactCardinality),
]


def is_structural(p, o) -> bool:
    if p == RDF.type:
        return o in STRUCTURAL_TYPES
    return p in STRUCTURAL


def has_axiom_parts(description: Dict[URIRef, Node]) -> bool:
    """True if an axiom node carries every predicate its type requires."""
    if description.get(RDF.type) == OWL.NegativePropertyAssertion:
        return (
            OWL.sourceIndividual in description and OWL.assertionProperty in description
            and (OWL.targetIndividual in description or OWL.targetValue in description)
        )
    return OWL.members in description or OWL.distinctMembers in description


class ClassExpressionAxiomAcceptor(Acceptor[AnnotatedAxiom]):
    """Collects one anchor triple plus the blank node tree it points to."""

    def __init__(self):
        self._reset()

    def _reset(self):
        self.anchor: Optional[Triple] = None
        self.accepted: List[Triple] = []
        self.descriptions: Dict[BNode, Dict[URIRef, Node]] = {}
        self.referenced: Set[BNode] = set()

    def nodes(self):
        return frozenset(self.descriptions)

    def triples(self):
        return tuple(self.accepted)

    def accept(self, build: Build, triple: Triple) -> AcceptState:
        s, p, o = triple

        if isinstance(s, BNode) and s in self.descriptions:
            if not is_structural(p, o):
                return Return(triple)
            self._describe(triple)
            return Accept()

        if isinstance(o, BNode) and o in self.descriptions and o not in self.referenced:
            if isinstance(s, BNode):
                if not is_structural(p, o):
                    return Return(triple)
                # our root is nested under a node we do not hold
                released = [triple] + self.accepted
                logger.debug(f"Releasing {len(released)} triples: {o.n3()} is nested under {s.n3()}")
                self._reset()
                return BackTrack(released)
            if isinstance(s, URIRef) and p in ANCHORS and self.anchor is None:
                self._anchor(triple)
                return Accept()
            return Return(triple)

        if not self.accepted:
            if isinstance(s, BNode) and is_structural(p, o):
                self._describe(triple)
                return Accept()
            if isinstance(s, URIRef) and p in ANCHORS and isinstance(o, BNode):
                self._anchor(triple)
                return Accept()

        return Return(triple)

    def _describe(self, triple: Triple) -> None:
        s, p, o = triple
        self.descriptions.setdefault(s, {})[p] = o
        if isinstance(o, BNode):
            self.descriptions.setdefault(o, {})
            self.referenced.add(o)
        self.accepted.append(triple)

    def _anchor(self, triple: Triple) -> None:
        _, _, o = triple
        self.anchor = triple
        self.descriptions.setdefault(o, {})
        self.referenced.add(o)
        self.accepted.append(triple)

    def axiom_node(self) -> Optional[BNode]:
        """The held node typed as a whole axiom, e.g. ``owl:AllDisjointClasses``."""
        for node, description in self.descriptions.items():
            if description.get(RDF.type) in AXIOM_NODE_TYPES and node not in self.referenced:
                return node
        return None

    def can_complete(self) -> CompleteState:
        if any(not description for description in self.descriptions.values()):
            return CompleteState.NOT_COMPLETE
        if self.anchor is None:
            node = self.axiom_node()
            if node is None or not has_axiom_parts(self.descriptions[node]):
                return CompleteState.NOT_COMPLETE
        # the tree may still grow, e.g. a late rdf:type owl:Restriction
        return CompleteState.CAN_COMPLETE

    def _complete(self, build: Build, ontology: Ontology) -> AnnotatedAxiom:
        decoder = ExpressionDecoder(build, ontology, self.descriptions)
        if self.anchor is None:
            return AnnotatedAxiom(decoder.axiom(self.axiom_node()))

        s, p, o = self.anchor

        if p == RDFS.subClassOf:
            return AnnotatedAxiom(SubClassOf(build.class_(s), decoder.class_expression(o)))
        if p == OWL.equivalentClass:
            return AnnotatedAxiom(EquivalentClasses([build.class_(s), decoder.class_expression(o)]))
        if p == OWL.disjointWith:
            return AnnotatedAxiom(DisjointClasses([build.class_(s), decoder.class_expression(o)]))
        if p == RDF.type:
            return AnnotatedAxiom(ClassAssertion(decoder.class_expression(o), individual(build, s)))
        if p == OWL.disjointUnionOf:
            operands = [decoder.class_expression(item) for item in decoder.items(o)]
            return AnnotatedAxiom(DisjointUnion(build.class_(s), operands))
        if p == OWL.propertyChainAxiom:
            chain = ObjectPropertyChain([decoder.object_property_expression(item) for item in decoder.items(o)])
            return AnnotatedAxiom(SubObjectPropertyOf(chain, build.object_property(s)))
        if p == OWL.hasKey:
            keys = [decoder.property_expression(item) for item in decoder.items(o)]
            return AnnotatedAxiom(HasKey(
                build.class_(s),
                [key for key in keys if not isinstance(key, DataProperty)],
                [key for key in keys if isinstance(key, DataProperty)],
            ))

        kind = property_kind(build, ontology, s)
        if p == RDFS.domain and kind is ObjectProperty:
            return AnnotatedAxiom(ObjectPropertyDomain(build.object_property(s), decoder.class_expression(o)))
        if p == RDFS.domain and kind is DataProperty:
            return AnnotatedAxiom(DataPropertyDomain(build.data_property(s), decoder.class_expression(o)))
        if p == RDFS.range and kind is ObjectProperty:
            return AnnotatedAxiom(ObjectPropertyRange(build.object_property(s), decoder.class_expression(o)))
        if p == RDFS.range and kind is DataProperty:
            return AnnotatedAxiom(DataPropertyRange(build.data_property(s), decoder.data_range(o)))
        raise UnsupportedConstructError(f"Anonymous {p} is not supported for {kind.__name__} {s}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(anchor={self.anchor!r}, nodes={len(self.descriptions)})"


class ExpressionDecoder:
    """Decodes the blank node descriptions of one acceptor into model expressions."""

    def __init__(self, build: Build, ontology: Ontology, descriptions: Dict[BNode, Dict[URIRef, Node]]):
        self.build = build
        self.ontology = ontology
        self.descriptions = descriptions

    def describe(self, node) -> Dict[URIRef, Node]:
        description = self.descriptions.get(node)
        if not description:
            raise IncompleteConstructError(f"Blank node {node!r} is referenced but never described")
        return description

    def items(self, node) -> List[Node]:
        """Members of the RDF list starting at ``node``."""
        items = []
        seen = set()
        while node != RDF.nil:
            if not isinstance(node, BNode) or node in seen:
                raise UnsupportedConstructError(f"Malformed RDF list at {node!r}")
            seen.add(node)
            description = self.describe(node)
            if RDF.first not in description or RDF.rest not in description:
                raise IncompleteConstructError(f"List cell {node!r} lacks rdf:first or rdf:rest")
            items.append(description[RDF.first])
            node = description[RDF.rest]
        return items

    def class_expression(self, term):
        if isinstance(term, URIRef):
            return self.build.class_(term)
        if not isinstance(term, BNode):
            raise UnsupportedConstructError(f"Expected a class expression, found {term!r}")

        description = self.describe(term)
        if OWL.onProperty in description:
            return self._restriction(description)
        if OWL.intersectionOf in description:
            return ObjectIntersectionOf(
                [self.class_expression(item) for item in self.items(description[OWL.intersectionOf])]
            )
        if OWL.unionOf in description:
            return ObjectUnionOf([self.class_expression(item) for item in self.items(description[OWL.unionOf])])
        if OWL.complementOf in description:
            return ObjectComplementOf(self.class_expression(description[OWL.complementOf]))
        if OWL.oneOf in description:
            return ObjectOneOf([individual(self.build, item) for item in self.items(description[OWL.oneOf])])
        raise UnsupportedConstructError(f"Unsupported class expression on {term!r}: {sorted(description)}")

    def object_property_expression(self, term):
        if isinstance(term, URIRef):
            return self.build.object_property(term)
        inverse = self.describe(term).get(OWL.inverseOf)
        if isinstance(inverse, URIRef):
            return InverseObjectProperty(self.build.object_property(inverse))
        raise UnsupportedConstructError(f"Unsupported object property expression on {term!r}")

    def property_expression(self, term):
        """Object property expression or data property, by declared kind."""
        if isinstance(term, BNode):
            return self.object_property_expression(term)
        kind = property_kind(self.build, self.ontology, term)
        if kind is ObjectProperty:
            return self.build.object_property(term)
        if kind is DataProperty:
            return self.build.data_property(term)
        raise UnsupportedConstructError(f"Annotation property {term} used as an object or data property")

    def data_range(self, term):
        if isinstance(term, URIRef):
            return self.build.datatype(term)
        if not isinstance(term, BNode):
            raise UnsupportedConstructError(f"Expected a data range, found {term!r}")

        description = self.describe(term)
        if OWL.intersectionOf in description:
            return DataIntersectionOf([self.data_range(item) for item in self.items(description[OWL.intersectionOf])])
        if OWL.unionOf in description:
            return DataUnionOf([self.data_range(item) for item in self.items(description[OWL.unionOf])])
        if OWL.datatypeComplementOf in description:
            return DataComplementOf(self.data_range(description[OWL.datatypeComplementOf]))
        if OWL.oneOf in description:
            return DataOneOf([literal(self.build, item) for item in self.items(description[OWL.oneOf])])
        if OWL.onDatatype in description:
            if OWL.withRestrictions not in description:
                raise IncompleteConstructError(f"Datatype restriction on {term!r} lacks owl:withRestrictions")
            return DatatypeRestriction(
                self.build.datatype(description[OWL.onDatatype]),
                [self.facet(item) for item in self.items(description[OWL.withRestrictions])],
            )
        raise UnsupportedConstructError(f"Unsupported data range on {term!r}: {sorted(description)}")

    def facet(self, node) -> FacetRestriction:
        facets = [(p, o) for p, o in self.describe(node).items() if p in FACETS]
        if len(facets) != 1:
            raise UnsupportedConstructError(f"Facet node {node!r} must carry exactly one facet")
        facet, value = facets[0]
        return FacetRestriction(self.build.iri(facet), literal(self.build, value))

    def axiom(self, node):
        """Decode a blank node that stands for a whole axiom."""
        description = self.describe(node)
        kind = description[RDF.type]
        if kind == OWL.NegativePropertyAssertion:
            return self._negative_assertion(description)

        members = self.items(description.get(OWL.members, description.get(OWL.distinctMembers)))
        if kind == OWL.AllDisjointClasses:
            return DisjointClasses([self.class_expression(member) for member in members])
        if kind == OWL.AllDifferent:
            return DifferentIndividuals([individual(self.build, member) for member in members])

        properties = [self.property_expression(member) for member in members]
        data = [prop for prop in properties if isinstance(prop, DataProperty)]
        if not data:
            return DisjointObjectProperties(properties)
        if len(data) == len(properties):
            return DisjointDataProperties(data)
        raise UnsupportedConstructError(f"owl:AllDisjointProperties on {node!r} mixes object and data properties")

    def _negative_assertion(self, description: Dict[URIRef, Node]):
        source = individual(self.build, description[OWL.sourceIndividual])
        prop = self.property_expression(description[OWL.assertionProperty])

        if OWL.targetValue in description:
            if not isinstance(prop, DataProperty):
                raise UnsupportedConstructError(f"Negative assertion of {prop} with a literal target")
            return NegativeDataPropertyAssertion(prop, source, literal(self.build, description[OWL.targetValue]))
        if isinstance(prop, DataProperty):
            raise UnsupportedConstructError(f"Negative assertion of data property {prop} with an individual target")
        return NegativeObjectPropertyAssertion(prop, source, individual(self.build, description[OWL.targetIndividual]))

    @staticmethod
    def cardinality(term) -> int:
        try:
            return int(str(term))
        except ValueError:
            raise UnsupportedConstructError(f"Invalid cardinality {term!r}")

    def _restriction(self, description: Dict[URIRef, Node]):
        prop = description[OWL.onProperty]
        if isinstance(prop, BNode):
            return self._object_restriction(self.object_property_expression(prop), description)

        kind = property_kind(self.build, self.ontology, prop)
        if kind is ObjectProperty:
            return self._object_restriction(self.build.object_property(prop), description)
        if kind is DataProperty:
            return self._data_restriction(self.build.data_property(prop), description)
        raise UnsupportedConstructError(f"Restriction on annotation property {prop}")

    def _object_restriction(self, pe, description: Dict[URIRef, Node]):
        if OWL.someValuesFrom in description:
            return ObjectSomeValuesFrom(pe, self.class_expression(description[OWL.someValuesFrom]))
        if OWL.allValuesFrom in description:
            return ObjectAllValuesFrom(pe, self.class_expression(description[OWL.allValuesFrom]))
        if OWL.hasValue in description:
            return ObjectHasValue(pe, individual(self.build, description[OWL.hasValue]))

        for unqualified, qualified, constructor, _ in CARDINALITIES:
            if unqualified in description:
                return constructor(self.cardinality(description[unqualified]), pe)
            if qualified in description:
                if OWL.onClass not in description:
                    raise IncompleteConstructError(f"Qualified cardinality on {pe} lacks owl:onClass")
                filler = self.class_expression(description[OWL.onClass])
                return constructor(self.cardinality(description[qualified]), pe, filler)

        raise IncompleteConstructError(f"Restriction on {pe} has no filler or cardinality")

    def _data_restriction(self, dp: DataProperty, description: Dict[URIRef, Node]):
        if OWL.someValuesFrom in description:
            return DataSomeValuesFrom(dp, self.data_range(description[OWL.someValuesFrom]))
        if OWL.allValuesFrom in description:
            return DataAllValuesFrom(dp, self.data_range(description[OWL.allValuesFrom]))
        if OWL.hasValue in description:
            return DataHasValue(dp, literal(self.build, description[OWL.hasValue]))

        for unqualified, qualified, _, constructor in CARDINALITIES:
            if unqualified in description:
                return constructor(self.cardinality(description[unqualified]), dp)
            if qualified in description:
                if OWL.onDataRange not in description:
                    raise IncompleteConstructError(f"Qualified cardinality on {dp} lacks owl:onDataRange")
                filler = self.data_range(description[OWL.onDataRange])
                return constructor(self.cardinality(description[qualified]), dp, filler)

        raise IncompleteConstructError(f"Restriction on {dp} has no filler or cardinality")
