"""
OWL 2 vocabulary used by the readers.

Namespaces come from rdflib; this module adds the tables that map vocabulary
terms onto the structural model and the built-in entities that count as
declared without an explicit declaration.
"""

from typing import FrozenSet, Type

from rdflib import URIRef
from rdflib.namespace import OWL, RDF, RDFS, XSD

from .domain import AnnotationProperty, Class, DataProperty, Datatype, NamedIndividual, ObjectProperty


# rdf:type objects that declare an entity
ENTITY_TYPES = {
    OWL.Class: Class,
    OWL.ObjectProperty: ObjectProperty,
    OWL.DatatypeProperty: DataProperty,
    OWL.AnnotationProperty: AnnotationProperty,
    OWL.NamedIndividual: NamedIndividual,
    RDFS.Datatype: Datatype,
}

# rdf:type objects that state a property characteristic
CHARACTERISTIC_TYPES = frozenset([
    OWL.FunctionalProperty,
    OWL.InverseFunctionalProperty,
    OWL.ReflexiveProperty,
    OWL.IrreflexiveProperty,
    OWL.SymmetricProperty,
    OWL.AsymmetricProperty,
    OWL.TransitiveProperty,
])

# Constraining facets allowed in owl:withRestrictions
FACETS = frozenset([
    XSD.length, XSD.minLength, XSD.maxLength, XSD.pattern,
    XSD.minInclusive, XSD.minExclusive, XSD.maxInclusive, XSD.maxExclusive,
    XSD.totalDigits, XSD.fractionDigits,
])

BUILTIN_CLASSES = frozenset([OWL.Thing, OWL.Nothing])

BUILTIN_OBJECT_PROPERTIES = frozenset([OWL.topObjectProperty, OWL.bottomObjectProperty])

BUILTIN_DATA_PROPERTIES = frozenset([OWL.topDataProperty, OWL.bottomDataProperty])

BUILTIN_ANNOTATION_PROPERTIES = frozenset([
    RDFS.label,
    RDFS.comment,
    RDFS.seeAlso,
    RDFS.isDefinedBy,
    OWL.deprecated,
    OWL.versionInfo,
    OWL.priorVersion,
    OWL.backwardCompatibleWith,
    OWL.incompatibleWith,
])

BUILTIN_DATATYPES = frozenset([RDFS.Literal, RDF.PlainLiteral, RDF.XMLLiteral, OWL.real, OWL.rational])

RESERVED_NAMESPACES = tuple(str(ns) for ns in (RDF, RDFS, OWL, XSD))


def is_reserved(term) -> bool:
    """True if ``term`` is an IRI in the rdf, rdfs, owl or xsd namespace."""
    return isinstance(term, URIRef) and str(term).startswith(RESERVED_NAMESPACES)


def is_annotation_predicate(term) -> bool:
    """True if ``term`` may be the predicate of an annotation triple."""
    return isinstance(term, URIRef) and (not is_reserved(term) or term in BUILTIN_ANNOTATION_PROPERTIES)


def builtin_kinds(term) -> FrozenSet[Type]:
    """Entity kinds that ``term`` has without being declared."""
    kinds = set()
    if term in BUILTIN_CLASSES:
        kinds.add(Class)
    if term in BUILTIN_OBJECT_PROPERTIES:
        kinds.add(ObjectProperty)
    if term in BUILTIN_DATA_PROPERTIES:
        kinds.add(DataProperty)
    if term in BUILTIN_ANNOTATION_PROPERTIES:
        kinds.add(AnnotationProperty)
    if term in BUILTIN_DATATYPES or (isinstance(term, URIRef) and str(term).startswith(str(XSD))):
        kinds.add(Datatype)
    return frozenset(kinds)
