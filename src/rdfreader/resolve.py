"""
Helpers that turn rdflib terms into model values during finalisation.

Lookups that depend on what an IRI has been declared as go through the
ontology built so far, plus the built-in vocabulary.
"""

from typing import FrozenSet, Type

from rdflib import BNode, Literal as RDFLiteral, URIRef
from rdflib.namespace import RDF

from ontology import Build, Ontology
from ontology.domain import (
    AnnotationProperty, AnnotationValue, DataProperty, Literal, NamedIndividual, ObjectProperty,
)
from ontology.vocab import builtin_kinds

from .errors import MissingDeclarationError, UnsupportedConstructError


PROPERTY_KINDS = (ObjectProperty, DataProperty, AnnotationProperty)


def kinds(build: Build, ontology: Ontology, term) -> FrozenSet[Type]:
    """Entity kinds of an IRI term, declared or built in."""
    if not isinstance(term, URIRef):
        return frozenset()
    return ontology.declared_kinds(build.iri(term)) | builtin_kinds(term)


def property_kind(build: Build, ontology: Ontology, term) -> Type:
    """Decide whether ``term`` is an object, data or annotation property.

    Raises:
        MissingDeclarationError: If the ontology declares no property kind for the IRI
        UnsupportedConstructError: If it is declared as more than one kind
    """
    found = [kind for kind in PROPERTY_KINDS if kind in kinds(build, ontology, term)]
    if not found:
        raise MissingDeclarationError(term, "property")
    if len(found) > 1:
        names = ", ".join(kind.__name__ for kind in found)
        raise UnsupportedConstructError(f"{term} is declared as more than one property kind: {names}")
    return found[0]


def literal(build: Build, term) -> Literal:
    if not isinstance(term, RDFLiteral):
        raise UnsupportedConstructError(f"Expected a literal, found {term!r}")
    datatype = term.datatype
    if term.language or datatype == RDF.PlainLiteral:
        datatype = None
    return Literal(
        str(term),
        lang=term.language or None,
        datatype=build.iri(datatype) if datatype is not None else None,
    )


def individual(build: Build, term) -> NamedIndividual:
    if isinstance(term, BNode):
        raise UnsupportedConstructError(f"Anonymous individuals are not supported: {term!r}")
    return build.named_individual(term)


def annotation_value(build: Build, term) -> AnnotationValue:
    if isinstance(term, RDFLiteral):
        return literal(build, term)
    if isinstance(term, URIRef):
        return build.iri(term)
    raise UnsupportedConstructError(f"Anonymous annotation values are not supported: {term!r}")
