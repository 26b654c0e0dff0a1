"""
Unit test for the construction context and the vocabulary tables.

HOW TO RUN:
    pytest src/ontology/test_build.py
"""

from rdflib import URIRef
from rdflib.namespace import OWL, RDF, RDFS, XSD

from .build import Build
from .domain import IRI, AnnotationProperty, Class, Datatype, NamedIndividual, ObjectProperty
from .vocab import builtin_kinds, is_annotation_predicate, is_reserved


EX = "http://example.com/iri#"


def test_iri_interning():
    """Test that one Build hands out the identical IRI for equal strings."""
    print("Testing IRI interning...")

    build = Build()
    first = build.iri(EX + "A")

    assert build.iri(EX + "A") is first
    assert build.iri(URIRef(EX + "A")) is first
    assert build.iri(IRI(EX + "A")) is first
    assert len(build) == 1

    print("✓ IRI interning working correctly")


def test_separate_builds_are_equal_not_identical():
    """Test that two contexts produce equal but distinct IRIs."""
    print("Testing separate contexts...")

    one, two = Build(), Build()
    assert one.iri(EX + "A") == two.iri(EX + "A")
    assert one.iri(EX + "A") is not two.iri(EX + "A")

    print("✓ Separate contexts working correctly")


def test_entity_constructors():
    """Test the named entity helpers."""
    print("Testing entity constructors...")

    build = Build()
    assert build.class_(EX + "A") == Class(build.iri(EX + "A"))
    assert build.object_property(EX + "r") == ObjectProperty(build.iri(EX + "r"))
    assert build.named_individual(EX + "i") == NamedIndividual(build.iri(EX + "i"))
    assert build.annotation_property(RDFS.label).iri.value == str(RDFS.label)
    assert build.datatype(XSD.string) == Datatype(build.iri(str(XSD.string)))

    print("✓ Entity constructors working correctly")


def test_reserved_vocabulary():
    """Test reserved namespace and annotation predicate detection."""
    print("Testing reserved vocabulary...")

    assert is_reserved(OWL.Class)
    assert is_reserved(RDF.type)
    assert is_reserved(XSD.integer)
    assert not is_reserved(URIRef(EX + "A"))

    assert is_annotation_predicate(RDFS.label)
    assert is_annotation_predicate(URIRef(EX + "p"))
    assert not is_annotation_predicate(RDFS.subClassOf)
    assert not is_annotation_predicate(OWL.versionIRI)

    print("✓ Reserved vocabulary working correctly")


def test_builtin_kinds():
    """Test that built-in vocabulary counts as declared."""
    print("Testing built-in kinds...")

    assert builtin_kinds(OWL.Thing) == frozenset([Class])
    assert builtin_kinds(RDFS.comment) == frozenset([AnnotationProperty])
    assert builtin_kinds(OWL.topObjectProperty) == frozenset([ObjectProperty])
    assert builtin_kinds(XSD.nonNegativeInteger) == frozenset([Datatype])
    assert builtin_kinds(RDFS.Literal) == frozenset([Datatype])
    assert builtin_kinds(URIRef(EX + "A")) == frozenset()

    print("✓ Built-in kinds working correctly")
