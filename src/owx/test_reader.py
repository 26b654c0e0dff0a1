"""
Unit test for the OWL/XML reader.

HOW TO RUN:
    pytest src/owx/test_reader.py
"""

from pathlib import Path

import pytest
from rdflib.namespace import RDFS, XSD

from ontology import AnnotatedAxiom, Build
from ontology.domain import (
    Annotation, AnnotationAssertion, Class, DataComplementOf, DataHasValue, DataOneOf, DataProperty,
    DataPropertyRange, DataSomeValuesFrom, DataUnionOf, Datatype, DatatypeRestriction, Declaration,
    FacetRestriction, HasKey, InverseObjectProperty, Literal, NegativeDataPropertyAssertion,
    NegativeObjectPropertyAssertion, NamedIndividual, ObjectMaxCardinality, ObjectProperty, ObjectSomeValuesFrom,
    SubClassOf, SubObjectPropertyOf, TransitiveObjectProperty,
)
from rdfreader.errors import MalformedInputError, UnsupportedConstructError

from .reader import read, read_with_build


OWX_DIR = Path(__file__).resolve().parents[2] / "ont" / "owl-xml"

EX = "http://example.com/iri#"

HEADER = (
    '<Ontology xmlns="http://www.w3.org/2002/07/owl#" xml:base="http://example.com/iri" '
    'ontologyIRI="http://example.com/iri">'
    '<Prefix name="" IRI="http://example.com/iri#"/>'
)


def document(body: str) -> bytes:
    return (HEADER + body + "</Ontology>").encode("utf-8")


def test_read_header_and_prefixes():
    """Test ontology identity and prefix declarations."""
    print("Testing OWL/XML header...")

    build = Build()
    ontology, prefixes = read_with_build(OWX_DIR / "ont-with-version.owx", build)

    assert ontology.id.iri == build.iri("http://example.com/iri")
    assert ontology.id.viri == build.iri("http://example.com/iri/1.0")
    assert prefixes[""] == EX
    assert list(ontology) == [AnnotatedAxiom(Declaration(build.class_(EX + "A")))]

    print("✓ OWL/XML header working correctly")


def test_abbreviated_iris_and_plain_literals():
    """Test abbreviated IRIs and rdf:PlainLiteral normalisation."""
    build = Build()
    ontology, _ = read_with_build(OWX_DIR / "one-label.owx", build)

    label = Annotation(build.annotation_property(RDFS.label), Literal("A"))
    assert AnnotatedAxiom(AnnotationAssertion(build.iri(EX + "A"), label)) in ontology


def test_axiom_annotations():
    build = Build()
    ontology, _ = read_with_build(OWX_DIR / "annotation-on-subclass.owx", build)

    comment = Annotation(build.annotation_property(RDFS.comment), Literal("Annotation on subclass"))
    subclass = SubClassOf(build.class_(EX + "A"), build.class_(EX + "B"))
    assert AnnotatedAxiom(subclass, [comment]) in ontology


def test_class_expressions():
    """Test nested expressions, cardinalities and data restrictions."""
    build = Build()
    ontology, _ = read_with_build(document(
        '<SubClassOf><Class IRI="#A"/>'
        '<ObjectSomeValuesFrom><ObjectInverseOf><ObjectProperty IRI="#r"/></ObjectInverseOf>'
        '<ObjectMaxCardinality cardinality="2"><ObjectProperty IRI="#r"/><Class IRI="#B"/></ObjectMaxCardinality>'
        '</ObjectSomeValuesFrom></SubClassOf>'
        '<SubClassOf><Class IRI="#A"/>'
        '<DataHasValue><DataProperty IRI="#d"/>'
        '<Literal datatypeIRI="http://www.w3.org/2001/XMLSchema#integer">3</Literal></DataHasValue>'
        '</SubClassOf>'
    ), build)

    r = ObjectProperty(build.iri(EX + "r"))
    nested = ObjectSomeValuesFrom(InverseObjectProperty(r), ObjectMaxCardinality(2, r, Class(build.iri(EX + "B"))))
    has_value = DataHasValue(DataProperty(build.iri(EX + "d")), Literal("3", datatype=build.iri(XSD.integer)))

    assert ontology.axioms == {
        AnnotatedAxiom(SubClassOf(build.class_(EX + "A"), nested)),
        AnnotatedAxiom(SubClassOf(build.class_(EX + "A"), has_value)),
    }


def test_characteristics_and_chains():
    build = Build()
    ontology, _ = read_with_build(OWX_DIR / "transitive-properties.owx", build)
    assert AnnotatedAxiom(TransitiveObjectProperty(build.object_property(EX + "r"))) in ontology

    ontology, _ = read_with_build(OWX_DIR / "subproperty-chain.owx", build)
    assert any(isinstance(a.axiom, SubObjectPropertyOf) for a in ontology)


@pytest.mark.parametrize("body, error", [
    ('<DatatypeDefinition><Datatype IRI="#t"/><Datatype abbreviatedIRI="xsd:integer"/></DatatypeDefinition>',
     UnsupportedConstructError),
    ('<SubClassOf><Class IRI="#A"/><DataSomeValuesFrom><DataProperty IRI="#d"/>'
     '<DataComplementOf/></DataSomeValuesFrom></SubClassOf>', MalformedInputError),
    ('<ClassAssertion><Class IRI="#A"/><AnonymousIndividual nodeID="x"/></ClassAssertion>',
     UnsupportedConstructError),
    ('<SubClassOf><Class IRI="#A"/></SubClassOf>', MalformedInputError),
    ('<SubClassOf><Class abbreviatedIRI="nope:A"/><Class IRI="#B"/></SubClassOf>', MalformedInputError),
    ('<SubClassOf><Class IRI="#A"/><ObjectMinCardinality><ObjectProperty IRI="#r"/>'
     '</ObjectMinCardinality></SubClassOf>', MalformedInputError),
])
def test_rejected_documents(body, error):
    """Test the errors raised for unsupported or malformed content."""
    with pytest.raises(error):
        read(document(body))


def test_not_xml():
    with pytest.raises(MalformedInputError):
        read(b"<Ontology")


def test_wrong_root():
    with pytest.raises(MalformedInputError):
        read(b'<Document xmlns="http://www.w3.org/2002/07/owl#"/>')


def test_declaration_entity_kinds():
    build = Build()
    ontology, _ = read_with_build(document(
        '<Declaration><ObjectProperty IRI="#r"/></Declaration>'
        '<Declaration><NamedIndividual IRI="#i"/></Declaration>'
    ), build)

    assert ontology.is_declared(build.iri(EX + "r"), ObjectProperty)
    assert len(ontology) == 2


def test_data_ranges():
    """Test data range connectives, enumerations and facet restrictions."""
    build = Build()
    ontology, _ = read_with_build(document(
        '<SubClassOf><Class IRI="#A"/><DataSomeValuesFrom><DataProperty IRI="#d"/>'
        '<DataUnionOf><Datatype abbreviatedIRI="xsd:string"/>'
        '<DataComplementOf><Datatype abbreviatedIRI="xsd:integer"/></DataComplementOf></DataUnionOf>'
        '</DataSomeValuesFrom></SubClassOf>'
        '<DataPropertyRange><DataProperty IRI="#d"/>'
        '<DatatypeRestriction><Datatype abbreviatedIRI="xsd:integer"/>'
        '<FacetRestriction facet="http://www.w3.org/2001/XMLSchema#minInclusive">'
        '<Literal datatypeIRI="http://www.w3.org/2001/XMLSchema#integer">5</Literal></FacetRestriction>'
        '</DatatypeRestriction></DataPropertyRange>'
        '<DataPropertyRange><DataProperty IRI="#e"/>'
        '<DataOneOf><Literal>a</Literal><Literal>b</Literal></DataOneOf></DataPropertyRange>'
    ), build)

    d, e = DataProperty(build.iri(EX + "d")), DataProperty(build.iri(EX + "e"))
    integer = Datatype(build.iri(XSD.integer))
    union = DataUnionOf([Datatype(build.iri(XSD.string)), DataComplementOf(integer)])
    at_least_five = DatatypeRestriction(
        integer, [FacetRestriction(build.iri(XSD.minInclusive), Literal("5", datatype=build.iri(XSD.integer)))],
    )

    assert ontology.axioms == {
        AnnotatedAxiom(SubClassOf(build.class_(EX + "A"), DataSomeValuesFrom(d, union))),
        AnnotatedAxiom(DataPropertyRange(d, at_least_five)),
        AnnotatedAxiom(DataPropertyRange(e, DataOneOf([Literal("a"), Literal("b")]))),
    }


def test_has_key_and_negative_assertions():
    build = Build()
    ontology, _ = read_with_build(document(
        '<HasKey><Class IRI="#A"/><ObjectProperty IRI="#r"/><DataProperty IRI="#d"/></HasKey>'
        '<NegativeObjectPropertyAssertion><ObjectProperty IRI="#r"/>'
        '<NamedIndividual IRI="#i"/><NamedIndividual IRI="#j"/></NegativeObjectPropertyAssertion>'
        '<NegativeDataPropertyAssertion><DataProperty IRI="#d"/>'
        '<NamedIndividual IRI="#i"/><Literal>x</Literal></NegativeDataPropertyAssertion>'
    ), build)

    r, d = ObjectProperty(build.iri(EX + "r")), DataProperty(build.iri(EX + "d"))
    i, j = NamedIndividual(build.iri(EX + "i")), NamedIndividual(build.iri(EX + "j"))

    assert ontology.axioms == {
        AnnotatedAxiom(HasKey(build.class_(EX + "A"), [r], [d])),
        AnnotatedAxiom(NegativeObjectPropertyAssertion(r, i, j)),
        AnnotatedAxiom(NegativeDataPropertyAssertion(d, i, Literal("x"))),
    }


def test_facet_without_literal_is_malformed():
    with pytest.raises(MalformedInputError):
        read(document(
            '<DataPropertyRange><DataProperty IRI="#d"/>'
            '<DatatypeRestriction><Datatype abbreviatedIRI="xsd:integer"/>'
            '<FacetRestriction facet="http://www.w3.org/2001/XMLSchema#minInclusive"/>'
            '</DatatypeRestriction></DataPropertyRange>'
        ))
