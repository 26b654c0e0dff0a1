"""
Unit test for the ontology domain models.

HOW TO RUN:
The virtual environment .venv should be activated before running the tests.

From the src directory, run:
    python -m ontology.test_domain

Or with pytest:
    pytest src/ontology/test_domain.py
"""

import sys
from dataclasses import FrozenInstanceError

import pytest

from .build import Build
from .domain import (
    IRI, Annotation, AnnotatedAxiom, AnnotationProperty, Class, DataProperty, Datatype, DatatypeRestriction,
    Declaration, EquivalentClasses, FacetRestriction, HasKey, InverseObjectProperty, Literal,
    ObjectIntersectionOf, ObjectMinCardinality, ObjectProperty, ObjectPropertyChain, ObjectSomeValuesFrom,
    OntologyID, SubClassOf, SubObjectPropertyOf,
)


EX = "http://example.com/iri#"


def test_iri_value_semantics():
    """Test that IRIs compare by string and print as their string."""
    print("Testing IRI value semantics...")

    a = IRI(EX + "A")
    assert a == IRI(EX + "A")
    assert hash(a) == hash(IRI(EX + "A"))
    assert a != IRI(EX + "B")
    assert str(a) == EX + "A"

    print("✓ IRI value semantics working correctly")


def test_models_are_immutable():
    """Test that model values cannot be modified after construction."""
    print("Testing immutability...")

    cls = Class(IRI(EX + "A"))
    with pytest.raises(FrozenInstanceError):
        cls.iri = IRI(EX + "B")

    annotated = AnnotatedAxiom(Declaration(cls))
    with pytest.raises(FrozenInstanceError):
        annotated.annotations = frozenset()

    print("✓ Models are immutable")


def test_nary_operands_are_sets():
    """Test that n-ary operands compare regardless of order and duplicates."""
    print("Testing n-ary operand sets...")

    a, b = Class(IRI(EX + "A")), Class(IRI(EX + "B"))

    assert EquivalentClasses([a, b]) == EquivalentClasses([b, a])
    assert EquivalentClasses([a, b, a]) == EquivalentClasses([a, b])
    assert isinstance(EquivalentClasses([a, b]).classes, frozenset)
    assert ObjectIntersectionOf([a, b]) == ObjectIntersectionOf((b, a))

    print("✓ N-ary operands behave as sets")


def test_property_chain_keeps_order():
    """Test that property chains are ordered, unlike n-ary operands."""
    print("Testing property chain ordering...")

    r, s = ObjectProperty(IRI(EX + "r")), ObjectProperty(IRI(EX + "s"))
    chain = ObjectPropertyChain([r, s])

    assert chain.properties == (r, s)
    assert chain != ObjectPropertyChain([s, r])
    assert SubObjectPropertyOf(chain, r) == SubObjectPropertyOf(ObjectPropertyChain((r, s)), r)

    print("✓ Property chains keep their order")


def test_nested_class_expressions_hash():
    """Test that nested expressions can be used as set members."""
    print("Testing nested class expressions...")

    r = ObjectProperty(IRI(EX + "r"))
    a, b = Class(IRI(EX + "A")), Class(IRI(EX + "B"))

    some = ObjectSomeValuesFrom(InverseObjectProperty(r), ObjectIntersectionOf([a, b]))
    axioms = {SubClassOf(a, some), SubClassOf(a, some)}
    assert len(axioms) == 1

    # a missing filler means unqualified
    assert ObjectMinCardinality(1, r) != ObjectMinCardinality(1, r, a)
    assert ObjectMinCardinality(1, r).filler is None

    print("✓ Nested class expressions are hashable")


def test_annotated_axiom_equality():
    """Test that annotated axioms compare on axiom and annotation set."""
    print("Testing annotated axiom equality...")

    build = Build()
    declaration = Declaration(build.class_(EX + "A"))
    label = Annotation(AnnotationProperty(build.iri(EX + "label")), Literal("A", lang="en"))

    assert AnnotatedAxiom(declaration) == AnnotatedAxiom(declaration, frozenset())
    assert AnnotatedAxiom(declaration, [label]) == AnnotatedAxiom(declaration, {label})
    assert AnnotatedAxiom(declaration, [label]) != AnnotatedAxiom(declaration)
    assert AnnotatedAxiom(declaration).kind == "Declaration"

    print("✓ Annotated axiom equality working correctly")


def test_literal_fields():
    """Test literal construction defaults."""
    print("Testing literals...")

    plain = Literal("x")
    assert plain.lang is None
    assert plain.datatype is None

    typed = Literal("10", datatype=IRI("http://www.w3.org/2001/XMLSchema#integer"))
    assert typed != Literal("10")
    assert Literal("x", lang="en") != Literal("x", lang="de")

    print("✓ Literals working correctly")


def test_ontology_id_defaults():
    """Test that an ontology ID starts without IRIs."""
    print("Testing ontology ID...")

    empty = OntologyID()
    assert empty.iri is None
    assert empty.viri is None
    assert OntologyID(IRI(EX)) == OntologyID(iri=IRI(EX), viri=None)

    print("✓ Ontology ID working correctly")


def test_keys_and_facets_are_sets():
    """Test that key properties and facet restrictions compare as sets."""
    print("Testing key and facet sets...")

    a, r = Class(IRI(EX + "A")), ObjectProperty(IRI(EX + "r"))
    d, e = DataProperty(IRI(EX + "d")), DataProperty(IRI(EX + "e"))
    assert HasKey(a, [r], [d, e, d]) == HasKey(a, [r], [e, d])
    assert HasKey(a, [r], []) != HasKey(a, [], [])

    integer = Datatype(IRI("http://www.w3.org/2001/XMLSchema#integer"))
    low = FacetRestriction(IRI("http://www.w3.org/2001/XMLSchema#minInclusive"), Literal("5"))
    high = FacetRestriction(IRI("http://www.w3.org/2001/XMLSchema#maxExclusive"), Literal("10"))
    assert DatatypeRestriction(integer, [low, high]) == DatatypeRestriction(integer, (high, low))
    assert len({DatatypeRestriction(integer, [low]), DatatypeRestriction(integer, [low])}) == 1

    print("✓ Key and facet sets working correctly")


def run_all_tests():
    """Run all test functions."""
    print("=" * 50)
    print("Running Ontology Domain Tests")
    print("=" * 50)

    test_functions = [
        test_iri_value_semantics,
        test_models_are_immutable,
        test_nary_operands_are_sets,
        test_property_chain_keeps_order,
        test_nested_class_expressions_hash,
        test_annotated_axiom_equality,
        test_literal_fields,
        test_ontology_id_defaults,
        test_keys_and_facets_are_sets,
    ]

    passed = 0
    failed = 0

    for test_func in test_functions:
        try:
            test_func()
            passed += 1
        except Exception as e:
            print(f"✗ {test_func.__name__} FAILED: {e}")
            failed += 1

    print("=" * 50)
    print(f"Test Results: {passed} passed, {failed} failed")
    print("=" * 50)

    return failed == 0


def main():
    """Main function to run the tests."""
    success = run_all_tests()
    if success:
        print("All tests passed!")
        return 0
    else:
        print("Some tests failed!")
        return 1


if __name__ == "__main__":
    sys.exit(main())
