"""
Domain models for the ontology module.

These models represent the typed OWL 2 structural model that the readers
produce: IRIs, named entities, literals, class and property expressions,
axioms and their annotations. All models are immutable and hashable so that
axioms can be collected in sets and compared field for field.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Tuple, Union


@dataclass(frozen=True)
class IRI:
    """An IRI. Build instances through ``Build.iri`` so that they are shared."""

    value: str

    def __str__(self) -> str:
        return self.value


def _frozen(items: Iterable) -> frozenset:
    return items if isinstance(items, frozenset) else frozenset(items)


# Named entities

@dataclass(frozen=True)
class Class:
    iri: IRI


@dataclass(frozen=True)
class ObjectProperty:
    iri: IRI


@dataclass(frozen=True)
class DataProperty:
    iri: IRI


@dataclass(frozen=True)
class AnnotationProperty:
    iri: IRI


@dataclass(frozen=True)
class NamedIndividual:
    iri: IRI


@dataclass(frozen=True)
class Datatype:
    iri: IRI


NamedEntity = Union[Class, ObjectProperty, DataProperty, AnnotationProperty, NamedIndividual, Datatype]

ENTITY_KINDS = (Class, ObjectProperty, DataProperty, AnnotationProperty, NamedIndividual, Datatype)


@dataclass(frozen=True)
class Literal:
    """A literal value.

    Language tagged literals carry no datatype, mirroring the RDF 1.0 plain
    literal the parsers hand us.
    """

    literal: str
    lang: Optional[str] = None
    datatype: Optional[IRI] = None


AnnotationValue = Union[IRI, Literal]


@dataclass(frozen=True)
class Annotation:
    property: AnnotationProperty
    value: AnnotationValue


# Property expressions

@dataclass(frozen=True)
class InverseObjectProperty:
    property: ObjectProperty


ObjectPropertyExpression = Union[ObjectProperty, InverseObjectProperty]


@dataclass(frozen=True)
class ObjectPropertyChain:
    properties: Tuple[ObjectPropertyExpression, ...]

    def __post_init__(self):
        object.__setattr__(self, "properties", tuple(self.properties))


# Data ranges

@dataclass(frozen=True)
class DataIntersectionOf:
    operands: FrozenSet["DataRange"]

    def __post_init__(self):
        object.__setattr__(self, "operands", _frozen(self.operands))


@dataclass(frozen=True)
class DataUnionOf:
    operands: FrozenSet["DataRange"]

    def __post_init__(self):
        object.__setattr__(self, "operands", _frozen(self.operands))


@dataclass(frozen=True)
class DataComplementOf:
    operand: "DataRange"


@dataclass(frozen=True)
class DataOneOf:
    literals: FrozenSet[Literal]

    def __post_init__(self):
        object.__setattr__(self, "literals", _frozen(self.literals))


@dataclass(frozen=True)
class FacetRestriction:
    facet: IRI
    value: Literal


@dataclass(frozen=True)
class DatatypeRestriction:
    """A datatype narrowed by facets, e.g. xsd:integer with xsd:minInclusive 5."""

    datatype: Datatype
    restrictions: FrozenSet[FacetRestriction]

    def __post_init__(self):
        object.__setattr__(self, "restrictions", _frozen(self.restrictions))


DataRange = Union[Datatype, DataIntersectionOf, DataUnionOf, DataComplementOf, DataOneOf, DatatypeRestriction]


# Class expressions

@dataclass(frozen=True)
class ObjectIntersectionOf:
    operands: FrozenSet["ClassExpression"]

    def __post_init__(self):
        object.__setattr__(self, "operands", _frozen(self.operands))


@dataclass(frozen=True)
class ObjectUnionOf:
    operands: FrozenSet["ClassExpression"]

    def __post_init__(self):
        object.__setattr__(self, "operands", _frozen(self.operands))


@dataclass(frozen=True)
class ObjectComplementOf:
    operand: "ClassExpression"


@dataclass(frozen=True)
class ObjectOneOf:
    individuals: FrozenSet[NamedIndividual]

    def __post_init__(self):
        object.__setattr__(self, "individuals", _frozen(self.individuals))


@dataclass(frozen=True)
class ObjectSomeValuesFrom:
    property: ObjectPropertyExpression
    filler: "ClassExpression"


@dataclass(frozen=True)
class ObjectAllValuesFrom:
    property: ObjectPropertyExpression
    filler: "ClassExpression"


@dataclass(frozen=True)
class ObjectHasValue:
    property: ObjectPropertyExpression
    individual: NamedIndividual


@dataclass(frozen=True)
class ObjectMinCardinality:
    cardinality: int
    property: ObjectPropertyExpression
    filler: Optional["ClassExpression"] = None  # None is unqualified


@dataclass(frozen=True)
class ObjectMaxCardinality:
    cardinality: int
    property: ObjectPropertyExpression
    filler: Optional["ClassExpression"] = None


@dataclass(frozen=True)
class ObjectExactCardinality:
    cardinality: int
    property: ObjectPropertyExpression
    filler: Optional["ClassExpression"] = None


@dataclass(frozen=True)
class DataSomeValuesFrom:
    property: DataProperty
    filler: DataRange


@dataclass(frozen=True)
class DataAllValuesFrom:
    property: DataProperty
    filler: DataRange


@dataclass(frozen=True)
class DataHasValue:
    property: DataProperty
    value: Literal


@dataclass(frozen=True)
class DataMinCardinality:
    cardinality: int
    property: DataProperty
    filler: Optional[DataRange] = None


@dataclass(frozen=True)
class DataMaxCardinality:
    cardinality: int
    property: DataProperty
    filler: Optional[DataRange] = None


@dataclass(frozen=True)
class DataExactCardinality:
    cardinality: int
    property: DataProperty
    filler: Optional[DataRange] = None


ClassExpression = Union[
    Class, ObjectIntersectionOf, ObjectUnionOf, ObjectComplementOf, ObjectOneOf,
    ObjectSomeValuesFrom, ObjectAllValuesFrom, ObjectHasValue,
    ObjectMinCardinality, ObjectMaxCardinality, ObjectExactCardinality,
    DataSomeValuesFrom, DataAllValuesFrom, DataHasValue,
    DataMinCardinality, DataMaxCardinality, DataExactCardinality,
]


# Axioms

@dataclass(frozen=True)
class Declaration:
    entity: NamedEntity


@dataclass(frozen=True)
class Import:
    iri: IRI


@dataclass(frozen=True)
class OntologyAnnotation:
    annotation: Annotation


@dataclass(frozen=True)
class SubClassOf:
    sub: ClassExpression
    sup: ClassExpression


@dataclass(frozen=True)
class EquivalentClasses:
    classes: FrozenSet[ClassExpression]

    def __post_init__(self):
        object.__setattr__(self, "classes", _frozen(self.classes))


@dataclass(frozen=True)
class DisjointClasses:
    classes: FrozenSet[ClassExpression]

    def __post_init__(self):
        object.__setattr__(self, "classes", _frozen(self.classes))


@dataclass(frozen=True)
class DisjointUnion:
    cls: Class
    classes: FrozenSet[ClassExpression]

    def __post_init__(self):
        object.__setattr__(self, "classes", _frozen(self.classes))


@dataclass(frozen=True)
class SubObjectPropertyOf:
    sub: Union[ObjectPropertyExpression, ObjectPropertyChain]
    sup: ObjectPropertyExpression


@dataclass(frozen=True)
class EquivalentObjectProperties:
    properties: FrozenSet[ObjectPropertyExpression]

    def __post_init__(self):
        object.__setattr__(self, "properties", _frozen(self.properties))


@dataclass(frozen=True)
class DisjointObjectProperties:
    properties: FrozenSet[ObjectPropertyExpression]

    def __post_init__(self):
        object.__setattr__(self, "properties", _frozen(self.properties))


@dataclass(frozen=True)
class InverseObjectProperties:
    first: ObjectProperty
    second: ObjectProperty


@dataclass(frozen=True)
class ObjectPropertyDomain:
    property: ObjectPropertyExpression
    domain: ClassExpression


@dataclass(frozen=True)
class ObjectPropertyRange:
    property: ObjectPropertyExpression
    range: ClassExpression


@dataclass(frozen=True)
class FunctionalObjectProperty:
    property: ObjectPropertyExpression


@dataclass(frozen=True)
class InverseFunctionalObjectProperty:
    property: ObjectPropertyExpression


@dataclass(frozen=True)
class ReflexiveObjectProperty:
    property: ObjectPropertyExpression


@dataclass(frozen=True)
class IrreflexiveObjectProperty:
    property: ObjectPropertyExpression


@dataclass(frozen=True)
class SymmetricObjectProperty:
    property: ObjectPropertyExpression


@dataclass(frozen=True)
class AsymmetricObjectProperty:
    property: ObjectPropertyExpression


@dataclass(frozen=True)
class TransitiveObjectProperty:
    property: ObjectPropertyExpression


@dataclass(frozen=True)
class SubDataPropertyOf:
    sub: DataProperty
    sup: DataProperty


@dataclass(frozen=True)
class EquivalentDataProperties:
    properties: FrozenSet[DataProperty]

    def __post_init__(self):
        object.__setattr__(self, "properties", _frozen(self.properties))


@dataclass(frozen=True)
class DisjointDataProperties:
    properties: FrozenSet[DataProperty]

    def __post_init__(self):
        object.__setattr__(self, "properties", _frozen(self.properties))


@dataclass(frozen=True)
class DataPropertyDomain:
    property: DataProperty
    domain: ClassExpression


@dataclass(frozen=True)
class DataPropertyRange:
    property: DataProperty
    range: DataRange


@dataclass(frozen=True)
class FunctionalDataProperty:
    property: DataProperty


@dataclass(frozen=True)
class SameIndividual:
    individuals: FrozenSet[NamedIndividual]

    def __post_init__(self):
        object.__setattr__(self, "individuals", _frozen(self.individuals))


@dataclass(frozen=True)
class DifferentIndividuals:
    individuals: FrozenSet[NamedIndividual]

    def __post_init__(self):
        object.__setattr__(self, "individuals", _frozen(self.individuals))


@dataclass(frozen=True)
class ClassAssertion:
    ce: ClassExpression
    individual: NamedIndividual


@dataclass(frozen=True)
class ObjectPropertyAssertion:
    property: ObjectPropertyExpression
    source: NamedIndividual
    target: NamedIndividual


@dataclass(frozen=True)
class DataPropertyAssertion:
    property: DataProperty
    source: NamedIndividual
    target: Literal


@dataclass(frozen=True)
class NegativeObjectPropertyAssertion:
    property: ObjectPropertyExpression
    source: NamedIndividual
    target: NamedIndividual


@dataclass(frozen=True)
class NegativeDataPropertyAssertion:
    property: DataProperty
    source: NamedIndividual
    target: Literal


@dataclass(frozen=True)
class HasKey:
    """Instances of ``ce`` are identified by their values for the key properties."""

    ce: ClassExpression
    object_properties: FrozenSet[ObjectPropertyExpression]
    data_properties: FrozenSet[DataProperty]

    def __post_init__(self):
        object.__setattr__(self, "object_properties", _frozen(self.object_properties))
        object.__setattr__(self, "data_properties", _frozen(self.data_properties))


@dataclass(frozen=True)
class AnnotationAssertion:
    subject: IRI
    annotation: Annotation


@dataclass(frozen=True)
class SubAnnotationPropertyOf:
    sub: AnnotationProperty
    sup: AnnotationProperty


@dataclass(frozen=True)
class AnnotationPropertyDomain:
    property: AnnotationProperty
    iri: IRI


@dataclass(frozen=True)
class AnnotationPropertyRange:
    property: AnnotationProperty
    iri: IRI


Axiom = Union[
    Declaration, Import, OntologyAnnotation,
    SubClassOf, EquivalentClasses, DisjointClasses, DisjointUnion,
    SubObjectPropertyOf, EquivalentObjectProperties, DisjointObjectProperties,
    InverseObjectProperties, ObjectPropertyDomain, ObjectPropertyRange,
    FunctionalObjectProperty, InverseFunctionalObjectProperty,
    ReflexiveObjectProperty, IrreflexiveObjectProperty,
    SymmetricObjectProperty, AsymmetricObjectProperty, TransitiveObjectProperty,
    SubDataPropertyOf, EquivalentDataProperties, DisjointDataProperties,
    DataPropertyDomain, DataPropertyRange, FunctionalDataProperty,
    SameIndividual, DifferentIndividuals, ClassAssertion,
    ObjectPropertyAssertion, DataPropertyAssertion,
    NegativeObjectPropertyAssertion, NegativeDataPropertyAssertion, HasKey,
    AnnotationAssertion, SubAnnotationPropertyOf,
    AnnotationPropertyDomain, AnnotationPropertyRange,
]


@dataclass(frozen=True)
class AnnotatedAxiom:
    """An axiom together with the annotations attached to it."""

    axiom: Axiom
    annotations: FrozenSet[Annotation] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "annotations", _frozen(self.annotations))

    @property
    def kind(self) -> str:
        """Name of the wrapped axiom type, e.g. ``"SubClassOf"``."""
        return type(self.axiom).__name__


@dataclass(frozen=True)
class OntologyID:
    """Ontology identity: the primary IRI and the optional version IRI."""

    iri: Optional[IRI] = None
    viri: Optional[IRI] = None
