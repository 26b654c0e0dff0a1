"""
Reader for the OWL/XML serialisation.

OWL/XML mirrors the structural model element for element, so unlike the RDF
reader there is no triple matching: every axiom element is decoded directly
into its model type.
"""

import logging
import os
import xml.etree.ElementTree as ET
from typing import BinaryIO, Callable, Dict, List, Optional, Tuple, Union
from urllib.parse import urljoin

from rdflib.namespace import OWL, RDF, RDFS, XSD

from ontology import AnnotatedAxiom, Build, Ontology, OntologyID
from ontology import domain as d
from rdfreader.errors import MalformedInputError, UnsupportedConstructError


logger = logging.getLogger(__name__)

OWX_NS = "http://www.w3.org/2002/07/owl#"
XML_NS = "http://www.w3.org/XML/1998/namespace"

STANDARD_PREFIXES = {
    "owl": str(OWL),
    "rdf": str(RDF),
    "rdfs": str(RDFS),
    "xsd": str(XSD),
    "xml": XML_NS + "#",
}

Source = Union[str, bytes, os.PathLike, BinaryIO]


def _local(element: ET.Element) -> str:
    tag = element.tag
    if tag.startswith("{"):
        namespace, _, name = tag[1:].partition("}")
        if namespace != OWX_NS:
            raise UnsupportedConstructError(f"Element {tag} is not in the OWL namespace")
        return name
    return tag


class OWXReader:
    """Decodes one OWL/XML document."""

    def __init__(self, build: Build):
        self.build = build
        self.base: Optional[str] = None
        self.prefixes: Dict[str, str] = {}

        self._axioms: Dict[str, Callable[[List[ET.Element]], object]] = {
            "Declaration": self._declaration,
            "SubClassOf": lambda c: d.SubClassOf(self.class_expression(c[0]), self.class_expression(c[1])),
            "EquivalentClasses": lambda c: d.EquivalentClasses([self.class_expression(e) for e in c]),
            "DisjointClasses": lambda c: d.DisjointClasses([self.class_expression(e) for e in c]),
            "DisjointUnion": lambda c: d.DisjointUnion(
                self.class_(c[0]), [self.class_expression(e) for e in c[1:]]
            ),
            "SubObjectPropertyOf": self._sub_object_property_of,
            "EquivalentObjectProperties": lambda c: d.EquivalentObjectProperties(
                [self.object_property_expression(e) for e in c]
            ),
            "DisjointObjectProperties": lambda c: d.DisjointObjectProperties(
                [self.object_property_expression(e) for e in c]
            ),
            "InverseObjectProperties": lambda c: d.InverseObjectProperties(
                self.object_property_expression(c[0]), self.object_property_expression(c[1])
            ),
            "ObjectPropertyDomain": lambda c: d.ObjectPropertyDomain(
                self.object_property_expression(c[0]), self.class_expression(c[1])
            ),
            "ObjectPropertyRange": lambda c: d.ObjectPropertyRange(
                self.object_property_expression(c[0]), self.class_expression(c[1])
            ),
            "SubDataPropertyOf": lambda c: d.SubDataPropertyOf(self.data_property(c[0]), self.data_property(c[1])),
            "EquivalentDataProperties": lambda c: d.EquivalentDataProperties([self.data_property(e) for e in c]),
            "DisjointDataProperties": lambda c: d.DisjointDataProperties([self.data_property(e) for e in c]),
            "DataPropertyDomain": lambda c: d.DataPropertyDomain(
                self.data_property(c[0]), self.class_expression(c[1])
            ),
            "DataPropertyRange": lambda c: d.DataPropertyRange(self.data_property(c[0]), self.data_range(c[1])),
            "FunctionalDataProperty": lambda c: d.FunctionalDataProperty(self.data_property(c[0])),
            "SameIndividual": lambda c: d.SameIndividual([self.individual(e) for e in c]),
            "DifferentIndividuals": lambda c: d.DifferentIndividuals([self.individual(e) for e in c]),
            "ClassAssertion": lambda c: d.ClassAssertion(self.class_expression(c[0]), self.individual(c[1])),
            "ObjectPropertyAssertion": lambda c: d.ObjectPropertyAssertion(
                self.object_property_expression(c[0]), self.individual(c[1]), self.individual(c[2])
            ),
            "DataPropertyAssertion": lambda c: d.DataPropertyAssertion(
                self.data_property(c[0]), self.individual(c[1]), self.literal(c[2])
            ),
            "NegativeObjectPropertyAssertion": lambda c: d.NegativeObjectPropertyAssertion(
                self.object_property_expression(c[0]), self.individual(c[1]), self.individual(c[2])
            ),
            "NegativeDataPropertyAssertion": lambda c: d.NegativeDataPropertyAssertion(
                self.data_property(c[0]), self.individual(c[1]), self.literal(c[2])
            ),
            "HasKey": self._has_key,
            "AnnotationAssertion": lambda c: d.AnnotationAssertion(
                self.iri_element(c[1]), d.Annotation(self.annotation_property(c[0]), self.annotation_value(c[2]))
            ),
            "SubAnnotationPropertyOf": lambda c: d.SubAnnotationPropertyOf(
                self.annotation_property(c[0]), self.annotation_property(c[1])
            ),
            "AnnotationPropertyDomain": lambda c: d.AnnotationPropertyDomain(
                self.annotation_property(c[0]), self.iri_element(c[1])
            ),
            "AnnotationPropertyRange": lambda c: d.AnnotationPropertyRange(
                self.annotation_property(c[0]), self.iri_element(c[1])
            ),
        }
        characteristics = [
            d.FunctionalObjectProperty, d.InverseFunctionalObjectProperty, d.ReflexiveObjectProperty,
            d.IrreflexiveObjectProperty, d.SymmetricObjectProperty, d.AsymmetricObjectProperty,
            d.TransitiveObjectProperty,
        ]
        for characteristic in characteristics:
            self._axioms[characteristic.__name__] = (
                lambda c, characteristic=characteristic: characteristic(self.object_property_expression(c[0]))
            )

    # IRIs

    def resolve(self, value: str) -> d.IRI:
        if self.base is not None:
            value = urljoin(self.base, value)
        return self.build.iri(value)

    def expand(self, curie: str) -> d.IRI:
        prefix, sep, name = curie.partition(":")
        if not sep:
            prefix, name = "", curie
        namespace = self.prefixes.get(prefix, STANDARD_PREFIXES.get(prefix))
        if namespace is None:
            raise MalformedInputError(f"Undeclared prefix in abbreviated IRI {curie!r}")
        return self.build.iri(namespace + name)

    def entity_iri(self, element: ET.Element) -> d.IRI:
        if "IRI" in element.attrib:
            return self.resolve(element.attrib["IRI"])
        if "abbreviatedIRI" in element.attrib:
            return self.expand(element.attrib["abbreviatedIRI"])
        raise MalformedInputError(f"<{_local(element)}> has no IRI")

    def iri_element(self, element: ET.Element) -> d.IRI:
        name = _local(element)
        text = (element.text or "").strip()
        if name == "IRI":
            return self.resolve(text)
        if name == "AbbreviatedIRI":
            return self.expand(text)
        raise UnsupportedConstructError(f"Expected an IRI, found <{name}>")

    # Entities and expressions

    def _expect(self, element: ET.Element, name: str) -> d.IRI:
        if _local(element) != name:
            raise UnsupportedConstructError(f"Expected <{name}>, found <{_local(element)}>")
        return self.entity_iri(element)

    def class_(self, element: ET.Element) -> d.Class:
        return d.Class(self._expect(element, "Class"))

    def data_property(self, element: ET.Element) -> d.DataProperty:
        return d.DataProperty(self._expect(element, "DataProperty"))

    def annotation_property(self, element: ET.Element) -> d.AnnotationProperty:
        return d.AnnotationProperty(self._expect(element, "AnnotationProperty"))

    def datatype(self, element: ET.Element) -> d.Datatype:
        return d.Datatype(self._expect(element, "Datatype"))

    def individual(self, element: ET.Element) -> d.NamedIndividual:
        if _local(element) == "AnonymousIndividual":
            raise UnsupportedConstructError("Anonymous individuals are not supported")
        return d.NamedIndividual(self._expect(element, "NamedIndividual"))

    def entity(self, element: ET.Element):
        name = _local(element)
        kinds = {kind.__name__: kind for kind in d.ENTITY_KINDS}
        if name not in kinds:
            raise UnsupportedConstructError(f"<{name}> is not an entity")
        return kinds[name](self.entity_iri(element))

    def object_property_expression(self, element: ET.Element):
        if _local(element) == "ObjectInverseOf":
            return d.InverseObjectProperty(d.ObjectProperty(self._expect(element[0], "ObjectProperty")))
        return d.ObjectProperty(self._expect(element, "ObjectProperty"))

    def literal(self, element: ET.Element) -> d.Literal:
        if _local(element) != "Literal":
            raise UnsupportedConstructError(f"Expected <Literal>, found <{_local(element)}>")
        lang = element.attrib.get(f"{{{XML_NS}}}lang") or None
        datatype = element.attrib.get("datatypeIRI")
        if lang or datatype == str(RDF.PlainLiteral):
            datatype = None
        return d.Literal(
            element.text or "",
            lang=lang,
            datatype=self.resolve(datatype) if datatype else None,
        )

    def annotation_value(self, element: ET.Element):
        if _local(element) == "Literal":
            return self.literal(element)
        return self.iri_element(element)

    def annotation(self, element: ET.Element) -> d.Annotation:
        children = list(element)
        if any(_local(child) == "Annotation" for child in children):
            raise UnsupportedConstructError("Annotations on annotations are not supported")
        return d.Annotation(self.annotation_property(children[0]), self.annotation_value(children[1]))

    def class_expression(self, element: ET.Element):
        name = _local(element)
        c = list(element)

        if name == "Class":
            return self.class_(element)
        if name == "ObjectIntersectionOf":
            return d.ObjectIntersectionOf([self.class_expression(e) for e in c])
        if name == "ObjectUnionOf":
            return d.ObjectUnionOf([self.class_expression(e) for e in c])
        if name == "ObjectComplementOf":
            return d.ObjectComplementOf(self.class_expression(c[0]))
        if name == "ObjectOneOf":
            return d.ObjectOneOf([self.individual(e) for e in c])
        if name == "ObjectSomeValuesFrom":
            return d.ObjectSomeValuesFrom(self.object_property_expression(c[0]), self.class_expression(c[1]))
        if name == "ObjectAllValuesFrom":
            return d.ObjectAllValuesFrom(self.object_property_expression(c[0]), self.class_expression(c[1]))
        if name == "ObjectHasValue":
            return d.ObjectHasValue(self.object_property_expression(c[0]), self.individual(c[1]))
        if name in ("ObjectMinCardinality", "ObjectMaxCardinality", "ObjectExactCardinality"):
            filler = self.class_expression(c[1]) if len(c) > 1 else None
            return getattr(d, name)(self.cardinality(element), self.object_property_expression(c[0]), filler)
        if name == "DataSomeValuesFrom":
            return d.DataSomeValuesFrom(self.data_property(c[0]), self.data_range(c[1]))
        if name == "DataAllValuesFrom":
            return d.DataAllValuesFrom(self.data_property(c[0]), self.data_range(c[1]))
        if name == "DataHasValue":
            return d.DataHasValue(self.data_property(c[0]), self.literal(c[1]))
        if name in ("DataMinCardinality", "DataMaxCardinality", "DataExactCardinality"):
            filler = self.data_range(c[1]) if len(c) > 1 else None
            return getattr(d, name)(self.cardinality(element), self.data_property(c[0]), filler)

        raise UnsupportedConstructError(f"Unsupported class expression <{name}>")

    def data_range(self, element: ET.Element):
        name = _local(element)
        c = list(element)

        if name == "Datatype":
            return self.datatype(element)
        if name == "DataIntersectionOf":
            return d.DataIntersectionOf([self.data_range(e) for e in c])
        if name == "DataUnionOf":
            return d.DataUnionOf([self.data_range(e) for e in c])
        if name == "DataComplementOf":
            return d.DataComplementOf(self.data_range(c[0]))
        if name == "DataOneOf":
            return d.DataOneOf([self.literal(e) for e in c])
        if name == "DatatypeRestriction":
            return d.DatatypeRestriction(self.datatype(c[0]), [self.facet(e) for e in c[1:]])

        raise UnsupportedConstructError(f"Unsupported data range <{name}>")

    def facet(self, element: ET.Element) -> d.FacetRestriction:
        if _local(element) != "FacetRestriction" or "facet" not in element.attrib:
            raise MalformedInputError(f"Expected <FacetRestriction facet=...>, found <{_local(element)}>")
        return d.FacetRestriction(self.resolve(element.attrib["facet"]), self.literal(element[0]))

    @staticmethod
    def cardinality(element: ET.Element) -> int:
        try:
            return int(element.attrib["cardinality"])
        except (KeyError, ValueError):
            raise MalformedInputError(f"<{_local(element)}> has no valid cardinality")

    # Axioms

    def _declaration(self, c: List[ET.Element]) -> d.Declaration:
        return d.Declaration(self.entity(c[0]))

    def _sub_object_property_of(self, c: List[ET.Element]) -> d.SubObjectPropertyOf:
        if _local(c[0]) == "ObjectPropertyChain":
            sub = d.ObjectPropertyChain([self.object_property_expression(e) for e in c[0]])
        else:
            sub = self.object_property_expression(c[0])
        return d.SubObjectPropertyOf(sub, self.object_property_expression(c[1]))

    def _has_key(self, c: List[ET.Element]) -> d.HasKey:
        """HasKey lists its object property expressions before its data properties."""
        keys = c[1:]
        data = [self.data_property(e) for e in keys if _local(e) == "DataProperty"]
        objects = [self.object_property_expression(e) for e in keys if _local(e) != "DataProperty"]
        return d.HasKey(self.class_expression(c[0]), objects, data)

    def axiom(self, element: ET.Element) -> AnnotatedAxiom:
        name = _local(element)
        handler = self._axioms.get(name)
        if handler is None:
            raise UnsupportedConstructError(f"Unsupported axiom <{name}>")

        annotations = [self.annotation(e) for e in element if _local(e) == "Annotation"]
        operands = [e for e in element if _local(e) != "Annotation"]
        try:
            axiom = handler(operands)
        except IndexError:
            raise MalformedInputError(f"<{name}> has too few operands")
        return AnnotatedAxiom(axiom, annotations)

    def read(self, root: ET.Element) -> Ontology:
        if _local(root) != "Ontology":
            raise MalformedInputError(f"Root element is <{_local(root)}>, expected <Ontology>")

        self.base = root.attrib.get(f"{{{XML_NS}}}base")
        for element in root:
            if _local(element) == "Prefix":
                self.prefixes[element.attrib.get("name", "")] = element.attrib["IRI"]

        ontology = Ontology()
        iri = root.attrib.get("ontologyIRI")
        viri = root.attrib.get("versionIRI")
        ontology.id = OntologyID(
            iri=self.build.iri(iri) if iri else None,
            viri=self.build.iri(viri) if viri else None,
        )

        for element in root:
            name = _local(element)
            if name == "Prefix":
                continue
            if name == "Import":
                ontology.insert(d.Import(self.resolve((element.text or "").strip())))
            elif name == "Annotation":
                ontology.insert(d.OntologyAnnotation(self.annotation(element)))
            else:
                ontology.insert(self.axiom(element))

        logger.debug(f"Read {len(ontology)} axioms from OWL/XML")
        return ontology


def _parse(source: Source) -> ET.Element:
    try:
        if isinstance(source, (bytes, bytearray)):
            return ET.fromstring(bytes(source))
        return ET.parse(source).getroot()
    except ET.ParseError as e:
        raise MalformedInputError(f"Could not parse OWL/XML input: {e}") from e


def read_with_build(source: Source, build: Build) -> Tuple[Ontology, Dict[str, str]]:
    """
    Read an OWL/XML document, interning IRIs through the given context.

    Args:
        source: Path, binary file object or bytes
        build: Construction context

    Returns:
        Tuple of (ontology, prefix mapping declared by the document)

    Raises:
        MalformedInputError: If the document is not well-formed OWL/XML
        UnsupportedConstructError: If it contains constructs outside the model
    """
    reader = OWXReader(build)
    ontology = reader.read(_parse(source))
    return ontology, dict(reader.prefixes)


def read(source: Source) -> Tuple[Ontology, Dict[str, str]]:
    return read_with_build(source, Build())
