"""
Construction context for ontology entities.

A ``Build`` interns IRIs so that every reader, and every acceptor inside a
reader, that asks for the same string gets the identical ``IRI`` object. One
``Build`` may be shared across several reads to share that canonicalisation.
"""

from typing import Dict, Union

from rdflib import URIRef

from .domain import (
    IRI, AnnotationProperty, Class, DataProperty, Datatype, NamedIndividual, ObjectProperty,
)


class Build:
    """Canonical constructor for IRIs and named entities."""

    def __init__(self):
        self._iris: Dict[str, IRI] = {}

    def iri(self, value: Union[str, URIRef, IRI]) -> IRI:
        """Return the shared IRI for ``value``."""
        if isinstance(value, IRI):
            value = value.value
        key = str(value)
        iri = self._iris.get(key)
        if iri is None:
            iri = IRI(key)
            self._iris[key] = iri
        return iri

    def class_(self, value) -> Class:
        return Class(self.iri(value))

    def object_property(self, value) -> ObjectProperty:
        return ObjectProperty(self.iri(value))

    def data_property(self, value) -> DataProperty:
        return DataProperty(self.iri(value))

    def annotation_property(self, value) -> AnnotationProperty:
        return AnnotationProperty(self.iri(value))

    def named_individual(self, value) -> NamedIndividual:
        return NamedIndividual(self.iri(value))

    def datatype(self, value) -> Datatype:
        return Datatype(self.iri(value))

    def __len__(self) -> int:
        return len(self._iris)
