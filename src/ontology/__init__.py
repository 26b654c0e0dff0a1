"""
Ontology Model Module

This module provides the typed OWL 2 structural model shared by the readers.

Public Interface:
- Ontology: identity plus a set of annotated axioms
- Build: construction context that interns IRIs and builds named entities
- domain: IRIs, entities, literals, class expressions and axioms
"""

from . import domain
from .build import Build
from .domain import AnnotatedAxiom, IRI, OntologyID
from .store import Ontology

__all__ = ["Ontology", "Build", "AnnotatedAxiom", "IRI", "OntologyID", "domain"]
