"""
RDF Reader Module

This module reads OWL 2 ontologies from their RDF serialisation into the typed
model of the ``ontology`` package.

Public Interface:
- read: parse a document and build an ontology with a fresh construction context
- read_with_build: the same, sharing the caller's construction context
- read_triples: build an ontology from an already materialised triple sequence
- ReaderConfig: reader configuration
- ReaderError and subclasses: everything the reader raises
"""

from .config import ReaderConfig, UnmatchedPolicy
from .errors import (
    IncompleteConstructError, MalformedInputError, MissingDeclarationError, ReaderError,
    UnrecognizedTripleError, UnsupportedConstructError,
)
from .reader import read, read_triples, read_with_build

__all__ = [
    'read', 'read_with_build', 'read_triples',
    'ReaderConfig', 'UnmatchedPolicy',
    'ReaderError', 'MalformedInputError', 'IncompleteConstructError', 'MissingDeclarationError',
    'UnrecognizedTripleError', 'UnsupportedConstructError',
]
