"""
OWL/XML Module

This module reads the OWL/XML serialisation into the same typed model as the
RDF reader, which lets the two readers be checked against each other.

Public Interface:
- read: read a document with a fresh construction context
- read_with_build: the same, sharing the caller's construction context
"""

from .reader import read, read_with_build

__all__ = ['read', 'read_with_build']
