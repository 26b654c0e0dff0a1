"""
Errors raised while reading an ontology.

Every error is fatal to the read as a whole; there is no partial ontology.
"""


class ReaderError(Exception):
    """Base class for all reader errors."""


class MalformedInputError(ReaderError):
    """The byte or triple level source could not be parsed."""


class IncompleteConstructError(ReaderError):
    """An acceptor was finalised without the triples it requires."""


class MissingDeclarationError(IncompleteConstructError):
    """Finalising needs a declaration that the ontology does not contain."""

    def __init__(self, iri, expected: str):
        super().__init__(f"No {expected} declaration for {iri}")
        self.iri = iri
        self.expected = expected


class UnrecognizedTripleError(ReaderError):
    """No acceptor claimed a triple and the reader is configured to fail."""

    def __init__(self, triple):
        super().__init__(f"Unrecognized triple: {' '.join(term.n3() for term in triple)}")
        self.triple = triple


class UnsupportedConstructError(ReaderError):
    """A construct was recognised but its shape is not supported."""
