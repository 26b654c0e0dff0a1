"""
Acceptor protocol.

An acceptor is a stateful recogniser for one construct. Acceptors are offered
triples one at a time and answer with an ``AcceptState``; once the whole
stream has been seen they are finalised, in a second pass, into typed values
using the partially built ontology as context.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Generic, Tuple, TypeVar, Union

from rdflib import BNode
from rdflib.term import Node

from ontology import Build, Ontology

from .errors import IncompleteConstructError


Triple = Tuple[Node, Node, Node]

T = TypeVar("T")


@dataclass(frozen=True)
class Accept:
    """The triple was consumed."""


@dataclass(frozen=True)
class Return:
    """The triple does not belong to the acceptor and is handed back unchanged."""

    triple: Triple


@dataclass(frozen=True)
class BackTrack:
    """Previously accepted triples are un-accepted and must be offered again, in order."""

    triples: Tuple[Triple, ...]

    def __post_init__(self):
        object.__setattr__(self, "triples", tuple(self.triples))


AcceptState = Union[Accept, Return, BackTrack]


class CompleteState(str, Enum):
    """Whether an acceptor may be finalised."""
    NOT_COMPLETE = "not_complete"    # required triples are missing
    CAN_COMPLETE = "can_complete"    # could finalise, would still accept more
    COMPLETE = "complete"            # saturated, stop feeding it


class Acceptor(ABC, Generic[T]):
    """Abstract base class for construct recognisers."""

    # Finalisation tier: lower phases are finalised first.
    phase: int = 1

    _consumed: bool = False

    @abstractmethod
    def accept(self, build: Build, triple: Triple) -> AcceptState:
        """
        Offer one triple.

        Args:
            build: Construction context
            triple: The triple to consider

        Returns:
            Accept, Return(triple) or BackTrack(triples)
        """
        pass

    @abstractmethod
    def can_complete(self) -> CompleteState:
        """Report whether finalisation is legal now."""
        pass

    def complete(self, build: Build, ontology: Ontology) -> T:
        """
        Finalise the acceptor into its typed value.

        The acceptor is consumed and cannot be completed again.

        Args:
            build: Construction context
            ontology: The ontology as built so far

        Returns:
            The typed value

        Raises:
            IncompleteConstructError: If required triples or declarations are missing
        """
        if self._consumed:
            raise IncompleteConstructError(f"{type(self).__name__} has already been completed")
        self._consumed = True
        if self.can_complete() == CompleteState.NOT_COMPLETE:
            raise IncompleteConstructError(f"{type(self).__name__} cannot complete: {self!r}")
        return self._complete(build, ontology)

    @abstractmethod
    def _complete(self, build: Build, ontology: Ontology) -> T:
        pass

    def nodes(self) -> FrozenSet[BNode]:
        """Blank nodes whose description this acceptor currently holds."""
        return frozenset()

    def triples(self) -> Tuple[Triple, ...]:
        """Triples this acceptor has accepted so far."""
        return ()
