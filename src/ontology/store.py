"""
In-memory axiom store for an assembled ontology.

The store keeps the ontology identity, the set of annotated axioms and an index
of which entity kinds each IRI has been declared as. Readers consult that index
while finalising, e.g. to decide whether a property IRI denotes an object, a
data or an annotation property.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, List, Set, Type, Union

from .domain import AnnotatedAxiom, Axiom, Declaration, IRI, OntologyID


@dataclass
class Ontology:
    """An OWL ontology: identity plus a set of annotated axioms."""

    id: OntologyID = field(default_factory=OntologyID)
    axioms: Set[AnnotatedAxiom] = field(default_factory=set)

    # IRI -> entity kind -> number of declarations
    _declared: Dict[IRI, Counter] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        for annotated in self.axioms:
            self._index(annotated, 1)

    def insert(self, axiom: Union[Axiom, AnnotatedAxiom]) -> bool:
        """Add an axiom, wrapping bare axioms without annotations.

        Returns:
            True if the axiom was not present before
        """
        annotated = axiom if isinstance(axiom, AnnotatedAxiom) else AnnotatedAxiom(axiom)
        if annotated in self.axioms:
            return False
        self.axioms.add(annotated)
        self._index(annotated, 1)
        return True

    def remove(self, axiom: Union[Axiom, AnnotatedAxiom]) -> bool:
        """Remove an axiom if present.

        Returns:
            True if the axiom was removed
        """
        annotated = axiom if isinstance(axiom, AnnotatedAxiom) else AnnotatedAxiom(axiom)
        if annotated not in self.axioms:
            return False
        self.axioms.discard(annotated)
        self._index(annotated, -1)
        return True

    def declared_kinds(self, iri: IRI) -> FrozenSet[Type]:
        """Entity kinds (``Class``, ``ObjectProperty``, ...) declared for an IRI."""
        counts = self._declared.get(iri)
        if not counts:
            return frozenset()
        return frozenset(kind for kind, count in counts.items() if count > 0)

    def is_declared(self, iri: IRI, kind: Type) -> bool:
        return kind in self.declared_kinds(iri)

    def axioms_of(self, kind: Type) -> List[AnnotatedAxiom]:
        """All annotated axioms whose axiom is an instance of ``kind``."""
        return [annotated for annotated in self.axioms if isinstance(annotated.axiom, kind)]

    def _index(self, annotated: AnnotatedAxiom, delta: int) -> None:
        if not isinstance(annotated.axiom, Declaration):
            return
        entity = annotated.axiom.entity
        counts = self._declared.setdefault(entity.iri, Counter())
        counts[type(entity)] += delta

    def __len__(self) -> int:
        return len(self.axioms)

    def __iter__(self) -> Iterator[AnnotatedAxiom]:
        return iter(self.axioms)

    def __contains__(self, axiom) -> bool:
        annotated = axiom if isinstance(axiom, AnnotatedAxiom) else AnnotatedAxiom(axiom)
        return annotated in self.axioms
