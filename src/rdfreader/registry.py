"""
Acceptor registry for the variants the ontology acceptor dispatches to.

This module keeps an ordered set of acceptor factories. The order is the
dispatch priority: when no in-progress acceptor claims a triple, one fresh
acceptor of each variant is tried in registry order and the first to accept
wins.
"""

from typing import Callable, Dict, Iterator, List, Optional, Tuple

from ontology import AnnotatedAxiom, Build, Ontology

from .acceptor import Accept, Acceptor, CompleteState, Triple
from .axioms import (
    AssertionAcceptor, CharacteristicAcceptor, ClassAssertionAcceptor, ClassAxiomAcceptor,
    DeclarationAcceptor, ImportAcceptor, IndividualAxiomAcceptor, PropertyAxiomAcceptor,
)
from .errors import UnsupportedConstructError
from .expressions import ClassExpressionAxiomAcceptor
from .reification import ReifiedAxiomAcceptor


AcceptorFactory = Callable[[], Acceptor[AnnotatedAxiom]]


class AcceptorRegistry:
    """
    Registry for axiom acceptor variants.

    Provides a pluggable set of recognisers while keeping the dispatch order
    explicit and deterministic.
    """

    def __init__(self):
        """Initialize the registry with the default acceptor variants."""
        self._factories: Dict[str, AcceptorFactory] = {
            'declaration': DeclarationAcceptor,
            'characteristic': CharacteristicAcceptor,
            'class_expression': ClassExpressionAxiomAcceptor,
            'reification': lambda: ReifiedAxiomAcceptor(self),
            'class_assertion': ClassAssertionAcceptor,
            'class_axiom': ClassAxiomAcceptor,
            'property_axiom': PropertyAxiomAcceptor,
            'individual_axiom': IndividualAxiomAcceptor,
            'import': ImportAcceptor,
            'assertion': AssertionAcceptor,
        }

    def register(self, name: str, factory: AcceptorFactory, before: Optional[str] = None) -> None:
        """
        Register an acceptor variant.

        Args:
            name: Variant name; an existing variant of that name is replaced
            factory: Zero-argument callable returning a fresh acceptor
            before: Variant to insert ahead of; appended last if None

        Raises:
            KeyError: If ``before`` is not a registered variant
        """
        if before is None:
            self._factories[name] = factory
            return
        if before not in self._factories:
            raise KeyError(f"Unknown acceptor variant: {before}")

        factories = {}
        for existing, existing_factory in self._factories.items():
            if existing == name:
                continue
            if existing == before:
                factories[name] = factory
            factories[existing] = existing_factory
        self._factories = factories

    def get_factory(self, name: str) -> Optional[AcceptorFactory]:
        return self._factories.get(name)

    def get_available_variants(self) -> List[str]:
        """
        Get variant names in dispatch order.

        Returns:
            List of variant names
        """
        return list(self._factories.keys())

    def has_variant(self, name: str) -> bool:
        return name in self._factories

    def spawn(self) -> Iterator[Tuple[str, Acceptor[AnnotatedAxiom]]]:
        """Yield one fresh acceptor per variant, in dispatch order."""
        for name, factory in list(self._factories.items()):
            yield name, factory()

    def complete_triple(self, build: Build, ontology: Ontology, triple: Triple) -> AnnotatedAxiom:
        """
        Rebuild the axiom a single triple stands for.

        Args:
            build: Construction context
            ontology: The ontology as built so far
            triple: The triple to interpret on its own

        Returns:
            The completed axiom

        Raises:
            UnsupportedConstructError: If no variant can complete the triple alone
        """
        for _, acceptor in self.spawn():
            if not isinstance(acceptor.accept(build, triple), Accept):
                continue
            if acceptor.can_complete() != CompleteState.NOT_COMPLETE:
                return acceptor.complete(build, ontology)
        raise UnsupportedConstructError(
            f"No axiom can be built from the triple {' '.join(term.n3() for term in triple)}"
        )
