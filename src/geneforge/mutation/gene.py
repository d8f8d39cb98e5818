"""Gene-wise mutators: bit flip, random reset and program point mutation."""

from typing import Any

import numpy as np

from geneforge.errors import PreconditionError
from geneforge.genetic import Flippable, Mutable, ProgramGene
from geneforge.mutation.base import GeneMutator


class BitFlipMutator(GeneMutator):
    """Negate boolean genes.

    A selected gene is always flipped, never re-sampled, so with every rate set
    to 1 each gene of the population ends up with the opposite value.

    Example:
        >>> mutator = BitFlipMutator(individual_rate=1.0, chromosome_rate=1.0, gene_rate=1.0)
        >>> flipped, count = mutator.apply(population, len(population), rng)
    """

    def mutate_gene(self, gene: Any, rng: np.random.Generator) -> Any:
        if not isinstance(gene, Flippable):
            raise PreconditionError(f"bit flip mutation requires flippable genes, got {type(gene).__name__}")
        return gene.flip()


class RandomMutator(GeneMutator):
    """Random reset: replace a gene's value with a fresh draw from its own domain.

    The new value may coincide with the old one.
    """

    def mutate_gene(self, gene: Any, rng: np.random.Generator) -> Any:
        if not isinstance(gene, Mutable):
            raise PreconditionError(f"random mutation requires genes with a mutate() method, got {type(gene).__name__}")
        return gene.mutate(rng)


class PointMutator(GeneMutator):
    """Replace a program tree with one of its own nodes of the same arity as the root.

    The candidates always include the root itself, so a tree without any other
    node of matching arity stays unchanged.
    """

    def mutate_gene(self, gene: Any, rng: np.random.Generator) -> Any:
        if not isinstance(gene, ProgramGene):
            raise PreconditionError(f"point mutation requires ProgramGene genes, got {type(gene).__name__}")
        tree = gene.value
        candidates = [node for node in tree.nodes if node.arity == tree.arity]
        return gene.duplicate_with_value(candidates[int(rng.integers(len(candidates)))])
