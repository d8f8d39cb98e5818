"""Gene-wise combination crossovers."""

from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from geneforge.crossover.base import Crossover
from geneforge.errors import PreconditionError, check_probability
from geneforge.genetic import Averageable, Chromosome
from geneforge.sampling import select_indices


class CombineCrossover(Crossover):
    """Blend the genes of several parents into a single offspring.

    Each position is combined with probability ``gene_rate``: the offspring gene
    is ``combiner(genes)`` where ``genes`` holds that position's gene of every
    parent, in parent order. Other positions copy the first parent's gene.

    Args:
        combiner: Function reducing a list of genes to one gene.
        num_parents: Parents per group, at least 2.
        chromosome_rate: Probability of each chromosome position being crossed.
        gene_rate: Probability of each gene being combined.
        exclusivity: Whether each individual may belong to one group only.
    """

    def __init__(
        self,
        combiner: Callable[[list[Any]], Any],
        num_parents: int = 2,
        chromosome_rate: float = 1.0,
        gene_rate: float = 1.0,
        exclusivity: bool = False,
    ) -> None:
        super().__init__(
            num_parents=num_parents, num_offspring=1, chromosome_rate=chromosome_rate, exclusivity=exclusivity
        )
        self.combiner = combiner
        self.gene_rate = check_probability("gene_rate", gene_rate)

    def crossover_chromosomes(self, chromosomes: Sequence[Chromosome], rng: np.random.Generator) -> list[Chromosome]:
        self.check_chromosomes(chromosomes)
        first = chromosomes[0]
        genes = list(first)
        for i in select_indices(self.gene_rate, len(first), rng):
            genes[i] = self.combiner([chromosome[i] for chromosome in chromosomes])
        return [first.duplicate_with_genes(genes)]

    def _params(self) -> dict[str, Any]:
        return {"num_parents": self.num_parents, "gene_rate": self.gene_rate, **super()._params()}


def average_genes(genes: list[Any]) -> Any:
    """Return the first gene averaged with the others.

    Raises:
        PreconditionError: If the first gene cannot be averaged.
    """
    first = genes[0]
    if not isinstance(first, Averageable):
        raise PreconditionError(f"average crossover requires averageable genes, got {type(first).__name__}")
    return first.average(genes[1:])


class AverageCrossover(CombineCrossover):
    """Replace selected genes with the arithmetic mean of the parents' genes.

    Example:
        >>> crossover = AverageCrossover(gene_rate=1.0)
        >>> parents = [Chromosome((DoubleGene(1.0),)), Chromosome((DoubleGene(3.0),))]
        >>> crossover.crossover_chromosomes(parents, rng)[0].values
        [2.0]
    """

    def __init__(
        self,
        num_parents: int = 2,
        chromosome_rate: float = 1.0,
        gene_rate: float = 1.0,
        exclusivity: bool = False,
    ) -> None:
        super().__init__(average_genes, num_parents, chromosome_rate, gene_rate, exclusivity)
