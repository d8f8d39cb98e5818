"""Subtree crossover for program chromosomes."""

from collections.abc import Sequence
from typing import Any

import numpy as np

from geneforge.crossover.base import Crossover
from geneforge.errors import PreconditionError, check_positive, check_probability
from geneforge.genetic import Chromosome, ProgramGene
from geneforge.sampling import select_indices
from geneforge.trees import Tree


def swap_subtrees(first: Tree, second: Tree, path_a: tuple[int, ...], path_b: tuple[int, ...]) -> tuple[Tree, Tree]:
    """Exchange the subtree of ``first`` at ``path_a`` with the subtree of ``second`` at ``path_b``.

    Example:
        >>> a = Tree("+", (Tree("x"), Tree("y")))
        >>> b = Tree("*", (Tree("1"), Tree("2")))
        >>> new_a, new_b = swap_subtrees(a, b, (0,), (1,))
        >>> new_a.to_simple_string(), new_b.to_simple_string()
        ('+(2, y)', '*(1, x)')
    """
    return first.replace(path_a, second.subtree(path_b)), second.replace(path_b, first.subtree(path_a))


class SubtreeCrossover(Crossover):
    """Swap random subtrees between the program genes of two parents.

    The crossover only acts when every gene of both chromosomes holds a tree of
    more than one node; otherwise the parents are returned unchanged. Parents
    taller than ``max_depth`` are rejected, so every offspring tree respects the
    bound. Each gene pair is crossed with probability ``gene_rate`` by picking
    one node of each tree uniformly and exchanging the subtrees rooted there. A
    resulting tree taller than ``max_depth`` is discarded in favour of the tree
    it came from, independently for each side.

    Args:
        chromosome_rate: Probability of each chromosome position being crossed.
        gene_rate: Probability of each gene pair being crossed.
        max_depth: Maximum height of a tree produced by the crossover.
        exclusivity: Whether each individual may belong to one group only.
    """

    def __init__(
        self,
        chromosome_rate: float = 1.0,
        gene_rate: float = 1.0,
        max_depth: int = 7,
        exclusivity: bool = False,
    ) -> None:
        super().__init__(num_parents=2, num_offspring=2, chromosome_rate=chromosome_rate, exclusivity=exclusivity)
        self.gene_rate = check_probability("gene_rate", gene_rate)
        self.max_depth = check_positive("max_depth", max_depth)

    def crossover_chromosomes(self, chromosomes: Sequence[Chromosome], rng: np.random.Generator) -> list[Chromosome]:
        self.check_chromosomes(chromosomes)
        first, second = chromosomes
        for gene in (*first, *second):
            if not isinstance(gene, ProgramGene):
                raise PreconditionError(f"subtree crossover requires ProgramGene genes, got {type(gene).__name__}")
            gene.value.check_arity()
            if gene.value.height > self.max_depth:
                raise PreconditionError(
                    f"subtree crossover requires trees of height at most max_depth={self.max_depth}, "
                    f"got a tree of height {gene.value.height}"
                )
        if any(gene.value.size <= 1 for gene in (*first, *second)):
            return [first, second]

        genes_a, genes_b = list(first), list(second)
        for i in select_indices(self.gene_rate, len(first), rng):
            tree_a, tree_b = genes_a[i].value, genes_b[i].value
            path_a = tree_a.paths()[int(rng.integers(tree_a.size))]
            path_b = tree_b.paths()[int(rng.integers(tree_b.size))]
            new_a, new_b = swap_subtrees(tree_a, tree_b, path_a, path_b)
            if new_a.height <= self.max_depth:
                genes_a[i] = genes_a[i].duplicate_with_value(new_a)
            if new_b.height <= self.max_depth:
                genes_b[i] = genes_b[i].duplicate_with_value(new_b)
        return [first.duplicate_with_genes(genes_a), second.duplicate_with_genes(genes_b)]

    def _params(self) -> dict[str, Any]:
        return {"gene_rate": self.gene_rate, "max_depth": self.max_depth, **super()._params()}
