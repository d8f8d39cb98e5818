"""Crossover operators."""

from geneforge.crossover.base import Crossover
from geneforge.crossover.combine import AverageCrossover, CombineCrossover, average_genes
from geneforge.crossover.permutation import (
    OrderedCrossover,
    PartiallyMappedCrossover,
    PermutationCrossover,
    PositionBasedCrossover,
    ordered_exchange,
    partially_mapped,
    position_based,
)
from geneforge.crossover.point import MultiPointCrossover, SinglePointCrossover, multi_point_at, single_point_at
from geneforge.crossover.subtree import SubtreeCrossover, swap_subtrees
from geneforge.registry import AltererRegistry

# Register built-in crossovers
AltererRegistry.register("single_point", SinglePointCrossover)
AltererRegistry.register("multi_point", MultiPointCrossover)
AltererRegistry.register("average", AverageCrossover)
AltererRegistry.register("pmx", PartiallyMappedCrossover)
AltererRegistry.register("ox", OrderedCrossover)
AltererRegistry.register("pbx", PositionBasedCrossover)
AltererRegistry.register("subtree", SubtreeCrossover)

__all__ = [
    "Crossover",
    "CombineCrossover",
    "AverageCrossover",
    "average_genes",
    "SinglePointCrossover",
    "MultiPointCrossover",
    "single_point_at",
    "multi_point_at",
    "PermutationCrossover",
    "PartiallyMappedCrossover",
    "OrderedCrossover",
    "PositionBasedCrossover",
    "partially_mapped",
    "ordered_exchange",
    "position_based",
    "SubtreeCrossover",
    "swap_subtrees",
]
