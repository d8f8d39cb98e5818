"""Mutation operators."""

from geneforge.mutation.base import GeneMutator, Mutator
from geneforge.mutation.gene import BitFlipMutator, PointMutator, RandomMutator
from geneforge.mutation.sequence import InversionMutator, PartialShuffleMutator, SwapMutator
from geneforge.registry import AltererRegistry

# Register built-in mutators
AltererRegistry.register("bit_flip", BitFlipMutator)
AltererRegistry.register("swap", SwapMutator)
AltererRegistry.register("inversion", InversionMutator)
AltererRegistry.register("random", RandomMutator)
AltererRegistry.register("partial_shuffle", PartialShuffleMutator)
AltererRegistry.register("point", PointMutator)

__all__ = [
    "Mutator",
    "GeneMutator",
    "BitFlipMutator",
    "RandomMutator",
    "PointMutator",
    "SwapMutator",
    "InversionMutator",
    "PartialShuffleMutator",
]
