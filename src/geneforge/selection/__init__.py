"""Selection strategies for the generational engine."""

from geneforge.registry import SelectionRegistry
from geneforge.selection.random import random_selector
from geneforge.selection.roulette import roulette_wheel
from geneforge.selection.tournament import tournament_selector

# Register built-in selection strategies
SelectionRegistry.register("tournament", tournament_selector)
SelectionRegistry.register("roulette", roulette_wheel)
SelectionRegistry.register("random", random_selector)

__all__ = ["random_selector", "roulette_wheel", "tournament_selector"]
