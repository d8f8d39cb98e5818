"""Ready-made evolutionary algorithms."""

from geneforge.algorithms.ga import evolve

__all__ = ["evolve"]
