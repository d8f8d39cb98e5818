"""Registry system for selection strategies, optimizers and alterers.

This module provides a registry pattern for managing the pluggable strategies
of the generational engine. Instead of hardcoding strategy implementations,
users register factories that create configured strategies and retrieve them
by name.

The registry pattern enables:
- **Pluggable strategies**: Swap selection methods or operators without code changes
- **Name-based configuration**: ``EngineConfig`` accepts registry names wherever
  it accepts a callable
- **Discoverability**: List all available strategies programmatically
- **Factory pattern**: Register functions that create configured strategies

There are three independent registries:
1. **SelectionRegistry**: Selectors for survivors and parents (Selector protocol)
2. **OptimizerRegistry**: Optimization directions ("max", "min")
3. **AltererRegistry**: Crossover and mutation operators (Alterer protocol)

Basic usage:
    ```python
    from geneforge.registry import AltererRegistry, SelectionRegistry

    # Get a configured selector
    selector = SelectionRegistry.get("tournament", tournament_size=5)

    # Get a configured operator
    mutator = AltererRegistry.get("bit_flip", individual_rate=0.5, gene_rate=0.1)

    # List available strategies
    available = AltererRegistry.list()  # ["average", "bit_flip", ...]
    ```

Registering a custom strategy:
    ```python
    def elite_factory():
        def selector(population, count, optimizer, rng):
            best = optimizer.sort(population)
            return best.take([0] * count)
        return selector

    SelectionRegistry.register("elite", elite_factory)
    ```
"""

from collections.abc import Callable
from typing import Any, ClassVar


class StrategyRegistry:
    """Class-level registry of named strategy factories.

    Each subclass owns a separate ``_registry`` dictionary, so names only need
    to be unique within one kind of strategy.

    Class Attributes:
        _registry: Dictionary mapping strategy names to factory functions.
        _kind: Human readable name of the strategy kind, used in error messages.
    """

    _registry: ClassVar[dict[str, Callable[..., Any]]]
    _kind: ClassVar[str] = "Strategy"

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._registry = {}

    @classmethod
    def register(cls, name: str, factory: Callable[..., Any]) -> None:
        """Register a strategy factory.

        Args:
            name: Unique name for the strategy. Will overwrite if already exists.
            factory: Callable that returns a configured strategy. Should accept
                keyword arguments for configuration.
        """
        cls._registry[name] = factory

    @classmethod
    def get(cls, name: str, **kwargs: Any) -> Any:
        """Get a configured strategy by name.

        Args:
            name: Name of the registered strategy.
            **kwargs: Configuration parameters passed to the factory function.

        Returns:
            The strategy built by the registered factory.

        Raises:
            KeyError: If the strategy name is not registered. Error message
                includes list of available strategies.
        """
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry.keys())) or "none"
            raise KeyError(f"{cls._kind} '{name}' not found. Available strategies: {available}")
        factory = cls._registry[name]
        return factory(**kwargs)

    @classmethod
    def list(cls) -> list[str]:
        """Return the sorted list of registered strategy names."""
        return sorted(cls._registry.keys())


class SelectionRegistry(StrategyRegistry):
    """Registry for survivor and parent selection strategies.

    Example:
        ```python
        selector = SelectionRegistry.get("tournament", tournament_size=5)
        parents = selector(population, 30, optimizer, rng)
        ```
    """

    _kind = "Selection strategy"


class OptimizerRegistry(StrategyRegistry):
    """Registry for optimization directions."""

    _kind = "Optimizer"


class AltererRegistry(StrategyRegistry):
    """Registry for crossover and mutation operators.

    Example:
        ```python
        crossover = AltererRegistry.get("pmx", chromosome_rate=0.6)
        offspring = crossover(parents, len(parents), rng)
        ```
    """

    _kind = "Alterer"


def list_selections() -> list[str]:
    """List all registered selection strategies.

    Convenience function that returns SelectionRegistry.list().
    """
    return SelectionRegistry.list()


def list_optimizers() -> list[str]:
    """List all registered optimizers."""
    return OptimizerRegistry.list()


def list_alterers() -> list[str]:
    """List all registered alterers.

    Example:
        ```python
        from geneforge.registry import list_alterers

        for name in list_alterers():
            print(f"- {name}")
        ```
    """
    return AltererRegistry.list()
