"""Hexagonal crossword layout engine.

This package exposes the public API surface via:

- ``hexaword.engine.generator.generate``: one-call layout for a word list.
- ``hexaword.engine.generator.HexawordGenerator``: configurable orchestration.
- ``hexaword.engine.placement.WordPlacementService``: the greedy placement engine.
- ``hexaword.utils.rng.create_rng``: the deterministic seeded random source.
"""

from .engine.generator import GenerationResult, GeneratorConfig, HexawordGenerator, generate
from .engine.placement import WordPlacementService
from .utils.rng import create_rng

__all__ = [
    "GenerationResult",
    "GeneratorConfig",
    "HexawordGenerator",
    "WordPlacementService",
    "create_rng",
    "generate",
]

__version__ = "0.1.0"
