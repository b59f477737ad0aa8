# abuse/gen/__init__.py
"""Sentence generator submodule for abuse.

This package provides:
- Depth-bounded expansion of `$SENTENCE` driven by a caller-supplied selector
- Exhaustive, depth-first enumeration of every complete sentence
- Selector implementations (seeded random, replay of a recorded sequence)

It depends only on abuse.grammar.ast (rules and symbols), never on the parser.
"""

from .engine import (
    GenerationError, GenerationResult, Selector,
    generate, generate_all, iter_all,
)
from .select import RandomSelector, ReplaySelector
