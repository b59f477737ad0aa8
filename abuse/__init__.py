# abuse/__init__.py
"""abuse — 욕설 문장 템플릿 문법 컴파일러 / 문장 생성기

    >>> from abuse import parse, generate_all
    >>> res = parse("$SENTENCE -> You smell of $SMELL\\n$SMELL -> dogfood")
    >>> [r.text for r in generate_all(res.rules)]
    ['You smell of dogfood']
"""

from .grammar.ast import (
    START_SYMBOL, Rule, Symbol, SymbolKind, non_terminal, terminal,
)
from .grammar.errors import (
    SEMANTIC_KINDS, SYNTACTIC_KINDS, ErrorKind, ParseError, format_error,
)
from .grammar.loader import load_grammar_text
from .grammar.parser import ParseResult, parse
from .gen import (
    GenerationError, GenerationResult, RandomSelector, ReplaySelector,
    generate, generate_all, iter_all,
)

__version__ = "0.1.0"
