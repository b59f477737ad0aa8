# abuse/grammar/ast.py
"""Grammar AST
- Symbol: 단말(terminal) / 비단말(non-terminal) 두 가지만 있는 닫힌 태그 유니온
- Rule  : `$NAME -> ...` 한 줄에 해당하는 생성 규칙
"""

from __future__     import annotations
from dataclasses    import dataclass, field
from typing         import Dict, List, Optional, Sequence, Tuple

# 시작 기호는 항상 고정
START_SYMBOL = "SENTENCE"


class SymbolKind:
    TERMINAL     = "terminal"
    NON_TERMINAL = "non_terminal"


@dataclass(frozen=True)
class Symbol:
    """
    심볼 1개.
    - kind : SymbolKind.TERMINAL | SymbolKind.NON_TERMINAL
    - value: 단말이면 리터럴 텍스트, 비단말이면 이름
    - col  : 파싱된 비단말 참조를 연 '$'의 열(1-based). 비교에는 참여하지 않음
    """
    kind: str
    value: str
    col: Optional[int] = field(default=None, compare=False)

    @property
    def is_terminal(self) -> bool:
        return self.kind == SymbolKind.TERMINAL

    @property
    def is_non_terminal(self) -> bool:
        return self.kind == SymbolKind.NON_TERMINAL

    @property
    def text(self) -> str:
        if not self.is_terminal:
            raise AttributeError(f"non-terminal ${self.value} has no text")
        return self.value

    @property
    def name(self) -> str:
        if not self.is_non_terminal:
            raise AttributeError(f"terminal {self.value!r} has no name")
        return self.value

    def __repr__(self) -> str:
        if self.is_terminal:
            return f"Terminal({self.value!r})"
        return f"NonTerminal({self.value})"


def terminal(text: str) -> Symbol:
    return Symbol(SymbolKind.TERMINAL, text)


def non_terminal(name: str, col: Optional[int] = None) -> Symbol:
    return Symbol(SymbolKind.NON_TERMINAL, name, col)


@dataclass(frozen=True)
class Rule:
    """
    생성 규칙 1개.
    - left : 좌변 비단말
    - right: 우변 심볼 튜플(빈 튜플이면 빈 문자열을 생성)
    - line : 정의된 줄 번호(1-based)
    """
    left: Symbol
    right: Tuple[Symbol, ...]
    line: int

    def __repr__(self) -> str:
        rhs = " ".join(repr(s) for s in self.right) if self.right else "ε"
        return f"${self.left.name} -> {rhs}  (line {self.line})"


def group_by_left(rules: Sequence[Rule]) -> Dict[str, List[Rule]]:
    """좌변 이름 -> 후보 규칙 리스트(파싱 순서 유지)."""
    by_left: Dict[str, List[Rule]] = {}
    for r in rules:
        by_left.setdefault(r.left.name, []).append(r)
    return by_left
