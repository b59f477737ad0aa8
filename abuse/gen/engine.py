# abuse/gen/engine.py
from __future__ import annotations
import operator
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple
from ..grammar.ast import START_SYMBOL, Rule, Symbol, group_by_left, non_terminal

# Sentence generator:
# - generate    : selector로 후보 규칙을 고르며 $SENTENCE를 깊이 우선 전개
# - generate_all: 모든 완성 문장을 깊이 우선, 후보 순서대로 열거 (selector 없음)
# - depth는 경로상의 비단말 전개 횟수. depth >= max_depth 인 전개는 허용하지 않음
# - max_depth=None + 순환 문법이면 재귀가 끝나지 않는다(호출자 책임)

Selector = Callable[[int], int]
_Index = Dict[str, List[Rule]]


class GenerationError(RuntimeError):
    pass


@dataclass
class GenerationResult:
    """
    생성된 문장 1개.
    - text    : 단말 텍스트를 이어붙인 결과
    - sequence: i번째 비단말 전개에서 고른 후보 인덱스 (전개 순서대로)
    """
    text: str
    sequence: List[int] = field(default_factory=list)

    def __str__(self) -> str:
        return self.text


class _Stuck(Exception):
    """전개 불가(후보 없음 또는 깊이 한계) → 전체 문장 폴백 신호."""


def _blocked(depth: int, max_depth: Optional[int]) -> bool:
    return max_depth is not None and depth >= max_depth


# ---- 열거 ----

def _enum_symbol(sym: Symbol, index: _Index, depth: int,
                 max_depth: Optional[int]) -> Iterator[Tuple[str, List[int]]]:
    if sym.is_terminal:
        yield sym.text, []
        return
    candidates = index.get(sym.name)
    if not candidates or _blocked(depth, max_depth):
        # 가지치기: 이 경로는 완성 문장을 내지 않는다
        return
    for i, rule in enumerate(candidates):
        for text, seq in _enum_seq(rule.right, index, depth + 1, max_depth):
            yield text, [i] + seq

def _enum_seq(symbols: Sequence[Symbol], index: _Index, depth: int,
              max_depth: Optional[int]) -> Iterator[Tuple[str, List[int]]]:
    """
    symbols의 모든 전개. 왼쪽 심볼이 가장 느리게 바뀐다.
    위치별 이터레이터 스택(오도미터)으로 돌기 때문에 재귀 깊이는 우변 길이와 무관하고,
    각 위치의 전개는 필요할 때만 만든다(무한 열거에서도 지연 동작).
    """
    n = len(symbols)
    if n == 0:
        yield "", []
        return
    iters: List[Optional[Iterator[Tuple[str, List[int]]]]] = [None] * n
    parts: List[Tuple[str, List[int]]] = [("", [])] * n
    pos = 0
    iters[0] = _enum_symbol(symbols[0], index, depth, max_depth)
    while pos >= 0:
        nxt = next(iters[pos], None)
        if nxt is None:
            # 이 위치 소진 → 왼쪽 위치를 한 칸 진행
            iters[pos] = None
            pos -= 1
            continue
        parts[pos] = nxt
        if pos == n - 1:
            yield "".join(t for t, _s in parts), [i for _t, s in parts for i in s]
        else:
            pos += 1
            iters[pos] = _enum_symbol(symbols[pos], index, depth, max_depth)


def iter_all(rules: Sequence[Rule], max_depth: Optional[int] = None) -> Iterator[GenerationResult]:
    """generate_all의 지연(lazy) 버전."""
    index = group_by_left(rules)
    start = non_terminal(START_SYMBOL)
    for text, seq in _enum_symbol(start, index, 0, max_depth):
        yield GenerationResult(text, seq)


def generate_all(rules: Sequence[Rule], max_depth: Optional[int] = None) -> List[GenerationResult]:
    """$SENTENCE에서 유도 가능한 모든 완성 문장(깊이 우선, 후보 순서)."""
    return list(iter_all(rules, max_depth))


# ---- 무작위(선택기 기반) 생성 ----

def _choose(selector: Selector, count: int) -> int:
    raw = selector(count)
    # numpy 정수처럼 __index__를 가진 값은 허용, bool은 거부
    if isinstance(raw, bool):
        raise GenerationError(f"selector returned {raw!r} for {count} candidates")
    try:
        idx = operator.index(raw)
    except TypeError:
        raise GenerationError(f"selector returned {raw!r} for {count} candidates") from None
    if not 0 <= idx < count:
        raise GenerationError(f"selector returned {raw!r} for {count} candidates")
    return idx

def _expand(sym: Symbol, index: _Index, selector: Selector, depth: int,
            max_depth: Optional[int], out: List[str], seq: List[int]) -> None:
    if sym.is_terminal:
        out.append(sym.text)
        return
    candidates = index.get(sym.name)
    if not candidates or _blocked(depth, max_depth):
        raise _Stuck(sym.name)
    i = _choose(selector, len(candidates))
    seq.append(i)
    for child in candidates[i].right:
        _expand(child, index, selector, depth + 1, max_depth, out, seq)


def generate(rules: Sequence[Rule], selector: Selector,
             max_depth: Optional[int] = None) -> GenerationResult:
    """
    selector(후보 수) -> 인덱스 를 호출하며 $SENTENCE를 전개한다.

    어느 비단말이든 전개가 막히면(후보 없음/깊이 한계) 진행 중이던 문장 전체를 버리고,
    generate_all(rules, max_depth)의 결과 중 하나를 selector로 골라 돌려준다.
    고를 문장이 하나도 없으면 GenerationError.
    """
    index = group_by_left(rules)
    start = non_terminal(START_SYMBOL)
    out: List[str] = []
    seq: List[int] = []
    try:
        _expand(start, index, selector, 0, max_depth, out, seq)
    except _Stuck as stuck:
        pool = generate_all(rules, max_depth)
        if not pool:
            raise GenerationError(
                f"cannot expand ${stuck.args[0]} and ${START_SYMBOL} has no complete sentence"
                + (f" within depth {max_depth}" if max_depth is not None else "")
            ) from None
        return pool[_choose(selector, len(pool))]
    return GenerationResult("".join(out), seq)
