"""abuse 문법 DSL 파서
- 한 줄에 규칙 하나:  $NAME -> 리터럴 텍스트와 $NAME / ${NAME} 참조의 혼합
- 빈 줄/공백만 있는 줄은 무시
- 오류는 던지지 않고 ParseResult.errors에 **수집** (줄 단위 복구)
- 모든 줄을 읽은 뒤 의미 검사(정의 없는 비단말, 쓰이지 않는 규칙)를 수행
"""

from __future__ import annotations
import regex as re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from .ast import START_SYMBOL, Rule, Symbol, non_terminal, terminal
from .errors import (
    ParseError, missing_arrow, missing_closing_brace,
    no_production_rule, rule_never_used,
)

# 줄 머리: [공백]* $NAME [공백]* -> [공백]*
_HEAD_RE = re.compile(r"\s*\$([A-Za-z0-9_]+)\s*->\s*")
_NAME_RE = re.compile(r"[A-Za-z0-9_]+")


@dataclass
class ParseResult:
    rules: List[Rule] = field(default_factory=list)
    errors: List[ParseError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _scan_right(text: str, line_no: int, i: int) -> Tuple[Optional[List[Symbol]], Optional[ParseError]]:
    """
    text[i:]를 우변으로 스캔한다.
    반환: (심볼 리스트, None) 또는 (None, 오류)
    """
    right: List[Symbol] = []
    buf: List[str] = []

    def flush() -> None:
        if buf:
            right.append(terminal("".join(buf)))
            buf.clear()

    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "$":
            # ${NAME}: 같은 줄 안에서 '}'를 찾는다
            if i + 1 < n and text[i + 1] == "{":
                close = text.find("}", i + 2)
                if close == -1:
                    # 열은 '{' 기준(1-based) = (i + 1) + 1
                    return None, missing_closing_brace(line_no, i + 2)
                flush()
                right.append(non_terminal(text[i + 2:close], col=i + 1))
                i = close + 1
                continue
            # $NAME: 이름 문자의 최장 일치
            m = _NAME_RE.match(text, i + 1)
            if m:
                flush()
                right.append(non_terminal(m.group(0), col=i + 1))
                i = m.end()
                continue
        # 그 외(홀로 쓰인 '$' 포함)는 리터럴
        buf.append(ch)
        i += 1

    # 줄 끝 공백은 마지막 단말에서만 오른쪽으로 잘라낸다. 빈 단말은 만들지 않음
    tail = "".join(buf).rstrip()
    if tail:
        right.append(terminal(tail))
    return right, None


def _parse_line(text: str, line_no: int) -> Tuple[Optional[Rule], Optional[ParseError]]:
    m = _HEAD_RE.match(text)
    if not m:
        return None, missing_arrow(line_no)
    right, err = _scan_right(text, line_no, m.end())
    if err is not None:
        return None, err
    return Rule(non_terminal(m.group(1)), tuple(right), line_no), None


def _validate(rules: List[Rule]) -> List[ParseError]:
    """
    의미 검사(규칙 전체 기준).
    1) 시작 기호 $SENTENCE에 규칙이 없고 어디서도 참조되지 않으면 위치 없는 오류
    2) 우변의 비단말 참조마다, 해당 이름의 규칙이 없으면 위치 포함 오류
    3) 어떤 우변에서도 참조되지 않는 좌변 이름(시작 기호 제외)은 첫 규칙 기준 오류
    """
    errors: List[ParseError] = []
    defined = {r.left.name for r in rules}
    refs = [(r, s) for r in rules for s in r.right if s.is_non_terminal]
    referenced = {s.name for _r, s in refs}

    if START_SYMBOL not in defined and START_SYMBOL not in referenced:
        errors.append(no_production_rule(START_SYMBOL))

    for r, s in refs:
        if s.name not in defined:
            errors.append(no_production_rule(s.name, r.line, s.col))

    seen = set()
    for r in rules:
        name = r.left.name
        if name in seen:
            continue
        seen.add(name)
        if name != START_SYMBOL and name not in referenced:
            errors.append(rule_never_used(name, r.line))

    return errors


# --- Grammar Parsing ---
def parse(src: str) -> ParseResult:
    """문법 원문 전체를 규칙 리스트와 오류 리스트로 변환한다. 예외를 던지지 않는다."""
    result = ParseResult()
    for line_no, text in enumerate(src.split("\n"), start=1):
        if not text.strip():
            continue
        rule, err = _parse_line(text, line_no)
        if err is not None:
            result.errors.append(err)
        else:
            result.rules.append(rule)

    result.errors.extend(_validate(result.rules))
    return result
