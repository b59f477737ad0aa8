# abuse/grammar/errors.py
"""문법 오류 카탈로그

오류는 던지지 않고 `ParseError`로 **수집**한다. (parse는 항상 결과를 돌려줌)

- 구문 오류(줄 스캔 중 발견): MISSING_ARROW, MISSING_CLOSING_BRACE
- 의미 오류(전체 규칙을 읽은 뒤 검사): NO_PRODUCTION_RULE, RULE_NEVER_USED
"""

from __future__     import annotations
from dataclasses    import dataclass
from typing         import Optional, Tuple


class ErrorKind:
    MISSING_ARROW         = "missing_arrow"
    MISSING_CLOSING_BRACE = "missing_closing_brace"
    NO_PRODUCTION_RULE    = "no_production_rule"
    RULE_NEVER_USED       = "rule_never_used"


SYNTACTIC_KINDS = (ErrorKind.MISSING_ARROW, ErrorKind.MISSING_CLOSING_BRACE)
SEMANTIC_KINDS  = (ErrorKind.NO_PRODUCTION_RULE, ErrorKind.RULE_NEVER_USED)


@dataclass(frozen=True)
class ParseError:
    """
    수집된 문법 오류 1개.
    - kind        : ErrorKind 값
    - message     : 사람이 읽는 메시지 (str(err)와 동일)
    - line        : 줄 번호(1-based), 알 수 없으면 None
    - col         : 열(1-based). 닫는 중괄호 누락이면 여는 '{'의 위치,
                    정의 없는 비단말이면 참조를 연 '$'의 위치
    - non_terminal: NO_PRODUCTION_RULE 대상 이름
    - start       : RULE_NEVER_USED 대상 좌변 이름
    """
    kind: str
    message: str
    line: Optional[int] = None
    col: Optional[int] = None
    non_terminal: Optional[str] = None
    start: Optional[str] = None

    @property
    def is_syntactic(self) -> bool:
        return self.kind in SYNTACTIC_KINDS

    def __str__(self) -> str:
        return self.message


# ---- 생성자 (메시지 규칙은 여기에만 둔다) ----

def missing_arrow(line: int) -> ParseError:
    return ParseError(ErrorKind.MISSING_ARROW,
                      f"Missing symbol on line {line}: ->",
                      line=line)

def missing_closing_brace(line: int, brace_col: int) -> ParseError:
    return ParseError(ErrorKind.MISSING_CLOSING_BRACE,
                      f"Missing closing brace on line {line} (opening brace at character {brace_col})",
                      line=line, col=brace_col)

def no_production_rule(name: str, line: Optional[int] = None, col: Optional[int] = None) -> ParseError:
    if line is None:
        msg = f"No production rule for non-terminal ${name}"
    else:
        msg = f"No production rule for non-terminal ${name} (line {line}, character {col})"
    return ParseError(ErrorKind.NO_PRODUCTION_RULE, msg,
                      line=line, col=col, non_terminal=name)

def rule_never_used(name: str, line: int) -> ParseError:
    return ParseError(ErrorKind.RULE_NEVER_USED,
                      f"Production rule with start symbol ${name} is never used (line {line})",
                      line=line, start=name)


# ---------- 진단 출력 utils ----------
def _line_bounds(src: str, line: int) -> Tuple[int, int]:
    """line(1-based) 번째 줄의 [시작, 끝) 범위. 범위 밖이면 (len, len)."""
    start = 0
    for _ in range(line - 1):
        nl = src.find("\n", start)
        if nl == -1:
            return len(src), len(src)
        start = nl + 1
    end = src.find("\n", start)
    if end == -1:
        end = len(src)
    return start, end

def format_error(src: str, err: ParseError) -> str:
    """메시지 + (위치를 알면) 원문 줄과 캐럿(^)."""
    if err.line is None:
        return err.message
    start, end = _line_bounds(src, err.line)
    line_text = src[start:end].rstrip("\r")
    if err.col is None:
        return f"{err.message}\n{line_text}"
    caret = " " * (err.col - 1) + "^"
    return f"{err.message}\n{line_text}\n{caret}"
