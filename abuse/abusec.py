# abuse/abusec.py
"""abusec – abuse CLI

사용 예)
    $ python -m abuse.abusec check abuse/tests/grammar_test/insults.abuse -D
    $ python -m abuse.abusec generate abuse/tests/grammar_test/insults.abuse -n 5 --seed 42
    $ python -m abuse.abusec generate abuse/tests/grammar_test/insults.abuse --replay 2,0,1
    $ python -m abuse.abusec all abuse/tests/grammar_test/insults.abuse --max-depth 4 --show-sequence

기능
----
- check    : 문법을 읽어 구문/의미 오류를 검사하고 요약 출력
- generate : 문법에서 문장을 무작위로(또는 기록된 선택 시퀀스로) 생성
- all      : 깊이 한계 안에서 만들 수 있는 모든 문장을 출력

문법에 오류가 하나라도 있으면 generate/all은 생성을 거부합니다(종료 코드 2).
디버그 모드(-D/--debug)를 켜면 규칙 목록과 생성 시퀀스 등을 stderr로 출력합니다.
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Optional

# CLI는 순환 문법에서도 끝나야 하므로 항상 깊이 한계를 둔다
DEFAULT_MAX_DEPTH = 12

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _parse_replay(text: str) -> List[int]:
    """'2,0,1' → [2, 0, 1]"""
    try:
        return [int(part) for part in text.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid replay sequence: {text!r}")


def _non_negative(text: str) -> int:
    n = int(text)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0: {n}")
    return n

# ------------------------------
# 파이프라인 로딩
# ------------------------------

def _load_grammar(path: str, debug: bool):
    """
    문법 파일을 읽어 ParseResult까지 만든다.
    반환: (원문, ParseResult)
    """
    from .grammar.loader import load_grammar_text
    from .grammar.parser import parse

    src = load_grammar_text(path)
    result = parse(src)
    if debug: _eprint("[DEBUG] grammar parsed | rules=%d errors=%d" %
                      (len(result.rules), len(result.errors)))
    return src, result

# ------------------------------
# 디버그 출력 헬퍼
# ------------------------------

def _print_rules(result) -> None:
    _eprint("\n[RULES]")
    for r in result.rules:
        _eprint("  " + repr(r))


def _report_errors(src: str, result) -> None:
    from .grammar.errors import format_error
    for err in result.errors:
        _eprint("[GRAMMAR ERROR] " + format_error(src, err))


def _print_result(res, show_sequence: bool) -> None:
    if show_sequence:
        seq = ",".join(str(i) for i in res.sequence)
        print(f"[{seq}] {res.text}")
    else:
        print(res.text)

# ------------------------------
# 커맨드 구현
# ------------------------------

def cmd_check(args) -> int:
    try:
        src, result = _load_grammar(args.file, debug=args.debug)
    except (OSError, ValueError) as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if args.debug:
        _print_rules(result)

    if result.errors:
        _report_errors(src, result)
        return 2

    nonterms = {r.left.name for r in result.rules}
    print(f"[CHECK OK] rules={len(result.rules)} nonterminals={len(nonterms)}")
    return 0


def cmd_generate(args) -> int:
    from .gen import GenerationError, RandomSelector, ReplaySelector, generate
    try:
        src, result = _load_grammar(args.file, debug=args.debug)
    except (OSError, ValueError) as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if result.errors:
        _report_errors(src, result)
        _eprint("[ERROR] refusing to generate from a grammar with errors")
        return 2

    if args.debug:
        _print_rules(result)

    try:
        if args.replay is not None:
            sel = ReplaySelector(args.replay)
            res = generate(result.rules, sel, args.max_depth)
            _print_result(res, args.show_sequence)
            if sel.remaining:
                _eprint(f"[WARN] {sel.remaining} replay choice(s) left unused")
            return 0

        sel = RandomSelector(args.seed)
        for _ in range(args.count):
            res = generate(result.rules, sel, args.max_depth)
            if args.debug: _eprint(f"[DEBUG] sequence={res.sequence}")
            _print_result(res, args.show_sequence)
    except GenerationError as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2
    return 0


def cmd_all(args) -> int:
    from .gen import iter_all
    try:
        src, result = _load_grammar(args.file, debug=args.debug)
    except (OSError, ValueError) as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if result.errors:
        _report_errors(src, result)
        _eprint("[ERROR] refusing to generate from a grammar with errors")
        return 2

    n = 0
    for res in iter_all(result.rules, args.max_depth):
        if args.limit is not None and n >= args.limit:
            if args.debug: _eprint(f"[DEBUG] stopped at --limit {args.limit}")
            break
        _print_result(res, args.show_sequence)
        n += 1
    if args.debug: _eprint(f"[DEBUG] sentences={n} max_depth={args.max_depth}")
    return 0

# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="abusec", description="abuse insult grammar CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="문법을 검사하고 오류를 보고합니다")
    p_check.add_argument("file", help=".abuse 문법 파일")
    p_check.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_check.set_defaults(func=cmd_check)

    p_gen = sub.add_parser("generate", help="문장을 무작위로 생성합니다")
    p_gen.add_argument("file", help=".abuse 문법 파일")
    p_gen.add_argument("-n", "--count", type=_non_negative, default=1, help="생성할 문장 수")
    p_gen.add_argument("--max-depth", type=_non_negative, default=DEFAULT_MAX_DEPTH, help="최대 전개 깊이")
    p_gen.add_argument("--seed", type=int, help="난수 시드(재현용)")
    p_gen.add_argument("--replay", type=_parse_replay, help="기록된 선택 시퀀스를 재생(예: 2,0,1)")
    p_gen.add_argument("--show-sequence", action="store_true", help="선택 시퀀스를 함께 출력")
    p_gen.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_gen.set_defaults(func=cmd_generate)

    p_all = sub.add_parser("all", help="가능한 모든 문장을 출력합니다")
    p_all.add_argument("file", help=".abuse 문법 파일")
    p_all.add_argument("--max-depth", type=_non_negative, default=DEFAULT_MAX_DEPTH, help="최대 전개 깊이")
    p_all.add_argument("--limit", type=_non_negative, help="최대 출력 문장 수")
    p_all.add_argument("--show-sequence", action="store_true", help="선택 시퀀스를 함께 출력")
    p_all.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_all.set_defaults(func=cmd_all)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
