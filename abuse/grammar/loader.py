"""문법 파일(.abuse) 로더"""

from __future__ import annotations
from pathlib    import Path

GRAMMAR_SUFFIX = ".abuse"


def load_grammar_text(path: str) -> str:
    """
    Load Grammar Text
    - 확장자가 .abuse가 아니면 ValueError
    - UTF-8(BOM 허용)으로 읽고, 디코딩 실패는 경로를 담은 ValueError로 보고
    - 줄바꿈을 '\\n'으로 통일 (ParseError의 줄 번호가 편집기와 일치하도록)
    """
    p = Path(path)
    if p.suffix != GRAMMAR_SUFFIX:
        raise ValueError(f"not an {GRAMMAR_SUFFIX} grammar file: {path}")
    try:
        text = p.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise ValueError(f"{path}: grammar is not valid UTF-8 (byte {e.start})") from None
    return text.replace("\r\n", "\n").replace("\r", "\n")
