# abuse/gen/select.py
from __future__ import annotations
import random
from typing import Iterable, List, Optional
from .engine import GenerationError

# 선택기(selector): selector(후보 수) -> 0-based 인덱스
# 상태(난수 생성기, 재생 위치)는 선택기 객체가 소유한다.


class RandomSelector:
    """균등 무작위 선택. seed를 주면 재현 가능."""
    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def __call__(self, count: int) -> int:
        return self._rng.randrange(count)


class ReplaySelector:
    """기록된 인덱스 시퀀스를 그대로 재생(테스트/재현용)."""
    def __init__(self, choices: Iterable[int]):
        self._choices: List[int] = list(choices)
        self._pos = 0

    def __call__(self, count: int) -> int:
        if self._pos >= len(self._choices):
            raise GenerationError(
                f"replay sequence exhausted after {len(self._choices)} choices"
            )
        idx = self._choices[self._pos]
        self._pos += 1
        return idx

    @property
    def remaining(self) -> int:
        return len(self._choices) - self._pos
