from __future__ import annotations

import random
from typing import Callable, Iterable

from .errors import RollError

# 面数を受け取り、出目（1〜面数）を返す
RandomSource = Callable[[int], int]

_system_rng = random.Random()


def from_rng(rng: random.Random) -> RandomSource:
    # random.Random を出目関数に変換（seed 付きで再現したいとき用）
    def _roll(max_sides: int) -> int:
        # d0 は 1 を返す
        if max_sides < 1:
            return 1
        return rng.randint(1, max_sides)

    return _roll


default_random: RandomSource = from_rng(_system_rng)


def sequence(values: Iterable[int]) -> RandomSource:
    '''決められた出目を順番に返す（テスト用）。尽きたら RollError。'''
    it = iter(values)

    def _next(_max_sides: int) -> int:
        try:
            return next(it)
        except StopIteration:
            raise RollError("Random sequence exhausted") from None

    return _next
