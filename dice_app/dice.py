from __future__ import annotations

import logging
from typing import Optional

from .errors import TooManyDiceError
from .evaluator import count_rolls, evaluate
from .lexer import lex
from .models import Result
from .parser import parse
from .rng import RandomSource, default_random

logger = logging.getLogger(__name__)


def roll(
    expression: str,
    *,
    random: Optional[RandomSource] = None,
    max_rolls: Optional[int] = None,
) -> Result:
    """ダイス式を評価して合計と説明文を返す。

    ``max_rolls`` を指定すると、評価前に数えたダイス数が上限を超えた時点で
    TooManyDiceError を送出する（0 / None は無制限）。
    """
    random = random or default_random
    tokens = lex(expression)
    ast = parse(tokens)

    if max_rolls:
        rolls = count_rolls(ast)
        if rolls > max_rolls:
            raise TooManyDiceError(rolls)

    result = evaluate(ast, random)
    logger.debug("rolled %r -> %s (%s)", expression, result["result"], result["explanation"])
    return result
