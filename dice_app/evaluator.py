from __future__ import annotations

import logging
from typing import List

from .errors import DiceInternalError, RollError
from .models import (
    ASTNode,
    BinaryOpNode,
    CHUNK_DIGITS,
    DiceBinaryOpNode,
    DiceNode,
    GroupingNode,
    Number,
    NumberNode,
    Result,
    TokenType,
)
from .rng import RandomSource

logger = logging.getLogger(__name__)

CHUNK = 10 ** CHUNK_DIGITS

OPERATOR_SYMBOLS = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.STAR: "*",
    TokenType.SLASH: "/",
}


def count_rolls(node: ASTNode) -> int:
    # 評価前に振るダイスの数を数える（数値リテラルも 1 と数える）
    if isinstance(node, NumberNode):
        return 1
    if isinstance(node, DiceNode):
        return node.num_dice
    if isinstance(node, (BinaryOpNode, DiceBinaryOpNode)):
        return count_rolls(node.left) + count_rolls(node.right)
    if isinstance(node, GroupingNode):
        return count_rolls(node.expression)
    logger.warning("Cannot count on unknown node %r", node)
    return 0


def _text(value: int) -> str:
    # str() の桁数制限（3.11〜）を避けて 10 進表記にする
    if -CHUNK < value < CHUNK:
        return str(value)
    sign = "-" if value < 0 else ""
    value = abs(value)
    chunks = []
    while value:
        value, rest = divmod(value, CHUNK)
        chunks.append(rest)
    head = str(chunks.pop())
    tail = "".join(str(c).zfill(CHUNK_DIGITS) for c in reversed(chunks))
    return sign + head + tail


def _normalize(value: Number) -> Number:
    # 6 / 2 は 3.0 ではなく 3 として返す
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _apply(op: TokenType, left: Number, right: Number) -> Number:
    if op == TokenType.SLASH and right == 0:
        raise RollError("Division by zero")
    try:
        if op == TokenType.PLUS:
            return left + right
        if op == TokenType.MINUS:
            return left - right
        if op == TokenType.STAR:
            return left * right
        if op == TokenType.SLASH:
            return left / right
    except OverflowError:
        # 巨大な整数を float にできない（割り算や小数との混在）
        raise RollError("Result too large") from None
    raise DiceInternalError(f"Unexpected operator: {op}")


def _keep(op: TokenType, rolls: List[int], count: Number) -> int:
    ordered = sorted(rolls)
    # 端数は 0 方向に切り捨て、足りなければあるだけ使う
    keep = int(count)
    if op == TokenType.KEEP_HIGHEST:
        return sum(ordered[-keep:])
    if op == TokenType.KEEP_LOWEST:
        return sum(ordered[:keep])
    raise DiceInternalError(f"Unexpected dice modifier: {op}")


def evaluate(node: ASTNode, random: RandomSource) -> Result:
    """構文木を評価し、結果と説明文を返す。

    ``random`` は左から順に深さ優先で呼ばれるので、決まった出目列を渡せば
    結果は毎回同じになる。
    """
    if isinstance(node, NumberNode):
        return {"result": node.value, "explanation": _text(node.value)}

    if isinstance(node, DiceNode):
        rolls = [random(node.num_sides) for _ in range(node.num_dice)]
        return {
            "result": sum(rolls),
            "rolls": rolls,
            "explanation": f"[{' + '.join(map(_text, rolls))}]",
        }

    if isinstance(node, BinaryOpNode):
        left = evaluate(node.left, random)
        right = evaluate(node.right, random)
        value = _apply(node.operator, left["result"], right["result"])
        symbol = OPERATOR_SYMBOLS[node.operator]
        return {
            "result": _normalize(value),
            "explanation": f"{left['explanation']} {symbol} {right['explanation']}",
        }

    if isinstance(node, DiceBinaryOpNode):
        left = evaluate(node.left, random)
        right = evaluate(node.right, random)
        suffix = "kh" if node.operator == TokenType.KEEP_HIGHEST else "kl"
        return {
            "result": _keep(node.operator, left["rolls"], right["result"]),
            "explanation": f"{left['explanation']}{suffix}{right['explanation']}",
        }

    if isinstance(node, GroupingNode):
        inner = evaluate(node.expression, random)
        result: Result = {"result": inner["result"], "explanation": f"({inner['explanation']})"}
        if "rolls" in inner:
            result["rolls"] = inner["rolls"]
        return result

    raise DiceInternalError(f"Unexpected node: {node!r}")
