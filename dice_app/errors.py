from __future__ import annotations

from typing import List, Optional


class RollError(ValueError):
    # ダイス式のパースや評価で問題があった場合に送出
    pass


class TooManyDiceError(RollError):
    # 振るダイスの数が上限を超えた
    def __init__(self, dice: int):
        self.dice = dice
        super().__init__(f"Too many dice ({dice})!")


class DiceNotationError(RollError):
    """字句解析エラー。式とオフセットからキャレット付きのメッセージを組み立てる。"""

    def __init__(self, message: str, expression: str, offset: int, char: str = ""):
        self.expression = expression
        self.offset = offset
        self.char = char
        # 同じ走査で見つかった全エラー（lexer が設定する）
        self.errors: List[DiceNotationError] = [self]
        pointer = " " * offset + "^"
        super().__init__(f"Error: {message}\n```\n{expression}\n{pointer}\n```\n")


class DiceSyntaxError(RollError):
    # 構文エラー（キャレット表示なしの簡易メッセージ）
    def __init__(self, token_type: str, offset: int, expected: Optional[str] = None):
        self.token_type = token_type
        self.offset = offset
        self.expected = expected
        if expected is not None:
            message = f"Expected {expected} at offset {offset}"
        else:
            message = f"Unexpected {token_type} at offset {offset}"
        super().__init__(message)


class DiceInternalError(RuntimeError):
    # 到達しないはずの分岐。lexer/parser の不具合を示す
    pass
