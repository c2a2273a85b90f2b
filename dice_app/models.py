from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

# TypedDict も typing_extensions から取ると NotRequired が古い Python でも効く
from typing_extensions import NotRequired, TypedDict


class TokenType(str, Enum):
    PLUS = "PLUS"
    MINUS = "MINUS"
    STAR = "STAR"
    SLASH = "SLASH"
    NUMBER = "NUMBER"
    DICE = "DICE"
    KEEP_HIGHEST = "KEEP_HIGHEST"
    KEEP_LOWEST = "KEEP_LOWEST"
    PAREN_OPEN = "PAREN_OPEN"
    PAREN_CLOSE = "PAREN_CLOSE"
    EOF = "EOF"


OPERATORS = (TokenType.PLUS, TokenType.MINUS, TokenType.STAR, TokenType.SLASH)
DICE_MODIFIERS = (TokenType.KEEP_HIGHEST, TokenType.KEEP_LOWEST)

# int と str の相互変換の桁数制限（3.11〜）に掛からない区切り幅
CHUNK_DIGITS = 1000


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    # 式の先頭からの文字位置（エラー表示用）
    offset: int
    # NUMBER トークンのみ整数値を持つ
    literal: Optional[int] = None


# =========================
# 構文木ノード
# =========================

@dataclass(frozen=True)
class NumberNode:
    value: int


@dataclass(frozen=True)
class DiceNode:
    num_dice: int
    num_sides: int


@dataclass(frozen=True)
class BinaryOpNode:
    left: "ASTNode"
    operator: TokenType
    right: "ASTNode"


@dataclass(frozen=True)
class DiceBinaryOpNode:
    # kh / kl の左辺は常に素のダイス
    left: DiceNode
    operator: TokenType
    right: "ASTNode"


@dataclass(frozen=True)
class GroupingNode:
    # 説明文に括弧を残すため畳み込まない
    expression: "ASTNode"


ASTNode = Union[NumberNode, DiceNode, BinaryOpNode, DiceBinaryOpNode, GroupingNode]

Number = Union[int, float]


class Result(TypedDict):
    '''評価結果（そのまま JSON にできる形）'''
    result: Number
    # ダイスを直接振ったときだけ入る（振った順）
    rolls: NotRequired[List[int]]
    # 将来用。現状は埋めない
    children: NotRequired[List["Result"]]
    explanation: str
