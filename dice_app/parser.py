from __future__ import annotations

import logging
from typing import List

from .errors import DiceSyntaxError
from .models import (
    ASTNode,
    BinaryOpNode,
    DICE_MODIFIERS,
    DiceBinaryOpNode,
    DiceNode,
    GroupingNode,
    NumberNode,
    Token,
    TokenType,
)

logger = logging.getLogger(__name__)


class _Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def _peek(self, ahead: int = 0) -> Token:
        # 末尾を越えたら EOF を返し続ける
        index = min(self.pos + ahead, len(self.tokens) - 1)
        return self.tokens[index]

    def _consume(self) -> Token:
        tok = self._peek()
        self.pos += 1
        return tok

    def _match(self, *types: TokenType) -> bool:
        if self._peek().type in types:
            self._consume()
            return True
        return False

    def _previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def _expect(self, token_type: TokenType) -> Token:
        tok = self._peek()
        if tok.type != token_type:
            raise DiceSyntaxError(tok.type.value, tok.offset, expected=token_type.value)
        return self._consume()

    def parse(self) -> ASTNode:
        # トップレベルの式を解析
        node = self._term()
        if self._peek().type != TokenType.EOF:
            # 残りは捨てる（エラーにはしない）
            logger.warning(
                "Could not parse whole expression; ignoring input from offset %d",
                self._peek().offset,
            )
        return node

    def _term(self) -> ASTNode:
        node = self._factor()
        while self._match(TokenType.MINUS, TokenType.PLUS):
            op = self._previous().type
            right = self._factor()
            node = BinaryOpNode(node, op, right)
        return node

    def _factor(self) -> ASTNode:
        node = self._primary()
        while self._match(TokenType.STAR, TokenType.SLASH):
            op = self._previous().type
            right = self._primary()
            node = BinaryOpNode(node, op, right)
        return node

    def _primary(self) -> ASTNode:
        tok = self._peek()
        # 2d6 を「2」と「d6」に分けないための先読み
        if tok.type == TokenType.DICE or (
            tok.type == TokenType.NUMBER and self._peek(1).type == TokenType.DICE
        ):
            return self._dice()
        if self._match(TokenType.NUMBER):
            return NumberNode(self._previous().literal)
        if self._match(TokenType.PAREN_OPEN):
            node = self._term()
            self._expect(TokenType.PAREN_CLOSE)
            return GroupingNode(node)
        raise DiceSyntaxError(tok.type.value, tok.offset)

    def _dice(self) -> ASTNode:
        # 個数省略時は 1 個
        num_dice = self._previous().literal if self._match(TokenType.NUMBER) else 1
        self._expect(TokenType.DICE)
        num_sides = self._expect(TokenType.NUMBER).literal
        dice = DiceNode(num_dice, num_sides)
        if self._match(*DICE_MODIFIERS):
            op = self._previous().type
            return DiceBinaryOpNode(dice, op, self._primary())
        return dice


def parse(tokens: List[Token]) -> ASTNode:
    """トークン列から構文木を組み立てる。"""
    return _Parser(tokens).parse()
