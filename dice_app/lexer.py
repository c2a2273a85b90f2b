from __future__ import annotations

from typing import List

from .errors import DiceNotationError
from .models import CHUNK_DIGITS, Token, TokenType

SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.PAREN_OPEN,
    ")": TokenType.PAREN_CLOSE,
    "d": TokenType.DICE,
    "h": TokenType.KEEP_HIGHEST,
    "l": TokenType.KEEP_LOWEST,
}

KEEP_SUFFIXES = {
    "h": (TokenType.KEEP_HIGHEST, "kh"),
    "l": (TokenType.KEEP_LOWEST, "kl"),
}


def _is_digit(char: str) -> bool:
    # str.isdigit は全角数字なども通すので ASCII に限定
    return "0" <= char <= "9"


def _to_int(digits: str) -> int:
    # 長い数字列も上限なしで整数にする
    value = 0
    for i in range(0, len(digits), CHUNK_DIGITS):
        chunk = digits[i:i + CHUNK_DIGITS]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def lex(expression: str) -> List[Token]:
    """ダイス式をトークン列に分割する。

    不正な文字があっても最後まで走査してエラーを集め、最初の1件を送出する。
    残りは送出した例外の ``errors`` から参照できる。
    """
    tokens: List[Token] = []
    errors: List[DiceNotationError] = []
    offset = 0
    length = len(expression)

    while offset < length:
        char = expression[offset]

        if char.isspace():
            offset += 1
        elif _is_digit(char):
            start = offset
            while offset < length and _is_digit(expression[offset]):
                offset += 1
            number = expression[start:offset]
            tokens.append(Token(TokenType.NUMBER, number, start, literal=_to_int(number)))
        elif char == "k":
            # k の直後は h か l でなければならない
            offset += 1
            following = expression[offset] if offset < length else ""
            if following in KEEP_SUFFIXES:
                token_type, lexeme = KEEP_SUFFIXES[following]
                tokens.append(Token(token_type, lexeme, offset))
                offset += 1
            else:
                shown = repr(following) if following else "end of input"
                errors.append(
                    DiceNotationError(f"Unexpected {shown} after 'k'!", expression, offset, following)
                )
        elif char in SINGLE_CHAR_TOKENS:
            tokens.append(Token(SINGLE_CHAR_TOKENS[char], char, offset))
            offset += 1
        else:
            errors.append(DiceNotationError(f"Unexpected {char!r}!", expression, offset, char))
            offset += 1

    if errors:
        first = errors[0]
        first.errors = errors
        raise first

    tokens.append(Token(TokenType.EOF, "", offset))
    return tokens
