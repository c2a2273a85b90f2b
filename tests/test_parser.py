from __future__ import annotations

import logging

import pytest

from dice_app.errors import DiceSyntaxError
from dice_app.lexer import lex
from dice_app.models import (
    BinaryOpNode,
    DiceBinaryOpNode,
    DiceNode,
    GroupingNode,
    NumberNode,
    TokenType,
)
from dice_app.parser import parse


def _parse(expression: str):
    return parse(lex(expression))


def test_parse_number() -> None:
    assert _parse("42") == NumberNode(42)


def test_parse_dice_with_count() -> None:
    assert _parse("2d6") == DiceNode(2, 6)


def test_parse_dice_count_defaults_to_one() -> None:
    assert _parse("d8") == DiceNode(1, 8)


def test_multiplication_binds_tighter() -> None:
    assert _parse("1 + 2 * 3") == BinaryOpNode(
        NumberNode(1),
        TokenType.PLUS,
        BinaryOpNode(NumberNode(2), TokenType.STAR, NumberNode(3)),
    )


def test_operators_are_left_associative() -> None:
    assert _parse("8 - 3 - 1") == BinaryOpNode(
        BinaryOpNode(NumberNode(8), TokenType.MINUS, NumberNode(3)),
        TokenType.MINUS,
        NumberNode(1),
    )
    assert _parse("8 / 2 * 4") == BinaryOpNode(
        BinaryOpNode(NumberNode(8), TokenType.SLASH, NumberNode(2)),
        TokenType.STAR,
        NumberNode(4),
    )


def test_grouping_is_preserved() -> None:
    assert _parse("(1 + 2) * 3") == BinaryOpNode(
        GroupingNode(BinaryOpNode(NumberNode(1), TokenType.PLUS, NumberNode(2))),
        TokenType.STAR,
        NumberNode(3),
    )


def test_keep_highest_wraps_dice() -> None:
    assert _parse("3d6kh1") == DiceBinaryOpNode(DiceNode(3, 6), TokenType.KEEP_HIGHEST, NumberNode(1))


def test_keep_count_can_be_an_expression() -> None:
    assert _parse("4d6l(1d2)") == DiceBinaryOpNode(
        DiceNode(4, 6),
        TokenType.KEEP_LOWEST,
        GroupingNode(DiceNode(1, 2)),
    )


def test_keep_count_is_a_primary() -> None:
    # kh の右辺は primary なので後続の + は外側の式になる
    assert _parse("2d20kh1 + 5") == BinaryOpNode(
        DiceBinaryOpNode(DiceNode(2, 20), TokenType.KEEP_HIGHEST, NumberNode(1)),
        TokenType.PLUS,
        NumberNode(5),
    )


def test_missing_closing_paren() -> None:
    with pytest.raises(DiceSyntaxError) as excinfo:
        _parse("(1 + 2")
    err = excinfo.value
    assert err.expected == "PAREN_CLOSE"
    assert err.token_type == "EOF"
    assert err.offset == 6
    assert str(err) == "Expected PAREN_CLOSE at offset 6"


def test_missing_sides_after_d() -> None:
    with pytest.raises(DiceSyntaxError) as excinfo:
        _parse("2d + 1")
    assert excinfo.value.expected == "NUMBER"
    assert excinfo.value.offset == 3


def test_unexpected_token() -> None:
    with pytest.raises(DiceSyntaxError) as excinfo:
        _parse("1 + * 2")
    err = excinfo.value
    assert err.expected is None
    assert str(err) == "Unexpected STAR at offset 4"


def test_empty_input_is_a_syntax_error() -> None:
    with pytest.raises(DiceSyntaxError):
        _parse("")


def test_trailing_input_is_ignored_with_warning(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="dice_app.parser"):
        ast = _parse("1 + 2 3")
    assert ast == BinaryOpNode(NumberNode(1), TokenType.PLUS, NumberNode(2))
    assert "Could not parse whole expression" in caplog.text
