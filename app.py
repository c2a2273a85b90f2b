import logging
import os
import random
from typing import Any, Dict

from flask import Flask, jsonify, request

from config import Config
from dice_app import dice
from dice_app.errors import DiceNotationError, DiceSyntaxError, RollError, TooManyDiceError
from dice_app.rng import from_rng
from logging_config import setup_logging

app = Flask(__name__)
app.config.from_object(Config)
setup_logging(app.config["LOG_LEVEL"])
logger = logging.getLogger(__name__)


def _json_error(message: str, status: int = 400, **extra: Any):
    # エラーレスポンスを組み立てるヘルパ
    return jsonify({"error": message, **extra}), status


def _roll_error_body(exc: RollError) -> Dict[str, Any]:
    # 例外の種類ごとに位置情報などを添える
    if isinstance(exc, DiceNotationError):
        return {"expression": exc.expression, "offset": exc.offset}
    if isinstance(exc, DiceSyntaxError):
        return {"offset": exc.offset}
    if isinstance(exc, TooManyDiceError):
        return {"dice": exc.dice}
    return {}


@app.route("/api/health")
def health():
    # 動作確認用ヘルスチェック
    return jsonify({"status": "ok"})


@app.route("/api/dice/roll", methods=["POST"])
def roll_dice():
    # ダイスロール API
    payload = request.get_json(force=True, silent=True) or {}
    expr = payload.get("expression")
    if not expr or not isinstance(expr, str):
        return _json_error("expression is required")
    if len(expr) > app.config["DICE_MAX_EXPRESSION_LENGTH"]:
        return _json_error("expression is too long")
    max_rolls = payload.get("max_rolls", app.config["DICE_MAX_ROLLS"])
    # true / 1.5 などは受け付けない
    if isinstance(max_rolls, bool) or not isinstance(max_rolls, int):
        return _json_error("max_rolls must be an integer")
    seed = payload.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, (int, str))):
        return _json_error("seed must be an integer or string")
    source = from_rng(random.Random(seed)) if seed is not None else None
    try:
        result = dice.roll(expr, random=source, max_rolls=max_rolls)
    except RollError as exc:
        logger.info("rejected expression %r: %s", expr, exc)
        return _json_error(str(exc), **_roll_error_body(exc))
    return jsonify({"expression": expr, **result})


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=True)
