from icecream import ic # デバッグ用

from dice_app import dice
from dice_app.errors import RollError

# 動作確認用の式
expressions = [
    "1d20",
    "2d6 + d8",
    "4d6kh3",
    "(2d10 + 3) * 2",
    "3d6kl(1d2)",
    "7 / 2",
    "1 @ 2",
]

for expr in expressions:
    try:
        result = dice.roll(expr, max_rolls=100)
    except RollError as e:
        ic(expr, str(e))
        continue
    ic(expr, result["result"], result["explanation"])
