import os


class Config:
    '''Flask/ダイスAPIの最低限設定'''
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only")
    # API 経由で1回に振れるダイス数の上限（0 で無制限）
    DICE_MAX_ROLLS = int(os.getenv("DICE_MAX_ROLLS", "100"))
    # 式の長さの上限。結果の桁数もこれで抑えられる
    DICE_MAX_EXPRESSION_LENGTH = int(os.getenv("DICE_MAX_EXPRESSION_LENGTH", "1000"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
