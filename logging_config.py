import logging

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level.upper())

    # 既にハンドラがあれば何もしない
    if root.handlers:
        return

    sh = logging.StreamHandler()
    sh.setFormatter(logging.Formatter(fmt=FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(sh)
