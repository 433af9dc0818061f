import logging
from pathlib import Path


def get_logger(name: str, log_dir: str = 'logs') -> logging.Logger:
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(logging.DEBUG)

        # 控制台只输出 INFO 及以上
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter('%(levelname)s - %(message)s'))

        # 文件记录完整的 DEBUG 日志，包括生成的 SQL
        path = Path(log_dir)
        path.mkdir(exist_ok=True)
        file_handler = logging.FileHandler(path / 'ddl.log', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )

        logger.addHandler(console_handler)
        logger.addHandler(file_handler)

    return logger
