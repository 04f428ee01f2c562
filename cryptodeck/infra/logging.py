import logging
import sys

from loguru import logger


class _InterceptHandler(logging.Handler):
    # przekierowanie logów stdlib (GeminiClient, requests) do loguru
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(exception=record.exc_info).log(level, record.getMessage())


def setup_logging(log_file: str = "logs/runtime.log", level: str = "INFO"):
    logger.remove()
    logger.add(
        log_file,
        rotation="10 MB",
        retention="10 days",
        enqueue=True,
        backtrace=True,
        diagnose=False,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level:<8} | {message}",
    )
    logger.add(sys.stdout, level=level, format="{time:HH:mm:ss} | {level:<8} | {message}")
    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    return logger
