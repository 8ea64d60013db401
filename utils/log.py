# utils/log.py
import logging

from flask.logging import default_handler

LOG_FORMAT = '[%(asctime)s] %(levelname)s: %(message)s'


def _build_handlers(log_file):
    formatter = logging.Formatter(LOG_FORMAT)

    # 控制台输出
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    handlers = [console_handler]

    # 文件输出
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)
    return handlers


def setup_logging(app):
    """Configure the app logger and the ``utils`` logger once; later calls only reset the level."""
    level = logging.getLevelName(str(app.config.get('LOG_LEVEL', 'INFO')).upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.getLogger('sqlalchemy').setLevel(logging.WARNING)

    app.logger.removeHandler(default_handler)
    for logger in (app.logger, logging.getLogger('utils')):
        logger.setLevel(level)
        if logger.handlers:
            continue  # already configured
        for handler in _build_handlers(app.config.get('LOG_FILE')):
            logger.addHandler(handler)

    return app.logger
