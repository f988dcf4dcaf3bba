import logging
import logging.config
from typing import Optional

from eunoia.config import config, AppConfig


def setup_logger(app_config: Optional[AppConfig] = None) -> logging.Logger:
    app_config = app_config or config
    if app_config.log_to_file:
        app_config.log_dir.mkdir(exist_ok=True, parents=True)
    logging.config.dictConfig(app_config.get_logging_config())
    logger = logging.getLogger()
    logger.debug("Logging configured: %s", app_config.log_level.value)
    return logger
