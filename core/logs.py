"""Named loggers for MDM operations."""

import logging

TROUBLESHOOTING_LOG_NAME = "mdm.troubleshooting"

def get_troubleshooting_log() -> logging.Logger:
    """
    Logger for MDM events operators may need to trace.

    A stream handler is attached the first time, unless the application has
    already configured handlers for it.
    """
    logger = logging.getLogger(TROUBLESHOOTING_LOG_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                '%(asctime)s - %(levelname)s - %(message)s'
            )
        )
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger
