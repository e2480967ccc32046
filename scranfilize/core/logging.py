import logging
import os
import sys

def get_logger(name: str) -> logging.Logger:
    """
    Returns a configured logger with the given name.
    Avoids duplicate handlers and respects SCRANFILIZE_LOG_LEVEL.
    """
    logger = logging.getLogger(name)

    log_level_str = os.getenv("SCRANFILIZE_LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    logger.setLevel(log_level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("[scranfilize] %(message)s"))
        logger.addHandler(handler)

    # Progress output goes to stderr only, stdout may carry the scrambled CNF
    logger.propagate = False

    return logger

# Default library logger
logger = get_logger("scranfilize")
