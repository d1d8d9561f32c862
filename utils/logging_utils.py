import logging

# Logger shared by every module of the project
LOGGER_NAME = "sudoku"


def get_logger(level=None):
    """
    Return the project logger.

    A stream handler is attached on first use only, so repeated calls (and
    applications that configure logging themselves) don't duplicate output.
    """
    logger = logging.getLogger(LOGGER_NAME)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.WARNING)

    if level is not None:
        logger.setLevel(level)

    return logger
