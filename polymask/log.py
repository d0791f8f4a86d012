"""Logging functions.

Every module logs to a child of the 'polymask' logger.
"""

# This file is part of the 'polymask' project and subject
# to the MIT License as defined in the file 'LICENSE',
# at the root of this project. © 2020 Clément HAËCK


import logging
from typing import Union


LOGGER_NAME = 'polymask'

FILE_FORMAT = '%(asctime)s %(levelname)s:%(name)s:%(message)s'
"""Format of records written by :func:`set_file_log`."""


def get_level(level: Union[str, int]) -> int:
    """Return numeric logging level.

    :param level: Level name (not case sensitive) or number.

    :raises ValueError: Unknown level name.
    """
    if isinstance(level, int):
        return level
    level_num = logging.getLevelName(level.upper())
    if not isinstance(level_num, int):
        raise ValueError("Invalid logging level '%s'." % level)
    return level_num


def set_logging(level: Union[str, int] = 'INFO'):
    """Set package-wide logging level.

    :param level: {'debug', 'info', 'warning', 'error', 'critical'}
         Not case sensitive.
    """
    logging.getLogger(LOGGER_NAME).setLevel(get_level(level))


def set_file_log(filename: str, no_stdout: bool = False,
                 level: Union[str, int] = None) -> logging.FileHandler:
    """Redirect output to file.

    :param filename: File to output log, overwritten.
    :param no_stdout: Disable logging to the stdout.
    :param level: [opt] Level of output for file.

    :returns: The file handler, to pass to :func:`remove_file_log`.
    """
    logger = logging.getLogger(LOGGER_NAME)
    handler = logging.FileHandler(filename, mode='w')
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    if level is not None:
        handler.setLevel(get_level(level))

    logger.addHandler(handler)
    if no_stdout:
        logger.propagate = False
    return handler


def remove_file_log(handler: logging.Handler):
    """Stop logging to a file, and restore output to stdout."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.removeHandler(handler)
    handler.close()
    logger.propagate = True


logging.basicConfig()
