# Configuration settings should be set in app.config
# The Reshape class variables hold the defaults, environment variables are used as a last resort
import os
import logging
from flask import current_app
import reshape
from typing import Optional, Union


def get_config(option: str) -> Optional[Union[bool, int, str]]:
    """Retrieve a configuration parameter from the app
    :param option: configuration parameter
    :return: configuration value
    """
    try:
        result = current_app.config[option]
    except (KeyError, RuntimeError):
        # no app context or the app doesn't override the option
        result = getattr(reshape.Reshape, option, os.environ.get(option, None))
    return result


def get_int_config(option: str) -> int:
    """
    :param option: configuration parameter that should hold an integer
    :return: integer configuration value
    """
    value = get_config(option)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise reshape.errors.GenericError(f"Invalid integer configuration for {option}: {value}")


def is_debug() -> bool:
    """
    We use the loglevel to check whether we're running in debug mode
    :return: whether the app is in debug mode
    :rtype: Boolean
    """
    return reshape.log.getEffectiveLevel() < logging.INFO
