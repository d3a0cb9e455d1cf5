import logging
import os
from typing import Union

from s3bridge.constants import (
    LOG_LEVELS,
    TRACE_LOG_LEVELS,
    TRUE_STRINGS,
)


def eval_log_type(env_var_name: str) -> Union[str, bool]:
    """Get the log type from environment variable"""
    log_type = os.environ.get(env_var_name, "").lower().strip()
    return log_type if log_type in LOG_LEVELS else False


def is_env_true(env_var_name: str) -> bool:
    """Whether the given environment variable has a truthy value."""
    return os.environ.get(env_var_name, "").lower().strip() in TRUE_STRINGS


# whether to enable verbose debug logging
S3BRIDGE_LOG = eval_log_type("S3BRIDGE_LOG")
DEBUG = is_env_true("DEBUG") or S3BRIDGE_LOG in TRACE_LOG_LEVELS


def is_trace_logging_enabled():
    if S3BRIDGE_LOG:
        log_level = str(S3BRIDGE_LOG).upper()
        return log_level.lower() in TRACE_LOG_LEVELS
    return False


# set log levels immediately, but will be overwritten later by setup_logging
if DEBUG:
    logging.getLogger("").setLevel(logging.DEBUG)
    logging.getLogger("s3bridge").setLevel(logging.DEBUG)
