"""Formatting of the s3bridge log output."""
import logging

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(s3_level)5s %(s3_name)-14s %(s3_resource)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

PACKAGE_PREFIX = "s3bridge."

LEVEL_NAMES = {
    logging.CRITICAL: "FATAL",
    logging.WARNING: "WARN",
}


class DefaultFormatter(logging.Formatter):
    def __init__(self, fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT):
        super().__init__(fmt=fmt, datefmt=datefmt)


class AddFormattedAttributes(logging.Filter):
    """
    Adds the attributes ``LOG_FORMAT`` refers to:

    - s3_level: the level name, ``WARN`` and ``FATAL`` instead of ``WARNING`` and ``CRITICAL``
    - s3_name: see ``short_logger_name``
    - s3_resource: ``[bucket/key] `` if the record was logged for an operation (``extra={"resource": ...}``)
    """

    def filter(self, record):
        record.s3_level = LEVEL_NAMES.get(record.levelno, record.levelname)
        record.s3_name = short_logger_name(record.name)
        resource = getattr(record, "resource", None)
        record.s3_resource = f"[{resource}] " if resource else ""
        return True


def short_logger_name(name: str) -> str:
    """
    Names a logger by the module relative to the package, e.g. ``s3.transport`` for ``s3bridge.s3.transport``.
    Loggers of libraries are named by their top-level package, e.g. ``urllib3`` for ``urllib3.connectionpool``.
    """
    if name.startswith(PACKAGE_PREFIX):
        return name[len(PACKAGE_PREFIX) :]
    return name.split(".", 1)[0]
