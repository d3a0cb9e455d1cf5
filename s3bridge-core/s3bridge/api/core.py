import functools
from typing import Iterable, Mapping, Optional, Tuple, TypedDict


class ServiceRequest(TypedDict):
    pass


class ServiceException(Exception):
    """
    Base of all errors raised by client operations. Errors with a code and status extend CommonServiceException,
    connection failures are raised as ``s3bridge.s3.exceptions.TransportError``.
    """


class CommonServiceException(ServiceException):
    """
    An exception which carries an error code, a message and the HTTP-equivalent status code, i.e., everything a
    caller needs to report the failure of an operation.
    """

    def __init__(self, code: Optional[str], message: Optional[str], status_code: int = 400):
        self.code = code
        self.status_code = status_code
        self.message = message
        super().__init__(self.message)


class MissingParameter(CommonServiceException):
    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__("MissingParameter", status_code=400, message=f"missing {parameter}")


class OperationModel:
    """
    Describes a client operation: its versioned name (e.g. ``putObject@v1``) and the parameters it cannot run
    without, in the order they are checked.
    """

    name: str
    required: Tuple[str, ...]
    allow_empty: Tuple[str, ...]

    def __init__(self, name: str, required: Iterable[str] = (), allow_empty: Iterable[str] = ()):
        """
        :param name: the operation name
        :param required: the required parameter names, in the order they are checked
        :param allow_empty: required parameters for which only an absent (None) value counts as missing
        """
        self.name = name
        self.required = tuple(required)
        self.allow_empty = tuple(allow_empty)

    def validate(self, params: Mapping) -> None:
        """
        Raises for the first required parameter which is missing. A parameter is missing if it is absent or, unless
        it is listed in ``allow_empty``, empty.

        :raises MissingParameter: naming the first missing parameter
        """
        for name in self.required:
            value = params.get(name)
            if value is None or (not value and name not in self.allow_empty):
                raise MissingParameter(name)

    def __repr__(self):
        return f"OperationModel({self.name})"


def handler(operation: OperationModel):
    """
    Marks a client method as the implementation of the given operation. The model is available as ``.operation`` on
    the method, which is how callers look up operations by name.
    """

    def wrapper(fn):
        @functools.wraps(fn)
        def operation_marker(*args, **kwargs):
            return fn(*args, **kwargs)

        operation_marker.operation = operation

        return operation_marker

    return wrapper
