from .core import (
    CommonServiceException,
    MissingParameter,
    OperationModel,
    ServiceException,
    ServiceRequest,
    handler,
)

__all__ = [
    "ServiceException",
    "CommonServiceException",
    "MissingParameter",
    "OperationModel",
    "ServiceRequest",
    "handler",
]
