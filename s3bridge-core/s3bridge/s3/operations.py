"""
Callback-style access to the operations of the ``S3Client``, addressed by their names (e.g. ``putObject@v1``). This
is the surface a message bus or RPC framework would register.
"""
import logging
from typing import Any, Callable, Mapping, Optional

from s3bridge.api.s3 import GetBucket, GetObject
from s3bridge.s3.client import S3Client
from s3bridge.s3.exceptions import OperationNotImplemented

LOG = logging.getLogger(__name__)

Callback = Callable[[Optional[Exception], Any], None]
"""Receives either the error (and None), or None and the result of the operation."""

# operations which are not executed at all if nobody is interested in their result
READ_OPERATIONS = (GetBucket.name, GetObject.name)


class OperationDispatcher:
    def __init__(self, client: S3Client):
        self.client = client
        self.operations = S3Client.operations()

    def dispatch(self, operation: str, params: Mapping, callback: Optional[Callback] = None) -> None:
        """
        Invokes the named operation and reports the outcome to the callback.

        Without a callback, read operations are skipped entirely, while ``deleteObject@v1`` and ``putObject@v1`` are
        still executed for their side effect and their outcome is only logged.

        :param operation: the operation name
        :param params: the parameters of the operation
        :param callback: called with ``(error, result)``
        :raises OperationNotImplemented: if there is no such operation
        """
        if operation not in self.operations:
            raise OperationNotImplemented(f"unknown operation {operation}")

        if callback is None:
            if operation in READ_OPERATIONS:
                return
            callback = self._log_outcome(operation)

        method = getattr(self.client, self.operations[operation])
        try:
            result = method(params)
        except Exception as e:
            callback(e, None)
            return

        callback(None, result)

    @staticmethod
    def _log_outcome(operation: str) -> Callback:
        def _callback(error, result):
            if error:
                LOG.debug("%s failed without a callback: %s", operation, error)
            else:
                LOG.debug("%s succeeded without a callback: %s", operation, result)

        return _callback
