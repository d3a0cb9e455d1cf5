"""
The pipeline executing a single operation: signing, attaching the signature, sending the request and parsing the
response. Each step is a handler working on a shared ``OperationContext``.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from s3bridge.s3.models import OperationRequest, ResponseEnvelope
from s3bridge.s3.signer import Signature

LOG = logging.getLogger(__name__)


class OperationContext:
    """Holds the state of one operation while it passes through the handler chain."""

    request: OperationRequest
    signature: Optional[Signature]
    response: Optional[ResponseEnvelope]
    result: Any

    def __init__(self, request: OperationRequest) -> None:
        super().__init__()
        self.request = request
        self.signature = None
        self.response = None
        self.result = None


Handler = Callable[["HandlerChain", OperationContext], None]
"""The signature of a handler in the handler chain. Receives the HandlerChain and the OperationContext."""


class HandlerChain:
    """
    Runs a list of handlers sequentially on an ``OperationContext``. Each operation should have its own HandlerChain
    instance, since the handler chain holds state for the handling of an operation.

    An exception raised by a handler ends the chain right away and is re-raised unchanged by ``handle``, so there
    are never partial results. Finalizers run in any case.
    """

    handlers: List[Handler]
    finalizers: List[Handler]

    error: Optional[Exception]
    context: Optional[OperationContext]

    def __init__(self, handlers: List[Handler] = None, finalizers: List[Handler] = None) -> None:
        super().__init__()
        self.handlers = handlers or list()
        self.finalizers = finalizers or list()

        self.error = None
        self.context = None

    def handle(self, context: OperationContext) -> Any:
        """
        Process the given context with all handlers.

        :param context: the operation context
        :return: the result the handlers stored in the context
        """
        self.context = context

        try:
            for handler in self.handlers:
                try:
                    handler(self, context)
                except Exception as e:
                    self.error = e
                    raise
        finally:
            self._call_finalizers()

        return context.result

    def _call_finalizers(self):
        for handler in self.finalizers:
            try:
                handler(self, self.context)
            except Exception as e:
                msg = "exception while running finalizer"
                if LOG.isEnabledFor(logging.DEBUG):
                    LOG.exception(msg)
                else:
                    LOG.warning(msg + ": %s", e)
