"""Handlers of the operation chain, in the order the client runs them."""
import logging

from s3bridge.constants import HEADER_AUTHORIZATION, HEADER_DATE
from s3bridge.s3.chain import HandlerChain, OperationContext
from s3bridge.s3.models import OperationRequest
from s3bridge.s3.response import parse_response
from s3bridge.s3.signer import Signer, SigningRequest
from s3bridge.s3.transport import Transport

LOG = logging.getLogger(__name__)


class SignatureHandler:
    """Asks the signer for the signature of the request."""

    def __init__(self, signer: Signer):
        self.signer = signer

    def __call__(self, chain: HandlerChain, context: OperationContext):
        request = context.request
        context.signature = self.signer.sign(
            SigningRequest(
                verb=request.verb,
                bucket_name=request.bucket_name,
                object_key=request.object_key or "",
                headers=dict(request.headers),
                access_key_id=request.access_key_id,
                secret_access_key=request.secret_access_key,
            )
        )


def attach_signature(chain: HandlerChain, context: OperationContext):
    context.request.headers[HEADER_AUTHORIZATION] = context.signature.authorization
    context.request.headers[HEADER_DATE] = context.signature.date


class TransportHandler:
    """Sends the signed request."""

    def __init__(self, transport: Transport):
        self.transport = transport

    def __call__(self, chain: HandlerChain, context: OperationContext):
        context.response = self.transport.send(context.request)


def parse_response_handler(chain: HandlerChain, context: OperationContext):
    context.result = parse_response(context.response)


def get_resource(request: OperationRequest) -> str:
    """Returns ``bucket/key`` for object operations, and ``bucket/`` for bucket operations."""
    return f"{request.bucket_name}/{request.object_key or ''}"


def log_operation(chain: HandlerChain, context: OperationContext):
    request = context.request
    extra = {"resource": get_resource(request)}
    status = context.response.status_code if context.response else None
    if chain.error:
        LOG.debug("%s failed (status %s): %s", request.verb, status, chain.error, extra=extra)
    else:
        LOG.debug("%s => %s", request.verb, status, extra=extra)
