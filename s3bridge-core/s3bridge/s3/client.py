import logging
from typing import Dict, Optional

from s3bridge.api import OperationModel, handler
from s3bridge.api.s3 import (
    DeleteObject,
    DeleteObjectOutput,
    DeleteObjectRequest,
    GetBucket,
    GetBucketOutput,
    GetBucketRequest,
    GetObject,
    GetObjectOutput,
    GetObjectRequest,
    PutObject,
    PutObjectOutput,
    PutObjectRequest,
)
from s3bridge.s3.chain import HandlerChain, OperationContext
from s3bridge.s3.handlers import (
    SignatureHandler,
    TransportHandler,
    attach_signature,
    log_operation,
    parse_response_handler,
)
from s3bridge.s3.models import OperationRequest
from s3bridge.s3.request import (
    build_delete_object_request,
    build_get_bucket_request,
    build_get_object_request,
    build_put_object_request,
)
from s3bridge.s3.signer import HmacV1Signer, Signer
from s3bridge.s3.transport import RequestsTransport, Transport

LOG = logging.getLogger(__name__)


class S3Client:
    """
    Client for the object operations of the storage service. Every call validates its parameters, signs the
    request, sends it exactly once, and returns the parsed result. Failures are raised (see
    ``s3bridge.s3.exceptions``); nothing is retried.

    The client holds no per-request state, so a single instance can be shared by concurrent callers as long as the
    signer and the transport can.
    """

    signer: Signer
    transport: Transport

    def __init__(
        self,
        signer: Optional[Signer] = None,
        transport: Optional[Transport] = None,
        endpoint: Optional[str] = None,
        use_ssl: bool = True,
    ):
        """
        :param signer: the signer, defaults to a ``HmacV1Signer``
        :param transport: the transport, defaults to a ``RequestsTransport``
        :param endpoint: the storage endpoint used by the default signer and transport
        :param use_ssl: whether the default transport uses https
        """
        self.signer = signer or HmacV1Signer(endpoint=endpoint)
        self.transport = transport or RequestsTransport(endpoint=endpoint, use_ssl=use_ssl)

    @classmethod
    def operations(cls) -> Dict[str, str]:
        """Returns the names of all operations, mapped to the name of the method implementing them."""
        result = {}
        for name in dir(cls):
            attr = getattr(cls, name)
            if isinstance(operation := getattr(attr, "operation", None), OperationModel):
                result[operation.name] = name
        return result

    def create_chain(self) -> HandlerChain:
        return HandlerChain(
            handlers=[
                SignatureHandler(self.signer),
                attach_signature,
                TransportHandler(self.transport),
                parse_response_handler,
            ],
            finalizers=[log_operation],
        )

    def execute(self, request: OperationRequest):
        """
        Runs the given request through the operation chain.

        :param request: the request built for an operation
        :return: the parsed result
        """
        return self.create_chain().handle(OperationContext(request))

    @handler(DeleteObject)
    def delete_object(self, params: DeleteObjectRequest) -> DeleteObjectOutput:
        return self.execute(build_delete_object_request(params))

    @handler(GetBucket)
    def get_bucket(self, params: GetBucketRequest) -> GetBucketOutput:
        return self.execute(build_get_bucket_request(params))

    @handler(GetObject)
    def get_object(self, params: GetObjectRequest) -> GetObjectOutput:
        return self.execute(build_get_object_request(params))

    @handler(PutObject)
    def put_object(self, params: PutObjectRequest) -> PutObjectOutput:
        return self.execute(build_put_object_request(params))

    def close(self):
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
