import abc
import logging
from typing import Callable, Dict, Mapping, NamedTuple, Optional, Union

from botocore.auth import HmacV1Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials

from s3bridge.constants import DEFAULT_S3_ENDPOINT
from s3bridge.s3.transport import get_bucket_host

LOG = logging.getLogger(__name__)


class SigningRequest(NamedTuple):
    verb: str
    bucket_name: str
    object_key: str
    """empty for bucket-level requests"""
    headers: Mapping[str, str]
    access_key_id: str
    secret_access_key: str


class Signature(NamedTuple):
    """
    The signature of exactly one request. The date is part of the signed string, so a signature is never reused.
    """

    authorization: str
    date: str


class Signer(abc.ABC):
    """Computes the credential proof for a request."""

    @abc.abstractmethod
    def sign(self, request: SigningRequest) -> Signature:
        """
        :param request: the request to sign
        :return: the values of the ``Authorization`` and ``Date`` headers
        """
        raise NotImplementedError


SigningFunction = Callable[[SigningRequest], Union[Signature, Dict[str, str]]]


class DelegatingSigner(Signer):
    """
    Hands the signing off to an external signature provider, e.g., a stub calling a signing service. The provider
    may return a ``Signature`` or a dict with ``authorization`` and ``date``. Errors of the provider are not handled.
    """

    def __init__(self, provider: SigningFunction):
        self.provider = provider

    def sign(self, request: SigningRequest) -> Signature:
        response = self.provider(request)
        if isinstance(response, Signature):
            return response
        return Signature(authorization=response["authorization"], date=response["date"])


class HmacV1Signer(Signer):
    """
    Signs requests with the S3 REST authentication scheme (``Authorization: AWS <access-key-id>:<signature>``)
    using botocore's ``HmacV1Auth``.
    """

    def __init__(self, endpoint: Optional[str] = None):
        self.endpoint = endpoint or DEFAULT_S3_ENDPOINT

    def sign(self, request: SigningRequest) -> Signature:
        credentials = Credentials(request.access_key_id, request.secret_access_key)
        host = get_bucket_host(request.bucket_name, self.endpoint)
        aws_request = AWSRequest(
            method=request.verb,
            url=f"https://{host}/{request.object_key}",
            headers={name: str(value) for name, value in request.headers.items()},
            # virtual-hosted requests are signed with the bucket as the first path segment
            auth_path=f"/{request.bucket_name}/{request.object_key}",
        )
        HmacV1Auth(credentials).add_auth(aws_request)
        LOG.debug("signed %s request for %s", request.verb, aws_request.auth_path)
        return Signature(
            authorization=aws_request.headers["Authorization"],
            date=aws_request.headers["Date"],
        )
