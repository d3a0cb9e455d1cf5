import abc
import logging
from typing import Optional

import requests
from requests.structures import CaseInsensitiveDict

from s3bridge.constants import DEFAULT_S3_ENDPOINT
from s3bridge.s3.exceptions import TransportError
from s3bridge.s3.models import OperationRequest, ResponseEnvelope
from s3bridge.utils.strings import to_str, truncate

LOG = logging.getLogger(__name__)


class Transport(abc.ABC):
    """
    Sends a single request to the storage service and returns the fully buffered response.
    """

    def send(self, request: OperationRequest) -> ResponseEnvelope:
        """
        Send the given request exactly once.

        :param request: the request to send, already carrying its signature headers
        :return: the response envelope
        :raises TransportError: if the request could not be sent or the response could not be received
        """
        raise NotImplementedError

    def close(self):
        """
        Close any underlying resources the transport may need.
        """
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def get_bucket_host(bucket_name: str, endpoint: str) -> str:
    return f"{bucket_name}.{endpoint}"


def get_request_path(request: OperationRequest) -> str:
    path = "/"
    if request.object_key:
        path += request.object_key
    if request.query_params:
        path += "?" + "&".join(request.query_params)
    return path


class RequestsTransport(Transport):
    """
    Transport based on a ``requests.Session``. Buckets are addressed as virtual hosts below the endpoint. There are
    no retries and no timeouts besides what the underlying connection enforces.
    """

    session: requests.Session

    def __init__(
        self,
        endpoint: Optional[str] = None,
        use_ssl: bool = True,
        server: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        :param endpoint: the hostname of the storage service, defaults to ``DEFAULT_S3_ENDPOINT``
        :param use_ssl: whether to use https, plain http is only meant for local test servers
        :param server: optional ``host:port`` to connect to instead of the bucket host, the bucket host is then only
            sent in the ``Host`` header
        :param session: the session to use, a new one is created if not set
        """
        self.endpoint = endpoint or DEFAULT_S3_ENDPOINT
        self.use_ssl = use_ssl
        self.server = server
        self.session = session or requests.Session()

    def get_url(self, request: OperationRequest) -> str:
        scheme = "https" if self.use_ssl else "http"
        netloc = self.server or get_bucket_host(request.bucket_name, self.endpoint)
        return f"{scheme}://{netloc}{get_request_path(request)}"

    def send(self, request: OperationRequest) -> ResponseEnvelope:
        url = self.get_url(request)
        headers = {name: str(value) for name, value in request.headers.items()}
        if self.server:
            headers["Host"] = get_bucket_host(request.bucket_name, self.endpoint)
        # requests would otherwise ask for a compressed body
        if not any(name.lower() == "accept-encoding" for name in headers):
            headers["Accept-Encoding"] = "identity"

        LOG.debug("%s %s", request.verb, url)
        if request.body is not None:
            LOG.debug("request body: %s", truncate(to_str(request.body, errors="replace"), 512))

        try:
            response = self.session.request(
                method=request.verb,
                url=url,
                headers=headers,
                data=request.body,
            )
        except requests.exceptions.RequestException as e:
            LOG.warning("%s %s failed: %s", request.verb, url, e)
            raise TransportError(str(e)) from e

        return ResponseEnvelope(
            status_code=response.status_code,
            headers=CaseInsensitiveDict(response.headers),
            body=to_str(response.content, errors="replace"),
            verb=request.verb,
            action_type=request.action_type,
        )

    def close(self):
        self.session.close()
