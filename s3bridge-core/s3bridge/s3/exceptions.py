from typing import Dict, Optional

from s3bridge.api import CommonServiceException, MissingParameter, ServiceException

__all__ = [
    "MissingParameter",
    "OperationNotImplemented",
    "ProviderError",
    "SerializationError",
    "TransportError",
]


class SerializationError(CommonServiceException):
    def __init__(self, message=None):
        if not message:
            message = "Could not convert object to JSON"
        super().__init__("SerializationError", status_code=400, message=message)


class OperationNotImplemented(CommonServiceException):
    """Raised for a verb or an operation name the client has no handler for."""

    def __init__(self, message=None, response: Optional[str] = None):
        self.response = response
        super().__init__("NotImplemented", status_code=501, message=message or "Not Implemented")


class TransportError(ServiceException):
    """A connection or network failure while talking to the storage endpoint. No request is retried."""

    code = "TransportError"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ProviderError(CommonServiceException):
    """
    An error reported by the storage service. The fields are taken from the XML error document of the response, and
    are only set if the document contains them. If the response body could not be decoded, ``message`` holds the
    raw body.
    """

    # attribute name -> element name in the <Error> document
    FIELDS = {
        "argument_name": "ArgumentName",
        "argument_value": "ArgumentValue",
        "aws_access_key_id": "AWSAccessKeyId",
        "code": "Code",
        "host_id": "HostId",
        "message": "Message",
        "request_id": "RequestId",
        "resource": "Resource",
        "signature_provided": "SignatureProvided",
        "string_to_sign": "StringToSign",
        "string_to_sign_bytes": "StringToSignBytes",
    }

    # attribute name -> key in the dict returned by ``to_dict``
    _DICT_KEYS = {
        "argument_name": "argumentName",
        "argument_value": "argumentValue",
        "aws_access_key_id": "awsAccessKeyId",
        "code": "code",
        "host_id": "hostId",
        "message": "message",
        "request_id": "requestId",
        "resource": "resource",
        "signature_provided": "signatureProvided",
        "string_to_sign": "stringToSign",
        "string_to_sign_bytes": "stringToSignBytes",
    }

    def __init__(
        self,
        code: Optional[str] = None,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        request_id: Optional[str] = None,
        host_id: Optional[str] = None,
        resource: Optional[str] = None,
        argument_name: Optional[str] = None,
        argument_value: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        signature_provided: Optional[str] = None,
        string_to_sign: Optional[str] = None,
        string_to_sign_bytes: Optional[str] = None,
    ):
        super().__init__(code, message=message, status_code=status_code)
        self.request_id = request_id
        self.host_id = host_id
        self.resource = resource
        self.argument_name = argument_name
        self.argument_value = argument_value
        self.aws_access_key_id = aws_access_key_id
        self.signature_provided = signature_provided
        self.string_to_sign = string_to_sign
        self.string_to_sign_bytes = string_to_sign_bytes

    def to_dict(self) -> Dict[str, str]:
        return {
            key: getattr(self, attribute)
            for attribute, key in self._DICT_KEYS.items()
            if getattr(self, attribute) is not None
        }

    def __str__(self):
        if self.code:
            return f"{self.code}: {self.message}"
        return str(self.message)
