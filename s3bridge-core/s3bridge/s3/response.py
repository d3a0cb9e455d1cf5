"""
Parsers turning a ``ResponseEnvelope`` into the result of an operation. A response with an unexpected status code is
decoded into a ``ProviderError``, which is raised.
"""
import logging
from typing import Any, Dict, Mapping, Optional

from s3bridge.api.s3 import (
    ActionType,
    DeleteObjectOutput,
    GetBucketOutput,
    GetObjectOutput,
    HttpVerb,
    ObjectEntry,
    Owner,
    PutObjectOutput,
)
from s3bridge.constants import (
    HEADER_AMZ_DELETE_MARKER,
    HEADER_AMZ_EXPIRATION,
    HEADER_AMZ_REQUEST_ID,
    HEADER_AMZ_RESTORE,
    HEADER_AMZ_SERVER_SIDE_ENCRYPTION,
    HEADER_AMZ_VERSION_ID,
    HEADER_AMZ_WEBSITE_REDIRECT_LOCATION,
    HEADER_ETAG,
)
from s3bridge.s3.exceptions import OperationNotImplemented, ProviderError
from s3bridge.s3.models import ResponseEnvelope
from s3bridge.s3.utils import parse_expiration_header, strip_etag_quotes
from s3bridge.utils.strings import truncate
from s3bridge.utils.xml import XmlDecodeError, parse_xml

LOG = logging.getLogger(__name__)

# plain response headers copied into the results, keyed by result field
_REQUEST_ID = ("requestId", HEADER_AMZ_REQUEST_ID)
_RESTORE = ("restore", HEADER_AMZ_RESTORE)
_SERVER_SIDE_ENCRYPTION = ("serverSideEncryption", HEADER_AMZ_SERVER_SIDE_ENCRYPTION)
_VERSION_ID = ("versionId", HEADER_AMZ_VERSION_ID)
_WEBSITE_REDIRECT_LOCATION = ("websiteRedirectLocation", HEADER_AMZ_WEBSITE_REDIRECT_LOCATION)


def parse_response(envelope: ResponseEnvelope):
    """
    Picks the parser for the verb of the request.

    :raises OperationNotImplemented: for any verb besides PUT, GET and DELETE
    """
    LOG.debug("response status: %s, headers: %s", envelope.status_code, dict(envelope.headers))
    LOG.debug("response body: %s", truncate(envelope.body, 512))

    match envelope.verb.upper():
        case HttpVerb.PUT:
            return parse_put_response(envelope)
        case HttpVerb.GET:
            return parse_get_response(envelope)
        case HttpVerb.DELETE:
            return parse_delete_response(envelope)

    raise OperationNotImplemented(response=envelope.body)


def _copy_header(result: Dict[str, Any], headers: Mapping[str, str], field: str, header: str):
    if value := headers.get(header):
        result[field] = value


def _set_common_fields(result: Dict[str, Any], headers: Mapping[str, str]):
    if etag := headers.get(HEADER_ETAG):
        result["ETag"] = strip_etag_quotes(etag)
    if headers.get(HEADER_AMZ_EXPIRATION):
        # an unparseable header leaves the field out entirely
        if expiration := parse_expiration_header(headers[HEADER_AMZ_EXPIRATION]):
            result["expiration"] = expiration


def parse_put_response(envelope: ResponseEnvelope) -> PutObjectOutput:
    if envelope.status_code != 200:
        raise parse_error_response(envelope)

    headers = envelope.headers
    result = PutObjectOutput()
    _set_common_fields(result, headers)
    _copy_header(result, headers, *_SERVER_SIDE_ENCRYPTION)
    _copy_header(result, headers, *_VERSION_ID)
    _copy_header(result, headers, *_REQUEST_ID)
    return result


def parse_get_response(envelope: ResponseEnvelope):
    if envelope.status_code != 200:
        raise parse_error_response(envelope)

    if envelope.action_type == ActionType.bucket:
        return parse_get_bucket_response(envelope)

    headers = envelope.headers
    result = GetObjectOutput(object=envelope.body)
    _set_common_fields(result, headers)
    if headers.get(HEADER_AMZ_DELETE_MARKER):
        result["deleteMarker"] = True
    _copy_header(result, headers, *_REQUEST_ID)
    _copy_header(result, headers, *_RESTORE)
    _copy_header(result, headers, *_SERVER_SIDE_ENCRYPTION)
    _copy_header(result, headers, *_VERSION_ID)
    _copy_header(result, headers, *_WEBSITE_REDIRECT_LOCATION)
    return result


def parse_delete_response(envelope: ResponseEnvelope) -> DeleteObjectOutput:
    if envelope.status_code != 204:
        raise parse_error_response(envelope)

    headers = envelope.headers
    result = DeleteObjectOutput()
    if headers.get(HEADER_AMZ_DELETE_MARKER):
        result["deleteMarker"] = True
    _copy_header(result, headers, *_REQUEST_ID)
    _copy_header(result, headers, *_VERSION_ID)
    return result


def parse_error_response(envelope: ResponseEnvelope) -> ProviderError:
    """
    Decodes the ``<Error>`` document of a failed request. If the body is not such a document, the error carries the
    raw body as its message.

    :return: the error, to be raised by the caller
    """
    try:
        document = parse_xml(envelope.body)
    except XmlDecodeError:
        return ProviderError(message=envelope.body, status_code=envelope.status_code)

    error = document.get("Error")
    if not isinstance(error, dict):
        return ProviderError(message=envelope.body, status_code=envelope.status_code)

    fields = {
        attribute: value
        for attribute, element in ProviderError.FIELDS.items()
        if isinstance(value := error.get(element), str)
    }
    return ProviderError(status_code=envelope.status_code, **fields)


def _text(node: Dict[str, Any], element: str) -> Optional[str]:
    """Returns the text of the given child element, or None if the element is missing or empty."""
    value = node.get(element)
    return value if isinstance(value, str) else None


def _integer(node: Dict[str, Any], element: str):
    value = _text(node, element)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return value


def _parse_object_entry(node: Dict[str, Any]) -> ObjectEntry:
    entry = ObjectEntry()
    if (etag := _text(node, "ETag")) is not None:
        entry["ETag"] = strip_etag_quotes(etag)
    if (key := _text(node, "Key")) is not None:
        entry["key"] = key
    if (last_modified := _text(node, "LastModified")) is not None:
        entry["lastModified"] = last_modified
    if (size := _integer(node, "Size")) is not None:
        entry["size"] = size
    if (storage_class := _text(node, "StorageClass")) is not None:
        entry["storageClass"] = storage_class

    if "Owner" in node:
        owner_node = node["Owner"] if isinstance(node["Owner"], dict) else {}
        owner = Owner()
        if (display_name := _text(owner_node, "DisplayName")) is not None:
            owner["displayName"] = display_name
        if (owner_id := _text(owner_node, "ID")) is not None:
            owner["id"] = owner_id
        entry["owner"] = owner

    return entry


def parse_list_bucket_result(document: str) -> GetBucketOutput:
    """
    Decodes a ``<ListBucketResult>`` document.

    :param document: the XML document
    :return: the listing, ``contents`` keeps the order of the document and is empty if there are no entries
    :raises XmlDecodeError: if the document is not well-formed
    :raises KeyError: if the root element is not ``ListBucketResult``
    """
    bucket_list = parse_xml(document, force_list=("Contents",))["ListBucketResult"]
    if not isinstance(bucket_list, dict):
        bucket_list = {}

    result = GetBucketOutput()
    is_truncated = _text(bucket_list, "IsTruncated")
    result["isTruncated"] = bool(is_truncated) and is_truncated.lower() == "true"

    # empty elements (e.g. <Marker/>) are not reported
    if (marker := _text(bucket_list, "Marker")) is not None:
        result["marker"] = marker
    if (max_keys := _integer(bucket_list, "MaxKeys")) is not None:
        result["maxKeys"] = max_keys
    if (name := _text(bucket_list, "Name")) is not None:
        result["name"] = name
    if (prefix := _text(bucket_list, "Prefix")) is not None:
        result["prefix"] = prefix

    result["contents"] = [
        _parse_object_entry(node)
        for node in bucket_list.get("Contents") or []
        if isinstance(node, dict)
    ]
    return result


def parse_get_bucket_response(envelope: ResponseEnvelope) -> GetBucketOutput:
    try:
        return parse_list_bucket_result(envelope.body)
    except (XmlDecodeError, KeyError):
        LOG.debug("unexpected list bucket document: %s", truncate(envelope.body, 512))
        raise ProviderError(message=envelope.body, status_code=envelope.status_code)
