"""
Builders turning the parameters of an operation into an ``OperationRequest``. All validation happens here, before
anything is signed or sent.
"""
import json
import logging
from typing import Dict, List, Mapping, Tuple
from urllib.parse import quote

from s3bridge.api.s3 import (
    ActionType,
    DeleteObject,
    DeleteObjectRequest,
    GetBucket,
    GetBucketRequest,
    GetObject,
    GetObjectRequest,
    HttpVerb,
    PutObject,
    PutObjectRequest,
)
from s3bridge.constants import HEADER_AMZ_META_PREFIX
from s3bridge.s3.exceptions import SerializationError
from s3bridge.s3.models import OperationRequest
from s3bridge.utils.strings import to_bytes

LOG = logging.getLogger(__name__)

# characters which encodeURIComponent leaves untouched besides alphanumerics
_URI_COMPONENT_SAFE_CHARS = "-_.!~*'()"

# parameter name -> request header, in the order they are copied
DELETE_OBJECT_HEADERS: List[Tuple[str, str]] = [
    ("mfa", "x-amz-mfa"),
]

GET_OBJECT_HEADERS: List[Tuple[str, str]] = [
    ("ifMatch", "If-Match"),
    ("ifModifiedSince", "If-Modified-Since"),
    ("ifNoneMatch", "If-None-Match"),
    ("ifUnmodifiedSince", "If-Unmodified-Since"),
    ("range", "Range"),
    ("responseCacheControl", "response-cache-control"),
    ("responseContentDisposition", "response-content-disposition"),
    ("responseContentEncoding", "response-content-encoding"),
    ("responseContentLanguage", "response-content-language"),
    ("responseContentType", "response-content-type"),
    ("responseExpires", "response-expires"),
]

PUT_OBJECT_HEADERS: List[Tuple[str, str]] = [
    ("acl", "x-amz-acl"),
    ("cacheControl", "Cache-Control"),
    ("contentDisposition", "Content-Disposition"),
    ("contentEncoding", "Content-Encoding"),
    ("contentLength", "Content-Length"),
    ("contentMD5", "Content-MD5"),
    ("contentType", "Content-Type"),
    ("expires", "Expires"),
    ("grantRead", "x-amz-grant-read"),
    ("grantReadAcp", "x-amz-grant-read-acp"),
    ("grantWriteAcp", "x-amz-grant-write-acp"),
    ("grantFullControl", "x-amz-grant-full-control"),
    ("serverSideEncryption", "x-amz-server-side-encryption"),
    ("storageClass", "x-amz-storage-class"),
    ("websiteRedirectLocation", "x-amz-website-redirect-location"),
]

# parameter name -> query parameter name, in the order they are appended
GET_BUCKET_QUERY_PARAMS: List[Tuple[str, str]] = [
    ("delimiter", "delimiter"),
    ("marker", "marker"),
    ("maxKeys", "max-keys"),
    ("prefix", "prefix"),
]


def encode_uri_component(value) -> str:
    return quote(str(value), safe=_URI_COMPONENT_SAFE_CHARS)


def copy_headers(params: Mapping, mapping: List[Tuple[str, str]]) -> Dict[str, str]:
    """Copies every parameter which is set into the header it maps to."""
    headers = {}
    for param, header in mapping:
        if value := params.get(param):
            headers[header] = str(value)
    return headers


def serialize_object(obj) -> bytes:
    """
    Converts the payload of a put into the request body. Text and bytes are sent as they are, any other value is
    sent as compact JSON encoded in UTF-8, without escaping non-ASCII characters.

    :raises SerializationError: if the value cannot be represented as JSON
    """
    if isinstance(obj, (str, bytes, bytearray)):
        return to_bytes(bytes(obj) if isinstance(obj, bytearray) else obj)
    try:
        return to_bytes(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
    except (TypeError, ValueError, RecursionError) as e:
        LOG.debug("unable to serialize object to JSON: %s", e)
        raise SerializationError() from e


def build_delete_object_request(params: DeleteObjectRequest) -> OperationRequest:
    DeleteObject.validate(params)
    return OperationRequest(
        access_key_id=params["awsAccessKeyId"],
        bucket_name=params["bucketName"],
        secret_access_key=params["secretAccessKey"],
        verb=HttpVerb.DELETE,
        object_key=params["objectKey"],
        headers=copy_headers(params, DELETE_OBJECT_HEADERS),
    )


def build_get_bucket_request(params: GetBucketRequest) -> OperationRequest:
    GetBucket.validate(params)

    query_params = []
    for param, name in GET_BUCKET_QUERY_PARAMS:
        if value := params.get(param):
            query_params.append(f"{name}={encode_uri_component(value)}")

    return OperationRequest(
        access_key_id=params["awsAccessKeyId"],
        bucket_name=params["bucketName"],
        secret_access_key=params["secretAccessKey"],
        verb=HttpVerb.GET,
        query_params=query_params,
        action_type=ActionType.bucket,
    )


def build_get_object_request(params: GetObjectRequest) -> OperationRequest:
    GetObject.validate(params)
    return OperationRequest(
        access_key_id=params["awsAccessKeyId"],
        bucket_name=params["bucketName"],
        secret_access_key=params["secretAccessKey"],
        verb=HttpVerb.GET,
        object_key=params["objectKey"],
        headers=copy_headers(params, GET_OBJECT_HEADERS),
    )


def build_put_object_request(params: PutObjectRequest) -> OperationRequest:
    PutObject.validate(params)

    body = serialize_object(params["object"])

    headers = copy_headers(params, PUT_OBJECT_HEADERS)
    for name, value in (params.get("meta") or {}).items():
        headers[f"{HEADER_AMZ_META_PREFIX}{name}"] = str(value)

    return OperationRequest(
        access_key_id=params["awsAccessKeyId"],
        bucket_name=params["bucketName"],
        secret_access_key=params["secretAccessKey"],
        verb=HttpVerb.PUT,
        object_key=params["objectKey"],
        headers=headers,
        body=body,
    )
