from typing import Any, Dict, List, Optional, TypedDict, Union

from s3bridge.api.core import OperationModel, ServiceRequest

AccessKeyId = str
BucketName = str
Boolean = bool
ETag = str
Integer = int
ObjectKey = str
RequestId = str
SecretAccessKey = str
String = str
Timestamp = str
VersionId = str

Metadata = Dict[str, str]
ObjectBody = Union[str, bytes, Dict[str, Any], List[Any]]


class HttpVerb(str):
    DELETE = "DELETE"
    GET = "GET"
    PUT = "PUT"


class ActionType(str):
    object = "object"
    bucket = "bucket"


class DeleteObjectRequest(ServiceRequest, total=False):
    awsAccessKeyId: AccessKeyId
    bucketName: BucketName
    objectKey: ObjectKey
    secretAccessKey: SecretAccessKey
    mfa: Optional[String]


class DeleteObjectOutput(TypedDict, total=False):
    deleteMarker: Optional[Boolean]
    requestId: Optional[RequestId]
    versionId: Optional[VersionId]


class GetBucketRequest(ServiceRequest, total=False):
    awsAccessKeyId: AccessKeyId
    bucketName: BucketName
    secretAccessKey: SecretAccessKey
    delimiter: Optional[String]
    marker: Optional[String]
    maxKeys: Optional[Union[Integer, String]]
    prefix: Optional[String]


class Owner(TypedDict, total=False):
    displayName: Optional[String]
    id: Optional[String]


class ObjectEntry(TypedDict, total=False):
    ETag: Optional[ETag]
    key: Optional[ObjectKey]
    lastModified: Optional[Timestamp]
    size: Optional[Integer]
    storageClass: Optional[String]
    owner: Optional[Owner]


ObjectEntryList = List[ObjectEntry]


class GetBucketOutput(TypedDict, total=False):
    isTruncated: Boolean
    marker: Optional[String]
    maxKeys: Optional[Integer]
    name: Optional[BucketName]
    prefix: Optional[String]
    contents: ObjectEntryList


class GetObjectRequest(ServiceRequest, total=False):
    awsAccessKeyId: AccessKeyId
    bucketName: BucketName
    objectKey: ObjectKey
    secretAccessKey: SecretAccessKey
    ifMatch: Optional[String]
    ifModifiedSince: Optional[String]
    ifNoneMatch: Optional[String]
    ifUnmodifiedSince: Optional[String]
    range: Optional[String]
    responseCacheControl: Optional[String]
    responseContentDisposition: Optional[String]
    responseContentEncoding: Optional[String]
    responseContentLanguage: Optional[String]
    responseContentType: Optional[String]
    responseExpires: Optional[String]


Expiration = TypedDict("Expiration", {"expiry-date": Timestamp, "rule-id": String})


class GetObjectOutput(TypedDict, total=False):
    object: String
    ETag: Optional[ETag]
    deleteMarker: Optional[Boolean]
    expiration: Optional[Expiration]
    requestId: Optional[RequestId]
    restore: Optional[String]
    serverSideEncryption: Optional[String]
    versionId: Optional[VersionId]
    websiteRedirectLocation: Optional[String]


class PutObjectRequest(ServiceRequest, total=False):
    awsAccessKeyId: AccessKeyId
    bucketName: BucketName
    object: ObjectBody
    objectKey: ObjectKey
    secretAccessKey: SecretAccessKey
    acl: Optional[String]
    cacheControl: Optional[String]
    contentDisposition: Optional[String]
    contentEncoding: Optional[String]
    contentLength: Optional[Union[Integer, String]]
    contentMD5: Optional[String]
    contentType: Optional[String]
    expires: Optional[String]
    grantRead: Optional[String]
    grantReadAcp: Optional[String]
    grantWriteAcp: Optional[String]
    grantFullControl: Optional[String]
    meta: Optional[Metadata]
    serverSideEncryption: Optional[String]
    storageClass: Optional[String]
    websiteRedirectLocation: Optional[String]


class PutObjectOutput(TypedDict, total=False):
    ETag: Optional[ETag]
    expiration: Optional[Expiration]
    serverSideEncryption: Optional[String]
    versionId: Optional[VersionId]
    requestId: Optional[RequestId]


DeleteObject = OperationModel(
    "deleteObject@v1",
    required=["awsAccessKeyId", "bucketName", "objectKey", "secretAccessKey"],
)

GetBucket = OperationModel(
    "getBucket@v1",
    required=["awsAccessKeyId", "bucketName", "secretAccessKey"],
)

GetObject = OperationModel(
    "getObject@v1",
    required=["awsAccessKeyId", "bucketName", "objectKey", "secretAccessKey"],
)

# an empty payload is a valid object, only its absence is not
PutObject = OperationModel(
    "putObject@v1",
    required=["awsAccessKeyId", "bucketName", "object", "objectKey", "secretAccessKey"],
    allow_empty=["object"],
)
