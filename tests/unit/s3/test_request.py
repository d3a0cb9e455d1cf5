import json

import pytest

from s3bridge.api.s3 import ActionType, HttpVerb
from s3bridge.s3 import request as s3_request
from s3bridge.s3.exceptions import MissingParameter, SerializationError

DELETE_PARAMS = {
    "awsAccessKeyId": "a",
    "bucketName": "b",
    "objectKey": "k",
    "secretAccessKey": "s",
}
GET_BUCKET_PARAMS = {
    "awsAccessKeyId": "a",
    "bucketName": "b",
    "secretAccessKey": "s",
}
PUT_PARAMS = {
    "awsAccessKeyId": "a",
    "bucketName": "b",
    "object": "content",
    "objectKey": "k",
    "secretAccessKey": "s",
}


class TestRequiredParameters:
    @pytest.mark.parametrize(
        "builder, params, missing",
        [
            (s3_request.build_delete_object_request, DELETE_PARAMS, "awsAccessKeyId"),
            (s3_request.build_delete_object_request, DELETE_PARAMS, "bucketName"),
            (s3_request.build_delete_object_request, DELETE_PARAMS, "objectKey"),
            (s3_request.build_delete_object_request, DELETE_PARAMS, "secretAccessKey"),
            (s3_request.build_get_object_request, DELETE_PARAMS, "awsAccessKeyId"),
            (s3_request.build_get_object_request, DELETE_PARAMS, "bucketName"),
            (s3_request.build_get_object_request, DELETE_PARAMS, "objectKey"),
            (s3_request.build_get_object_request, DELETE_PARAMS, "secretAccessKey"),
            (s3_request.build_get_bucket_request, GET_BUCKET_PARAMS, "awsAccessKeyId"),
            (s3_request.build_get_bucket_request, GET_BUCKET_PARAMS, "bucketName"),
            (s3_request.build_get_bucket_request, GET_BUCKET_PARAMS, "secretAccessKey"),
            (s3_request.build_put_object_request, PUT_PARAMS, "awsAccessKeyId"),
            (s3_request.build_put_object_request, PUT_PARAMS, "bucketName"),
            (s3_request.build_put_object_request, PUT_PARAMS, "object"),
            (s3_request.build_put_object_request, PUT_PARAMS, "objectKey"),
            (s3_request.build_put_object_request, PUT_PARAMS, "secretAccessKey"),
        ],
    )
    def test_missing_parameter(self, builder, params, missing):
        params = {k: v for k, v in params.items() if k != missing}
        with pytest.raises(MissingParameter) as e:
            builder(params)
        assert e.value.parameter == missing
        assert e.value.message == f"missing {missing}"
        assert e.value.code == "MissingParameter"

    def test_empty_value_is_missing(self):
        with pytest.raises(MissingParameter) as e:
            s3_request.build_delete_object_request({**DELETE_PARAMS, "bucketName": ""})
        assert e.value.parameter == "bucketName"

    def test_first_missing_parameter_is_reported(self):
        with pytest.raises(MissingParameter) as e:
            s3_request.build_put_object_request({"objectKey": "k"})
        assert e.value.parameter == "awsAccessKeyId"

        with pytest.raises(MissingParameter) as e:
            s3_request.build_put_object_request({"awsAccessKeyId": "a", "bucketName": "b"})
        assert e.value.parameter == "object"

    def test_empty_object_is_valid(self):
        request = s3_request.build_put_object_request({**PUT_PARAMS, "object": ""})
        assert request.body == b""


class TestDeleteObjectRequest:
    def test_request(self):
        request = s3_request.build_delete_object_request(DELETE_PARAMS)
        assert request.verb == HttpVerb.DELETE
        assert request.bucket_name == "b"
        assert request.object_key == "k"
        assert request.access_key_id == "a"
        assert request.secret_access_key == "s"
        assert request.headers == {}
        assert request.query_params == []
        assert request.body is None

    def test_mfa_header(self):
        request = s3_request.build_delete_object_request({**DELETE_PARAMS, "mfa": "123 456"})
        assert request.headers == {"x-amz-mfa": "123 456"}


class TestGetBucketRequest:
    def test_request(self):
        request = s3_request.build_get_bucket_request(GET_BUCKET_PARAMS)
        assert request.verb == HttpVerb.GET
        assert request.object_key is None
        assert request.action_type == ActionType.bucket
        assert request.query_params == []

    def test_query_params_order_and_encoding(self):
        params = {
            **GET_BUCKET_PARAMS,
            "prefix": "2012-12-26/23",
            "maxKeys": 10,
            "marker": "a key",
            "delimiter": "/",
        }
        request = s3_request.build_get_bucket_request(params)
        assert request.query_params == [
            "delimiter=%2F",
            "marker=a%20key",
            "max-keys=10",
            "prefix=2012-12-26%2F23",
        ]

    def test_only_given_query_params(self):
        request = s3_request.build_get_bucket_request({**GET_BUCKET_PARAMS, "prefix": "logs"})
        assert request.query_params == ["prefix=logs"]

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("abc-_.!~*'()", "abc-_.!~*'()"),
            ("a&b=c", "a%26b%3Dc"),
            ("ü", "%C3%BC"),
            (5, "5"),
        ],
    )
    def test_encode_uri_component(self, value, expected):
        assert s3_request.encode_uri_component(value) == expected


class TestGetObjectRequest:
    def test_headers(self):
        params = {
            **DELETE_PARAMS,
            "ifMatch": '"etag"',
            "ifModifiedSince": "Wed, 26 Dec 2012 23:00:00 GMT",
            "ifNoneMatch": '"other"',
            "ifUnmodifiedSince": "Thu, 27 Dec 2012 23:00:00 GMT",
            "range": "bytes=0-9",
            "responseCacheControl": "no-cache",
            "responseContentDisposition": "attachment",
            "responseContentEncoding": "gzip",
            "responseContentLanguage": "en",
            "responseContentType": "text/plain",
            "responseExpires": "Fri, 28 Dec 2012 23:00:00 GMT",
        }
        request = s3_request.build_get_object_request(params)
        assert request.verb == HttpVerb.GET
        assert request.action_type == ActionType.object
        assert request.headers == {
            "If-Match": '"etag"',
            "If-Modified-Since": "Wed, 26 Dec 2012 23:00:00 GMT",
            "If-None-Match": '"other"',
            "If-Unmodified-Since": "Thu, 27 Dec 2012 23:00:00 GMT",
            "Range": "bytes=0-9",
            "response-cache-control": "no-cache",
            "response-content-disposition": "attachment",
            "response-content-encoding": "gzip",
            "response-content-language": "en",
            "response-content-type": "text/plain",
            "response-expires": "Fri, 28 Dec 2012 23:00:00 GMT",
        }

    def test_unset_headers_are_not_sent(self):
        request = s3_request.build_get_object_request({**DELETE_PARAMS, "range": None})
        assert request.headers == {}


class TestPutObjectRequest:
    def test_text_body(self):
        request = s3_request.build_put_object_request({**PUT_PARAMS, "object": "hällo"})
        assert request.verb == HttpVerb.PUT
        assert request.body == "hällo".encode("utf-8")

    def test_bytes_body(self):
        request = s3_request.build_put_object_request({**PUT_PARAMS, "object": b"\x00\x01"})
        assert request.body == b"\x00\x01"

    def test_structured_body_is_compact_json(self):
        obj = {"my": "test object", "n": [1, 2], "u": "grüße"}
        request = s3_request.build_put_object_request({**PUT_PARAMS, "object": obj})
        assert request.body == b'{"my":"test object","n":[1,2],"u":"gr\xc3\xbc\xc3\x9fe"}'
        assert json.loads(request.body) == obj

    @pytest.mark.parametrize(
        "obj, expected",
        [
            ([], b"[]"),
            ({"a": {"b": None}}, b'{"a":{"b":null}}'),
            (["x", True, 1.5], b'["x",true,1.5]'),
            (0, b"0"),
        ],
    )
    def test_json_body(self, obj, expected):
        request = s3_request.build_put_object_request({**PUT_PARAMS, "object": obj})
        assert request.body == expected

    def test_cyclic_body(self):
        obj = {"name": "cyclic"}
        obj["self"] = obj
        with pytest.raises(SerializationError) as e:
            s3_request.build_put_object_request({**PUT_PARAMS, "object": obj})
        assert e.value.status_code == 400
        assert e.value.message == "Could not convert object to JSON"

    def test_not_serializable_body(self):
        with pytest.raises(SerializationError):
            s3_request.build_put_object_request({**PUT_PARAMS, "object": {"set": {1, 2}}})

    def test_headers(self):
        params = {
            **PUT_PARAMS,
            "acl": "private",
            "cacheControl": "max-age=60",
            "contentDisposition": "inline",
            "contentEncoding": "identity",
            "contentLength": 7,
            "contentMD5": "md5",
            "contentType": "application/json",
            "expires": "Fri, 28 Dec 2012 23:00:00 GMT",
            "grantRead": "id=1",
            "grantReadAcp": "id=2",
            "grantWriteAcp": "id=3",
            "grantFullControl": "id=4",
            "meta": {"owner": "me", "count": 2},
            "serverSideEncryption": "AES256",
            "storageClass": "REDUCED_REDUNDANCY",
            "websiteRedirectLocation": "/other",
        }
        request = s3_request.build_put_object_request(params)
        assert request.headers == {
            "x-amz-acl": "private",
            "Cache-Control": "max-age=60",
            "Content-Disposition": "inline",
            "Content-Encoding": "identity",
            "Content-Length": "7",
            "Content-MD5": "md5",
            "Content-Type": "application/json",
            "Expires": "Fri, 28 Dec 2012 23:00:00 GMT",
            "x-amz-grant-read": "id=1",
            "x-amz-grant-read-acp": "id=2",
            "x-amz-grant-write-acp": "id=3",
            "x-amz-grant-full-control": "id=4",
            "x-amz-meta-owner": "me",
            "x-amz-meta-count": "2",
            "x-amz-server-side-encryption": "AES256",
            "x-amz-storage-class": "REDUCED_REDUNDANCY",
            "x-amz-website-redirect-location": "/other",
        }
