import json

import pytest
from click.testing import CliRunner

from s3bridge.cli import main as cli_main
from s3bridge.cli.exceptions import CLIError
from s3bridge.s3.client import S3Client
from s3bridge.s3.exceptions import MissingParameter, ProviderError, TransportError
from s3bridge.testing.fakes import FakeSigner, FakeTransport

from ..s3.test_response import ERROR_DOCUMENT, LIST_BUCKET_RESULT


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def runner(monkeypatch, transport):
    monkeypatch.setattr(
        cli_main, "S3Client", lambda endpoint=None: S3Client(signer=FakeSigner(), transport=transport)
    )
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "test")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "test-secret")
    return CliRunner()


def test_put(runner, transport):
    transport.respond(status_code=200, headers={"etag": '"e"', "x-amz-version-id": "v1"})
    result = runner.invoke(
        cli_main.s3bridge,
        ["put", "b", "k", "-", "--content-type", "text/plain", "--meta", "owner=me"],
        input="content",
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"ETag": "e", "versionId": "v1"}

    request = transport.requests[0]
    assert request.body == b"content"
    assert request.headers["Content-Type"] == "text/plain"
    assert request.headers["x-amz-meta-owner"] == "me"
    assert request.access_key_id == "test"


def test_get(runner, transport):
    transport.respond(status_code=200, body="hello")
    result = runner.invoke(cli_main.s3bridge, ["get", "b", "k"])
    assert result.exit_code == 0, result.output
    assert result.output == "hello"


def test_ls(runner, transport):
    transport.respond(status_code=200, body=LIST_BUCKET_RESULT)
    result = runner.invoke(cli_main.s3bridge, ["ls", "bucket", "--max-keys", "2"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["name"] == "bucket"
    assert transport.requests[0].query_params == ["max-keys=2"]


def test_delete_error(runner, transport):
    transport.respond(status_code=403, body=ERROR_DOCUMENT)
    result = runner.invoke(cli_main.s3bridge, ["delete", "b", "k"])
    assert result.exit_code == 1
    assert "SignatureDoesNotMatch" in result.output
    assert '"requestId": "CB2BE7A9A7C2F7B6"' in result.output


def test_missing_credentials(monkeypatch):
    monkeypatch.delenv("AWS_ACCESS_KEY_ID", raising=False)
    monkeypatch.delenv("AWS_SECRET_ACCESS_KEY", raising=False)
    result = CliRunner().invoke(cli_main.s3bridge, ["get", "b", "k"])
    assert result.exit_code == 2


class TestCLIError:
    def test_from_provider_error(self):
        error = ProviderError(
            code="NoSuchKey", message="The specified key does not exist.", status_code=404, resource="/b/k"
        )
        cli_error = CLIError.from_exception(error)
        assert cli_error.message == "NoSuchKey: The specified key does not exist."
        assert cli_error.details == error.to_dict()
        assert '"resource": "/b/k"' in cli_error.format_message()

    def test_from_service_exception(self):
        cli_error = CLIError.from_exception(MissingParameter("objectKey"))
        assert cli_error.message == "MissingParameter: missing objectKey"
        assert cli_error.details is None
        assert cli_error.format_message().endswith("Error: MissingParameter: missing objectKey\x1b[0m")

    def test_from_other_exception(self):
        cli_error = CLIError.from_exception(TransportError("connection refused"))
        assert cli_error.message == "connection refused"
