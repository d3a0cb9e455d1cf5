import pytest

from s3bridge.s3.client import S3Client
from s3bridge.testing.fakes import FakeSigner, FakeTransport

TEST_AWS_ACCESS_KEY_ID = "test"
TEST_AWS_SECRET_ACCESS_KEY = "test-secret"


@pytest.fixture
def signer() -> FakeSigner:
    return FakeSigner()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(signer, transport) -> S3Client:
    return S3Client(signer=signer, transport=transport)


@pytest.fixture
def credentials() -> dict:
    return {
        "awsAccessKeyId": TEST_AWS_ACCESS_KEY_ID,
        "secretAccessKey": TEST_AWS_SECRET_ACCESS_KEY,
    }
