import boto3
import pytest
from moto import mock_aws

from ec2_manager.settings import Settings, get_settings
from tests.consts import TEST_AMI_ID, TEST_REGION
from tests.fixtures.fake_provider import FakeClock, FakeProvider


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Mocked AWS credentials and fast polling for every test."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    monkeypatch.setenv("DEPLOYMENT_MODE", "aws-prod")
    monkeypatch.setenv("POLL_INTERVAL_SECONDS", "0.01")
    monkeypatch.setenv("MAX_WAIT_SECONDS", "2")
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mocked_aws(aws_credentials):
    with mock_aws():
        yield


@pytest.fixture
def ec2_client(mocked_aws):
    return boto3.client("ec2", region_name=TEST_REGION)


@pytest.fixture
def running_instance_id(ec2_client):
    response = ec2_client.run_instances(
        ImageId=TEST_AMI_ID, MinCount=1, MaxCount=1, InstanceType="t3.micro"
    )
    return response["Instances"][0]["InstanceId"]


@pytest.fixture
def settings():
    return Settings(
        deployment_mode="aws-prod",
        poll_interval_seconds=0.01,
        max_wait_seconds=0.05,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def provider():
    return FakeProvider()
