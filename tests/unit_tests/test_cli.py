import json

from click.testing import CliRunner

from ec2_manager.cli import cli
from tests.consts import TEST_INSTANCE_TYPE


def test_restart_command(running_instance_id):
    result = CliRunner().invoke(cli, ["restart", running_instance_id])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["success"] is True
    assert running_instance_id in payload["message"]


def test_change_class_command(ec2_client, running_instance_id):
    result = CliRunner().invoke(cli, ["change-class", running_instance_id, TEST_INSTANCE_TYPE])

    assert result.exit_code == 0
    instance = ec2_client.describe_instances(
        InstanceIds=[running_instance_id]
    )["Reservations"][0]["Instances"][0]
    assert instance["InstanceType"] == TEST_INSTANCE_TYPE


def test_failure_exits_non_zero(mocked_aws):
    result = CliRunner().invoke(cli, ["stop", "i-0123456789abcdef0"])

    assert result.exit_code == 1
    assert json.loads(result.stdout)["success"] is False


def test_show_config():
    result = CliRunner().invoke(cli, ["show-config"])

    assert result.exit_code == 0
    assert "Deployment Mode: aws-prod" in result.output
    assert "Max Wait: 2.0s" in result.output
