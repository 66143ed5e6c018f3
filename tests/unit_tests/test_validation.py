import pytest

from ec2_manager.commands import (
    ChangeInstanceClass,
    RestartInstance,
    StartInstance,
    StopInstance,
)
from ec2_manager.errors import MissingField, UnknownAction
from ec2_manager.schemas import OperationRequest
from ec2_manager.validation import validate
from tests.consts import TEST_INSTANCE_TYPE
from tests.fixtures.fake_provider import TEST_INSTANCE_ID


def test_missing_instance_id():
    outcome = validate(OperationRequest(action="start"))

    assert not outcome.ok
    assert isinstance(outcome.error, MissingField)
    assert outcome.error.field == "instance_id"
    assert outcome.message == "instance_id is required"


def test_missing_instance_id_is_reported_before_missing_action():
    outcome = validate(OperationRequest())

    assert outcome.message == "instance_id is required"


def test_missing_action():
    outcome = validate(OperationRequest(instance_id=TEST_INSTANCE_ID))

    assert isinstance(outcome.error, MissingField)
    assert outcome.message == "action is required"


def test_unknown_action():
    outcome = validate(OperationRequest(action="invalid", instance_id=TEST_INSTANCE_ID))

    assert isinstance(outcome.error, UnknownAction)
    assert outcome.error.action == "invalid"
    assert "unknown action" in outcome.message
    assert "start, stop, restart, change_class" in outcome.message


def test_change_class_without_instance_type():
    outcome = validate(OperationRequest(action="change_class", instance_id=TEST_INSTANCE_ID))

    assert isinstance(outcome.error, MissingField)
    assert outcome.error.field == "instance_type"
    assert outcome.message.startswith("instance_type is required")


def test_blank_values_count_as_missing():
    outcome = validate(OperationRequest(action="stop", instance_id="   "))

    assert outcome.message == "instance_id is required"


@pytest.mark.parametrize(
    "action, expected",
    [
        ("start", StartInstance(TEST_INSTANCE_ID)),
        ("stop", StopInstance(TEST_INSTANCE_ID)),
        ("restart", RestartInstance(TEST_INSTANCE_ID)),
        ("change_class", ChangeInstanceClass(TEST_INSTANCE_ID, TEST_INSTANCE_TYPE)),
    ],
)
def test_valid_requests_map_to_commands(action, expected):
    request = OperationRequest(
        action=action, instance_id=TEST_INSTANCE_ID, instance_type=TEST_INSTANCE_TYPE
    )

    outcome = validate(request)

    assert outcome.ok
    assert outcome.message == ""
    assert outcome.command == expected


def test_legacy_change_type_action_is_accepted():
    request = OperationRequest(
        action="change_type", instance_id=TEST_INSTANCE_ID, instance_type=TEST_INSTANCE_TYPE
    )

    outcome = validate(request)

    assert outcome.command == ChangeInstanceClass(TEST_INSTANCE_ID, TEST_INSTANCE_TYPE)


def test_action_is_case_sensitive():
    outcome = validate(OperationRequest(action="Restart", instance_id=TEST_INSTANCE_ID))

    assert not outcome.ok
    assert isinstance(outcome.error, UnknownAction)
    assert outcome.error.action == "Restart"


@pytest.mark.parametrize(
    "request_fields",
    [
        {"action": "start", "instance_id": TEST_INSTANCE_ID},
        {"action": "bogus", "instance_id": TEST_INSTANCE_ID},
        {"action": "change_class", "instance_id": TEST_INSTANCE_ID},
        {},
    ],
)
def test_validate_is_idempotent(request_fields):
    request = OperationRequest(**request_fields)

    first = validate(request)
    second = validate(request)

    assert first.ok == second.ok
    assert first.message == second.message
    assert first.command == second.command
    assert type(first.error) is type(second.error)
