"""boto3-backed implementation of the compute provider interface."""
import logging
from typing import Any, Dict, Optional

from botocore.exceptions import ClientError

from ec2_manager.errors import NotFoundError
from ec2_manager.provider import ComputeProvider, InstanceState, StateChange

logger = logging.getLogger(__name__)

NOT_FOUND_ERROR_CODES = ("InvalidInstanceID.NotFound", "InvalidInstanceID.Malformed")


def _raise_if_not_found(error: ClientError, instance_id: str) -> None:
    code = error.response.get('Error', {}).get('Code', '')
    if code in NOT_FOUND_ERROR_CODES:
        raise NotFoundError(instance_id) from error


def _first_state_change(changes, instance_id: str) -> Optional[StateChange]:
    if not changes:
        return None
    change = changes[0]
    return StateChange(
        instance_id=change.get('InstanceId', instance_id),
        previous=change['PreviousState']['Name'],
        current=change['CurrentState']['Name'],
    )


class Ec2Provider(ComputeProvider):
    """Drive a single EC2 instance through an EC2 client."""

    def __init__(self, ec2_client: Any):
        self.ec2_client = ec2_client

    def start_instance(self, instance_id: str) -> Optional[StateChange]:
        try:
            response = self.ec2_client.start_instances(InstanceIds=[instance_id])
        except ClientError as e:
            _raise_if_not_found(e, instance_id)
            raise
        return _first_state_change(response.get('StartingInstances', []), instance_id)

    def stop_instance(self, instance_id: str) -> Optional[StateChange]:
        try:
            response = self.ec2_client.stop_instances(InstanceIds=[instance_id])
        except ClientError as e:
            _raise_if_not_found(e, instance_id)
            raise
        return _first_state_change(response.get('StoppingInstances', []), instance_id)

    def describe_instance(self, instance_id: str) -> InstanceState:
        instance = self._describe(instance_id)
        return InstanceState(instance['State']['Name'])

    def modify_instance_class(self, instance_id: str, instance_class: str) -> None:
        try:
            self.ec2_client.modify_instance_attribute(
                InstanceId=instance_id,
                InstanceType={'Value': instance_class},
            )
        except ClientError as e:
            _raise_if_not_found(e, instance_id)
            raise

    def _describe(self, instance_id: str) -> Dict[str, Any]:
        try:
            response = self.ec2_client.describe_instances(InstanceIds=[instance_id])
        except ClientError as e:
            _raise_if_not_found(e, instance_id)
            raise

        reservations = response.get('Reservations', [])
        if not reservations or not reservations[0].get('Instances'):
            raise NotFoundError(instance_id)
        return reservations[0]['Instances'][0]
