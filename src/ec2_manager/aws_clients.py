"""AWS client construction.

Each invocation builds its own session and client from settings and hands the
client to the provider; nothing is cached at module level.
"""
import os
import logging
from typing import Any, Optional

import boto3

from ec2_manager.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_client(service_name: str, settings: Optional[Settings] = None) -> Any:
    """Create an AWS service client configured from settings.

    Against real AWS the credentials come from boto3's own provider chain
    (profile, environment including the session token, execution role).
    Explicit keys and the endpoint override are only used for local modes.
    """
    settings = settings or get_settings()

    client_kwargs = {
        'region_name': settings.aws_region
    }

    if settings.uses_local_endpoint:
        if settings.aws_access_key_id:
            client_kwargs['aws_access_key_id'] = settings.aws_access_key_id
        if settings.aws_secret_access_key:
            client_kwargs['aws_secret_access_key'] = settings.aws_secret_access_key
        if settings.aws_endpoint_url:
            client_kwargs['endpoint_url'] = settings.aws_endpoint_url
        session = boto3.Session()
    else:
        # Check for AWS profile in environment (for SSO)
        aws_profile = os.environ.get('AWS_PROFILE')
        session = boto3.Session(profile_name=aws_profile) if aws_profile else boto3.Session()

    try:
        client = session.client(service_name, **client_kwargs)
    except Exception as e:
        logger.error(f"Error creating {service_name} client: {str(e)}")
        raise
    logger.debug(f"Created {service_name} client in {settings.aws_region} ({settings.deployment_mode})")
    return client


def create_ec2_client(settings: Optional[Settings] = None) -> Any:
    """Create the EC2 client."""
    return create_client('ec2', settings)
