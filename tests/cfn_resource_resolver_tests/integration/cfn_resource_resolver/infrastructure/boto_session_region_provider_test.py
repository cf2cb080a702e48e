from logging import Logger

import pytest
import requests
import responses
from boto3 import Session

from cfn_resource_resolver.domain.region_unavailable_exception import RegionUnavailableException
from cfn_resource_resolver.infrastructure.boto_session_region_provider import BotoSessionRegionProvider
from cfn_resource_resolver.infrastructure.ec2_instance_metadata_source import Ec2InstanceMetadataSource

METADATA_ENDPOINT = 'http://169.254.169.254'


@pytest.fixture(scope='function')
def session_without_region(monkeypatch: pytest.MonkeyPatch) -> Session:
    monkeypatch.delenv('AWS_REGION', raising=False)
    monkeypatch.delenv('AWS_DEFAULT_REGION', raising=False)
    monkeypatch.delenv('AWS_PROFILE', raising=False)
    monkeypatch.setenv('AWS_CONFIG_FILE', '/nonexistent/aws/config')

    return Session(aws_access_key_id='testing', aws_secret_access_key='testing')


@responses.activate
def test_provides_region_of_session(boto_session: Session, aws_region: str, logger: Logger) -> None:
    region_provider = BotoSessionRegionProvider(boto_session, Ec2InstanceMetadataSource(logger), logger)

    assert region_provider.get_region() == aws_region
    assert len(responses.calls) == 0


@responses.activate
def test_falls_back_to_region_of_ec2_instance(session_without_region: Session, logger: Logger) -> None:
    responses.put(f'{METADATA_ENDPOINT}/latest/api/token', body='the-token')
    responses.get(f'{METADATA_ENDPOINT}/latest/meta-data/placement/region', body='eu-west-1')
    region_provider = BotoSessionRegionProvider(session_without_region, Ec2InstanceMetadataSource(logger), logger)

    assert region_provider.get_region() == 'eu-west-1'
    assert region_provider.get_region() == 'eu-west-1'
    assert len(responses.calls) == 2


@responses.activate
def test_raises_exception_when_no_region_can_be_found(session_without_region: Session, logger: Logger) -> None:
    responses.put(f'{METADATA_ENDPOINT}/latest/api/token', body=requests.ConnectTimeout('timed out'))
    region_provider = BotoSessionRegionProvider(session_without_region, Ec2InstanceMetadataSource(logger), logger)

    with pytest.raises(RegionUnavailableException, match='No AWS region configured'):
        region_provider.get_region()
