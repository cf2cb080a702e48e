from logging import Logger

import pytest
from boto3 import Session
from botocore.stub import Stubber

from cfn_resource_resolver.domain.identity_lookup_exception import IdentityLookupException
from cfn_resource_resolver.infrastructure.sts_caller_identity_source import StsCallerIdentitySource


def test_provides_arn_of_caller(boto_session: Session, logger: Logger) -> None:
    sts_client = boto_session.client('sts')

    with Stubber(sts_client) as stubber:
        stubber.add_response('get_caller_identity', dict(
            UserId='AIDAEXAMPLE',
            Account='123456789012',
            Arn='arn:aws:iam::123456789012:user/deployer'
        ), {})

        caller_arn = StsCallerIdentitySource(sts_client, logger).get_caller_arn()

    assert caller_arn == 'arn:aws:iam::123456789012:user/deployer'


def test_raises_identity_lookup_exception_when_identity_service_fails(boto_session: Session, logger: Logger) -> None:
    sts_client = boto_session.client('sts')

    with Stubber(sts_client) as stubber:
        stubber.add_client_error('get_caller_identity', service_error_code='ExpiredToken',
                                 service_message='The security token included in the request is expired',
                                 http_status_code=403)

        with pytest.raises(IdentityLookupException, match='expired'):
            StsCallerIdentitySource(sts_client, logger).get_caller_arn()


def test_raises_identity_lookup_exception_when_no_arn_returned(boto_session: Session, logger: Logger) -> None:
    sts_client = boto_session.client('sts')

    with Stubber(sts_client) as stubber:
        stubber.add_response('get_caller_identity', dict(Account='123456789012'))

        with pytest.raises(IdentityLookupException):
            StsCallerIdentitySource(sts_client, logger).get_caller_arn()
