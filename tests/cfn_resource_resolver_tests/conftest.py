import logging
from logging import Logger

import pytest
from boto3 import Session


@pytest.fixture(scope="session")
def logger() -> Logger:
    return logging.getLogger()


@pytest.fixture(scope="session")
def aws_region() -> str:
    return 'eu-west-2'


@pytest.fixture(scope="session")
def boto_session(aws_region: str) -> Session:
    return Session(aws_access_key_id='testing', aws_secret_access_key='testing', region_name=aws_region)
