from logging import Logger

from botocore.exceptions import ClientError, BotoCoreError
from mypy_boto3_sts import STSClient

from cfn_resource_resolver.domain.caller_identity_source import CallerIdentitySource
from cfn_resource_resolver.domain.identity_lookup_exception import IdentityLookupException


class StsCallerIdentitySource(CallerIdentitySource):
    def __init__(self, sts_client: STSClient, logger: Logger):
        self.__sts_client = sts_client
        self.__logger = logger

    def get_caller_arn(self) -> str:
        self.__logger.debug('Looking up caller identity...')

        try:
            caller_identity = self.__sts_client.get_caller_identity()
        except (ClientError, BotoCoreError) as e:
            raise IdentityLookupException(f'Unable to determine the identity of the caller: {e}') from e

        caller_arn = caller_identity.get('Arn')

        if not caller_arn:
            raise IdentityLookupException('The identity service did not return an ARN for the caller')

        return caller_arn
