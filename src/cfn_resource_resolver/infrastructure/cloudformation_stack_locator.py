from logging import Logger
from typing import List

from botocore.exceptions import ClientError
from mypy_boto3_cloudformation import CloudFormationClient

from cfn_resource_resolver.domain.stack_locator import StackLocator
from cfn_resource_resolver.infrastructure.client_error_codes import error_code_of, error_message_of


class CloudFormationStackLocator(StackLocator):
    def __init__(self, cloudformation_client: CloudFormationClient, logger: Logger):
        self.__cloudformation_client = cloudformation_client
        self.__logger = logger

    def find_stack_names_owning(self, physical_resource_id: str) -> List[str]:
        try:
            describe_stack_resources_result = self.__cloudformation_client.describe_stack_resources(
                PhysicalResourceId=physical_resource_id
            )
        except ClientError as client_error:
            if error_code_of(client_error) == 'ValidationError' and 'does not exist' in error_message_of(client_error):
                self.__logger.debug(f'No stack owns resource "{physical_resource_id}"')
                return []

            raise

        return sorted({
            stack_resource['StackName']
            for stack_resource in describe_stack_resources_result['StackResources']
            if 'StackName' in stack_resource
        })
