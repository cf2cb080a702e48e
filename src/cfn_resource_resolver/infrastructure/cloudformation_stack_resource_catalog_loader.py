from logging import Logger
from typing import Iterator, Optional

from botocore.exceptions import ClientError, NoCredentialsError, EndpointConnectionError, ConnectTimeoutError, \
    ReadTimeoutError, ConnectionClosedError
from mypy_boto3_cloudformation import CloudFormationClient
from mypy_boto3_cloudformation.type_defs import StackTypeDef

from cfn_resource_resolver.domain.catalog_load_exception import CatalogLoadException, CatalogLoadFailureReason
from cfn_resource_resolver.domain.stack_reference import StackReference
from cfn_resource_resolver.domain.stack_resource import StackResource
from cfn_resource_resolver.domain.stack_resource_catalog import StackResourceCatalog
from cfn_resource_resolver.domain.stack_resource_catalog_loader import StackResourceCatalogLoader
from cfn_resource_resolver.infrastructure.client_error_codes import error_code_of, error_message_of, \
    THROTTLING_ERROR_CODES, AUTHORISATION_ERROR_CODES

NESTED_RESOURCE_SEPARATOR = '.'


class CloudFormationStackResourceCatalogLoader(StackResourceCatalogLoader):
    def __init__(self, cloudformation_client: CloudFormationClient, logger: Logger,
                 follow_nested_stacks: bool = True):
        self.__cloudformation_client = cloudformation_client
        self.__logger = logger
        self.__follow_nested_stacks = follow_nested_stacks

    def load(self, stack_reference: StackReference) -> StackResourceCatalog:
        stack_name = stack_reference.name

        try:
            stack = self.__describe_stack(stack_name)
            resources = list(self.__list_stack_resources(stack_name))
        except ClientError as client_error:
            catalog_load_exception = self.__to_catalog_load_exception(stack_name, client_error)

            if catalog_load_exception is None:
                raise

            raise catalog_load_exception from client_error
        except NoCredentialsError as e:
            raise CatalogLoadException(stack_name, CatalogLoadFailureReason.UNAUTHORIZED, str(e)) from e
        except (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError, ConnectionClosedError) as e:
            raise CatalogLoadException(stack_name, CatalogLoadFailureReason.TRANSIENT, str(e)) from e

        return StackResourceCatalog.assemble(
            stack_reference,
            resources,
            tags=[(tag['Key'], tag['Value']) for tag in stack.get('Tags', [])],
            outputs=[(output['OutputKey'], output['OutputValue']) for output in stack.get('Outputs', [])],
            stack_id=stack.get('StackId')
        )

    def __describe_stack(self, stack_name: str) -> StackTypeDef:
        self.__logger.debug(f'Describing stack "{stack_name}"...')
        describe_stacks_result = self.__cloudformation_client.describe_stacks(StackName=stack_name)
        stacks = describe_stacks_result['Stacks']

        if not stacks:
            raise CatalogLoadException(stack_name, CatalogLoadFailureReason.NOT_FOUND, 'Stack does not exist')

        return stacks[0]

    def __list_stack_resources(self, stack_name: str, logical_id_prefix: str = '') -> Iterator[StackResource]:
        self.__logger.debug(f'Listing resources of stack "{stack_name}"...')
        paginator = self.__cloudformation_client.get_paginator('list_stack_resources')

        for page in paginator.paginate(StackName=stack_name):
            for summary in page['StackResourceSummaries']:
                logical_id = f'{logical_id_prefix}{summary["LogicalResourceId"]}'
                physical_id: Optional[str] = summary.get('PhysicalResourceId')

                if not physical_id:
                    self.__logger.debug(f'Skipping resource "{logical_id}" without a physical id '
                                        f'({summary["ResourceStatus"]})')
                    continue

                stack_resource = StackResource(logical_id, physical_id, summary['ResourceType'])
                yield stack_resource

                if self.__follow_nested_stacks and stack_resource.is_nested_stack():
                    yield from self.__list_stack_resources(physical_id, f'{logical_id}{NESTED_RESOURCE_SEPARATOR}')

    @staticmethod
    def __to_catalog_load_exception(stack_name: str, client_error: ClientError) -> Optional[CatalogLoadException]:
        error_code = error_code_of(client_error)
        error_message = error_message_of(client_error)

        if error_code == 'ValidationError' and 'does not exist' in error_message:
            return CatalogLoadException(stack_name, CatalogLoadFailureReason.NOT_FOUND, error_message)

        if error_code in AUTHORISATION_ERROR_CODES:
            return CatalogLoadException(stack_name, CatalogLoadFailureReason.UNAUTHORIZED, error_message)

        if error_code in THROTTLING_ERROR_CODES:
            return CatalogLoadException(stack_name, CatalogLoadFailureReason.TRANSIENT, error_message)

        return None
