from logging import Logger
from typing import Dict

from mypy_boto3_rds import RDSClient

from cfn_resource_resolver.domain.resource_tag_source import ResourceTagSource


class RdsResourceTagSource(ResourceTagSource):
    def __init__(self, rds_client: RDSClient, logger: Logger):
        self.__rds_client = rds_client
        self.__logger = logger

    def list_tags_for_resource(self, resource_identifier: str) -> Dict[str, str]:
        list_tags_result = self.__rds_client.list_tags_for_resource(ResourceName=resource_identifier)
        tags = {tag['Key']: tag['Value'] for tag in list_tags_result.get('TagList', [])}
        self.__logger.debug(f'Found {len(tags)} tags on "{resource_identifier}"')

        return tags
