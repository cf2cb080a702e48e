from logging import Logger
from typing import Dict

from botocore.exceptions import ClientError
from mypy_boto3_s3 import S3Client

from cfn_resource_resolver.domain.resource_tag_source import ResourceTagSource
from cfn_resource_resolver.infrastructure.client_error_codes import error_code_of


class S3BucketTagSource(ResourceTagSource):
    def __init__(self, s3_client: S3Client, logger: Logger):
        self.__s3_client = s3_client
        self.__logger = logger

    def list_tags_for_resource(self, resource_identifier: str) -> Dict[str, str]:
        try:
            get_bucket_tagging_result = self.__s3_client.get_bucket_tagging(Bucket=resource_identifier)
        except ClientError as client_error:
            if error_code_of(client_error) == 'NoSuchTagSet':
                self.__logger.debug(f'Bucket "{resource_identifier}" has no tags')
                return {}

            raise

        return {tag['Key']: tag['Value'] for tag in get_bucket_tagging_result['TagSet']}
