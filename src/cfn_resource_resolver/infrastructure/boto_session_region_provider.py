from logging import Logger
from typing import Optional

from boto3 import Session

from cfn_resource_resolver.domain.instance_metadata_source import InstanceMetadataSource
from cfn_resource_resolver.domain.instance_metadata_unavailable_exception import InstanceMetadataUnavailableException
from cfn_resource_resolver.domain.region_provider import RegionProvider
from cfn_resource_resolver.domain.region_unavailable_exception import RegionUnavailableException


class BotoSessionRegionProvider(RegionProvider):
    """
    Looks the region up the way the AWS SDKs do: first the region of the boto3 session (``AWS_REGION``,
    ``AWS_DEFAULT_REGION`` or the profile configuration), then the region of the EC2 instance the process runs on.
    """
    __instance_region: Optional[str] = None

    def __init__(self, boto_session: Session, instance_metadata_source: InstanceMetadataSource, logger: Logger):
        self.__boto_session = boto_session
        self.__instance_metadata_source = instance_metadata_source
        self.__logger = logger

    def get_region(self) -> str:
        region = self.__boto_session.region_name

        if region is not None:
            return region

        if self.__instance_region is None:
            self.__instance_region = self.__read_instance_region()

        return self.__instance_region

    def __read_instance_region(self) -> str:
        self.__logger.debug('No region configured for the boto3 session, asking the instance metadata service...')

        try:
            instance_region = self.__instance_metadata_source.get_region()
        except InstanceMetadataUnavailableException as e:
            raise RegionUnavailableException(
                'No AWS region configured: set one explicitly or through the AWS_REGION environment variable'
            ) from e

        self.__logger.info(f'Using region "{instance_region}" of the current EC2 instance.')

        return instance_region
