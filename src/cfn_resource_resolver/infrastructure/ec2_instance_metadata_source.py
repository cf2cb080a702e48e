from logging import Logger
from typing import Optional

import requests

from cfn_resource_resolver.domain.instance_metadata_source import InstanceMetadataSource
from cfn_resource_resolver.domain.instance_metadata_unavailable_exception import InstanceMetadataUnavailableException

DEFAULT_INSTANCE_METADATA_ENDPOINT = 'http://169.254.169.254'
TOKEN_TTL_SECONDS = 21600


class Ec2InstanceMetadataSource(InstanceMetadataSource):
    def __init__(self, logger: Logger, metadata_endpoint: str = DEFAULT_INSTANCE_METADATA_ENDPOINT,
                 timeout_seconds: float = 2):
        self.__logger = logger
        self.__metadata_endpoint = metadata_endpoint.rstrip('/')
        self.__timeout_seconds = timeout_seconds

    def get_instance_id(self) -> str:
        return self.__read_metadata('instance-id', 'instance id')

    def get_region(self) -> str:
        return self.__read_metadata('placement/region', 'region')

    def __read_metadata(self, path: str, description: str) -> str:
        try:
            token = self.__fetch_session_token()
            headers = {'X-aws-ec2-metadata-token': token} if token else {}

            metadata_response = requests.get(f'{self.__metadata_endpoint}/latest/meta-data/{path}',
                                             headers=headers, timeout=self.__timeout_seconds)
            metadata_response.raise_for_status()
        except requests.RequestException as e:
            raise InstanceMetadataUnavailableException(
                f'Unable to read the {description} from the instance metadata service: {e}'
            ) from e

        return metadata_response.text.strip()

    def __fetch_session_token(self) -> Optional[str]:
        token_response = requests.put(f'{self.__metadata_endpoint}/latest/api/token',
                                      headers={'X-aws-ec2-metadata-token-ttl-seconds': str(TOKEN_TTL_SECONDS)},
                                      timeout=self.__timeout_seconds)

        # IMDSv1-only endpoints reject token requests; fall back to unauthenticated reads
        if token_response.status_code in (403, 404, 405):
            self.__logger.debug(f'Instance metadata token unavailable ({token_response.status_code}), using IMDSv1')
            return None

        token_response.raise_for_status()

        return token_response.text
