from logging import Logger

from cfn_resource_resolver.domain.amazon_resource_name import AmazonResourceName
from cfn_resource_resolver.domain.caller_identity_source import CallerIdentitySource


class ResourceArnBuilder:
    """
    Builds ARNs for resources of the caller's own account.

    Some tagging APIs (RDS ListTagsForResource, for one) only accept an ARN, and the account number it needs is not
    otherwise known to the application, so it is taken from the ARN of the calling principal.
    """

    def __init__(self, caller_identity_source: CallerIdentitySource, logger: Logger):
        self.__caller_identity_source = caller_identity_source
        self.__logger = logger

    def build_resource_arn(self, service: str, region: str, resource_type: str, physical_id: str,
                           delimiter: str = ':') -> AmazonResourceName:
        caller_arn = AmazonResourceName.from_string(self.__caller_identity_source.get_caller_arn())
        self.__logger.debug(f'Building {service} ARN for "{physical_id}" in account {caller_arn.account}')

        return (AmazonResourceName.builder()
                .with_partition(caller_arn.partition)
                .with_service(service)
                .with_region(region)
                .with_account(caller_arn.account)
                .with_resource_type(resource_type)
                .with_resource_name(physical_id)
                .with_resource_type_delimiter(delimiter)
                .build())
