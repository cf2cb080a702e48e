from abc import ABCMeta, abstractmethod
from typing import Dict

from cfn_resource_resolver.domain.amazon_resource_name import AmazonResourceName
from cfn_resource_resolver.domain.resource_arn_builder import ResourceArnBuilder
from cfn_resource_resolver.domain.resource_tag_source import ResourceTagSource
from cfn_resource_resolver.domain.unsupported_resource_kind_exception import UnsupportedResourceKindException


class TaggableResourceKind(metaclass=ABCMeta):
    @property
    @abstractmethod
    def cloudformation_type(self) -> str:
        pass

    @abstractmethod
    def requires_arn_for_tags(self) -> bool:
        pass

    @abstractmethod
    def build_arn(self, physical_id: str, region: str, arn_builder: ResourceArnBuilder) -> AmazonResourceName:
        pass

    @abstractmethod
    def handles(self, arn: AmazonResourceName) -> bool:
        pass

    @abstractmethod
    def identifier_from_arn(self, arn: AmazonResourceName) -> str:
        pass

    @abstractmethod
    def fetch_tags(self, resource_identifier: str) -> Dict[str, str]:
        pass


class ArnAddressedResourceKind(TaggableResourceKind):
    """A kind of resource whose tags can only be listed by ARN, such as an RDS DB instance."""

    def __init__(self, cloudformation_type: str, service: str, resource_type: str, resource_type_delimiter: str,
                 tag_source: ResourceTagSource):
        self.__cloudformation_type = cloudformation_type
        self.__service = service
        self.__resource_type = resource_type
        self.__resource_type_delimiter = resource_type_delimiter
        self.__tag_source = tag_source

    @property
    def cloudformation_type(self) -> str:
        return self.__cloudformation_type

    def requires_arn_for_tags(self) -> bool:
        return True

    def build_arn(self, physical_id: str, region: str, arn_builder: ResourceArnBuilder) -> AmazonResourceName:
        return arn_builder.build_resource_arn(self.__service, region, self.__resource_type, physical_id,
                                              self.__resource_type_delimiter)

    def handles(self, arn: AmazonResourceName) -> bool:
        return arn.service == self.__service and arn.resource_type == self.__resource_type

    def identifier_from_arn(self, arn: AmazonResourceName) -> str:
        return str(arn)

    def fetch_tags(self, resource_identifier: str) -> Dict[str, str]:
        return self.__tag_source.list_tags_for_resource(resource_identifier)


class IdentifierAddressedResourceKind(TaggableResourceKind):
    """A kind of resource whose tags are listed by its bare physical id, such as an S3 bucket."""

    def __init__(self, cloudformation_type: str, service: str, tag_source: ResourceTagSource):
        self.__cloudformation_type = cloudformation_type
        self.__service = service
        self.__tag_source = tag_source

    @property
    def cloudformation_type(self) -> str:
        return self.__cloudformation_type

    def requires_arn_for_tags(self) -> bool:
        return False

    def build_arn(self, physical_id: str, region: str, arn_builder: ResourceArnBuilder) -> AmazonResourceName:
        raise UnsupportedResourceKindException(f'Tags of {self.__cloudformation_type} resources are not listed by ARN')

    def handles(self, arn: AmazonResourceName) -> bool:
        # only ARNs of the form arn:partition:service:::identifier name the resource itself
        return (arn.service == self.__service and arn.region is None and arn.account is None
                and arn.resource_name is None)

    def identifier_from_arn(self, arn: AmazonResourceName) -> str:
        return arn.resource_type

    def fetch_tags(self, resource_identifier: str) -> Dict[str, str]:
        return self.__tag_source.list_tags_for_resource(resource_identifier)
