from logging import Logger
from typing import Dict, Sequence

from cfn_resource_resolver.domain.amazon_resource_name import AmazonResourceName, ARN_PREFIX
from cfn_resource_resolver.domain.lazy_stack_resource_catalog import LazyStackResourceCatalog
from cfn_resource_resolver.domain.region_provider import RegionProvider
from cfn_resource_resolver.domain.resource_arn_builder import ResourceArnBuilder
from cfn_resource_resolver.domain.resource_id_resolver import ResourceIdResolver
from cfn_resource_resolver.domain.taggable_resource_kind import TaggableResourceKind
from cfn_resource_resolver.domain.unsupported_resource_kind_exception import UnsupportedResourceKindException


class TagAccessor:
    def __init__(self, stack_resource_catalog: LazyStackResourceCatalog, resource_id_resolver: ResourceIdResolver,
                 resource_kinds: Sequence[TaggableResourceKind], arn_builder: ResourceArnBuilder,
                 region_provider: RegionProvider, logger: Logger):
        self.__stack_resource_catalog = stack_resource_catalog
        self.__resource_id_resolver = resource_id_resolver
        self.__resource_kinds = list(resource_kinds)
        self.__arn_builder = arn_builder
        self.__region_provider = region_provider
        self.__logger = logger

    def get_stack_tags(self) -> Dict[str, str]:
        return dict(self.__stack_resource_catalog.get().tags)

    def get_stack_outputs(self) -> Dict[str, str]:
        return dict(self.__stack_resource_catalog.get().outputs)

    def get_resource_tags(self, logical_id_or_arn: str) -> Dict[str, str]:
        if logical_id_or_arn.startswith(f'{ARN_PREFIX}:'):
            return self.__get_tags_for_arn(AmazonResourceName.from_string(logical_id_or_arn))

        stack_resource = self.__resource_id_resolver.resolve_stack_resource(logical_id_or_arn)
        resource_kind = self.__resource_kind_for_cloudformation_type(stack_resource.resource_type)

        if resource_kind.requires_arn_for_tags():
            resource_identifier = str(resource_kind.build_arn(stack_resource.physical_id,
                                                              self.__region_provider.get_region(),
                                                              self.__arn_builder))
        else:
            resource_identifier = stack_resource.physical_id

        self.__logger.info(f'Fetching tags of resource "{logical_id_or_arn}" ({resource_identifier})...')
        return resource_kind.fetch_tags(resource_identifier)

    def __get_tags_for_arn(self, arn: AmazonResourceName) -> Dict[str, str]:
        resource_kind = next((kind for kind in self.__resource_kinds if kind.handles(arn)), None)

        if resource_kind is None:
            raise UnsupportedResourceKindException(f'Listing tags of resource "{arn}" is not supported')

        self.__logger.info(f'Fetching tags of resource "{arn}"...')
        return resource_kind.fetch_tags(resource_kind.identifier_from_arn(arn))

    def __resource_kind_for_cloudformation_type(self, cloudformation_type: str) -> TaggableResourceKind:
        for resource_kind in self.__resource_kinds:
            if resource_kind.cloudformation_type == cloudformation_type:
                return resource_kind

        raise UnsupportedResourceKindException(f'Listing tags of {cloudformation_type} resources is not supported')
