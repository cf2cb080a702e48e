from typing import Dict

from cfn_resource_resolver.domain.lazy_stack_resource_catalog import LazyStackResourceCatalog
from cfn_resource_resolver.domain.resource_id_resolver import ResourceIdResolver
from cfn_resource_resolver.domain.stack_resource import StackResource
from cfn_resource_resolver.domain.tag_accessor import TagAccessor


class StackResourceResolver:
    def __init__(self, stack_resource_catalog: LazyStackResourceCatalog, resource_id_resolver: ResourceIdResolver,
                 tag_accessor: TagAccessor):
        self.__stack_resource_catalog = stack_resource_catalog
        self.__resource_id_resolver = resource_id_resolver
        self.__tag_accessor = tag_accessor

    @property
    def stack_name(self) -> str:
        return self.__stack_resource_catalog.get().stack_name

    def resolve_to_physical_resource_id(self, logical_id: str) -> str:
        return self.__resource_id_resolver.resolve_to_physical_resource_id(logical_id)

    def resolve_to_physical_resource_id_or_logical_id(self, logical_id: str) -> str:
        return self.__resource_id_resolver.resolve_to_physical_resource_id_or_logical_id(logical_id)

    def resolve_stack_resource(self, logical_id: str) -> StackResource:
        return self.__resource_id_resolver.resolve_stack_resource(logical_id)

    def get_stack_tags(self) -> Dict[str, str]:
        return self.__tag_accessor.get_stack_tags()

    def get_stack_outputs(self) -> Dict[str, str]:
        return self.__tag_accessor.get_stack_outputs()

    def get_resource_tags(self, logical_id_or_arn: str) -> Dict[str, str]:
        return self.__tag_accessor.get_resource_tags(logical_id_or_arn)
