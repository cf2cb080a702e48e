from logging import Logger

from cfn_resource_resolver.domain.lazy_stack_resource_catalog import LazyStackResourceCatalog
from cfn_resource_resolver.domain.stack_resource import StackResource


class ResourceIdResolver:
    def __init__(self, stack_resource_catalog: LazyStackResourceCatalog, logger: Logger):
        self.__stack_resource_catalog = stack_resource_catalog
        self.__logger = logger

    def resolve_to_physical_resource_id(self, logical_id: str) -> str:
        return self.__stack_resource_catalog.get().physical_resource_id(logical_id)

    def resolve_to_physical_resource_id_or_logical_id(self, logical_id: str) -> str:
        catalog = self.__stack_resource_catalog.get()

        if not catalog.contains(logical_id):
            self.__logger.warning(
                f'No resource with logical id "{logical_id}" in stack "{catalog.stack_name}", '
                f'treating it as a physical id'
            )
            return logical_id

        return catalog.physical_resource_id(logical_id)

    def resolve_stack_resource(self, logical_id: str) -> StackResource:
        return self.__stack_resource_catalog.get().resource(logical_id)
