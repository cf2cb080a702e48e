from abc import ABCMeta, abstractmethod

from cfn_resource_resolver.domain.stack_reference import StackReference
from cfn_resource_resolver.domain.stack_resource_catalog import StackResourceCatalog


class StackResourceCatalogLoader(metaclass=ABCMeta):
    @abstractmethod
    def load(self, stack_reference: StackReference) -> StackResourceCatalog:
        pass
