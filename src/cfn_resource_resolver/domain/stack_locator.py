from abc import ABCMeta, abstractmethod
from typing import List


class StackLocator(metaclass=ABCMeta):
    @abstractmethod
    def find_stack_names_owning(self, physical_resource_id: str) -> List[str]:
        pass
