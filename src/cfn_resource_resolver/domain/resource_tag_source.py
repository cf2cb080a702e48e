from abc import ABCMeta, abstractmethod
from typing import Dict


class ResourceTagSource(metaclass=ABCMeta):
    @abstractmethod
    def list_tags_for_resource(self, resource_identifier: str) -> Dict[str, str]:
        pass
