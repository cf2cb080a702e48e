from abc import ABCMeta, abstractmethod


class InstanceMetadataSource(metaclass=ABCMeta):
    @abstractmethod
    def get_instance_id(self) -> str:
        pass

    @abstractmethod
    def get_region(self) -> str:
        pass
