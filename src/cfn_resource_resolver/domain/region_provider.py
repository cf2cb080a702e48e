from abc import ABCMeta, abstractmethod


class RegionProvider(metaclass=ABCMeta):
    @abstractmethod
    def get_region(self) -> str:
        pass


class StaticRegionProvider(RegionProvider):
    def __init__(self, region: str):
        self.__region = region

    def get_region(self) -> str:
        return self.__region
