from unittest.mock import Mock


class InspectableSpy:
    def __init__(self, mock: Mock):
        self.__mock = mock

    @property
    def called(self) -> bool:
        return self.__mock.called

    @property
    def call_count(self) -> int:
        return self.__mock.call_count
