from typing import Any
from unittest.mock import Mock


class VerifiableSpy:
    def __init__(self, mock: Mock):
        self.__mock = mock

    def was_not_called(self) -> None:
        self.__mock.assert_not_called()

    def was_called_once(self) -> None:
        self.__mock.assert_called_once()

    def was_called_once_with(self, /, *args: Any, **kwargs: Any) -> None:
        self.__mock.assert_called_once_with(*args, **kwargs)

    def was_called_times(self, expected_call_count: int) -> None:
        assert self.__mock.call_count == expected_call_count, (
            f'Expected {expected_call_count} calls but there were {self.__mock.call_count}: '
            f'{self.__mock.call_args_list}'
        )
