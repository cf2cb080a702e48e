from typing import Any, Callable
from unittest.mock import Mock


class Stub:
    def __init__(self, mock: Mock):
        self.__mock = mock

    def always_return(self, value: Any) -> None:
        self.__mock.return_value = value

    def respond_with(self, *values: Any) -> None:
        """Answers successive calls with successive values; exception instances among them are raised."""
        self.__mock.side_effect = values

    def invoke(self, function: Callable[..., Any]) -> None:
        self.__mock.side_effect = function

    def always_raise(self, exception: BaseException) -> None:
        self.__mock.side_effect = exception
