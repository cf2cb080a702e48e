from typing import TypeVar, Callable, cast, Any, Type
from unittest.mock import create_autospec

from cfn_resource_resolver_test_support.mocking.inspectable_spy import InspectableSpy
from cfn_resource_resolver_test_support.mocking.stub import Stub
from cfn_resource_resolver_test_support.mocking.verifiable_spy import VerifiableSpy

T = TypeVar("T")


# Callable[[], T] rather than Type[T] lets T be an abstract port
def mock_class[T](cls: Type[T] | Callable[[], T]) -> T:
    return cast(T, create_autospec(spec=cls, instance=True))


def inspect(mock: Any) -> InspectableSpy:
    return InspectableSpy(mock)


def verify(mock: Any) -> VerifiableSpy:
    return VerifiableSpy(mock)


def when_calling(mock: Any) -> Stub:
    return Stub(mock)
