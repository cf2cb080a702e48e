from abc import ABCMeta, abstractmethod
from logging import Logger
from threading import Lock
from typing import Optional

from cfn_resource_resolver.domain.ambiguous_stack_exception import AmbiguousStackException
from cfn_resource_resolver.domain.instance_metadata_source import InstanceMetadataSource
from cfn_resource_resolver.domain.stack_locator import StackLocator
from cfn_resource_resolver.domain.stack_not_found_exception import StackNotFoundException
from cfn_resource_resolver.domain.stack_reference import StackReference


class StackIdentityResolver(metaclass=ABCMeta):
    @abstractmethod
    def resolve(self) -> StackReference:
        pass


class StaticStackIdentityResolver(StackIdentityResolver):
    def __init__(self, stack_name: str):
        self.__stack_reference = StackReference(stack_name)

    def resolve(self) -> StackReference:
        return self.__stack_reference


class AutoDetectingStackIdentityResolver(StackIdentityResolver):
    """
    Finds the stack the current EC2 instance was launched by, using the instance id from the instance metadata
    service and a reverse lookup of the stack resources owning that physical id.
    """
    __stack_reference: Optional[StackReference] = None

    def __init__(self, instance_metadata_source: InstanceMetadataSource, stack_locator: StackLocator,
                 logger: Logger):
        self.__instance_metadata_source = instance_metadata_source
        self.__stack_locator = stack_locator
        self.__logger = logger
        self.__lock = Lock()

    def resolve(self) -> StackReference:
        with self.__lock:
            if self.__stack_reference is None:
                self.__stack_reference = self.__detect_stack_reference()

            return self.__stack_reference

    def __detect_stack_reference(self) -> StackReference:
        instance_id = self.__instance_metadata_source.get_instance_id()
        self.__logger.info(f'Detecting stack for instance "{instance_id}"...')

        stack_names = set(self.__stack_locator.find_stack_names_owning(instance_id))

        if not stack_names:
            raise StackNotFoundException(f'No stack found containing instance "{instance_id}"')

        if len(stack_names) > 1:
            raise AmbiguousStackException(instance_id, list(stack_names))

        stack_name = stack_names.pop()
        self.__logger.info(f'Instance "{instance_id}" belongs to stack "{stack_name}".')

        return StackReference(stack_name)
