from typing import Sequence

from cfn_resource_resolver.domain.resource_resolution_exception import ResourceResolutionException


class AmbiguousStackException(ResourceResolutionException):
    def __init__(self, physical_resource_id: str, stack_names: Sequence[str]):
        super().__init__(
            f'Resource "{physical_resource_id}" belongs to more than one stack: {", ".join(sorted(stack_names))}'
        )
        self.physical_resource_id = physical_resource_id
        self.stack_names = tuple(sorted(stack_names))
