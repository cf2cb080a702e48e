from enum import Enum

from cfn_resource_resolver.domain.resource_resolution_exception import ResourceResolutionException


class CatalogLoadFailureReason(Enum):
    NOT_FOUND = 'NotFound'
    TRANSIENT = 'Transient'
    UNAUTHORIZED = 'Unauthorized'


class CatalogLoadException(ResourceResolutionException):
    def __init__(self, stack_name: str, reason: CatalogLoadFailureReason, message: str):
        super().__init__(f'Unable to load resources of stack "{stack_name}" ({reason.value}): {message}')
        self.stack_name = stack_name
        self.reason = reason

    @property
    def terminal(self) -> bool:
        return self.reason is not CatalogLoadFailureReason.TRANSIENT
