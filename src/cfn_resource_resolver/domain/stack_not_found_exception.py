from cfn_resource_resolver.domain.resource_resolution_exception import ResourceResolutionException


class StackNotFoundException(ResourceResolutionException):
    pass
