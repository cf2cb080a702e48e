from cfn_resource_resolver.domain.resource_resolution_exception import ResourceResolutionException


class LogicalResourceNotFoundException(ResourceResolutionException):
    def __init__(self, logical_id: str, stack_name: str):
        super().__init__(f'No resource with logical id "{logical_id}" found in stack "{stack_name}"')
        self.logical_id = logical_id
        self.stack_name = stack_name
