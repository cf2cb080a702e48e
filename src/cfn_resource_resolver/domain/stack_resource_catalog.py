from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Iterable, Optional, List

from cfn_resource_resolver.domain.logical_resource_not_found_exception import LogicalResourceNotFoundException
from cfn_resource_resolver.domain.stack_reference import StackReference
from cfn_resource_resolver.domain.stack_resource import StackResource


@dataclass(frozen=True)
class StackResourceCatalog:
    """
    Read-only snapshot of one stack's resources, tags and outputs.

    Built once per process and shared by every lookup, so the mappings are exposed as read-only proxies.
    """
    stack_reference: StackReference
    resources: Mapping[str, StackResource]
    tags: Mapping[str, str] = field(default_factory=dict)
    outputs: Mapping[str, str] = field(default_factory=dict)
    stack_id: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, 'resources', MappingProxyType(dict(self.resources)))
        object.__setattr__(self, 'tags', MappingProxyType(dict(self.tags)))
        object.__setattr__(self, 'outputs', MappingProxyType(dict(self.outputs)))

    @staticmethod
    def assemble(stack_reference: StackReference, resources: Iterable[StackResource],
                 tags: Iterable[tuple[str, str]] = (), outputs: Iterable[tuple[str, str]] = (),
                 stack_id: Optional[str] = None) -> 'StackResourceCatalog':
        return StackResourceCatalog(
            stack_reference=stack_reference,
            resources={resource.logical_id: resource for resource in resources},
            tags={key: value for key, value in tags},
            outputs={key: value for key, value in outputs},
            stack_id=stack_id
        )

    @property
    def stack_name(self) -> str:
        return self.stack_reference.name

    def contains(self, logical_id: str) -> bool:
        return logical_id in self.resources

    def resource(self, logical_id: str) -> StackResource:
        stack_resource = self.resources.get(logical_id)

        if stack_resource is None:
            raise LogicalResourceNotFoundException(logical_id, self.stack_name)

        return stack_resource

    def physical_resource_id(self, logical_id: str) -> str:
        return self.resource(logical_id).physical_id

    def resources_of_type(self, resource_type: str) -> List[StackResource]:
        return [resource for resource in self.resources.values() if resource.resource_type == resource_type]
