from typing import Dict, Optional

from cfn_resource_resolver.domain.stack_reference import StackReference
from cfn_resource_resolver.domain.stack_resource import StackResource
from cfn_resource_resolver.domain.stack_resource_catalog import StackResourceCatalog


def a_stack_resource_with(logical_id: str = 'AnyLogicalId', physical_id: str = 'any-physical-id',
                          resource_type: str = 'AWS::SQS::Queue') -> StackResource:
    return StackResource(logical_id=logical_id, physical_id=physical_id, resource_type=resource_type)


def a_catalog_with(stack_name: str = 'any-stack', physical_ids: Optional[Dict[str, str]] = None,
                   resource_types: Optional[Dict[str, str]] = None, tags: Optional[Dict[str, str]] = None,
                   outputs: Optional[Dict[str, str]] = None) -> StackResourceCatalog:
    resource_types = resource_types or {}

    return StackResourceCatalog.assemble(
        StackReference(stack_name),
        [
            a_stack_resource_with(logical_id, physical_id, resource_types.get(logical_id, 'AWS::SQS::Queue'))
            for logical_id, physical_id in (physical_ids or {}).items()
        ],
        tags=(tags or {}).items(),
        outputs=(outputs or {}).items()
    )
