from dataclasses import dataclass

NESTED_STACK_RESOURCE_TYPE = 'AWS::CloudFormation::Stack'


@dataclass(frozen=True)
class StackResource:
    logical_id: str
    physical_id: str
    resource_type: str

    def is_nested_stack(self) -> bool:
        return self.resource_type == NESTED_STACK_RESOURCE_TYPE
