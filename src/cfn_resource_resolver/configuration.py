import os
from dataclasses import dataclass
from typing import Optional, Any, Mapping

from cfn_resource_resolver.infrastructure.ec2_instance_metadata_source import DEFAULT_INSTANCE_METADATA_ENDPOINT

STACK_NAME_VARIABLE = 'CLOUD_AWS_STACK_NAME'
AUTO_DETECT_VARIABLE = 'CLOUD_AWS_STACK_AUTO'
REGION_VARIABLE = 'CLOUD_AWS_REGION_STATIC'
CONNECT_TIMEOUT_VARIABLE = 'CLOUD_AWS_CONNECT_TIMEOUT'
READ_TIMEOUT_VARIABLE = 'CLOUD_AWS_READ_TIMEOUT'
MAX_ATTEMPTS_VARIABLE = 'CLOUD_AWS_MAX_ATTEMPTS'
INSTANCE_METADATA_ENDPOINT_VARIABLE = 'CLOUD_AWS_INSTANCE_METADATA_ENDPOINT'

TRUE_VALUES = ('true', 'yes', '1', 'on')
FALSE_VALUES = ('false', 'no', '0', 'off')


@dataclass(frozen=True)
class ResolverConfiguration:
    """
    Options recognised by :func:`cfn_resource_resolver.cfn_resource_resolver`.

    ``stack_name`` selects manual mode: the stack is never looked up. Without it the stack is detected from the EC2
    instance the process runs on, unless ``auto_detect`` is switched off, which is a configuration error.
    ``region`` overrides the region of the boto3 session. The ``*_client`` fields replace the clients the resolver
    would otherwise create, for custom endpoints or tests.
    """
    stack_name: Optional[str] = None
    auto_detect: bool = True
    region: Optional[str] = None
    follow_nested_stacks: bool = True
    connect_timeout: float = 5
    read_timeout: float = 10
    max_attempts: int = 5
    instance_metadata_endpoint: str = DEFAULT_INSTANCE_METADATA_ENDPOINT
    cloudformation_client: Optional[Any] = None
    sts_client: Optional[Any] = None
    rds_client: Optional[Any] = None
    s3_client: Optional[Any] = None

    @property
    def manual(self) -> bool:
        return bool(self.stack_name)

    def validate(self) -> None:
        if not self.manual and not self.auto_detect:
            raise ValueError('Either a stack name must be configured or stack auto-detection must be enabled')

        if self.max_attempts < 1:
            raise ValueError(f'max_attempts must be at least 1, was {self.max_attempts}')

    @staticmethod
    def from_environment(environ: Optional[Mapping[str, str]] = None) -> 'ResolverConfiguration':
        environment = os.environ if environ is None else environ

        return ResolverConfiguration(
            stack_name=environment.get(STACK_NAME_VARIABLE) or None,
            auto_detect=_parse_flag(environment.get(AUTO_DETECT_VARIABLE), default=True),
            region=environment.get(REGION_VARIABLE) or environment.get('AWS_REGION') or None,
            connect_timeout=float(environment.get(CONNECT_TIMEOUT_VARIABLE, 5)),
            read_timeout=float(environment.get(READ_TIMEOUT_VARIABLE, 10)),
            max_attempts=int(environment.get(MAX_ATTEMPTS_VARIABLE, 5)),
            instance_metadata_endpoint=environment.get(INSTANCE_METADATA_ENDPOINT_VARIABLE,
                                                       DEFAULT_INSTANCE_METADATA_ENDPOINT)
        )


def _parse_flag(value: Optional[str], default: bool) -> bool:
    if value is None or value.strip() == '':
        return default

    normalised_value = value.strip().lower()

    if normalised_value in TRUE_VALUES:
        return True

    if normalised_value in FALSE_VALUES:
        return False

    raise ValueError(f'"{value}" is not a valid boolean value')
