from dataclasses import dataclass
from typing import Optional

from cfn_resource_resolver.domain.malformed_arn_exception import MalformedArnException

ARN_PREFIX = 'arn'
ARN_SEGMENT_DELIMITER = ':'
RESOURCE_TYPE_DELIMITERS = (':', '/')


@dataclass(frozen=True)
class AmazonResourceName:
    """
    Structured form of an Amazon Resource Name:

        arn:partition:service:region:account:resource_type<delimiter>resource_name

    Region and account are optional (``None`` serialises to an empty segment, as in S3 and IAM ARNs). The resource
    name and its delimiter are optional too, for ARNs such as ``arn:aws:s3:::my-bucket`` where the resource segment
    carries no type.
    """
    partition: str
    service: str
    region: Optional[str]
    account: Optional[str]
    resource_type: str
    resource_name: Optional[str] = None
    resource_type_delimiter: Optional[str] = None

    @staticmethod
    def from_string(value: str) -> 'AmazonResourceName':
        segments = value.split(ARN_SEGMENT_DELIMITER, 5)

        if len(segments) < 6:
            raise MalformedArnException(
                f'"{value}" is not a valid ARN: expected at least 6 colon-separated segments, found {len(segments)}'
            )

        prefix, partition, service, region, account, resource = segments

        if prefix != ARN_PREFIX:
            raise MalformedArnException(f'"{value}" is not a valid ARN: it must start with "{ARN_PREFIX}:"')

        if not partition:
            raise MalformedArnException(f'"{value}" is not a valid ARN: the partition segment is empty')

        if not service:
            raise MalformedArnException(f'"{value}" is not a valid ARN: the service segment is empty')

        if not resource:
            raise MalformedArnException(f'"{value}" is not a valid ARN: the resource segment is empty')

        resource_type, delimiter, resource_name = AmazonResourceName.__split_resource(resource)

        return AmazonResourceName(
            partition=partition,
            service=service,
            region=region or None,
            account=account or None,
            resource_type=resource_type,
            resource_name=resource_name,
            resource_type_delimiter=delimiter
        )

    @staticmethod
    def builder() -> 'AmazonResourceNameBuilder':
        return AmazonResourceNameBuilder()

    def __str__(self) -> str:
        resource = self.resource_type

        if self.resource_name is not None:
            resource += f'{self.resource_type_delimiter}{self.resource_name}'

        return ARN_SEGMENT_DELIMITER.join([
            ARN_PREFIX,
            self.partition,
            self.service,
            self.region or '',
            self.account or '',
            resource
        ])

    @staticmethod
    def __split_resource(resource: str) -> tuple[str, Optional[str], Optional[str]]:
        delimiter_positions = [
            (resource.index(delimiter), delimiter)
            for delimiter in RESOURCE_TYPE_DELIMITERS
            if delimiter in resource
        ]

        if not delimiter_positions:
            return resource, None, None

        position, delimiter = min(delimiter_positions)

        return resource[:position], delimiter, resource[position + 1:]


class AmazonResourceNameBuilder:
    def __init__(self) -> None:
        self.__partition = 'aws'
        self.__service: Optional[str] = None
        self.__region: Optional[str] = None
        self.__account: Optional[str] = None
        self.__resource_type: Optional[str] = None
        self.__resource_name: Optional[str] = None
        self.__resource_type_delimiter = ':'

    def with_partition(self, partition: str) -> 'AmazonResourceNameBuilder':
        self.__partition = partition
        return self

    def with_service(self, service: str) -> 'AmazonResourceNameBuilder':
        self.__service = service
        return self

    def with_region(self, region: Optional[str]) -> 'AmazonResourceNameBuilder':
        self.__region = region
        return self

    def with_account(self, account: Optional[str]) -> 'AmazonResourceNameBuilder':
        self.__account = account
        return self

    def with_resource_type(self, resource_type: str) -> 'AmazonResourceNameBuilder':
        self.__resource_type = resource_type
        return self

    def with_resource_name(self, resource_name: Optional[str]) -> 'AmazonResourceNameBuilder':
        self.__resource_name = resource_name
        return self

    def with_resource_type_delimiter(self, delimiter: str) -> 'AmazonResourceNameBuilder':
        self.__resource_type_delimiter = delimiter
        return self

    def build(self) -> AmazonResourceName:
        if not self.__partition:
            raise MalformedArnException('An ARN requires a partition')

        if not self.__service:
            raise MalformedArnException('An ARN requires a service')

        for segment_name, segment in (('partition', self.__partition), ('service', self.__service),
                                      ('region', self.__region), ('account', self.__account)):
            if segment and ARN_SEGMENT_DELIMITER in segment:
                raise MalformedArnException(f'ARN {segment_name} "{segment}" must not contain ":"')

        if not self.__resource_type:
            raise MalformedArnException('An ARN requires a resource type')

        if any(delimiter in self.__resource_type for delimiter in RESOURCE_TYPE_DELIMITERS):
            raise MalformedArnException(f'Resource type "{self.__resource_type}" must not contain ":" or "/"')

        if self.__resource_type_delimiter not in RESOURCE_TYPE_DELIMITERS:
            raise MalformedArnException(f'Unsupported resource type delimiter "{self.__resource_type_delimiter}"')

        return AmazonResourceName(
            partition=self.__partition,
            service=self.__service,
            region=self.__region or None,
            account=self.__account or None,
            resource_type=self.__resource_type,
            resource_name=self.__resource_name,
            resource_type_delimiter=self.__resource_type_delimiter if self.__resource_name is not None else None
        )
