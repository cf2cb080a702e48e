import logging
from logging import Logger
from typing import Optional, Any

from boto3 import Session

from cfn_resource_resolver.configuration import ResolverConfiguration
from cfn_resource_resolver.domain.lazy_stack_resource_catalog import LazyStackResourceCatalog
from cfn_resource_resolver.domain.region_provider import RegionProvider, StaticRegionProvider
from cfn_resource_resolver.domain.resource_arn_builder import ResourceArnBuilder
from cfn_resource_resolver.domain.resource_id_resolver import ResourceIdResolver
from cfn_resource_resolver.domain.stack_identity_resolver import StackIdentityResolver, StaticStackIdentityResolver, \
    AutoDetectingStackIdentityResolver
from cfn_resource_resolver.domain.tag_accessor import TagAccessor
from cfn_resource_resolver.domain.taggable_resource_kind import ArnAddressedResourceKind, \
    IdentifierAddressedResourceKind
from cfn_resource_resolver.infrastructure.boto_client_configuration import boto_client_configuration
from cfn_resource_resolver.infrastructure.boto_session_region_provider import BotoSessionRegionProvider
from cfn_resource_resolver.infrastructure.cloudformation_stack_locator import CloudFormationStackLocator
from cfn_resource_resolver.infrastructure.cloudformation_stack_resource_catalog_loader import \
    CloudFormationStackResourceCatalogLoader
from cfn_resource_resolver.infrastructure.ec2_instance_metadata_source import Ec2InstanceMetadataSource
from cfn_resource_resolver.infrastructure.rds_resource_tag_source import RdsResourceTagSource
from cfn_resource_resolver.infrastructure.s3_bucket_tag_source import S3BucketTagSource
from cfn_resource_resolver.infrastructure.sts_caller_identity_source import StsCallerIdentitySource
from cfn_resource_resolver.stack_resource_resolver import StackResourceResolver

__all__ = ["cfn_resource_resolver", "ResolverConfiguration", "StackResourceResolver"]


def cfn_resource_resolver(configuration: Optional[ResolverConfiguration] = None,
                          boto_session: Optional[Session] = None,
                          logger: Optional[Logger] = None) -> StackResourceResolver:
    configuration = configuration or ResolverConfiguration.from_environment()
    configuration.validate()

    boto_session = boto_session or Session()
    logger = logger or logging.getLogger('cfn_resource_resolver')

    instance_metadata_source = Ec2InstanceMetadataSource(logger, configuration.instance_metadata_endpoint,
                                                         configuration.connect_timeout)
    region_provider: RegionProvider = (
        StaticRegionProvider(configuration.region) if configuration.region
        else BotoSessionRegionProvider(boto_session, instance_metadata_source, logger)
    )

    def client(service_name: str, injected_client: Optional[Any]) -> Any:
        if injected_client is not None:
            return injected_client

        return boto_session.client(
            service_name,
            region_name=region_provider.get_region(),
            config=boto_client_configuration(configuration.connect_timeout, configuration.read_timeout,
                                             configuration.max_attempts)
        )

    cloudformation_client = client('cloudformation', configuration.cloudformation_client)

    stack_identity_resolver: StackIdentityResolver
    if configuration.manual:
        stack_identity_resolver = StaticStackIdentityResolver(configuration.stack_name)
    else:
        stack_identity_resolver = AutoDetectingStackIdentityResolver(
            instance_metadata_source,
            CloudFormationStackLocator(cloudformation_client, logger),
            logger
        )

    stack_resource_catalog = LazyStackResourceCatalog(
        stack_identity_resolver,
        CloudFormationStackResourceCatalogLoader(cloudformation_client, logger, configuration.follow_nested_stacks),
        logger
    )
    resource_id_resolver = ResourceIdResolver(stack_resource_catalog, logger)

    rds_tag_source = RdsResourceTagSource(client('rds', configuration.rds_client), logger)
    s3_bucket_tag_source = S3BucketTagSource(client('s3', configuration.s3_client), logger)
    resource_kinds = [
        ArnAddressedResourceKind('AWS::RDS::DBInstance', 'rds', 'db', ':', rds_tag_source),
        ArnAddressedResourceKind('AWS::RDS::DBCluster', 'rds', 'cluster', ':', rds_tag_source),
        IdentifierAddressedResourceKind('AWS::S3::Bucket', 's3', s3_bucket_tag_source),
    ]

    return StackResourceResolver(
        stack_resource_catalog,
        resource_id_resolver,
        TagAccessor(
            stack_resource_catalog,
            resource_id_resolver,
            resource_kinds,
            ResourceArnBuilder(StsCallerIdentitySource(client('sts', configuration.sts_client), logger), logger),
            region_provider,
            logger
        )
    )
