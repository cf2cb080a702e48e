from concurrent.futures import ThreadPoolExecutor
from traceback import extract_tb
from logging import Logger
from threading import Event

import pytest

from cfn_resource_resolver.domain.catalog_load_exception import CatalogLoadException, CatalogLoadFailureReason
from cfn_resource_resolver.domain.lazy_stack_resource_catalog import LazyStackResourceCatalog, CatalogState
from cfn_resource_resolver.domain.resource_id_resolver import ResourceIdResolver
from cfn_resource_resolver.domain.stack_identity_resolver import StaticStackIdentityResolver, StackIdentityResolver
from cfn_resource_resolver.domain.stack_not_found_exception import StackNotFoundException
from cfn_resource_resolver.domain.stack_reference import StackReference
from cfn_resource_resolver.domain.stack_resource_catalog import StackResourceCatalog
from cfn_resource_resolver.domain.stack_resource_catalog_loader import StackResourceCatalogLoader
from cfn_resource_resolver_test_support.mocking import mock_class, when_calling, verify, inspect
from cfn_resource_resolver_test_support.waiting import wait_until
from cfn_resource_resolver_tests.support.builders.stack_resource_builder import a_catalog_with

CONCURRENT_CALLERS = 16


@pytest.fixture(scope='function')
def catalog_loader() -> StackResourceCatalogLoader:
    return mock_class(StackResourceCatalogLoader)


@pytest.fixture(scope='function')
def lazy_catalog(catalog_loader: StackResourceCatalogLoader, logger: Logger) -> LazyStackResourceCatalog:
    return LazyStackResourceCatalog(StaticStackIdentityResolver('my-stack'), catalog_loader, logger)


def test_loads_catalog_of_resolved_stack_on_first_use(lazy_catalog: LazyStackResourceCatalog,
                                                      catalog_loader: StackResourceCatalogLoader) -> None:
    catalog = a_catalog_with(stack_name='my-stack')
    when_calling(catalog_loader.load).invoke(
        lambda stack_reference: catalog if stack_reference == StackReference('my-stack') else None
    )
    assert lazy_catalog.state is CatalogState.UNLOADED

    assert lazy_catalog.get() is catalog
    assert lazy_catalog.state is CatalogState.LOADED


def test_reuses_loaded_catalog(lazy_catalog: LazyStackResourceCatalog,
                               catalog_loader: StackResourceCatalogLoader) -> None:
    when_calling(catalog_loader.load).always_return(a_catalog_with())

    first_catalog = lazy_catalog.get()
    second_catalog = lazy_catalog.get()

    assert first_catalog is second_catalog
    verify(catalog_loader.load).was_called_once()


def test_does_not_resolve_stack_before_first_use(catalog_loader: StackResourceCatalogLoader, logger: Logger) -> None:
    stack_identity_resolver = mock_class(StackIdentityResolver)

    LazyStackResourceCatalog(stack_identity_resolver, catalog_loader, logger)

    verify(stack_identity_resolver.resolve).was_not_called()
    verify(catalog_loader.load).was_not_called()


def test_loads_catalog_only_once_for_concurrent_first_callers(lazy_catalog: LazyStackResourceCatalog,
                                                              catalog_loader: StackResourceCatalogLoader,
                                                              logger: Logger) -> None:
    release_load = Event()

    def slow_load(_: StackReference) -> StackResourceCatalog:
        release_load.wait(5)
        return a_catalog_with(physical_ids=dict(Queue='orders-queue'))

    when_calling(catalog_loader.load).invoke(slow_load)
    resource_id_resolver = ResourceIdResolver(lazy_catalog, logger)

    with ThreadPoolExecutor(max_workers=CONCURRENT_CALLERS) as executor:
        resolutions = [
            executor.submit(resource_id_resolver.resolve_to_physical_resource_id, 'Queue')
            for _ in range(CONCURRENT_CALLERS)
        ]
        wait_until(lambda: inspect(catalog_loader.load).called, 'catalog load to start')
        assert lazy_catalog.state is CatalogState.LOADING

        release_load.set()
        physical_ids = [resolution.result(timeout=5) for resolution in resolutions]

    assert physical_ids == ['orders-queue'] * CONCURRENT_CALLERS
    verify(catalog_loader.load).was_called_once()


def test_every_concurrent_caller_observes_failure_of_shared_load(lazy_catalog: LazyStackResourceCatalog,
                                                                 catalog_loader: StackResourceCatalogLoader) -> None:
    release_load = Event()

    def failing_load(_: StackReference) -> StackResourceCatalog:
        release_load.wait(5)
        raise CatalogLoadException('my-stack', CatalogLoadFailureReason.NOT_FOUND, 'Stack does not exist')

    when_calling(catalog_loader.load).invoke(failing_load)

    with ThreadPoolExecutor(max_workers=CONCURRENT_CALLERS) as executor:
        loads = [executor.submit(lazy_catalog.get) for _ in range(CONCURRENT_CALLERS)]
        wait_until(lambda: inspect(catalog_loader.load).called, 'catalog load to start')

        release_load.set()

        for load in loads:
            with pytest.raises(CatalogLoadException) as exception_info:
                load.result(timeout=5)

            assert exception_info.value.reason is CatalogLoadFailureReason.NOT_FOUND

    verify(catalog_loader.load).was_called_once()


def test_keeps_raising_terminal_failure_without_loading_again(lazy_catalog: LazyStackResourceCatalog,
                                                              catalog_loader: StackResourceCatalogLoader) -> None:
    when_calling(catalog_loader.load).always_raise(
        CatalogLoadException('my-stack', CatalogLoadFailureReason.UNAUTHORIZED, 'Access denied')
    )

    for _ in range(3):
        with pytest.raises(CatalogLoadException, match='Unauthorized'):
            lazy_catalog.get()

    assert lazy_catalog.state is CatalogState.FAILED
    verify(catalog_loader.load).was_called_once()


def test_keeps_raising_stack_detection_failure(catalog_loader: StackResourceCatalogLoader, logger: Logger) -> None:
    stack_identity_resolver = mock_class(StackIdentityResolver)
    when_calling(stack_identity_resolver.resolve).always_raise(StackNotFoundException('No stack found'))
    lazy_catalog = LazyStackResourceCatalog(stack_identity_resolver, catalog_loader, logger)

    for _ in range(2):
        with pytest.raises(StackNotFoundException):
            lazy_catalog.get()

    verify(stack_identity_resolver.resolve).was_called_once()
    verify(catalog_loader.load).was_not_called()


def test_starts_fresh_load_after_transient_failure(lazy_catalog: LazyStackResourceCatalog,
                                                   catalog_loader: StackResourceCatalogLoader) -> None:
    catalog = a_catalog_with()
    when_calling(catalog_loader.load).respond_with(
        CatalogLoadException('my-stack', CatalogLoadFailureReason.TRANSIENT, 'Rate exceeded'),
        catalog
    )

    with pytest.raises(CatalogLoadException, match='Rate exceeded'):
        lazy_catalog.get()

    assert lazy_catalog.state is CatalogState.UNLOADED
    assert lazy_catalog.get() is catalog
    verify(catalog_loader.load).was_called_times(2)


def test_raising_remembered_failure_again_does_not_grow_its_traceback(
        lazy_catalog: LazyStackResourceCatalog, catalog_loader: StackResourceCatalogLoader) -> None:
    when_calling(catalog_loader.load).always_raise(
        CatalogLoadException('my-stack', CatalogLoadFailureReason.NOT_FOUND, 'Stack does not exist')
    )
    with pytest.raises(CatalogLoadException):
        lazy_catalog.get()

    traceback_depths = []
    for _ in range(10):
        with pytest.raises(CatalogLoadException) as exception_info:
            lazy_catalog.get()

        traceback_depths.append(len(extract_tb(exception_info.value.__traceback__)))

    assert set(traceback_depths) == {traceback_depths[0]}
    assert inspect(catalog_loader.load).call_count == 1
