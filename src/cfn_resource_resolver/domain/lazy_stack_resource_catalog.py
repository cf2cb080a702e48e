from concurrent.futures import Future
from enum import Enum
from logging import Logger
from threading import Lock
from typing import Optional

from cfn_resource_resolver.domain.ambiguous_stack_exception import AmbiguousStackException
from cfn_resource_resolver.domain.catalog_load_exception import CatalogLoadException
from cfn_resource_resolver.domain.stack_identity_resolver import StackIdentityResolver
from cfn_resource_resolver.domain.stack_not_found_exception import StackNotFoundException
from cfn_resource_resolver.domain.stack_resource_catalog import StackResourceCatalog
from cfn_resource_resolver.domain.stack_resource_catalog_loader import StackResourceCatalogLoader


class CatalogState(Enum):
    UNLOADED = 'Unloaded'
    LOADING = 'Loading'
    LOADED = 'Loaded'
    FAILED = 'Failed'


class LazyStackResourceCatalog:
    """
    Holds the catalog of the current stack, loading it on first use.

    However many threads ask for the catalog before it is available, only one of them performs the load; the others
    wait on the same future and see its outcome, whether that is the catalog or the exception that ended the load.
    Once loaded, the catalog is returned without taking the lock.

    Terminal failures (the stack cannot be found, is ambiguous, or may not be read) are kept and raised again on every
    later call. Any other failure only ends the attempt in progress: the next call starts a fresh load.
    """
    __catalog: Optional[StackResourceCatalog] = None
    __terminal_failure: Optional[BaseException] = None
    __pending_load: Optional[Future[StackResourceCatalog]] = None

    def __init__(self, stack_identity_resolver: StackIdentityResolver,
                 stack_resource_catalog_loader: StackResourceCatalogLoader, logger: Logger):
        self.__stack_identity_resolver = stack_identity_resolver
        self.__stack_resource_catalog_loader = stack_resource_catalog_loader
        self.__logger = logger
        self.__lock = Lock()

    @property
    def state(self) -> CatalogState:
        with self.__lock:
            if self.__catalog is not None:
                return CatalogState.LOADED

            if self.__pending_load is not None:
                return CatalogState.LOADING

            if self.__terminal_failure is not None:
                return CatalogState.FAILED

            return CatalogState.UNLOADED

    def get(self) -> StackResourceCatalog:
        catalog = self.__catalog

        if catalog is not None:
            return catalog

        with self.__lock:
            if self.__catalog is not None:
                return self.__catalog

            if self.__terminal_failure is not None:
                raise self.__terminal_failure.with_traceback(None)

            if self.__pending_load is not None:
                pending_load = self.__pending_load
                initiated_load = False
            else:
                pending_load = Future()
                self.__pending_load = pending_load
                initiated_load = True

        if not initiated_load:
            self.__logger.debug('Waiting for stack resource catalog load in progress...')
            return pending_load.result()

        return self.__load(pending_load)

    def __load(self, pending_load: Future[StackResourceCatalog]) -> StackResourceCatalog:
        try:
            stack_reference = self.__stack_identity_resolver.resolve()
            self.__logger.info(f'Loading resource catalog of stack "{stack_reference.name}"...')
            catalog = self.__stack_resource_catalog_loader.load(stack_reference)
        except BaseException as e:
            with self.__lock:
                self.__pending_load = None

                if self.__is_terminal(e):
                    self.__terminal_failure = e

            self.__logger.error(f'Loading stack resource catalog failed: {e}')
            pending_load.set_exception(e)
            raise

        with self.__lock:
            self.__catalog = catalog
            self.__pending_load = None

        self.__logger.info(f'Loaded {len(catalog.resources)} resources of stack "{catalog.stack_name}".')
        pending_load.set_result(catalog)

        return catalog

    @staticmethod
    def __is_terminal(exception: BaseException) -> bool:
        if isinstance(exception, CatalogLoadException):
            return exception.terminal

        return isinstance(exception, (StackNotFoundException, AmbiguousStackException))
