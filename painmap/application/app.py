# painmap/application/app.py

import os
from typing import Optional

from painmap.domain.common.di_container import DIContainer
from painmap.domain.services.i_logger_service import ILoggerService
from painmap.domain.services.i_config_repository_service import IConfigRepository
from painmap.domain.services.i_hotspot_catalog_service import IHotspotCatalog
from painmap.domain.services.i_raster_service import IRasterService
from painmap.domain.services.i_hotspot_resolver_service import IHotspotResolver
from painmap.domain.services.i_pain_area_store_service import IPainAreaStore
from painmap.domain.services.i_form_state_service import IAssessmentFormState
from painmap.domain.services.i_pain_mapping_service import IPainMappingService
from painmap.domain.services.i_capture_service import IPainMapCaptureService

from painmap.infrastructure.logging.logger_service import ConsoleLoggerService, FileLoggerService
from painmap.infrastructure.config.json_config_repository import JsonConfigRepository
from painmap.infrastructure.catalog.json_hotspot_catalog import JsonHotspotCatalog
from painmap.infrastructure.raster.pil_raster_service import PilRasterService
from painmap.infrastructure.resolver.hotspot_resolver import HotspotResolver
from painmap.infrastructure.store.pain_area_store import InMemoryPainAreaStore
from painmap.infrastructure.form.assessment_form_state import AssessmentFormState
from painmap.infrastructure.mapping.pain_mapping_service import PainMappingService
from painmap.infrastructure.capture.qt_capture_service import QtPainMapCaptureService

CONFIG_ENV_VAR = "PAINMAP_CONFIG"


def initialize_app(config_file: Optional[str] = None, log_to_file: bool = True) -> DIContainer:
    """
    Build the dependency container of the pain mapping step.

    Args:
        config_file: Path of the JSON config; defaults to $PAINMAP_CONFIG, then
            config.json in the working directory
        log_to_file: Also write a rotating log file into the configured log_dir

    Raises:
        RuntimeError: If the hotspot catalog cannot be loaded
    """
    container = DIContainer()

    if config_file is None:
        config_file = os.environ.get(CONFIG_ENV_VAR) or os.path.join(os.getcwd(), "config.json")

    # The config repository needs a logger before the configured one exists
    bootstrap_logger = ConsoleLoggerService()
    config_repo = JsonConfigRepository(config_file, bootstrap_logger)

    log_level = config_repo.get_setting("log_level", "INFO")
    if log_to_file:
        logger = FileLoggerService(level=log_level, log_dir=config_repo.get_setting("log_dir", "logs"))
    else:
        logger = ConsoleLoggerService(level=log_level)
    config_repo.logger = logger

    container.register_instance(ILoggerService, logger)
    container.register_instance(IConfigRepository, config_repo)

    # Hotspot table
    catalog_result = JsonHotspotCatalog.load(logger, config_repo.get_setting("catalog_path") or None)
    if catalog_result.is_failure:
        logger.critical(f"Cannot start without a hotspot catalog: {catalog_result.error}")
        raise RuntimeError(str(catalog_result.error))
    container.register_instance(IHotspotCatalog, catalog_result.value)

    container.register_singleton(
        IRasterService,
        lambda: PilRasterService(container.resolve(ILoggerService))
    )

    container.register_singleton(
        IHotspotResolver,
        lambda: HotspotResolver(
            catalog=container.resolve(IHotspotCatalog),
            logger=container.resolve(ILoggerService),
            alpha_threshold=config_repo.get_alpha_threshold()
        )
    )

    # Session state
    container.register_singleton(
        IPainAreaStore,
        lambda: InMemoryPainAreaStore(container.resolve(ILoggerService))
    )

    def create_form_state() -> AssessmentFormState:
        form_state = AssessmentFormState(container.resolve(ILoggerService))
        form_state.bind_store(container.resolve(IPainAreaStore))
        return form_state

    container.register_singleton(IAssessmentFormState, create_form_state)

    container.register_singleton(
        IPainMappingService,
        lambda: PainMappingService(
            resolver=container.resolve(IHotspotResolver),
            store=container.resolve(IPainAreaStore),
            logger=container.resolve(ILoggerService),
            display_scale=config_repo.get_display_scale(),
            default_intensity=config_repo.get_default_intensity(),
            initial_view=config_repo.get_default_view()
        )
    )

    container.register_factory(
        IPainMapCaptureService,
        lambda: QtPainMapCaptureService(
            logger=container.resolve(ILoggerService),
            capture_dir=config_repo.get_setting("capture_dir", JsonConfigRepository.DEFAULT_CONFIG["capture_dir"])
        )
    )

    logger.info("Application dependencies initialized", config=config_file)

    return container


_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    global _container
    if _container is None:
        _container = initialize_app()
    return _container
