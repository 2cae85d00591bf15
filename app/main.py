"""Data collection service entry point.

Composes the service from settings and reports its state. Binding the IPC
entry points to a transport is left to the host process, which imports
``get_data_collection_service`` and registers the four IPC methods.
"""

from dotenv import load_dotenv

from infrastructure.logging import get_module_logger
from infrastructure.services import get_data_collection_service, get_settings
from modules.datacollection import ServiceState

logger = get_module_logger()

load_dotenv()


def list_configs():
    """List all configuration settings keys"""
    settings = get_settings()
    config_settings = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


def main() -> int:
    """Start the service and dump the stored table.

    Returns:
        Process exit code: 0 when the store opened, 1 when the service FAILED.
    """
    logger.info("application_startup")
    list_configs()

    service = get_data_collection_service()
    state = service.state
    logger.info("data_collection_service_state", state=state.value)

    if state is ServiceState.FAILED:
        return 1

    rows = service.store.dump()
    logger.info("data_collection_table_dumped", rows=rows)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
