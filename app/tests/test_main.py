import main

from unittest.mock import MagicMock, patch

from modules.datacollection import ServiceState


@patch("main.list_configs")
@patch("main.get_data_collection_service")
def test_main_dumps_table_when_store_opened(mock_get_service, mock_list_configs):
    service = MagicMock()
    service.state = ServiceState.READY
    service.store.dump.return_value = 3
    mock_get_service.return_value = service

    assert main.main() == 0

    mock_list_configs.assert_called_once_with()
    service.store.dump.assert_called_once_with()


@patch("main.list_configs")
@patch("main.get_data_collection_service")
def test_main_not_ready_still_dumps(mock_get_service, mock_list_configs):
    service = MagicMock()
    service.state = ServiceState.NOT_READY
    mock_get_service.return_value = service

    assert main.main() == 0
    service.store.dump.assert_called_once_with()


@patch("main.list_configs")
@patch("main.get_data_collection_service")
def test_main_failed_service_exits_nonzero(mock_get_service, mock_list_configs):
    service = MagicMock()
    service.state = ServiceState.FAILED
    mock_get_service.return_value = service

    assert main.main() == 1
    service.store.dump.assert_not_called()


@patch("main.logger")
@patch("main.get_settings")
def test_list_configs_logs_sections(mock_get_settings, mock_logger):
    mock_get_settings.return_value.model_dump.return_value = {
        "PREFIX": "",
        "LOG_LEVEL": "INFO",
        "data_collection": {"db_dir": "./data", "capacity": 10},
    }

    main.list_configs()

    mock_logger.info.assert_any_call(
        "configuration_initialized",
        base_settings=[{"PREFIX": ""}, {"LOG_LEVEL": "INFO"}],
    )
    mock_logger.info.assert_any_call(
        "configuration_loaded",
        config_setting="data_collection",
        keys=["db_dir", "capacity"],
    )
