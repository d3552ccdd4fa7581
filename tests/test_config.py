import logging

from budget_dashboard import config


def test_ensure_data_directories(tmp_path, monkeypatch):
    monkeypatch.setattr(config, 'DATA_DIR', tmp_path / 'data')
    monkeypatch.setattr(config, 'EXPENSES_DIR', tmp_path / 'data' / 'expenses')
    monkeypatch.setattr(config, 'SALARY_FILE', tmp_path / 'state' / 'salaries.json')
    monkeypatch.setattr(config, 'DB_PATH', tmp_path / 'db' / 'budget.db')

    config.ensure_data_directories()

    assert (tmp_path / 'data' / 'expenses').is_dir()
    assert (tmp_path / 'state').is_dir()
    assert (tmp_path / 'db').is_dir()


def test_configure_logging_sets_level_once():
    logger = config.configure_logging('info')
    try:
        handlers = list(logger.handlers)
        assert logger.level == logging.INFO
        assert config.configure_logging('debug').handlers == handlers
        assert logger.level == logging.DEBUG
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)


def test_carry_forward_lookback_is_one_year():
    assert config.CARRY_FORWARD_LOOKBACK == 12
