"""Tests for YAML defaults and logging configuration."""

import logging

import pytest

from mott_mc import logging_config
from mott_mc.config import get_default, get_defaults, reload_defaults


@pytest.fixture
def custom_defaults(tmp_path, monkeypatch):
    """Point the loader at a temporary defaults.yaml."""
    path = tmp_path / 'defaults.yaml'
    path.write_text(
        "model:\n"
        "  particle: e+\n"
        "  strict: true\n"
        "logging:\n"
        "  level: DEBUG\n"
    )
    monkeypatch.setenv('MOTT_MC_DEFAULTS_PATH', str(path))
    reload_defaults()
    yield path
    monkeypatch.delenv('MOTT_MC_DEFAULTS_PATH')
    reload_defaults()


class TestDefaults:

    def test_packaged_values(self):
        assert get_default('model.particle') == 'e-'
        assert get_default('model.cos_theta_limit') == 1.0
        assert get_default('model.cos_theta_max') == -1.0
        assert get_default('model.strict') is False

    def test_null_and_missing_use_fallback(self):
        assert get_default('data.mott_coefficients', 'fallback') == 'fallback'
        assert get_default('random.seed') is None
        assert get_default('no.such.key', 3) == 3
        assert get_default('model.particle.deeper', 'x') == 'x'

    def test_copy_returned(self):
        defaults = get_defaults()
        defaults['model'] = None
        assert get_default('model.particle') == 'e-'

    def test_environment_override(self, custom_defaults):
        assert get_default('model.particle') == 'e+'
        assert get_default('model.strict') is True
        assert get_default('model.cos_theta_limit', 1.0) == 1.0


class TestLogging:

    @pytest.fixture(autouse=True)
    def restore_level(self):
        logger = logging.getLogger('mott_mc')
        level = logger.level
        console = logging_config._console_handler
        console_level = console.level if console is not None else None
        yield
        logging_config.disable_file_logging()
        logger.setLevel(level)
        if console is not None:
            console.setLevel(console_level)

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv('MOTT_MC_LOG_LEVEL', 'warning')
        assert logging_config._resolve_level() == logging.WARNING

    def test_level_from_configuration(self, custom_defaults, monkeypatch):
        monkeypatch.delenv('MOTT_MC_LOG_LEVEL', raising=False)
        assert logging_config._resolve_level() == logging.DEBUG

    def test_unknown_level_name(self):
        assert logging_config._resolve_level('chatty') == logging.INFO

    def test_get_logger_attaches_one_handler(self):
        logging_config.get_logger('mott_mc.example')
        logging_config.get_logger('mott_mc.example')
        logging_config.configure_logging()

        handlers = [h for h in logging.getLogger('mott_mc').handlers
                    if h is logging_config._console_handler]
        assert len(handlers) == 1

    def test_set_log_level(self):
        logging_config.set_log_level('ERROR')
        assert logging.getLogger('mott_mc').level == logging.ERROR

    def test_file_logging(self, tmp_path):
        filename = logging_config.enable_file_logging(str(tmp_path / 'run.log'))
        logging.getLogger('mott_mc.physics').debug("grid loaded")
        logging_config.disable_file_logging()

        with open(filename, encoding='utf-8') as f:
            assert "grid loaded" in f.read()

    def test_set_log_level_keeps_file_handler_level(self, tmp_path):
        filename = logging_config.enable_file_logging(str(tmp_path / 'run.log'))
        logging_config.configure_logging('INFO')

        logging_config.set_log_level('WARNING')
        logging.getLogger('mott_mc.physics').debug("still recorded")
        logging.getLogger('mott_mc.physics').info("also recorded")
        logging_config.disable_file_logging()

        assert logging_config._console_handler.level == logging.WARNING
        with open(filename, encoding='utf-8') as f:
            text = f.read()
        assert "still recorded" in text
        assert "also recorded" in text
