# File: test_settings.py

import logging

import pytest

from retrieval_core.config.settings import Configuration, ConfigurationError
from retrieval_core.utils.logger import setup_logger


def test_defaults_when_environment_is_empty(clean_env):
    config = Configuration()
    assert config.get_retrieval_k() == 4
    assert config.get_score_threshold() is None
    assert config.get_retriever_tags() == []
    assert config.get_retriever_verbose() is False
    assert config.get_log_level() == "INFO"
    assert config.get_log_level_value() == logging.INFO


def test_values_read_from_environment(clean_env):
    clean_env.setenv("RETRIEVAL_K", "10")
    clean_env.setenv("RETRIEVAL_SCORE_THRESHOLD", "0.25")
    clean_env.setenv("RETRIEVER_TAGS", "kb,, prod ")
    clean_env.setenv("RETRIEVER_VERBOSE", "Yes")
    clean_env.setenv("LOG_LEVEL", "debug")
    config = Configuration()
    assert config.get_retrieval_k() == 10
    assert config.get_score_threshold() == 0.25
    assert config.get_retriever_tags() == ["kb", "prod"]
    assert config.get_retriever_verbose() is True
    assert config.get_log_level_value() == logging.DEBUG


@pytest.mark.parametrize("name, value, getter, expected", [
    ("RETRIEVAL_K", "many", "get_retrieval_k", 4),
    ("RETRIEVAL_K", "-3", "get_retrieval_k", 1),
    ("RETRIEVAL_SCORE_THRESHOLD", "high", "get_score_threshold", None),
    ("RETRIEVER_VERBOSE", "sometimes", "get_retriever_verbose", False),
    ("LOG_LEVEL", "LOUD", "get_log_level", "INFO"),
])
def test_bad_values_fall_back(clean_env, caplog, name, value, getter, expected):
    clean_env.setenv(name, value)
    with caplog.at_level(logging.WARNING, logger="retrieval_core.config.settings"):
        config = Configuration()
    assert getattr(config, getter)() == expected
    assert any(name in r.getMessage() for r in caplog.records)


def test_dotenv_file_is_loaded(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("RETRIEVAL_K=7\nRETRIEVER_TAGS=from-file\n")
    config = Configuration(dotenv_path=env_file)
    assert config.get_retrieval_k() == 7
    assert config.get_retriever_tags() == ["from-file"]


def test_environment_wins_over_dotenv(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("RETRIEVAL_K=7\n")
    clean_env.setenv("RETRIEVAL_K", "3")
    assert Configuration(dotenv_path=env_file).get_retrieval_k() == 3


def test_missing_dotenv_path_raises(clean_env, tmp_path):
    with pytest.raises(ConfigurationError):
        Configuration(dotenv_path=tmp_path / "nope.env")


def test_setup_logger_is_idempotent():
    name = "retrieval_core.tests.setup_logger"
    first = setup_logger(name, level="DEBUG")
    second = setup_logger(name, level=logging.WARNING)
    assert first is second
    handlers = [h for h in second.handlers if isinstance(h, logging.StreamHandler)]
    assert len(handlers) == 1
    assert second.level == logging.WARNING
    assert handlers[0].level == logging.WARNING
    assert second.propagate is False


def test_setup_logger_unknown_level_name_uses_default():
    logger = setup_logger("retrieval_core.tests.unknown_level", level="CHATTY")
    assert logger.level == logging.INFO
