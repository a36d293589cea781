import logging

import pytest

from gemmcheck.runtime import config
from gemmcheck.runtime.errors import InvalidArgumentError
from gemmcheck.runtime.types import float32, float64, get_dtype, supported_dtypes


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "GEMMCHECK_FRAMEWORK",
        "GEMMCHECK_BACKEND",
        "GEMMCHECK_DEVICE",
        "GEMMCHECK_SEED",
        "GEMMCHECK_DOUBLE_SUPPORT",
        "GEMMCHECK_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    assert config.get_framework_name() == "torch"
    assert config.get_backend_name() == "torch"
    assert config.get_device() is None
    assert config.get_seed() == 0
    assert config.get_double_support() is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("GEMMCHECK_DEVICE", "cpu")
    monkeypatch.setenv("GEMMCHECK_SEED", "42")
    monkeypatch.setenv("GEMMCHECK_DOUBLE_SUPPORT", "0")

    assert config.get_device() == "cpu"
    assert config.get_seed() == 42
    assert config.get_double_support() is False


def test_invalid_integer_names_the_variable(monkeypatch):
    monkeypatch.setenv("GEMMCHECK_SEED", "abc")
    with pytest.raises(InvalidArgumentError, match="GEMMCHECK_SEED"):
        config.get_seed()


def test_configure_logging(monkeypatch):
    monkeypatch.setenv("GEMMCHECK_LOG_LEVEL", "debug")
    logger = config.configure_logging()
    try:
        assert logger.name == "gemmcheck"
        assert logger.level == logging.DEBUG
        with pytest.raises(InvalidArgumentError):
            config.configure_logging("chatty")
    finally:
        logger.setLevel(logging.NOTSET)


def test_supported_dtypes_follow_double_support(monkeypatch):
    assert supported_dtypes() == [float32, float64]
    monkeypatch.setenv("GEMMCHECK_DOUBLE_SUPPORT", "0")
    assert supported_dtypes() == [float32]
    assert supported_dtypes(double_support=True) == [float32, float64]


def test_supported_dtypes_asks_the_framework(cpu_driver):
    assert float64 in supported_dtypes(cpu_driver.framework)


def test_get_dtype():
    assert get_dtype("fp64") is float64
    with pytest.raises(ValueError, match="fp32, fp64"):
        get_dtype("fp8")
