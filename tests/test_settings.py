import pytest
from http_contract.settings import Settings


# Fixture to provide a Settings instance for each test
@pytest.fixture
def settings():
    return Settings()


@pytest.mark.parametrize(
    "env_var, method_name, test_value, expected_value",
    [
        ("HTTP_CONTRACT_TIMEOUT", "get_timeout", "2.5", 2.5),
        ("HTTP_CONTRACT_VERIFY_TLS", "get_verify_tls", "false", False),
        ("HTTP_CONTRACT_VERIFY_TLS", "get_verify_tls", "YES", True),
        ("HTTP_CONTRACT_USER_AGENT", "get_user_agent", "suite/1.0", "suite/1.0"),
        ("HTTP_CONTRACT_LOG_LEVEL", "get_wire_log_level", "debug", "DEBUG"),
        ("HTTP_CONTRACT_PROXY", "get_proxy", "http://proxy:3128", "http://proxy:3128"),
        ("LOG_LEVEL", "get_log_level", "debug", "DEBUG"),  # Should be uppercase
    ],
)
def test_getter_set(settings, monkeypatch, env_var, method_name, test_value, expected_value):
    """Test getters when the corresponding environment variable is set."""
    monkeypatch.setenv(env_var, test_value)
    getter_method = getattr(settings, method_name)
    assert getter_method() == expected_value


@pytest.mark.parametrize(
    "env_var, method_name, expected_default",
    [
        ("HTTP_CONTRACT_TIMEOUT", "get_timeout", 10.0),
        ("HTTP_CONTRACT_VERIFY_TLS", "get_verify_tls", True),
        ("HTTP_CONTRACT_USER_AGENT", "get_user_agent", "http-contract"),
        ("HTTP_CONTRACT_LOG_LEVEL", "get_wire_log_level", "NONE"),
        ("HTTP_CONTRACT_PROXY", "get_proxy", None),
        ("LOG_LEVEL", "get_log_level", "INFO"),
    ],
)
def test_getter_default(settings, monkeypatch, env_var, method_name, expected_default):
    """Test getters return defaults when the environment variable is NOT set."""
    monkeypatch.delenv(env_var, raising=False)
    getter_method = getattr(settings, method_name)
    assert getter_method() == expected_default


@pytest.mark.parametrize("value", ["fast", "0", "-1"])
def test_get_timeout_invalid(settings, monkeypatch, value):
    monkeypatch.setenv("HTTP_CONTRACT_TIMEOUT", value)
    with pytest.raises(ValueError, match="HTTP_CONTRACT_TIMEOUT"):
        settings.get_timeout()


def test_get_verify_tls_invalid(settings, monkeypatch):
    monkeypatch.setenv("HTTP_CONTRACT_VERIFY_TLS", "maybe")
    with pytest.raises(ValueError, match="Invalid HTTP_CONTRACT_VERIFY_TLS"):
        settings.get_verify_tls()
