import pytest

import main
from core import config


def test_defaults():
    cfg = config.get_environment_config()
    assert cfg["UML_API_BASE_URL"] == config.DEFAULT_UML_API_BASE_URL
    assert cfg["COURSE_DETAILS_TIMEOUT"] == 15.0
    assert cfg["COURSE_SEARCH_TIMEOUT"] == 20.0
    assert cfg["MCP_MAX_DURATION"] == 60.0
    assert cfg["MCP_TRANSPORT"] == "stdio"
    assert cfg["MCP_PORT"] == 8000


def test_overrides(monkeypatch):
    monkeypatch.setenv("COURSE_DETAILS_TIMEOUT", "2.5")
    monkeypatch.setenv("MCP_TRANSPORT", "HTTP")
    monkeypatch.setenv("MCP_PORT", "9001")
    assert config.get_course_details_timeout() == 2.5
    assert config.get_transport() == "http"
    assert config.get_port() == 9001


@pytest.mark.parametrize(
    "name, value, getter",
    [
        ("COURSE_SEARCH_TIMEOUT", "soon", config.get_course_search_timeout),
        ("MCP_MAX_DURATION", "-1", config.get_max_duration),
        ("MCP_PORT", "eighty", config.get_port),
        ("MCP_TRANSPORT", "pigeon", config.get_transport),
    ],
)
def test_bad_values_fail_loudly(monkeypatch, name, value, getter):
    monkeypatch.setenv(name, value)
    with pytest.raises(RuntimeError):
        getter()


def test_cli_flags_fall_back_to_environment(monkeypatch):
    monkeypatch.setenv("MCP_TRANSPORT", "sse")
    monkeypatch.setenv("MCP_PORT", "8123")
    args = main.parse_args([])
    assert (args.transport, args.port) == ("sse", 8123)

    args = main.parse_args(["--transport", "http", "--host", "0.0.0.0", "--port", "9000"])
    assert (args.transport, args.host, args.port) == ("http", "0.0.0.0", 9000)
