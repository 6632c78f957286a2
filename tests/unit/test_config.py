import pytest
from pydantic import ValidationError

from bundle_viewer.config import ViewerConfig, load_config


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("BUNDLE_PATH", "FRONTEND_DIR", "VIEWER_HOST", "VIEWER_PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    config = load_config()

    assert config.bundle_path == "nvsupport.json.gz"
    assert config.frontend_dir == "frontend"
    assert config.port == 8080
    assert config.log_level == "INFO"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BUNDLE_PATH", "/data/bundle.json.gz")
    monkeypatch.setenv("VIEWER_PORT", "9000")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = load_config()

    assert config.bundle_path == "/data/bundle.json.gz"
    assert config.port == 9000
    assert config.log_level == "DEBUG"


def test_port_must_be_valid() -> None:
    with pytest.raises(ValidationError):
        ViewerConfig(port=0)


@pytest.mark.parametrize(
    ("name", "value"),
    [("VIEWER_PORT", "abc"), ("VIEWER_PORT", "70000"), ("LOG_LEVEL", "verbose")],
)
def test_invalid_environment_is_a_validation_error(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        load_config()
