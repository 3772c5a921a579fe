import logging
import pytest
from tls_config import (
    Closure,
    DynamicCall,
    ProviderOk,
    TlsConfigError,
    TlsMode,
    load_tls_config,
    load_tls_config_file,
    resolve_tls_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("TLS_ENABLED", raising=False)
    monkeypatch.delenv("TLS_OPTIONAL", raising=False)


def test_defaults():
    config = load_tls_config()
    assert config.enabled is False
    assert config.optional is False
    assert config.provider is None
    assert len(config.base_options) == 0


def test_mapping_loose_keys_become_base_options():
    config = load_tls_config({
        "enabled": True,
        "certfile": "/c.pem",
        "provider": "secrets:fetch",
        "verify": "required",
    })
    assert config.enabled is True
    assert config.provider == DynamicCall("secrets", "fetch")
    assert config.base_options == [("certfile", "/c.pem"), ("verify", "required")]


def test_explicit_options_section_comes_first():
    config = load_tls_config({
        "enabled": True,
        "options": {"cafile": "/ca.pem"},
        "ciphers": "ECDHE+AESGCM",
    })
    assert config.base_options == [("cafile", "/ca.pem"), ("ciphers", "ECDHE+AESGCM")]


def test_configure_alias():
    config = load_tls_config({"enabled": True, "configure": {"module": "secrets", "function": "fetch", "args": [1]}})
    assert config.provider == DynamicCall("secrets", "fetch", (1,))


def test_argument_beats_env_and_mapping(monkeypatch):
    monkeypatch.setenv("TLS_ENABLED", "false")
    config = load_tls_config({"enabled": False}, enabled=True)
    assert config.enabled is True


def test_env_beats_mapping(monkeypatch):
    monkeypatch.setenv("TLS_ENABLED", "yes")
    monkeypatch.setenv("TLS_OPTIONAL", "on")
    config = load_tls_config({"enabled": False, "optional": False})
    assert config.enabled is True
    assert config.optional is True


@pytest.mark.parametrize("value", ["maybe", "2", 7])
def test_invalid_boolean_rejected(value):
    with pytest.raises(TlsConfigError):
        load_tls_config({"enabled": value})


def test_invalid_env_boolean_rejected(monkeypatch):
    monkeypatch.setenv("TLS_ENABLED", "enable-please")
    with pytest.raises(TlsConfigError):
        load_tls_config()


def test_invalid_provider_mapping_rejected():
    with pytest.raises(TlsConfigError):
        load_tls_config({"enabled": True, "provider": {"target": "a:b", "module": "a"}})


def test_provider_argument_callable():
    config = load_tls_config(
        {"enabled": True},
        provider=lambda: ProviderOk([("certfile", "/dyn.pem")]),
        base_options=[("certfile", "/static.pem")],
    )
    assert isinstance(config.provider, Closure)
    decision = resolve_tls_config(config)
    assert decision.options.get("certfile") == "/dyn.pem"


def test_yaml_file_section(tmp_path):
    path = tmp_path / "app.yaml"
    path.write_text(
        "global:\n"
        "  network:\n"
        "    tls:\n"
        "      enabled: true\n"
        "      optional: true\n"
        "      cafile: /etc/ssl/ca.pem\n"
        "      verify: required\n"
    )
    config = load_tls_config_file(str(path), section="global.network.tls")
    decision = resolve_tls_config(config)
    assert decision.mode == TlsMode.OPTIONAL
    assert decision.options == [("cafile", "/etc/ssl/ca.pem"), ("verify", "required")]


def test_yaml_missing_section_is_disabled(tmp_path):
    path = tmp_path / "app.yaml"
    path.write_text("server:\n  port: 9090\n")
    config = load_tls_config_file(str(path))
    assert resolve_tls_config(config).mode == TlsMode.DISABLED


def test_yaml_missing_default_section_warns(tmp_path, caplog):
    path = tmp_path / "app.yaml"
    path.write_text("server:\n  port: 9090\n")
    with caplog.at_level(logging.WARNING, logger="tls_config.config"):
        load_tls_config_file(str(path))
    assert "Section 'tls' not found" in caplog.text


def test_yaml_missing_explicit_section_raises(tmp_path):
    """A mistyped section name is an error, not a silently disabled config."""
    path = tmp_path / "app.yaml"
    path.write_text("global:\n  network:\n    tls:\n      enabled: true\n")
    with pytest.raises(TlsConfigError):
        load_tls_config_file(str(path), section="global.netwrok.tls")


def test_yaml_overrides(tmp_path):
    path = tmp_path / "app.yaml"
    path.write_text("tls:\n  enabled: false\n")
    config = load_tls_config_file(str(path), enabled=True)
    assert config.enabled is True


def test_yaml_missing_file(tmp_path):
    with pytest.raises(TlsConfigError):
        load_tls_config_file(str(tmp_path / "missing.yaml"))


def test_yaml_malformed(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("tls: [unclosed\n")
    with pytest.raises(TlsConfigError):
        load_tls_config_file(str(path))


def test_yaml_section_not_mapping(tmp_path):
    path = tmp_path / "app.yaml"
    path.write_text("tls: true\n")
    with pytest.raises(TlsConfigError):
        load_tls_config_file(str(path))
