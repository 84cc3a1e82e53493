from __future__ import annotations

import pytest

from commitgen_relay.common.config import DEFAULT_MAX_BODY_BYTES, Settings, load_settings


def test_defaults() -> None:
    s = load_settings(env={})
    assert s == Settings()
    assert s.port == 3000
    assert s.max_body_bytes == DEFAULT_MAX_BODY_BYTES == 50 * 1024 * 1024
    assert s.cors_origins == ["*"]


def test_env_values_are_parsed() -> None:
    s = load_settings(env={
        "GEMINI_API_KEY": "k",
        "PORT": "8080",
        "UPSTREAM_TIMEOUT": "5.5",
        "CORS_ORIGINS": "http://a, http://b",
    })
    assert s.api_key == "k"
    assert s.port == 8080
    assert s.timeout_s == 5.5
    assert s.cors_origins == ["http://a", "http://b"]


def test_env_overrides_yaml(tmp_path) -> None:  # noqa: ANN001
    cfg = tmp_path / "relay.yaml"
    cfg.write_text("port: 4000\nmodel: gemini-yaml\ncors_origins: [http://x]\n", encoding="utf-8")
    s = load_settings(config_path=cfg, env={"PORT": "5000"})
    assert s.port == 5000
    assert s.model == "gemini-yaml"
    assert s.cors_origins == ["http://x"]


def test_config_path_from_env(tmp_path) -> None:  # noqa: ANN001
    cfg = tmp_path / "relay.yaml"
    cfg.write_text("max_tokens: 64\n", encoding="utf-8")
    s = load_settings(env={"COMMITGEN_CONFIG": str(cfg)})
    assert s.max_tokens == 64


def test_overrides_win_and_none_is_ignored() -> None:
    s = load_settings(env={"PORT": "5000", "HOST": "127.0.0.1"}, port=6000, host=None)
    assert s.port == 6000
    assert s.host == "127.0.0.1"


def test_malformed_int_names_variable() -> None:
    with pytest.raises(ValueError, match="PORT"):
        load_settings(env={"PORT": "abc"})


def test_unknown_yaml_key(tmp_path) -> None:  # noqa: ANN001
    cfg = tmp_path / "relay.yaml"
    cfg.write_text("prot: 1\n", encoding="utf-8")
    with pytest.raises(ValueError, match="prot"):
        load_settings(config_path=cfg, env={})


def test_null_yaml_values_fall_back_to_defaults(tmp_path) -> None:  # noqa: ANN001
    cfg = tmp_path / "relay.yaml"
    cfg.write_text("template_path:\nport: null\nmodel: gemini-yaml\n", encoding="utf-8")
    s = load_settings(config_path=cfg, env={})
    assert s.template_path is None
    assert s.port == 3000
    assert s.model == "gemini-yaml"
