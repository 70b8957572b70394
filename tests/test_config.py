import pytest
from pydantic import ValidationError

from springcurve.core.config import (
    Settings,
    CurveSettings,
    PhysicsSettings,
    load_settings,
    resolve_config_path,
    DEFAULT_CONFIG_PATH,
    CONFIG_ENV_VAR
)


def test_defaults():
    settings = Settings()

    assert settings.physics.stiffness == 80.0
    assert settings.physics.damping == 10.0
    assert settings.physics.max_dt == 0.1
    assert settings.curve.steps == 100
    assert settings.curve.tangent_interval == 10
    assert settings.layout.compact_breakpoint == 768.0
    assert settings.input.touch_hit_radius == 40.0


def test_bundled_config_matches_defaults():
    assert DEFAULT_CONFIG_PATH.exists()
    assert load_settings(DEFAULT_CONFIG_PATH) == Settings()


def test_partial_file_keeps_other_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("physics:\n  stiffness: 200\ncurve:\n  steps: 40\n", encoding="utf-8")

    settings = load_settings(path)

    assert settings.physics.stiffness == 200.0
    assert settings.physics.damping == 10.0
    assert settings.curve.steps == 40
    assert settings.server.port == 8000


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_settings(path) == Settings()


def test_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "nope.yaml") == Settings()


def test_env_var_selects_file(tmp_path, monkeypatch):
    path = tmp_path / "env.yaml"
    path.write_text("loop:\n  fps: 30\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert resolve_config_path() == path
    assert load_settings().loop.fps == 30.0


def test_explicit_path_beats_env_var(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "env.yaml"))
    assert resolve_config_path("other.yaml").name == "other.yaml"


def test_invalid_value_rejected(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("physics:\n  stiffness: -1\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_settings(path)


@pytest.mark.parametrize("kwargs", [
    {"line_length_min": 500.0, "line_length_max": 100.0},
    {"percent_min": 80.0, "percent_max": 20.0},
    {"steps": 0},
])
def test_curve_ranges_validated(kwargs):
    with pytest.raises(ValidationError):
        CurveSettings(**kwargs)


def test_physics_section_builds_spring_config():
    config = PhysicsSettings(stiffness=120.0, damping=6.0, max_dt=0.05).spring_config()

    assert config.stiffness == 120.0
    assert config.damping == 6.0
    assert config.max_dt == 0.05


def test_settings_are_frozen():
    settings = Settings()
    with pytest.raises(ValidationError):
        settings.physics.stiffness = 1.0
