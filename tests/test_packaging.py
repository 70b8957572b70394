from pathlib import Path

import pytest

import springcurve
from springcurve.app import main
from springcurve.core import config
from springcurve.services import scene


ROOT = Path(__file__).parent.parent


def test_modules_live_under_springcurve():
    for module in (main, config, scene):
        assert module.__name__.startswith("springcurve.")

    assert main.VERSION == springcurve.__version__


def test_only_springcurve_is_installed():
    tomllib = pytest.importorskip("tomllib")
    with open(ROOT / "pyproject.toml", "rb") as f:
        project = tomllib.load(f)

    setuptools = project["tool"]["setuptools"]
    assert setuptools["packages"]["find"]["include"] == ["springcurve*"]
    assert "py-modules" not in setuptools
    assert "package-dir" not in setuptools
    assert project["project"]["version"] == springcurve.__version__


def test_bundled_config_ships_with_package():
    assert config.DEFAULT_CONFIG_PATH == Path(springcurve.__file__).resolve().parent / "config.yaml"
