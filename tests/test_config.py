from __future__ import annotations

import textwrap

import pytest

from incidentsolver.catalog.models import Intent, Scenario
from incidentsolver.config import SCENARIO_ENV_VAR, AppConfig, load_config


VALID_YAML = """
clock:
  tick_interval_seconds: 60

selection:
  initial_scenario: "normal"
  initial_intent: "detour"

catalog:
  path: null

logging:
  level: "INFO"
  log_dir: "logs/"
"""


@pytest.fixture(autouse=True)
def _clear_scenario_env(monkeypatch) -> None:
    monkeypatch.delenv(SCENARIO_ENV_VAR, raising=False)


def _write_yaml(tmp_path, contents: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(textwrap.dedent(contents))
    return str(path)


def test_load_config_valid(tmp_path) -> None:
    path = _write_yaml(tmp_path, VALID_YAML)

    config = load_config(path)

    assert isinstance(config, AppConfig)
    assert config.clock.tick_interval_seconds == 60
    assert config.selection.initial_scenario == Scenario.NORMAL
    assert config.selection.initial_intent == Intent.DETOUR
    assert config.catalog.path is None
    assert config.log.level == "INFO"
    assert config.log.log_dir == "logs/"


def test_load_config_env_overrides_scenario(tmp_path, monkeypatch) -> None:
    path = _write_yaml(tmp_path, VALID_YAML)

    monkeypatch.setenv(SCENARIO_ENV_VAR, "stoppedHeavy")
    config = load_config(path)

    assert config.selection.initial_scenario == Scenario.STOPPED_HEAVY


def test_load_config_missing_file(tmp_path) -> None:
    missing_path = tmp_path / "does_not_exist.yaml"

    with pytest.raises(ValueError):
        load_config(str(missing_path))


def test_load_config_not_a_mapping(tmp_path) -> None:
    path = _write_yaml(tmp_path, "- just\n- a list\n")

    with pytest.raises(ValueError, match="mapping at the top level"):
        load_config(path)


def test_load_config_missing_clock_section(tmp_path) -> None:
    yaml_text = """
    selection:
      initial_scenario: "normal"
      initial_intent: "hurry"
    catalog:
      path: null
    logging:
      level: "INFO"
      log_dir: "logs/"
    """
    path = _write_yaml(tmp_path, yaml_text)

    with pytest.raises(ValueError, match="clock"):
        load_config(path)


def test_load_config_missing_intent(tmp_path) -> None:
    yaml_text = """
    clock:
      tick_interval_seconds: 60
    selection:
      initial_scenario: "normal"
    catalog:
      path: null
    logging:
      level: "INFO"
      log_dir: "logs/"
    """
    path = _write_yaml(tmp_path, yaml_text)

    with pytest.raises(ValueError, match="initial_intent"):
        load_config(path)


def test_load_config_unknown_scenario(tmp_path) -> None:
    path = _write_yaml(tmp_path, VALID_YAML.replace('"normal"', '"rushHour"'))

    with pytest.raises(ValueError, match="rushHour"):
        load_config(path)


def test_load_config_rejects_non_positive_interval(tmp_path) -> None:
    path = _write_yaml(tmp_path, VALID_YAML.replace("tick_interval_seconds: 60", "tick_interval_seconds: 0"))

    with pytest.raises(ValueError, match="tick_interval_seconds"):
        load_config(path)
