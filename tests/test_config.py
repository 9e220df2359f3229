# tests/test_config.py
import pytest

from gwbm.config import (
    BalanceConfig,
    ConfigError,
    InitialStorage,
    from_mapping,
    load_config,
    scenarios_from_normal,
)


def test_defaults_are_published_constants(default_config):
    assert default_config.base_year_inflow == 12.8
    assert default_config.final_year_inflow == 10.3
    assert default_config.base_year_outflow == 18.2
    assert default_config.final_year_outflow == 27.0
    labels = [(b.label, b.initial_storage) for b in default_config.scenario_bounds()]
    assert labels == [("low", 190.0), ("mean", 350.0), ("high", 550.0)]


def test_partial_storage_override_keeps_other_bounds():
    cfg = from_mapping({"scenario_initial_storage": {"high": 600}})
    assert cfg.scenario_initial_storage == InitialStorage(190.0, 350.0, 600.0)


def test_unknown_field_rejected():
    with pytest.raises(ConfigError, match="base_year_inflw"):
        from_mapping({"base_year_inflw": 1.0})


def test_unknown_storage_field_rejected():
    with pytest.raises(ConfigError):
        from_mapping({"scenario_initial_storage": {"median": 300}})


def test_bad_value_rejected():
    with pytest.raises(ConfigError):
        from_mapping({"final_year_outflow": "lots"})


def test_unordered_storage_rejected():
    with pytest.raises(ConfigError):
        from_mapping({"scenario_initial_storage": {"low": 400}})


def test_load_config_from_file(config_file):
    path = config_file('{"base_year_inflow": 13.0, "final_year": 2060, "base_year_net_change": null}')
    cfg = load_config(path)
    assert cfg.base_year_inflow == 13.0
    assert cfg.final_year == 2060
    assert isinstance(cfg.final_year, int)
    assert cfg.net_change_observations() is None


def test_load_config_from_environment(config_file, monkeypatch):
    path = config_file('{"storage_sigma": 100}')
    monkeypatch.setenv("GWBM_CONFIG", str(path))
    assert load_config().storage_sigma == 100.0


def test_no_config_gives_defaults(monkeypatch):
    monkeypatch.delenv("GWBM_CONFIG", raising=False)
    assert load_config() == BalanceConfig()


def test_invalid_json(config_file):
    with pytest.raises(ConfigError):
        load_config(config_file("{not json"))


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.json")


def test_top_level_must_be_object(config_file):
    with pytest.raises(ConfigError):
        load_config(config_file("[1, 2, 3]"))


def test_scenarios_from_normal_90_percent():
    s = scenarios_from_normal(350.0, 115.0, ci=0.90)
    assert s.mean == 350.0
    assert s.low == pytest.approx(350.0 - 1.6449 * 115.0, abs=0.01)
    assert s.high == pytest.approx(350.0 + 1.6449 * 115.0, abs=0.01)


def test_scenarios_from_normal_bad_level():
    with pytest.raises(ConfigError):
        scenarios_from_normal(350.0, 115.0, ci=1.5)


# ---- Year fields ----
@pytest.mark.parametrize("key,value", [
    ("final_year", 2050.7),
    ("base_year", True),
    ("step", 0.5),
    ("observation_final_year", False),
])
def test_year_fields_must_be_whole_numbers(key, value):
    with pytest.raises(ConfigError, match=key):
        from_mapping({key: value})


def test_whole_float_year_accepted():
    cfg = from_mapping({"final_year": 2060.0, "observation_base_year": 1995})
    assert cfg.final_year == 2060
    assert isinstance(cfg.final_year, int)
    assert cfg.observation_base_year == 1995
    assert cfg.inflow_observations()[0].year == 1995


def test_observation_years_default_to_published_ones(default_config):
    years = [o.year for o in default_config.inflow_observations()]
    assert years == [2000, 2050]
    assert [o.year for o in default_config.net_change_observations()] == [2000, 2050]
