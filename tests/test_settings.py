import pytest

from pulse.dates import DateAcceptancePolicy
from pulse.settings import Settings, get_settings, get_zone_config, normalize_settings


def test_defaults_from_empty_environment():
    assert normalize_settings({}) == Settings()


def test_values_are_parsed_and_clamped():
    s = normalize_settings(
        {
            "PULSE_SHEET_ID": " abc123 ",
            "PULSE_SEPARATOR": ";",
            "PULSE_TRAILING_DAYS": "3",
            "PULSE_EXTRA_DATES": "2025-06-03, 2025-06-04",
            "PULSE_MONTHS": "2025-05",
            "PULSE_FIRST_WEEKDAY": "9",
            "PULSE_DEMO_FALLBACK": "no",
            "PULSE_DEFAULT_CAPACITY": "oops",
        }
    )
    assert s.sheet_id == "abc123"
    assert s.separator == ";"
    assert s.first_weekday == 6
    assert s.demo_fallback is False
    assert s.default_capacity == 10
    assert s.date_policy() == DateAcceptancePolicy(trailing_days=3, extra_dates=("2025-06-03", "2025-06-04"), months=("2025-05",))


def test_unknown_separator_falls_back_to_comma():
    assert normalize_settings({"PULSE_SEPARATOR": "|"}).separator == ","


def test_zone_config_uses_override_files(tmp_path):
    capacities = tmp_path / "caps.csv"
    capacities.write_text("zone,capacity\nZ-Tech,50\n", encoding="utf-8")
    s = normalize_settings({"PULSE_ZONE_CAPACITIES": str(capacities), "PULSE_DEFAULT_CAPACITY": "7"})
    zones = s.zone_config()
    assert zones.capacity("Z-Tech") == 50
    assert zones.capacity("elsewhere") == 7


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    get_zone_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_zone_config.cache_clear()


def test_get_settings_reads_dotenv_file(tmp_path, monkeypatch, fresh_settings):
    (tmp_path / ".env").write_text("PULSE_SEPARATOR=;\nPULSE_TRAILING_DAYS=4\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    for key in ["PULSE_SEPARATOR", "PULSE_TRAILING_DAYS"]:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)

    s = get_settings()
    assert s.separator == ";"
    assert s.trailing_days == 4


def test_environment_wins_over_dotenv_file(tmp_path, monkeypatch, fresh_settings):
    (tmp_path / ".env").write_text("PULSE_SEPARATOR=;\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PULSE_SEPARATOR", ",")
    assert get_settings().separator == ","


def test_zone_config_is_cached(monkeypatch, fresh_settings):
    monkeypatch.delenv("PULSE_ZONE_ALIASES", raising=False)
    monkeypatch.delenv("PULSE_ZONE_CAPACITIES", raising=False)
    assert get_zone_config() is get_zone_config()
