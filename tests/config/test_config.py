from __future__ import annotations

import logging

import pytest

from ddrscores.config import (
    ConfigurationError,
    MissingConfigurationError,
    configure_logging,
    get_sanbai_config,
    get_skill_attack_config,
    optional_env_var,
    require_env_var,
    require_env_vars,
)
from ddrscores.config.logging import LOG_LEVEL_ENV_VAR
from ddrscores.config.roster import (
    ROSTER_ENV_VAR,
    get_roster_from_environment,
    parse_ddr_code,
    parse_player_entry,
    parse_roster,
)
from ddrscores.domain.model import PlayerSeed


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.setenv("MISSING_A", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)
    assert isinstance(exc.value, ConfigurationError)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_optional_env_var_falls_back_on_blank(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  ")
    assert optional_env_var("EXAMPLE_VAR", "fallback") == "fallback"

    monkeypatch.setenv("EXAMPLE_VAR", " set ")
    assert optional_env_var("EXAMPLE_VAR", "fallback") == "set"


def test_site_configs_use_default_base_urls(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DDRSCORES_SANBAI_BASE_URL", raising=False)
    monkeypatch.delenv("DDRSCORES_SKILL_ATTACK_BASE_URL", raising=False)

    sanbai = get_sanbai_config()
    skill_attack = get_skill_attack_config()

    assert sanbai.resilience.base_url == "https://3icecream.com"
    assert sanbai.song_data_path == "/js/songdata.js"
    assert sanbai.scores_path == "/api/follow_scores"
    assert skill_attack.resilience.base_url == "http://skillattack.com/sa4"
    assert skill_attack.encoding == "shift_jis"
    assert skill_attack.resilience.ratelimit is not None


def test_site_configs_honour_base_url_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DDRSCORES_SANBAI_BASE_URL", "http://localhost:8001")
    monkeypatch.setenv("DDRSCORES_SKILL_ATTACK_BASE_URL", "http://localhost:8002/sa4")

    assert get_sanbai_config().resilience.base_url == "http://localhost:8001"
    assert get_skill_attack_config().resilience.base_url == "http://localhost:8002/sa4"


def test_parse_player_entry_accepts_either_account() -> None:
    assert parse_player_entry("Alice:alice:1234-5678") == PlayerSeed("Alice", "alice", 12345678)
    assert parse_player_entry("Bob:bob:") == PlayerSeed("Bob", "bob", None)
    assert parse_player_entry(" Carol : : 87654321 ") == PlayerSeed("Carol", None, 87654321)


@pytest.mark.parametrize(
    "entry",
    ["Alice", "Alice:alice", ":alice:12345678", "Dave::", "Eve:eve:1234"],
)
def test_parse_player_entry_rejects_invalid(entry: str) -> None:
    with pytest.raises(ConfigurationError):
        parse_player_entry(entry)


def test_parse_ddr_code_requires_eight_digits() -> None:
    assert parse_ddr_code("0000-0001") == 1
    with pytest.raises(ConfigurationError, match="8 digits"):
        parse_ddr_code("1234-567X")


def test_parse_roster_rejects_duplicate_names() -> None:
    with pytest.raises(ConfigurationError, match="Alice"):
        parse_roster(["Alice:a:", "Alice:b:"])


def test_roster_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ROSTER_ENV_VAR, "Alice:alice:12345678; ;Bob::87654321")

    assert get_roster_from_environment() == [
        PlayerSeed("Alice", "alice", 12345678),
        PlayerSeed("Bob", None, 87654321),
    ]


def test_roster_from_environment_requires_the_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(ROSTER_ENV_VAR, raising=False)

    with pytest.raises(MissingConfigurationError, match=ROSTER_ENV_VAR):
        get_roster_from_environment()


@pytest.fixture
def basic_config_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, object]]:
    calls: list[dict[str, object]] = []

    def fake_basic_config(**kwargs: object) -> None:
        calls.append(kwargs)

    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)
    return calls


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("debug", logging.DEBUG),
        ("WARNING", logging.WARNING),
        ("15", 15),
        ("nonsense", logging.INFO),
    ],
)
def test_configure_logging_reads_level_from_environment(
    monkeypatch: pytest.MonkeyPatch,
    basic_config_calls: list[dict[str, object]],
    raw: str,
    expected: int,
) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, raw)

    configure_logging()

    assert basic_config_calls[0]["level"] == expected
    assert basic_config_calls[0]["force"] is False


def test_configure_logging_explicit_level_wins(
    monkeypatch: pytest.MonkeyPatch,
    basic_config_calls: list[dict[str, object]],
) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "ERROR")

    configure_logging(level=logging.DEBUG, force=True)

    assert basic_config_calls == [
        {
            "level": logging.DEBUG,
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            "datefmt": "%H:%M:%S",
            "force": True,
        }
    ]


@pytest.mark.usefixtures("basic_config_calls")
def test_configure_logging_quiets_httpx_unless_debugging(monkeypatch: pytest.MonkeyPatch) -> None:
    httpx_logger = logging.getLogger("httpx")
    monkeypatch.setattr(httpx_logger, "level", httpx_logger.level)

    configure_logging(level=logging.INFO)
    assert httpx_logger.level == logging.WARNING

    configure_logging(level=logging.DEBUG)
    assert httpx_logger.level == logging.NOTSET
