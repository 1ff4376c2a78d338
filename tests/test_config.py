from pathlib import Path

import pytest
from pydantic import ValidationError

from storefront_smoke.config import BrowserConfig, SuiteConfig, load_config, parse_window_size


def test_load_config_reads_env_file(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text(
        "\n".join(
            [
                "STOREFRONT_SMOKE_BASE_URL=https://shop.example.com",
                "STOREFRONT_SMOKE_BROWSER__HEADLESS=false",
                "STOREFRONT_SMOKE_BROWSER__WAIT_TIMEOUT=30",
                "STOREFRONT_SMOKE_NOTIFICATIONS__CHANNEL=silent",
            ]
        )
    )

    config = load_config(env_file=env_path)

    assert config.base_url == "https://shop.example.com"
    assert config.browser.headless is False
    assert config.browser.wait_timeout == 30
    assert config.notifications.channel == "silent"


def test_load_config_prioritises_overrides(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text("STOREFRONT_SMOKE_BASE_URL=https://env.example.com\n")

    config_path = tmp_path / "suite.yaml"
    config_path.write_text(
        "\n".join(
            [
                "base_url: https://file.example.com",
                "scenarios: [hero_heading, footer_present]",
                "browser:",
                "  window_size: 1024x768",
                "  implicit_timeout: 5",
            ]
        )
    )

    config = load_config(
        config_path,
        env_file=env_path,
        browser={"window_size": "375x667"},
    )

    assert config.base_url == "https://file.example.com"
    assert config.scenarios == ["hero_heading", "footer_present"]
    assert config.browser.window_size == (375, 667)
    assert config.browser.implicit_timeout == 5


def test_defaults_match_ci_friendly_chrome_setup() -> None:
    config = SuiteConfig()

    assert config.base_url == "http://localhost:5173"
    assert config.scenarios is None
    assert config.browser.headless is True
    assert config.browser.window_size == (1920, 1080)
    assert config.browser.implicit_timeout == 10
    assert config.browser.wait_timeout == 15
    assert config.browser.launch_args() == [
        "--no-sandbox",
        "--disable-dev-shm-usage",
        "--disable-gpu",
        "--window-size=1920,1080",
    ]


def test_launch_args_follow_flags() -> None:
    config = BrowserConfig(no_sandbox=False, disable_gpu=False, window_size="800,600")

    assert config.launch_args() == ["--disable-dev-shm-usage", "--window-size=800,600"]


@pytest.mark.parametrize(
    ("value", "expected"),
    [("1920x1080", (1920, 1080)), ("375 X 667", (375, 667)), ("800,600", (800, 600)), ((10, 20), (10, 20))],
)
def test_parse_window_size(value, expected) -> None:
    assert parse_window_size(value) == expected


@pytest.mark.parametrize("value", ["big", "0x100", "10x", 42])
def test_parse_window_size_rejects_garbage(value) -> None:
    with pytest.raises(ValueError):
        parse_window_size(value)


def test_base_url_must_be_http() -> None:
    with pytest.raises(ValidationError):
        SuiteConfig(base_url="shop.example.com")
