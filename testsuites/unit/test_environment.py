import dataclasses

import pytest
import yaml

from storefront_tools.common.environment import (
    ConfigurationError,
    Credentials,
    CredentialsNotFoundError,
    EnvironmentSettings,
    get_browser_config,
    get_credentials,
    load_settings,
)


@pytest.fixture
def no_file(tmp_path):
    return tmp_path / "missing.yaml"


def test_defaults_without_environment(no_file):
    settings = load_settings(no_file, environ={})

    assert settings.base_url == "http://automationpractice.com/index.php"
    assert settings.browser == "chrome"
    assert settings.headless is False
    assert settings.concurrency == 1
    assert settings.test_timeout_ms == 30000
    assert settings.retry_count == 0
    assert settings.screenshot_on_fail is True
    assert settings.video_recording is False
    assert settings.screenshot_path == "screenshots/"
    assert settings.video_path == "videos/"
    assert settings.assertion_timeout_ms == 10000
    assert settings.selector_timeout_ms == 10000
    assert settings.page_request_timeout_ms == 10000


def test_environment_values_are_parsed(no_file):
    settings = load_settings(no_file, environ={
        "BASE_URL": "http://shop.test/index.php",
        "BROWSER": "firefox",
        "HEADLESS": "TRUE",
        "CONCURRENCY": "4",
        "TEST_TIMEOUT": "60000",
        "RETRY_COUNT": "2",
        "SCREENSHOT_ON_FAIL": "false",
        "VIDEO_RECORDING": "true",
        "LOG_LEVEL": "debug",
        "CI": "true",
    })

    assert settings.base_url == "http://shop.test/index.php"
    assert settings.browser == "firefox"
    assert settings.headless is True
    assert settings.concurrency == 4
    assert settings.test_timeout_ms == 60000
    assert settings.retry_count == 2
    assert settings.screenshot_on_fail is False
    assert settings.video_recording is True
    assert settings.log_level == "debug"
    assert settings.is_ci is True
    assert settings.is_ci_github is False


@pytest.mark.parametrize("raw", ["yes", "1", "", "True "])
def test_headless_only_for_literal_true(no_file, raw):
    settings = load_settings(no_file, environ={"HEADLESS": raw})
    assert settings.headless is (raw.strip().lower() == "true")


@pytest.mark.parametrize("raw", ["no", "0", "", "FALSE"])
def test_screenshot_on_fail_disabled_only_by_false(no_file, raw):
    settings = load_settings(no_file, environ={"SCREENSHOT_ON_FAIL": raw})
    assert settings.screenshot_on_fail is (raw.lower() != "false")


@pytest.mark.parametrize("raw", ["abc", "0", "-3", ""])
def test_invalid_numbers_fall_back(no_file, raw):
    settings = load_settings(no_file, environ={"CONCURRENCY": raw, "TEST_TIMEOUT": raw, "RETRY_COUNT": raw})
    assert settings.concurrency == 1
    assert settings.test_timeout_ms == 30000
    assert settings.retry_count == 0


def test_yaml_layer_sits_between_defaults_and_environment(tmp_path):
    config_path = tmp_path / "environment.yaml"
    config_path.write_text(
        yaml.dump({"browser": "edge", "concurrency": 3, "video_recording": True}),
        encoding="utf-8",
    )

    settings = load_settings(config_path, environ={"BROWSER": "safari"})

    assert settings.browser == "safari"
    assert settings.concurrency == 3
    assert settings.video_recording is True


def test_invalid_yaml_raises(tmp_path):
    config_path = tmp_path / "environment.yaml"
    config_path.write_text("browser: [chrome", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_settings(config_path, environ={})


def test_settings_are_immutable(no_file):
    settings = load_settings(no_file, environ={})

    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.browser = "firefox"
    with pytest.raises(TypeError):
        settings.users["intruder"] = Credentials("x@example.com", "x")


def test_default_credentials(no_file):
    settings = load_settings(no_file, environ={})

    user = get_credentials(settings, "testUser1")
    assert user == Credentials("Harrison30@gmail.com", "oO_PI6jocB1JOLN")
    assert get_credentials(settings, "testUser2").email == "Bryon55@gmail.com"


def test_credentials_from_environment(no_file):
    settings = load_settings(no_file, environ={
        "TEST_USER1_EMAIL": "qa@shop.test",
        "TEST_USER1_PASSWORD": "pw-1",
    })

    assert get_credentials(settings, "testUser1") == Credentials("qa@shop.test", "pw-1")


def test_unknown_credentials_key(no_file):
    settings = load_settings(no_file, environ={})

    with pytest.raises(CredentialsNotFoundError) as exc_info:
        get_credentials(settings, "admin")

    assert exc_info.value.key == "admin"
    assert str(exc_info.value) == "User credentials not found for key: admin"


def test_extra_users_from_yaml(tmp_path):
    config_path = tmp_path / "environment.yaml"
    config_path.write_text(
        yaml.dump({"users": {"testUser3": {"email": "c@shop.test", "password": "pw-3"}}}),
        encoding="utf-8",
    )

    settings = load_settings(config_path, environ={})

    assert get_credentials(settings, "testUser3").password == "pw-3"
    assert get_credentials(settings, "testUser1").email == "Harrison30@gmail.com"


def test_browser_config():
    assert get_browser_config(EnvironmentSettings(browser="chrome")) == "chrome"
    assert get_browser_config(EnvironmentSettings(browser="firefox", headless=True)) == "firefox:headless"
