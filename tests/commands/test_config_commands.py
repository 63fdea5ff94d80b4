import pytest
import typer
from keyring.errors import KeyringError

from platsync.commands import config as config_commands
from platsync.constants import ACCESS_TOKEN_ENV_VAR
from platsync.utils.config_store import ConfigStore


@pytest.fixture
def store(tmp_path, mocker):
    store = ConfigStore(base_dir=tmp_path)
    mocker.patch("platsync.commands.config.config_store", store)
    mocker.patch("platsync.commands.config.setup_logging")
    return store


def test_set_token_saves_to_keyring(store, mocker):
    save = mocker.patch.object(store, "save_access_token")
    success = mocker.patch("platsync.commands.config.success")

    config_commands.set_token(token="  sbp_new_token  ")

    save.assert_called_once_with("sbp_new_token")
    success.assert_called_once()


def test_set_token_prompts_when_missing(store, mocker):
    save = mocker.patch.object(store, "save_access_token")
    prompt = mocker.patch("platsync.commands.config.typer.prompt", return_value="sbp_prompted")

    config_commands.set_token(token=None)

    prompt.assert_called_once()
    save.assert_called_once_with("sbp_prompted")


def test_set_token_rejects_blank(store, mocker):
    mocker.patch("platsync.commands.config.typer.prompt", return_value="   ")
    error = mocker.patch("platsync.commands.config.error")

    with pytest.raises(typer.Exit):
        config_commands.set_token(token=None)

    error.assert_called_once()


def test_set_token_keyring_failure(store, mocker):
    mocker.patch.object(store, "save_access_token", side_effect=KeyringError("no backend"))
    error = mocker.patch("platsync.commands.config.error")
    info = mocker.patch("platsync.commands.config.info")

    with pytest.raises(typer.Exit):
        config_commands.set_token(token="sbp_new_token")

    error.assert_called_once()
    assert ACCESS_TOKEN_ENV_VAR in info.call_args[0][0]


def test_set_url_updates_settings(store):
    config_commands.set_url(api_url="https://api.test/", data_plane_url="http://{project_ref}.local")

    assert store.get_api_url() == "https://api.test"
    assert store.get_data_plane_url() == "http://{project_ref}.local"


def test_set_url_requires_an_option(store, mocker):
    mocker.patch("platsync.commands.config.error")

    with pytest.raises(typer.Exit):
        config_commands.set_url(api_url=None, data_plane_url=None)


def test_set_url_rejects_template_without_placeholder(store, mocker):
    error = mocker.patch("platsync.commands.config.error")

    with pytest.raises(typer.Exit):
        config_commands.set_url(api_url=None, data_plane_url="https://fixed.example.com")

    assert "{project_ref}" in error.call_args[0][0]
    assert store.get_settings() == {}


def test_show_masks_token(store, mocker):
    mocker.patch.dict("os.environ", {ACCESS_TOKEN_ENV_VAR: "sbp_0123456789abcdef"})
    panel = mocker.patch("platsync.commands.config.display_panel")

    config_commands.show()

    content = panel.call_args[0][0]
    assert "sbp_0123456789abcdef" not in content
    assert "sbp_...cdef" in content
    assert f"environment ({ACCESS_TOKEN_ENV_VAR})" in content


def test_show_without_token(store, mocker):
    mocker.patch.dict("os.environ", {ACCESS_TOKEN_ENV_VAR: ""})
    mocker.patch.object(store, "get_access_token", return_value=None)
    panel = mocker.patch("platsync.commands.config.display_panel")

    config_commands.show()

    assert "access_token: not set" in panel.call_args[0][0]


def test_set_log_level_valid(store, mocker):
    success = mocker.patch("platsync.commands.config.success")

    config_commands.set_log_level(level="debug")

    assert store.get_settings()["log_level"] == "DEBUG"
    success.assert_called_once()


def test_set_log_level_invalid(store, mocker):
    error = mocker.patch("platsync.commands.config.error")

    with pytest.raises(typer.Exit):
        config_commands.set_log_level(level="verbose")

    error.assert_called_once()
    assert "log_level" not in store.get_settings()


def test_get_log_level_default(store, mocker):
    info = mocker.patch("platsync.commands.config.info")

    config_commands.get_log_level()

    info.assert_called_once_with("Current log level: INFO")
