import dataclasses
import os

import pytest
import yaml

from harborcli.config import (
    ConfigError,
    Credential,
    HarborConfig,
    HarborData,
    add_credentials_to_config_file,
    apply_data_file,
    create_config_file,
    create_data_file,
    determine_config_path,
    ensure_config_file_exists,
    get_credentials,
    get_current_harbor_config,
    get_current_harbor_data,
    get_data_paths,
    init_config,
    read_config,
    read_data_file,
    reset_config,
    update_config_file,
    update_credentials_in_config_file,
    update_data_file,
)

PASSWORD = "password"


def _cred(name, username="admin", password=PASSWORD):
    return Credential(
        name=name,
        username=username,
        password=password,
        server_address="https://registry.example.com",
    )


@pytest.fixture(autouse=True)
def _fresh_state(monkeypatch, tmp_path):
    reset_config()
    monkeypatch.delenv("HARBOR_CLI_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    yield
    reset_config()


def test_determine_config_path_user_specified(tmp_path):
    target = tmp_path / "mine.yaml"
    assert determine_config_path(str(target), True) == str(target)


def test_determine_config_path_ignores_file_when_not_user_specified(tmp_path):
    expected = str(tmp_path / "cfg" / "harbor-cli" / "config.yaml")
    assert determine_config_path(str(tmp_path / "other.yaml"), False) == expected


def test_determine_config_path_from_environment(monkeypatch, tmp_path):
    target = tmp_path / "env.yaml"
    monkeypatch.setenv("HARBOR_CLI_CONFIG", str(target))
    assert determine_config_path("", False) == str(target)


def test_determine_config_path_relative_is_made_absolute():
    path = determine_config_path("relative.yaml", True)
    assert os.path.isabs(path)
    assert path == os.path.join(os.getcwd(), "relative.yaml")


def test_get_data_paths(tmp_path):
    data_path, data_dir = get_data_paths()
    assert data_dir == str(tmp_path / "data" / "harbor-cli")
    assert data_path == os.path.join(data_dir, "data.yaml")


def test_create_config_file_writes_empty_config(tmp_path):
    path = str(tmp_path / "nested" / "config.yaml")
    create_config_file(path)
    raw = read_config(path)
    assert HarborConfig.from_dict(raw) == HarborConfig()
    assert raw["credentials"] == []


def test_create_config_file_keeps_existing(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("current-credential-name: keep\n", encoding="utf-8")
    create_config_file(str(path))
    assert read_config(str(path)) == {"current-credential-name": "keep"}


def test_ensure_config_file_exists_creates_directories(tmp_path):
    path = tmp_path / "a" / "b" / "config.yaml"
    ensure_config_file_exists(str(path))
    assert path.is_file()


def test_read_config_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="error reading config file"):
        read_config(str(tmp_path / "absent.yaml"))


def test_data_file_round_trip(tmp_path):
    data_path = str(tmp_path / "d" / "data.yaml")
    config_path = str(tmp_path / "config.yaml")
    create_data_file(data_path, config_path)
    assert read_data_file(data_path) == HarborData(config_path=config_path)


def test_read_data_file_missing(tmp_path):
    with pytest.raises(ConfigError, match="failed to read data file"):
        read_data_file(str(tmp_path / "none.yaml"))


def test_read_data_file_key_case_insensitive(tmp_path):
    path = tmp_path / "data.yaml"
    path.write_text("configPath: /some/where.yaml\n", encoding="utf-8")
    assert read_data_file(str(path)).config_path == "/some/where.yaml"


def test_apply_data_file_creates_then_updates(tmp_path):
    data_path = str(tmp_path / "data.yaml")
    first = str(tmp_path / "first.yaml")
    second = str(tmp_path / "second.yaml")
    apply_data_file(data_path, first)
    assert read_data_file(data_path).config_path == first
    apply_data_file(data_path, second)
    assert read_data_file(data_path).config_path == second


def test_update_data_file_missing(tmp_path):
    with pytest.raises(ConfigError, match="data file does not exist"):
        update_data_file(str(tmp_path / "none.yaml"), str(tmp_path / "c.yaml"))


def test_update_data_file_preserves_other_keys(tmp_path):
    path = tmp_path / "data.yaml"
    path.write_text("configpath: /old.yaml\nextra: kept\n", encoding="utf-8")
    new_path = str(tmp_path / "new.yaml")
    update_data_file(str(path), new_path)
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert raw["extra"] == "kept"
    assert read_data_file(str(path)).config_path == new_path


def test_init_config_sets_up_everything(tmp_path):
    config_path = tmp_path / "mine" / "config.yaml"
    init_config(str(config_path), True)
    assert config_path.is_file()
    assert get_current_harbor_config() == HarborConfig()
    assert get_current_harbor_data().config_path == str(config_path)
    data_path, _ = get_data_paths()
    assert read_data_file(data_path).config_path == str(config_path)


def test_init_config_runs_only_once(tmp_path):
    first = str(tmp_path / "first.yaml")
    init_config(first, True)
    init_config(str(tmp_path / "second.yaml"), True)
    assert get_current_harbor_data().config_path == first
    assert not (tmp_path / "second.yaml").exists()


def test_init_config_loads_existing_credentials(tmp_path):
    config_path = tmp_path / "config.yaml"
    config = HarborConfig(current_credential_name="one", credentials=[_cred("one")])
    config_path.write_text(yaml.safe_dump(config.to_dict()), encoding="utf-8")
    init_config(str(config_path), True)
    assert get_current_harbor_config() == config


def test_init_config_bad_yaml_records_error(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        init_config(str(config_path), True)
    with pytest.raises(ConfigError, match="initialization error"):
        get_current_harbor_config()


def test_get_current_config_before_init():
    with pytest.raises(ConfigError, match="not yet initialized"):
        get_current_harbor_config()
    with pytest.raises(ConfigError, match="not yet initialized"):
        get_current_harbor_data()


def test_config_dict_round_trip():
    config = HarborConfig(
        current_credential_name="two", credentials=[_cred("one"), _cred("two", "bob")]
    )
    assert HarborConfig.from_dict(config.to_dict()) == config


def test_from_dict_keys_case_insensitive():
    raw = {
        "Current-Credential-Name": "x",
        "Credentials": [
            {"Name": "x", "UserName": "admin", "Password": "password", "ServerAddress": "h"}
        ],
    }
    config = HarborConfig.from_dict(raw)
    assert config.current_credential_name == "x"
    assert config.credentials[0].server_address == "h"
    assert config.credentials[0].username == "admin"


def test_from_dict_rejects_bad_credentials():
    with pytest.raises(ConfigError):
        HarborConfig.from_dict({"credentials": "nope"})


def test_update_config_file_without_init():
    with pytest.raises(ConfigError, match="harbor data is nil"):
        update_config_file(HarborConfig())


def test_update_config_file_and_get_credentials(tmp_path):
    config_path = tmp_path / "config.yaml"
    init_config(str(config_path), True)
    credential = _cred("main")
    new_config = HarborConfig(current_credential_name="main", credentials=[credential])
    update_config_file(new_config)
    assert get_credentials("main") == credential
    assert HarborConfig.from_dict(read_config(str(config_path))) == new_config


def test_get_credentials_missing_name(tmp_path):
    init_config(str(tmp_path / "config.yaml"), True)
    with pytest.raises(ConfigError, match="not found"):
        get_credentials("ghost")


def test_add_credentials_to_config_file(tmp_path):
    path = str(tmp_path / "config.yaml")
    create_config_file(path)
    add_credentials_to_config_file(_cred("one"), path)
    add_credentials_to_config_file(_cred("two"), path)
    config = HarborConfig.from_dict(read_config(path))
    assert [c.name for c in config.credentials] == ["one", "two"]
    assert config.current_credential_name == "two"


def test_add_credentials_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="config file does not exist"):
        add_credentials_to_config_file(_cred("one"), str(tmp_path / "none.yaml"))


def test_update_credentials_in_config_file(tmp_path):
    path = str(tmp_path / "config.yaml")
    create_config_file(path)
    add_credentials_to_config_file(_cred("one"), path)
    add_credentials_to_config_file(_cred("two"), path)
    changed = dataclasses.replace(_cred("one"), username="bob")
    update_credentials_in_config_file(changed, path)
    config = HarborConfig.from_dict(read_config(path))
    assert config.current_credential_name == "one"
    assert config.credentials[0] == changed
    assert len(config.credentials) == 2


def test_update_credentials_unknown_name(tmp_path):
    path = str(tmp_path / "config.yaml")
    create_config_file(path)
    with pytest.raises(ConfigError, match="not found"):
        update_credentials_in_config_file(_cred("ghost"), path)