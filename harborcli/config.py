"""Location, creation and update of the CLI configuration and data files."""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "HARBOR_CLI_CONFIG"
APP_DIR_NAME = "harbor-cli"
CONFIG_FILE_NAME = "config.yaml"
DATA_FILE_NAME = "data.yaml"

_CURRENT_NAME_KEY = "current-credential-name"
_CREDENTIALS_KEY = "credentials"
_CONFIG_PATH_KEY = "configpath"


class ConfigError(Exception):
    """Raised when the configuration or data file cannot be used."""


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def _lower_keys(data: Mapping[Any, Any]) -> dict[str, Any]:
    return {str(key).lower(): value for key, value in data.items()}


@dataclass
class Credential:
    """A named login to one registry server."""

    name: str = ""
    username: str = ""
    password: str = ""
    server_address: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "username": self.username,
            "password": self.password,
            "serveraddress": self.server_address,
        }


@dataclass
class HarborConfig:
    """The credentials known to the CLI and which one is in use."""

    current_credential_name: str = ""
    credentials: list[Credential] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            _CURRENT_NAME_KEY: self.current_credential_name,
            _CREDENTIALS_KEY: [credential.to_dict() for credential in self.credentials],
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any] | None) -> "HarborConfig":
        """Build a config from parsed YAML, matching keys without regard to case."""
        if data is None:
            return HarborConfig()
        if not isinstance(data, Mapping):
            raise ConfigError("configuration must be a mapping")
        values = _lower_keys(data)
        raw_credentials = values.get(_CREDENTIALS_KEY) or []
        if not isinstance(raw_credentials, list):
            raise ConfigError("'credentials' must be a list")
        credentials = []
        for entry in raw_credentials:
            if not isinstance(entry, Mapping):
                raise ConfigError("each credential must be a mapping")
            fields = _lower_keys(entry)
            credentials.append(
                Credential(
                    name=_as_str(fields.get("name")),
                    username=_as_str(fields.get("username")),
                    password=_as_str(fields.get("password")),
                    server_address=_as_str(fields.get("serveraddress")),
                )
            )
        return HarborConfig(
            current_credential_name=_as_str(values.get(_CURRENT_NAME_KEY)),
            credentials=credentials,
        )


@dataclass
class HarborData:
    """Contents of the data file: where the config file lives."""

    config_path: str = ""


_lock = threading.RLock()
_initialized = False
_current_config: HarborConfig | None = None
_current_data: HarborData | None = None
_init_error: ConfigError | None = None


def _load_yaml(path: str | os.PathLike[str]) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(str(exc)) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} does not hold a YAML mapping")
    return data


def _dump_yaml(path: str | os.PathLike[str], data: Mapping[str, Any]) -> None:
    try:
        with open(path, "w", encoding="utf-8") as handle:
            yaml.safe_dump(dict(data), handle, sort_keys=False, allow_unicode=True)
    except OSError as exc:
        raise ConfigError(str(exc)) from exc


def _set_key(data: dict[str, Any], key: str, value: Any) -> None:
    for existing in [k for k in data if str(k).lower() == key]:
        del data[existing]
    data[key] = value


def _make_dirs(directory: str | os.PathLike[str], what: str) -> None:
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as exc:
        raise ConfigError(f"failed to create {what} directory: {exc}") from exc


def _home() -> Path:
    try:
        return Path.home()
    except (RuntimeError, KeyError) as exc:
        raise ConfigError(f"unable to determine user home directory: {exc}") from exc


def _initialize(cfg_file: str, user_specified_config: bool) -> tuple[HarborConfig, HarborData]:
    data_path, data_dir = get_data_paths()
    config_path = determine_config_path(cfg_file, user_specified_config)
    _make_dirs(data_dir, "data")
    apply_data_file(data_path, config_path)
    ensure_config_file_exists(config_path)
    raw = read_config(config_path)
    try:
        config = HarborConfig.from_dict(raw)
    except ConfigError as exc:
        raise ConfigError(f"failed to unmarshal config file: {exc}") from exc
    return config, HarborData(config_path=config_path)


def init_config(cfg_file: str = "", user_specified_config: bool = False) -> None:
    """Set up the data and config files and load the config, once per process."""
    global _initialized, _current_config, _current_data, _init_error
    with _lock:
        if _initialized:
            return
        _initialized = True
        try:
            config, data = _initialize(cfg_file, user_specified_config)
        except ConfigError as exc:
            _init_error = exc
            log.error("%s", exc)
            raise
        _current_config = config
        _current_data = data


def reset_config() -> None:
    """Forget the loaded configuration so that init_config runs again."""
    global _initialized, _current_config, _current_data, _init_error
    with _lock:
        _initialized = False
        _current_config = None
        _current_data = None
        _init_error = None


def get_data_paths() -> tuple[str, str]:
    """Return the data file path and its directory."""
    data_home = os.environ.get("XDG_DATA_HOME", "")
    if not data_home:
        data_home = str(_home() / ".local" / "share")
    data_dir = os.path.join(data_home, APP_DIR_NAME)
    return os.path.join(data_dir, DATA_FILE_NAME), data_dir


def determine_config_path(cfg_file: str = "", user_specified_config: bool = False) -> str:
    """Pick the config path: explicit flag, then environment, then XDG default."""
    if user_specified_config and cfg_file:
        return os.path.abspath(cfg_file)
    from_env = os.environ.get(CONFIG_ENV_VAR, "")
    if from_env:
        return os.path.abspath(from_env)
    config_home = os.environ.get("XDG_CONFIG_HOME", "")
    if not config_home:
        config_home = str(_home() / ".config")
    return os.path.abspath(os.path.join(config_home, APP_DIR_NAME, CONFIG_FILE_NAME))


def ensure_config_file_exists(harbor_config_path: str) -> None:
    """Create the config file and its directory when they are missing."""
    _make_dirs(os.path.dirname(harbor_config_path) or ".", "config")
    if not os.path.exists(harbor_config_path):
        try:
            create_config_file(harbor_config_path)
        except ConfigError as exc:
            raise ConfigError(f"failed to create config file: {exc}") from exc


def read_config(harbor_config_path: str) -> dict[str, Any]:
    """Return the parsed contents of the config file."""
    try:
        return _load_yaml(harbor_config_path)
    except ConfigError as exc:
        raise ConfigError(
            f"error reading config file: {exc}. Please ensure the config file exists."
        ) from exc


def _current_state() -> None:
    global _initialized
    with _lock:
        _initialized = True
        if _init_error is not None:
            raise ConfigError(f"initialization error: {_init_error}")


def get_current_harbor_config() -> HarborConfig:
    """Return the loaded configuration."""
    _current_state()
    with _lock:
        if _current_config is None:
            raise ConfigError("configuration is not yet initialized")
        return _current_config


def get_current_harbor_data() -> HarborData:
    """Return the loaded data file contents."""
    _current_state()
    with _lock:
        if _current_data is None:
            raise ConfigError("HarborData is not yet initialized")
        return _current_data


def create_data_file(data_file_path: str, initial_config_path: str) -> None:
    """Write a data file pointing at ``initial_config_path`` unless one exists."""
    if os.path.exists(data_file_path):
        return
    _make_dirs(os.path.dirname(data_file_path) or ".", "data")
    config_path = os.path.abspath(initial_config_path)
    try:
        _dump_yaml(data_file_path, {_CONFIG_PATH_KEY: config_path})
    except ConfigError as exc:
        raise ConfigError(f"failed to write data file: {exc}") from exc
    log.info("Data file created at %s with configPath: %s", data_file_path, config_path)


def read_data_file(data_file_path: str) -> HarborData:
    """Read the data file."""
    try:
        raw = _load_yaml(data_file_path)
    except ConfigError as exc:
        raise ConfigError(f"failed to read data file: {exc}") from exc
    return HarborData(config_path=_as_str(_lower_keys(raw).get(_CONFIG_PATH_KEY)))


def apply_data_file(harbor_data_path: str, harbor_config_path: str) -> None:
    """Make the data file point at ``harbor_config_path``."""
    try:
        current = read_data_file(harbor_data_path)
    except ConfigError:
        try:
            create_data_file(harbor_data_path, harbor_config_path)
        except ConfigError as exc:
            raise ConfigError(f"failed to create data file: {exc}") from exc
        return
    if current.config_path != harbor_config_path:
        try:
            update_data_file(harbor_data_path, harbor_config_path)
        except ConfigError as exc:
            raise ConfigError(f"failed to update data file: {exc}") from exc
    elif not current.config_path:
        try:
            create_data_file(harbor_data_path, harbor_config_path)
        except ConfigError as exc:
            raise ConfigError(f"failed to create data file: {exc}") from exc
    else:
        log.debug("Data file already exists with the same config path: %s", harbor_config_path)


def update_data_file(data_file_path: str, new_config_path: str) -> None:
    """Point an existing data file at ``new_config_path``."""
    if not os.path.exists(data_file_path):
        raise ConfigError(f"data file does not exist at {data_file_path}")
    config_path = os.path.abspath(new_config_path)
    try:
        raw = _load_yaml(data_file_path)
    except ConfigError as exc:
        raise ConfigError(f"failed to read existing data file: {exc}") from exc
    _set_key(raw, _CONFIG_PATH_KEY, config_path)
    try:
        _dump_yaml(data_file_path, raw)
    except ConfigError as exc:
        raise ConfigError(f"failed to write updated data file: {exc}") from exc
    log.info("Data file at %s updated with new configPath: %s", data_file_path, config_path)


def create_config_file(config_path: str) -> None:
    """Write an empty configuration unless the file already exists."""
    if os.path.exists(config_path):
        return
    _make_dirs(os.path.dirname(config_path) or ".", "config")
    try:
        _dump_yaml(config_path, HarborConfig().to_dict())
    except ConfigError as exc:
        raise ConfigError(f"failed to write config file: {exc}") from exc
    log.info("Config file created at %s", config_path)


def update_config_file(config: HarborConfig) -> None:
    """Write ``config`` to the current config file and make it the loaded one."""
    global _current_config
    with _lock:
        if _current_data is None:
            raise ConfigError(
                "harbor data is nil – check that your config initialization completed"
            )
        config_path = _current_data.config_path
        if not os.path.exists(config_path):
            raise ConfigError(f"config file does not exist at {config_path}")
        try:
            raw = _load_yaml(config_path)
        except ConfigError as exc:
            raise ConfigError(f"failed to read config file: {exc}") from exc
        for key, value in config.to_dict().items():
            _set_key(raw, key, value)
        try:
            _dump_yaml(config_path, raw)
        except ConfigError as exc:
            raise ConfigError(f"failed to write updated config file: {exc}") from exc
        _current_config = config
    log.info("Updated config file at %s", config_path)


def get_credentials(credential_name: str) -> Credential:
    """Return the loaded credential called ``credential_name``."""
    try:
        config = get_current_harbor_config()
    except ConfigError as exc:
        raise ConfigError(f"failed to get current Harbor configuration: {exc}") from exc
    for credential in config.credentials:
        if credential.name == credential_name:
            return credential
    raise ConfigError(f"credential with name '{credential_name}' not found")


def _load_config_file(config_path: str) -> tuple[dict[str, Any], HarborConfig]:
    if not os.path.exists(config_path):
        raise ConfigError(f"config file does not exist at {config_path}")
    try:
        raw = _load_yaml(config_path)
    except ConfigError as exc:
        raise ConfigError(f"failed to read config file: {exc}") from exc
    try:
        config = HarborConfig.from_dict(raw)
    except ConfigError as exc:
        raise ConfigError(f"failed to unmarshal config file: {exc}") from exc
    return raw, config


def _store_config_file(config_path: str, raw: dict[str, Any], config: HarborConfig) -> None:
    for key, value in config.to_dict().items():
        _set_key(raw, key, value)
    try:
        _dump_yaml(config_path, raw)
    except ConfigError as exc:
        raise ConfigError(f"failed to write updated config file: {exc}") from exc


def add_credentials_to_config_file(credential: Credential, config_path: str) -> None:
    """Append ``credential`` to the config file and make it the current one."""
    raw, config = _load_config_file(config_path)
    config.credentials.append(credential)
    config.current_credential_name = credential.name
    _store_config_file(config_path, raw, config)
    log.info("Added credential '%s' to config file at %s", credential.name, config_path)


def update_credentials_in_config_file(updated_credential: Credential, config_path: str) -> None:
    """Replace the credential of the same name and make it the current one."""
    raw, config = _load_config_file(config_path)
    for index, credential in enumerate(config.credentials):
        if credential.name == updated_credential.name:
            config.credentials[index] = updated_credential
            config.current_credential_name = updated_credential.name
            break
    else:
        raise ConfigError(f"credential with name '{updated_credential.name}' not found")
    _store_config_file(config_path, raw, config)
    log.info(
        "Updated credential '%s' in config file at %s.", updated_credential.name, config_path
    )
    log.info("Switched to context '%s'", updated_credential.name)