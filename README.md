# harborcli

Building blocks for a command-line client of a Harbor container registry:

- input validation and formatting helpers,
- a YAML configuration store for named registry credentials,
- AES-GCM encryption of stored secrets with a pluggable keyring,
- terminal tables, numbered selection lists and question-by-question forms
  for registry resources.

Install with its test extra to run the tests:

```
pip install -e ".[test]"
pytest
```

## Helpers

`harborcli.helpers` holds the small functions used by everything else.

```python
from harborcli.helpers import (
    format_url,
    format_size,
    parse_project_repo,
    parse_project_repo_reference,
    sanitize_server_address,
    validate_project_name,
    validate_storage_limit,
)

format_url("demo.example.com/")                      # "https://demo.example.com"
format_size(5 * 1024 * 1024)                         # "5.00MiB"
parse_project_repo("library/nginx")                  # ("library", "nginx")
parse_project_repo_reference("library/nginx/latest") # ("library", "nginx", "latest")
sanitize_server_address("https://demo.example.com")  # "demo-example-com"
validate_project_name("library")                     # True
validate_storage_limit("-1")                         # -1 (no limit)
```

- `format_created_time(timestamp, now=None)` turns an RFC 3339 string or a
  `datetime` into `"N minute ago"`, `"N hour ago"` or `"N day ago"`.
- `validate_user_name`, `validate_email`, `validate_config_path`,
  `validate_fl` (first and last name), `validate_tag_name`,
  `validate_project_name` and `validate_registry_name` return a boolean.
- `validate_password` returns the password or raises `ValidationError`
  saying which rule it breaks (length 8–256, a lower-case letter, an
  upper-case letter, a digit). `validate_storage_limit` returns the limit as
  an integer between -1 and 1024 or raises `ValidationError`.
- The `parse_*` functions raise `ValidationError` on malformed input.
- `print_format(resp, "json" | "yaml")` prints dataclasses, mappings and
  lists as JSON or YAML (`print_payload_json`, `print_payload_yaml`); any
  other format raises `ValidationError`.

## Configuration

`harborcli.config` keeps a list of named `Credential`s in a YAML file,
described by `HarborConfig`. The file is found, in order, from an explicit
path, the `HARBOR_CLI_CONFIG` environment variable, or
`$XDG_CONFIG_HOME/harbor-cli/config.yaml` (default `~/.config`). A data file
at `$XDG_DATA_HOME/harbor-cli/data.yaml` (default `~/.local/share`)
remembers which config file is in use (`HarborData`).

```python
from harborcli.config import (
    Credential,
    init_config,
    get_current_harbor_data,
    add_credentials_to_config_file,
    update_credentials_in_config_file,
)

init_config("", False)
data = get_current_harbor_data()
password = "password"
add_credentials_to_config_file(
    Credential(
        name="admin@demo-example-com",
        username="admin",
        password=password,
        server_address="https://demo.example.com",
    ),
    data.config_path,
)
```

`init_config` creates missing files and directories and loads the config
once per process; `reset_config` forgets it so it can run again.
`get_current_harbor_config`, `get_credentials(name)`, `update_config_file`,
`read_config`, `create_config_file`, `create_data_file`, `read_data_file`,
`update_data_file` and `apply_data_file` cover the rest. Adding or updating
a credential also makes it the current one. Every failure raises
`ConfigError`.

## Encryption

`harborcli.encryption` encrypts secrets with AES-GCM; the result is base64
of a 12-byte nonce followed by the ciphertext. The key is kept by a
`KeyringProvider`:

- `EnvironmentKeyring` — the `HARBOR_ENCRYPTION_KEY` environment variable,
  chosen automatically when it is set;
- `FileKeyring` — one file per secret, by default under
  `~/.harbor/keyring`.

```python
from harborcli.encryption import (
    FileKeyring,
    set_keyring_provider,
    get_encryption_key,
    encrypt,
    decrypt,
)

set_keyring_provider(FileKeyring("/tmp/harbor-keyring"))
key = get_encryption_key()        # generates and stores a 256-bit key if none exists
token = encrypt(key, b"secret")
assert decrypt(key, token) == "secret"
```

Keyring failures raise `KeyringError`; `decrypt` raises `ValueError` for
bad base64, short input or a failed authentication check.

## Tables, pickers and forms

`harborcli.models` holds the dataclasses the views work on (`Artifact`,
`Tag`, `Project`, `Registry`, `Repository`, `SearchRepository`, `Label`,
`ImmutableRule`, `ScheduleTask`, `UserResp`, `AuditLog`, `OverallHealth`, …)
and the records that forms fill in (`LoginView`, `UserCreateView`,
`LabelCreateView`, `ProjectCreateView`, `ImmutableCreateView`,
`CreateRegView`).

Tables are printed with `rich` through `harborcli.tables` (`Column`,
`TableList`, `render_table`, `print_table`). Each view module has a
`*_rows` function that builds the rows, plus printing functions that take
an optional `rich` console:

- `artifact_views`: `list_artifacts`, `view_artifact`, `list_tags`
- `project_views`: `list_projects`, `search_projects`, `view_project`, `logs_project`
- `registry_views`: `list_registries`, `view_registry`
- `repository_views`: `list_repositories`, `search_repositories`, `view_repository`
- `label_views`, `user_views`, `schedule_views`, `immutable_views`:
  `list_labels`, `list_users`, `list_schedules`, `list_immutable_rules`
- `health_views`: `print_health_status`, colouring "healthy" green and
  anything else red

Pickers show a numbered list (`harborcli.selection.run_selection`): type a
number, move with `j`/`k` and press enter, or `q` to give up. They return
a name (`select_project`, `select_repository`, `select_artifact`,
`select_tag`) or an id (`select_registry`, `select_label`, `select_user`,
`select_immutable_rule`), and `""` or `0` when nothing is chosen.

Forms ask one question at a time and repeat a question until the answer is
valid: `account_forms.login_form`, `user_create_form`, `tag_create_form`;
`resource_forms.immutable_create_form`, `label_create_form`,
`label_update_form`, `project_create_form`, `registry_create_form`,
`registry_update_form`. `selection.confirm_elevation` asks before making a
user an administrator.

Every interactive function takes an `input_func` that receives the prompt
and returns the answer, so it can be driven without a terminal:

```python
from harborcli.account_forms import tag_create_form
from harborcli.models import Project
from harborcli.project_views import select_project

tag_create_form(input_func=lambda prompt: "v1.0")          # "v1.0"
projects = [Project(project_id=1, name="library"), Project(project_id=2, name="team")]
select_project(projects, input_func=lambda prompt: "2")    # "team"
```

## What this package does not do

- It has no command to run: there is no entry point, only functions to
  build one from.
- It does not talk to a registry. There is no HTTP client; the views and
  forms work on `harborcli.models` objects that the caller supplies and
  returns the filled-in records without sending them anywhere.
- It does not use the operating system's keyring; keys live in an
  environment variable or in files.