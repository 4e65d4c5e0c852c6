"""Forms for immutability rules, labels, projects and registries."""

from __future__ import annotations

from typing import Optional, Sequence

from .account_forms import validate_server
from .helpers import ValidationError, validate_project_name, validate_registry_name, validate_storage_limit
from .models import (
    CreateRegView,
    ImmutableCreateView,
    ImmutableSelector,
    Label,
    LabelCreateView,
    ProjectCreateView,
    Registry,
    RegistryCredential,
)
from .selection import InputFunc, ask_choice, ask_confirm, ask_text

REPOSITORY_DECORATIONS = [("matching", "repoMatches"), ("excluding", "repoExcludes")]
TAG_DECORATIONS = [("matching", "matches"), ("excluding", "excludes")]

LABEL_COLORS = [
    ("White", "#FFFFFF"),
    ("Black", "#000000"),
    ("Jet Grey", "#61717D"),
    ("Grey", "#737373"),
    ("Spicy Pink", "#80746D"),
    ("Cadet Blue", "#A9B6BE"),
    ("Alto", "#DDDDDD"),
    ("Silk", "#BBB3A9"),
    ("Endeavour", "#0065AB"),
    ("Sapphire", "#343DAC"),
    ("Violet", "#781DA0"),
    ("Jazzberry Jam", "#9B0D54"),
    ("Blue", "#0095D3"),
    ("Purple", "#9DA3DB"),
    ("Bright Lavender", "#BE90D6"),
    ("Rose", "#F1428A"),
    ("Navy Green", "#1D5100"),
    ("Dark Aqua", "#006668"),
    ("Peacock Blue", "#006690"),
    ("Regal Blue", "#004A70"),
    ("Green", "#48960C"),
    ("Cyan", "#00AB9A"),
    ("Cerulean", "#00B7D6"),
    ("Nice Blue", "#0081A7"),
    ("Red", "#C92100"),
    ("Thunderbird", "#CD3517"),
    ("Rust Orange", "#C25400"),
    ("Yellow Brown", "#D28F00"),
    ("Radical Red", "#F52F52"),
    ("Reddish Orange", "#FF5501"),
    ("Orange", "#F57600"),
    ("Yellow", "#FFDC0B"),
]

_PATTERN_HELP = "Enter multiple comma separated repos,repo*,or **"

# Prompt titles for the two credential fields: (identifier, hidden value).
_CREATE_CREDENTIAL_TITLES = ("Access Key", "Access Secret")
_UPDATE_CREDENTIAL_TITLES = ("Access ID", "Access Secret")
_REPLACE_HINT = "Replace the Access Secret to the real one"


def _or_empty(value: Optional[str]) -> str:
    return value or ""


def _required(message: str):
    def check(value: str) -> str:
        if value == "":
            raise ValidationError(message)
        return value

    return check


def _not_blank(message: str):
    def check(value: str) -> str:
        if not value.strip():
            raise ValidationError(message)
        return value

    return check


def immutable_create_form(
    view: ImmutableCreateView, input_func: Optional[InputFunc] = None
) -> ImmutableCreateView:
    """Fill in ``view`` with the repository and tag selectors of a new rule."""
    if view.scope_selectors is None:
        view.scope_selectors = ImmutableSelector()
    if view.tag_selectors is None:
        view.tag_selectors = ImmutableSelector()
    view.scope_selectors.decoration = ask_choice(
        "\nFor the repositories\n",
        REPOSITORY_DECORATIONS,
        _required("decoration cannot be empty"),
        input_func,
    )
    view.scope_selectors.pattern = ask_text(
        "List of repositories",
        _required("pattern cannot be empty"),
        description=_PATTERN_HELP,
        input_func=input_func,
    )
    view.tag_selectors.decoration = ask_choice(
        "Tags\n", TAG_DECORATIONS, _required("decoration cannot be empty"), input_func
    )
    view.tag_selectors.pattern = ask_text(
        "List of Tags",
        _required("pattern cannot be empty"),
        description=_PATTERN_HELP,
        input_func=input_func,
    )
    return view


def _label_fields(target, input_func: Optional[InputFunc]) -> None:
    target.name = ask_text(
        "Name",
        _required("name cannot be empty"),
        default=target.name or "",
        input_func=input_func,
    )
    target.color = ask_choice(
        "Color", LABEL_COLORS, _required("color cannot be empty"), input_func
    )
    target.description = ask_text(
        "Description", default=target.description or "", input_func=input_func
    )


def label_create_form(view: LabelCreateView, input_func: Optional[InputFunc] = None) -> LabelCreateView:
    """Fill in ``view`` with the name, colour and description of a new label."""
    _label_fields(view, input_func)
    return view


def label_update_form(label: Label, input_func: Optional[InputFunc] = None) -> Label:
    """Edit the name, colour and description of ``label``; blank answers keep text fields."""
    _label_fields(label, input_func)
    return label


def registry_options(registries: Sequence[Registry]) -> list[tuple[str, str]]:
    """Return ``("name (url)", id)`` choices, one per distinct registry id."""
    options: dict[str, str] = {}
    for registry in registries:
        options[str(registry.id)] = f"{registry.name} ({registry.url})"
    return [(label, registry_id) for registry_id, label in options.items()]


def _validate_project_name(value: str) -> str:
    if not value.strip():
        raise ValidationError("project name cannot be empty or only spaces")
    if not validate_project_name(value):
        raise ValidationError("please enter correct project name format")
    return value


def _validate_storage(value: str) -> str:
    if not value.strip():
        raise ValidationError("storage limit cannot be empty or only spaces")
    validate_storage_limit(value)
    return value


def project_create_form(
    view: ProjectCreateView,
    registries: Sequence[Registry] = (),
    input_func: Optional[InputFunc] = None,
) -> ProjectCreateView:
    """Fill in ``view`` for a new project, asking for a registry when it is a proxy cache."""
    options = registry_options(registries)
    view.project_name = ask_text("Project Name", _validate_project_name, input_func=input_func)
    view.public = ask_confirm("Public", "yes", "no", input_func)
    view.storage_limit = ask_text("Storage Limit", _validate_storage, input_func=input_func)
    view.proxy_cache = ask_confirm("Proxy Cache", "yes", "no", input_func)
    if view.proxy_cache and options:
        print("Select a registry to reference when creating the proxy cache project")
        view.registry_id = ask_choice(
            "Registry ID", options, _required("registry ID cannot be empty"), input_func
        )
    return view


def _validate_registry_name(value: str) -> str:
    if not value.strip():
        raise ValidationError("name cannot be empty or only spaces")
    if not validate_registry_name(value):
        raise ValidationError("please enter the correct name format")
    return value


def _validate_registry_url(value: str) -> str:
    if not value.strip():
        raise ValidationError("url cannot be empty or only spaces")
    try:
        validate_server(value)
    except ValidationError as exc:
        raise ValidationError("please enter the correct url format") from exc
    return value


def registry_create_form(
    view: CreateRegView, providers: Sequence[str], input_func: Optional[InputFunc] = None
) -> CreateRegView:
    """Fill in ``view`` for a new registry endpoint of one of ``providers``."""
    if not providers:
        raise ValidationError("registry provider cannot be empty")
    if view.credential is None:
        view.credential = RegistryCredential()
    view.type = ask_choice(
        "Select a Registry Provider",
        [(provider, provider) for provider in providers],
        _required("registry provider cannot be empty"),
        input_func,
    )
    view.name = ask_text("Name", _validate_registry_name, input_func=input_func)
    view.description = ask_text("Description", input_func=input_func)
    view.url = ask_text("URL", _validate_registry_url, input_func=input_func)
    id_title, hidden_title = _CREATE_CREDENTIAL_TITLES
    credential = view.credential
    credential.access_key = ask_text(id_title, input_func=input_func)
    credential.access_secret = ask_text(hidden_title, input_func=input_func)
    view.insecure = ask_confirm("Verify Cert", "yes", "no", input_func)
    return view


def registry_update_form(registry: Registry, input_func: Optional[InputFunc] = None) -> Registry:
    """Edit ``registry``; blank answers keep the current text values."""
    if registry.credential is None:
        registry.credential = RegistryCredential()
    registry.type = ask_text(
        "Provider", _required("provider cannot be empty"),
        default=registry.type or "", input_func=input_func,
    )
    registry.name = ask_text(
        "Name", _required("name cannot be empty"),
        default=registry.name or "", input_func=input_func,
    )
    registry.description = ask_text(
        "Description", default=registry.description or "", input_func=input_func
    )
    registry.url = ask_text(
        "URL", _required("url cannot be empty"),
        default=registry.url or "", input_func=input_func,
    )
    id_title, hidden_title = _UPDATE_CREDENTIAL_TITLES
    credential = registry.credential
    current_id = _or_empty(credential.access_key)
    current_hidden = _or_empty(credential.access_secret)
    credential.access_key = ask_text(id_title, default=current_id, input_func=input_func)
    credential.access_secret = ask_text(
        hidden_title,
        description=_REPLACE_HINT,
        default=current_hidden,
        secret=True,
        input_func=input_func,
    )
    registry.insecure = ask_confirm("Verify Cert", "yes", "no", input_func)
    return registry