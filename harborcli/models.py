"""Data records exchanged with the registry and filled in by the forms."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass
class ListFlags:
    """Paging, filtering and sorting options for list requests."""

    project_id: int = 0
    scope: str = ""
    name: str = ""
    page: int = 0
    page_size: int = 0
    q: str = ""
    sort: str = ""
    public: bool = False


@dataclass
class RegistryCredential:
    access_key: str = ""
    type: str = ""
    access_secret: str = ""

    def to_dict(self) -> dict[str, str]:
        """Return the credential as a mapping, leaving out empty fields."""
        values = {
            "access_key": self.access_key,
            "type": self.type,
            "access_secret": self.access_secret,
        }
        return {name: value for name, value in values.items() if value}


@dataclass
class CreateRegView:
    name: str = ""
    type: str = ""
    description: str = ""
    url: str = ""
    credential: RegistryCredential = field(default_factory=RegistryCredential)
    insecure: bool = False


@dataclass
class Artifact:
    id: int = 0
    digest: str = ""
    type: str = ""
    size: int = 0
    push_time: Optional[datetime] = None
    scan_overview: dict[str, dict[str, Any]] = field(default_factory=dict)

    def total_vulnerabilities(self) -> int:
        """Sum the vulnerability totals over all scan reports."""
        return sum(
            int((report.get("summary") or {}).get("total", 0))
            for report in self.scan_overview.values()
        )


@dataclass
class Tag:
    name: str = ""
    push_time: Optional[datetime] = None
    pull_time: Optional[datetime] = None


@dataclass
class Project:
    project_id: int = 0
    name: str = ""
    metadata: dict[str, str] = field(default_factory=dict)
    registry_id: int = 0
    repo_count: int = 0
    creation_time: Optional[datetime] = None


@dataclass
class Registry:
    id: int = 0
    name: str = ""
    status: str = ""
    url: str = ""
    type: str = ""
    description: str = ""
    creation_time: Optional[datetime] = None
    credential: RegistryCredential = field(default_factory=RegistryCredential)
    insecure: bool = False


@dataclass
class Repository:
    id: int = 0
    name: str = ""
    project_id: int = 0
    artifact_count: int = 0
    pull_count: int = 0
    description: str = ""
    creation_time: Optional[datetime] = None
    update_time: Optional[datetime] = None


@dataclass
class SearchRepository:
    repository_name: str = ""
    project_id: int = 0
    project_name: str = ""
    project_public: bool = False
    artifact_count: int = 0
    pull_count: int = 0


@dataclass
class Label:
    id: int = 0
    name: str = ""
    color: str = ""
    description: str = ""
    scope: str = ""
    project_id: int = 0
    creation_time: Optional[datetime] = None


@dataclass
class ImmutableSelector:
    decoration: str = ""
    pattern: str = ""


@dataclass
class ImmutableRule:
    id: int = 0
    tag_selectors: list[ImmutableSelector] = field(default_factory=list)
    scope_selectors: dict[str, list[ImmutableSelector]] = field(default_factory=dict)


@dataclass
class ScheduleTask:
    id: int = 0
    cron: str = ""
    vendor_type: str = ""
    update_time: Optional[datetime] = None


@dataclass
class UserResp:
    user_id: int = 0
    username: str = ""
    email: str = ""
    realname: str = ""
    comment: str = ""
    sysadmin_flag: bool = False
    creation_time: Optional[datetime] = None


@dataclass
class AuditLog:
    id: int = 0
    username: str = ""
    resource: str = ""
    resource_type: str = ""
    operation: str = ""
    op_time: Optional[datetime] = None


@dataclass
class ComponentHealth:
    name: str = ""
    status: str = ""
    error: str = ""


@dataclass
class OverallHealth:
    status: str = ""
    components: list[ComponentHealth] = field(default_factory=list)


@dataclass
class LoginView:
    server: str = ""
    username: str = ""
    password: str = ""
    name: str = ""
    config: str = ""


@dataclass
class UserCreateView:
    username: str = ""
    email: str = ""
    realname: str = ""
    comment: str = ""
    password: str = ""


@dataclass
class LabelCreateView:
    name: str = ""
    color: str = ""
    description: str = ""
    scope: str = ""


@dataclass
class ProjectCreateView:
    project_name: str = ""
    public: bool = False
    registry_id: str = ""
    storage_limit: str = ""
    proxy_cache: bool = False


@dataclass
class ImmutableCreateView:
    scope_selectors: ImmutableSelector = field(default_factory=ImmutableSelector)
    tag_selectors: ImmutableSelector = field(default_factory=ImmutableSelector)