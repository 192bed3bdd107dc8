"""
OAuth Scope Registry - Single Source of Truth for Google service scopes

Maps every supported Google service to the OAuth scopes it needs, whether it
works for individual (consumer) accounts, the APIs it depends on and a short
note. Resolution helpers turn a set of services into the deduplicated, sorted
scope list used to build authorization URLs, and ``services_markdown``
renders the table for the docs.

The tables are built once at import time and never mutated; every function
returns fresh lists so callers may modify results freely.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType

from pydantic import BaseModel, Field
from typing_extensions import Any, Dict, Iterable, List, Mapping, Tuple, Union

from .errors import UnknownServiceError
from .service_types import Service

logger = logging.getLogger(__name__)

SCOPE_OPENID = "openid"
SCOPE_EMAIL = "email"
SCOPE_USERINFO_EMAIL = "https://www.googleapis.com/auth/userinfo.email"

IDENTITY_SCOPES: Tuple[str, ...] = (SCOPE_OPENID, SCOPE_EMAIL, SCOPE_USERINFO_EMAIL)


@dataclass(frozen=True)
class ServiceRecord:
    """Registry entry for one service"""
    scopes: Tuple[str, ...]
    user: bool  # available to individual (non-Workspace) accounts
    apis: Tuple[str, ...] = ()
    note: str = ""


class ServiceView(BaseModel):
    """Public projection of a registry entry."""

    service: Service = Field(..., description="Service identifier")
    user: bool = Field(..., description="Available to individual accounts")
    scopes: List[str] = Field(default_factory=list, description="OAuth scopes in declared order")
    apis: List[str] = Field(default_factory=list, description="Google APIs the service depends on")
    note: str = Field("", description="Free-text note")

    def to_json_dict(self) -> Dict[str, Any]:
        """JSON-ready dict; ``apis`` and ``note`` are omitted when empty."""
        data: Dict[str, Any] = {
            "service": self.service.value,
            "user": self.user,
            "scopes": list(self.scopes),
        }
        if self.apis:
            data["apis"] = list(self.apis)
        if self.note:
            data["note"] = self.note
        return data


_SERVICE_RECORDS: Mapping[Service, ServiceRecord] = MappingProxyType({
    Service.GMAIL: ServiceRecord(
        scopes=(
            "https://mail.google.com/",
            "https://www.googleapis.com/auth/gmail.settings.basic",
        ),
        user=True,
        apis=("Gmail API",),
    ),
    Service.CALENDAR: ServiceRecord(
        scopes=("https://www.googleapis.com/auth/calendar",),
        user=True,
        apis=("Calendar API",),
    ),
    Service.DRIVE: ServiceRecord(
        scopes=("https://www.googleapis.com/auth/drive",),
        user=True,
        apis=("Drive API",),
    ),
    # Docs operations go through Drive export/copy/create; the documents
    # scope is requested as well so Docs API calls keep working.
    Service.DOCS: ServiceRecord(
        scopes=(
            "https://www.googleapis.com/auth/drive",
            "https://www.googleapis.com/auth/documents",
        ),
        user=True,
        apis=("Docs API", "Drive API"),
        note="Export/copy/create via Drive",
    ),
    Service.CONTACTS: ServiceRecord(
        scopes=(
            "https://www.googleapis.com/auth/contacts",
            "https://www.googleapis.com/auth/contacts.other.readonly",
            "https://www.googleapis.com/auth/directory.readonly",
        ),
        user=True,
        apis=("People API",),
        note="Contacts + other contacts + directory",
    ),
    Service.TASKS: ServiceRecord(
        scopes=("https://www.googleapis.com/auth/tasks",),
        user=True,
        apis=("Tasks API",),
    ),
    Service.SHEETS: ServiceRecord(
        scopes=("https://www.googleapis.com/auth/spreadsheets",),
        user=True,
        apis=("Sheets API", "Drive API"),
        note="Export via Drive",
    ),
    # people/me lookups
    Service.PEOPLE: ServiceRecord(
        scopes=("profile",),
        user=True,
        apis=("People API",),
        note="OIDC profile scope",
    ),
    Service.GROUPS: ServiceRecord(
        scopes=("https://www.googleapis.com/auth/cloud-identity.groups.readonly",),
        user=False,
        apis=("Cloud Identity API",),
        note="Workspace only",
    ),
    Service.KEEP: ServiceRecord(
        scopes=("https://www.googleapis.com/auth/keep",),
        user=False,
        apis=("Keep API",),
        note="Workspace only; service account",
    ),
})

# Presentation order is the declaration order of Service
SERVICE_ORDER: Tuple[Service, ...] = tuple(Service)


def _check_registry() -> None:
    """Fail at import if the order and the record table ever drift apart."""
    missing = [svc.value for svc in SERVICE_ORDER if svc not in _SERVICE_RECORDS]
    extra = [str(svc) for svc in _SERVICE_RECORDS if svc not in SERVICE_ORDER]
    if missing or extra or len(set(SERVICE_ORDER)) != len(SERVICE_ORDER):
        raise RuntimeError(
            f"Service registry is inconsistent: missing records {missing}, unordered services {extra}"
        )


_check_registry()


class ScopeRegistry:
    """Central registry for Google service scopes and service metadata"""

    SERVICE_RECORDS = _SERVICE_RECORDS
    SERVICE_ORDER = SERVICE_ORDER
    IDENTITY_SCOPES = IDENTITY_SCOPES

    @classmethod
    def parse_service(cls, raw: str) -> Service:
        """
        Parse a user-supplied service name.

        Input is trimmed and lowercased before lookup, so ``" GMAIL "``
        parses to ``Service.GMAIL``.

        Args:
            raw: Service name as typed by the user

        Returns:
            The matching Service

        Raises:
            UnknownServiceError: If the name is not registered. The message
                lists every valid name, separated by ``|``.
        """
        canonical = str(raw).strip().lower()
        for service in cls.SERVICE_ORDER:
            if service.value == canonical:
                return service

        logger.debug(f"SERVICE_REGISTRY: Rejected service name {raw!r}")
        raise UnknownServiceError(raw, expected=cls._service_names())

    @classmethod
    def parse_services(cls, raw: Union[str, Iterable[str]]) -> List[Service]:
        """
        Parse a comma-separated string (or an iterable of names) into services.

        Blank entries are skipped and input order is kept, duplicates included.
        The first unknown name raises UnknownServiceError.
        """
        names = raw.split(",") if isinstance(raw, str) else list(raw)
        return [cls.parse_service(name) for name in names if str(name).strip()]

    @classmethod
    def all_services(cls) -> List[Service]:
        """Get all services in presentation order."""
        return list(cls.SERVICE_ORDER)

    @classmethod
    def user_services(cls) -> List[Service]:
        """Services usable with individual (consumer) accounts, in presentation order."""
        return [svc for svc in cls.SERVICE_ORDER if cls.SERVICE_RECORDS[svc].user]

    @classmethod
    def user_service_csv(cls) -> str:
        """Comma-separated user services, e.g. for a ``--services`` default."""
        return ",".join(svc.value for svc in cls.user_services())

    @classmethod
    def scopes(cls, service: Union[Service, str]) -> List[str]:
        """
        Get the scopes declared for one service.

        Membership is checked again here, so a raw string that bypassed
        ``parse_service`` is rejected unless it is an exact service value.

        Raises:
            UnknownServiceError: If ``service`` is not registered
        """
        try:
            record = cls.SERVICE_RECORDS[Service(service)]
        except (KeyError, ValueError):
            raise UnknownServiceError(service, expected=cls._service_names()) from None
        return list(record.scopes)

    @classmethod
    def scopes_for_services(cls, services: Iterable[Union[Service, str]]) -> List[str]:
        """
        Get the union of scopes for several services.

        The result is sorted and deduplicated so it does not depend on input
        order or repeated services; authorization URLs stay stable between
        runs.

        Args:
            services: Services to resolve; duplicates are allowed

        Returns:
            Sorted list of distinct scopes

        Raises:
            UnknownServiceError: For the first unregistered service. No
                partial result is returned.
        """
        collected = set()
        for service in services:
            collected.update(cls.scopes(service))

        resolved = sorted(collected)
        logger.debug(f"SERVICE_REGISTRY: Resolved {len(resolved)} scopes")
        return resolved

    @classmethod
    def scopes_for_manage(cls, services: Iterable[Union[Service, str]]) -> List[str]:
        """
        Get service scopes plus the identity scopes needed to identify the account.

        Adds ``openid``, ``email`` and ``userinfo.email`` to the result of
        ``scopes_for_services``; still sorted and deduplicated.
        """
        return cls.merge_scopes(cls.scopes_for_services(services), cls.IDENTITY_SCOPES)

    @staticmethod
    def merge_scopes(scopes: Iterable[str], extras: Iterable[str]) -> List[str]:
        """Union two scope lists, dropping blanks, sorted ascending."""
        merged = {scope for scope in scopes if scope}
        merged.update(scope for scope in extras if scope)
        return sorted(merged)

    @classmethod
    def services_info(cls) -> List[ServiceView]:
        """Get a view of every service in presentation order."""
        infos = []
        for svc in cls.SERVICE_ORDER:
            record = cls.SERVICE_RECORDS[svc]
            infos.append(ServiceView(
                service=svc,
                user=record.user,
                scopes=list(record.scopes),
                apis=list(record.apis),
                note=record.note,
            ))
        return infos

    @classmethod
    def services_markdown(cls, infos: Iterable[ServiceView]) -> str:
        """
        Render service views as a markdown table.

        Rows follow the order of ``infos``. An empty input renders nothing,
        not even the header.
        """
        rows = [
            f"| {info.service.value} | {'yes' if info.user else 'no'} | "
            f"{', '.join(info.apis)} | {_markdown_scopes(info.scopes)} | {info.note} |"
            for info in infos
        ]
        if not rows:
            return ""

        lines = [
            "| Service | User | APIs | Scopes | Notes |",
            "| --- | --- | --- | --- | --- |",
            *rows,
        ]
        return "\n".join(lines) + "\n"

    @classmethod
    def _service_names(cls) -> List[str]:
        return [svc.value for svc in cls.SERVICE_ORDER]


def _markdown_scopes(scopes: Iterable[str]) -> str:
    return "<br>".join(f"`{scope}`" for scope in scopes)


# Module-level access to the registry operations
parse_service = ScopeRegistry.parse_service
parse_services = ScopeRegistry.parse_services
all_services = ScopeRegistry.all_services
user_services = ScopeRegistry.user_services
user_service_csv = ScopeRegistry.user_service_csv
scopes = ScopeRegistry.scopes
scopes_for_services = ScopeRegistry.scopes_for_services
scopes_for_manage = ScopeRegistry.scopes_for_manage
merge_scopes = ScopeRegistry.merge_scopes
services_info = ScopeRegistry.services_info
services_markdown = ScopeRegistry.services_markdown
