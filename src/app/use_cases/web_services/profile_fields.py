"""
Connection profile field rules shared by create and update.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import DEFAULT_ROUTE, normalize_host, normalize_route

INVALID_WEB_SERVICE = "INVALID_WEB_SERVICE"
WEB_SERVICE_CONFLICT = "WEB_SERVICE_CONFLICT"

PROFILE_FIELDS = (
    "protocol",
    "url",
    "token",
    "route",
    "service_name",
    "moodle_user",
    "moodle_password",
    "is_active",
)
REQUIRED_FIELDS = ("url", "token", "service_name")
NON_NULL_FIELDS = ("protocol", "is_active")


def normalize_profile_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """url loses its scheme, route gains a leading "/", text fields are trimmed"""
    cleaned = {
        name: value
        for name, value in fields.items()
        if value is not None or name not in NON_NULL_FIELDS
    }
    if cleaned.get("url") is not None:
        cleaned["url"] = normalize_host(cleaned["url"])
    if "route" in cleaned:
        route = (cleaned["route"] or "").strip()
        cleaned["route"] = normalize_route(route) if route else DEFAULT_ROUTE
    for name in ("token", "service_name"):
        if cleaned.get(name) is not None:
            cleaned[name] = cleaned[name].strip()
    return cleaned


def validate_profile_fields(fields: Dict[str, Any]) -> Result[Dict[str, Any]]:
    missing = [name for name in REQUIRED_FIELDS if not fields.get(name)]
    if missing:
        return Return.err(
            Error(INVALID_WEB_SERVICE, f"Required fields missing: {', '.join(missing)}")
        )
    return Return.ok(fields)


async def check_host_available(
    uow: UnitOfWork, fields: Dict[str, Any], own_id: Optional[UUID] = None
) -> Result[None]:
    """Only one active profile may serve a given host"""
    if not fields.get("is_active", True):
        return Return.ok(None)

    existing = await uow.web_services.get_active_by_host(fields["url"])
    if existing is not None and existing.id != own_id:
        return Return.err(
            Error(WEB_SERVICE_CONFLICT, f"An active web service already serves {fields['url']}")
        )
    return Return.ok(None)
