"""
Template Renderer

Substitutes {{name}} / {{name(N)}} placeholders in notification templates and
assembles the variable set for a password reset email.
"""

import re
from datetime import datetime
from typing import Dict, List, Mapping, Optional

from src.domain.entities import RemoteUser, WebService

# {{reset.token}}, {{reset.token(20)}}, {{user.email(30)}}
VARIABLE_PATTERN = re.compile(r"\{\{([^}]+?)(?:\((\d+)\))?\}\}")
ELLIPSIS = "..."
DEFAULT_EXPIRATION_TEXT = "5 minutes"

USER_FIELDS = (
    "id",
    "username",
    "firstname",
    "lastname",
    "fullname",
    "email",
    "idnumber",
    "address",
    "phone1",
    "phone2",
    "department",
    "institution",
    "city",
    "country",
)

VARIABLE_CATALOGUE: Dict[str, Dict[str, Dict[str, str]]] = {
    "user": {
        "id": {"key": "user.id", "description": "Remote user id", "example": "11085"},
        "username": {"key": "user.username", "description": "Login name", "example": "jsilva"},
        "firstname": {"key": "user.firstname", "description": "First name", "example": "Joao"},
        "lastname": {"key": "user.lastname", "description": "Last name", "example": "Silva"},
        "fullname": {"key": "user.fullname", "description": "Full name", "example": "Joao Silva"},
        "email": {"key": "user.email", "description": "Email address", "example": "joao@example.com"},
        "idnumber": {"key": "user.idnumber", "description": "Identification number", "example": "202100123"},
        "address": {"key": "user.address", "description": "Postal address", "example": "12 Flower St"},
        "phone1": {"key": "user.phone1", "description": "Phone 1", "example": "(11) 99999-9999"},
        "phone2": {"key": "user.phone2", "description": "Phone 2", "example": "(11) 88888-8888"},
        "department": {"key": "user.department", "description": "Department", "example": "IT"},
        "institution": {"key": "user.institution", "description": "Institution", "example": "Example University"},
        "city": {"key": "user.city", "description": "City", "example": "Sao Luis"},
        "country": {"key": "user.country", "description": "Country code", "example": "BR"},
    },
    "system": {
        "currentDate": {"key": "system.currentDate", "description": "Current date", "example": "07/09/2025"},
        "currentTime": {"key": "system.currentTime", "description": "Current time", "example": "14:30"},
        "name": {"key": "system.name", "description": "System name", "example": "OxyPass"},
    },
    "reset": {
        "link": {
            "key": "reset.link",
            "description": "Password reset link",
            "example": "https://app.example.com/reset-password?token=abc123",
        },
        "token": {
            "key": "reset.token",
            "description": "Password reset token (full text)",
            "example": "abc123def456ghi789jkl012mno345pq",
        },
        "expirationTime": {
            "key": "reset.expirationTime",
            "description": "Token lifetime",
            "example": "5 minutes",
        },
    },
    "webservice": {
        "serviceName": {"key": "webservice.serviceName", "description": "Web service name", "example": "Campus EAD"},
        "url": {"key": "webservice.url", "description": "Remote Moodle host", "example": "ead.example.edu"},
    },
}


def render(text: str, variables: Mapping[str, str]) -> str:
    """
    Replace every {{name}} or {{name(N)}} in text.

    Unknown names render as an empty string. With (N), values longer than N
    characters are cut to N and suffixed with "...". Single pass: substituted
    values are never scanned again.
    """

    def substitute(match: "re.Match[str]") -> str:
        name, limit = match.group(1), match.group(2)
        value = variables.get(name)
        value = "" if value is None else str(value)
        if limit is not None:
            length = int(limit)
            if len(value) > length:
                value = value[:length] + ELLIPSIS
        return value

    return VARIABLE_PATTERN.sub(substitute, text or "")


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def extract_user_variables(
    remote_user: Optional[RemoteUser],
    web_service: Optional[WebService] = None,
    extra: Optional[Mapping[str, str]] = None,
    system_name: str = "",
    now: Optional[datetime] = None,
) -> Dict[str, str]:
    """
    Assemble the dotted variable set for one notification.

    extra carries the reset values: reset_link, reset_token, expiration_time.
    Missing values become empty strings.
    """
    extra = extra or {}
    now = now or datetime.now()

    variables: Dict[str, str] = {}
    for field in USER_FIELDS:
        variables[f"user.{field}"] = _text(getattr(remote_user, field, None))

    variables["system.currentDate"] = now.strftime("%d/%m/%Y")
    variables["system.currentTime"] = now.strftime("%H:%M")
    variables["system.name"] = system_name

    variables["reset.link"] = _text(extra.get("reset_link"))
    variables["reset.token"] = _text(extra.get("reset_token"))
    variables["reset.expirationTime"] = _text(extra.get("expiration_time")) or DEFAULT_EXPIRATION_TEXT

    variables["webservice.serviceName"] = _text(getattr(web_service, "service_name", None))
    variables["webservice.url"] = _text(getattr(web_service, "url", None))

    return variables


def available_variables() -> List[Dict[str, str]]:
    """Flat list of every supported variable, for template authors"""
    variables = []
    for category, entries in VARIABLE_CATALOGUE.items():
        for entry in entries.values():
            variables.append(
                {
                    "category": category,
                    "key": entry["key"],
                    "description": entry["description"],
                    "example": entry["example"],
                    "usage": "{{" + entry["key"] + "}}",
                }
            )
    return variables
