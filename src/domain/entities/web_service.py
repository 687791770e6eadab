"""
WebService Entity

Connection profile for one remote Moodle instance.
"""

import re
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel, Text

from src.domain.base import utcnow

from .enums import WebServiceProtocol

DEFAULT_ROUTE = "/webservice/rest/server.php"

_SCHEME_PREFIX = re.compile(r"^https?://", re.IGNORECASE)


def normalize_host(host: str) -> str:
    """Strip an http(s):// prefix and surrounding whitespace from a host"""
    return _SCHEME_PREFIX.sub("", host.strip())


def normalize_route(route: str) -> str:
    route = route.strip()
    if not route.startswith("/"):
        route = "/" + route
    return route


class WebService(SQLModel, table=True):
    """
    WebService entity - credentials and address of a remote Moodle instance.

    Business Rules:
    - url holds the bare host (no scheme), unique among active profiles
    - route always starts with "/"
    - token is the Moodle webservice token (wstoken), never exposed by the API
    - Read-only to the password reset workflow
    """

    __tablename__ = "webservices"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    protocol: WebServiceProtocol = Field(default=WebServiceProtocol.https)
    url: str = Field(max_length=255, index=True)
    token: Optional[str] = Field(default=None, sa_column=Column(Text))
    route: str = Field(default=DEFAULT_ROUTE, max_length=255)
    service_name: str = Field(max_length=100)

    # Optional administrative credentials
    moodle_user: Optional[str] = Field(default=None, max_length=100)
    moodle_password: Optional[str] = Field(default=None, max_length=255)

    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_webservice_url_active", "url", "is_active"),)

    @property
    def base_url(self) -> str:
        return f"{self.protocol.value}://{self.url}"

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{normalize_route(self.route)}"
