"""Immutable CLE tool configuration snapshot.

A snapshot is built in one go from a mapping of property names to raw values
and never changes afterwards. Reconfiguration builds a new snapshot.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, TypeVar

from cletools.app.domain.tools.coerce import (
    parse_bool,
    parse_positive_int,
    parse_str,
    parse_str_list,
)

logger = logging.getLogger("cletools")

T = TypeVar("T")

# Property names
CLE_SERVER_URL = "sakai.cle.server.url"
CLE_BASICLTI_KEY = "sakai.cle.basiclti.key"
CLE_BASICLTI_SECRET = "sakai.cle.basiclti.secret"
CLE_BASICLTI_FRAME_HEIGHT = "sakai.cle.basiclti.frame.height"
CLE_BASICLTI_FRAME_HEIGHT_LOCK = "sakai.cle.basiclti.frame.height.lock"
LTI_URL_LOCK = "sakai.cle.basiclti.url.lock"
LTI_KEY_LOCK = "sakai.cle.basiclti.key.lock"
LTI_SECRET_LOCK = "sakai.cle.basiclti.secret.lock"
LTI_RELEASE_NAMES = "sakai.cle.basiclti.release.names"
LTI_RELEASE_NAMES_LOCK = "sakai.cle.basiclti.release.names.lock"
LTI_RELEASE_EMAIL = "sakai.cle.basiclti.release.email"
LTI_RELEASE_EMAIL_LOCK = "sakai.cle.basiclti.release.email.lock"
LTI_RELEASE_PRINCIPAL = "sakai.cle.basiclti.release.principal"
LTI_RELEASE_PRINCIPAL_LOCK = "sakai.cle.basiclti.release.principal.lock"
LTI_DEBUG = "sakai.cle.basiclti.debug"
LTI_DEBUG_LOCK = "sakai.cle.basiclti.debug.lock"
TOOL_LIST = "sakai.cle.basiclti.tool.list"

# Keys of the launch and key/secret mappings handed to LTI consumers
LTI_URL = "ltiurl"
LTI_KEY = "ltikey"
LTI_SECRET = "ltisecret"
FRAME_HEIGHT = "frame_height"
FRAME_HEIGHT_LOCK = "frame_height_lock"
LTI_URL_LOCK_KEY = "ltiurl_lock"
LTI_KEY_LOCK_KEY = "ltikey_lock"
LTI_SECRET_LOCK_KEY = "ltisecret_lock"
RELEASE_NAMES = "release_names"
RELEASE_NAMES_LOCK = "release_names_lock"
RELEASE_EMAIL = "release_email"
RELEASE_EMAIL_LOCK = "release_email_lock"
RELEASE_PRINCIPAL_NAME = "release_principal_name"
RELEASE_PRINCIPAL_NAME_LOCK = "release_principal_name_lock"
DEBUG = "debug"
DEBUG_LOCK = "debug_lock"

PROVIDER_PATH = "/imsblti/provider/"

DEFAULT_TOOL_LIST: tuple[str, ...] = (
    "sakai.gradebook.gwt.rpc",
    "sakai.assignment.grades",
    "sakai.samigo",
    "sakai.schedule",
    "sakai.announcements",
    "sakai.postem",
    "sakai.profile2",
    "sakai.profile",
    "sakai.chat",
    "sakai.resources",
    "sakai.rwiki",
    "sakai.forums",
    "sakai.gradebook.tool",
    "sakai.mailbox",
    "sakai.singleuser",
    "sakai.messages",
    "sakai.site.roster",
    "sakai.news",
    "sakai.summary.calendar",
    "sakai.poll",
    "sakai.syllabus",
    "sakai.blogwow",
    "sakai.sitestats",
    "sakai.sections",
)


def _read(
    properties: Mapping[str, Any],
    name: str,
    parser: Callable[[Any], T],
    default: T,
) -> T:
    """Read one property, falling back to ``default`` when missing or malformed."""
    raw = properties.get(name)
    if raw is None:
        return default
    try:
        return parser(raw)
    except (TypeError, ValueError) as exc:
        logger.warning("Ignoring malformed property %s: %s", name, exc)
        return default


@dataclass(frozen=True, repr=False)
class ToolRegistrySnapshot:
    """One complete CLE tool configuration.

    Equality and hashing consider only the server URL, the credential pair and
    the ordered tool list. The display and lock flags are left out so that
    change detection only fires on connection-level changes.
    """

    base_url: str = "http://localhost"
    lti_key: str = "12345"
    lti_secret: str = "secret"
    tool_list: tuple[str, ...] = DEFAULT_TOOL_LIST
    frame_height: int = field(default=100, compare=False)
    frame_height_lock: bool = field(default=True, compare=False)
    url_lock: bool = field(default=True, compare=False)
    key_lock: bool = field(default=True, compare=False)
    secret_lock: bool = field(default=True, compare=False)
    release_names: bool = field(default=True, compare=False)
    release_names_lock: bool = field(default=True, compare=False)
    release_email: bool = field(default=True, compare=False)
    release_email_lock: bool = field(default=True, compare=False)
    release_principal: bool = field(default=True, compare=False)
    release_principal_lock: bool = field(default=True, compare=False)
    debug: bool = field(default=False, compare=False)
    debug_lock: bool = field(default=True, compare=False)
    _members: frozenset[str] = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tool_list", tuple(self.tool_list))
        object.__setattr__(self, "_members", frozenset(self.tool_list))

    @classmethod
    def from_properties(cls, properties: Mapping[str, Any] | None) -> "ToolRegistrySnapshot":
        """Build a snapshot from raw properties; every field defaults independently."""
        props: Mapping[str, Any] = properties or {}
        d = cls()
        return cls(
            base_url=_read(props, CLE_SERVER_URL, parse_str, d.base_url),
            lti_key=_read(props, CLE_BASICLTI_KEY, parse_str, d.lti_key),
            lti_secret=_read(props, CLE_BASICLTI_SECRET, parse_str, d.lti_secret),
            tool_list=_read(props, TOOL_LIST, parse_str_list, d.tool_list),
            frame_height=_read(props, CLE_BASICLTI_FRAME_HEIGHT, parse_positive_int, d.frame_height),
            frame_height_lock=_read(props, CLE_BASICLTI_FRAME_HEIGHT_LOCK, parse_bool, d.frame_height_lock),
            url_lock=_read(props, LTI_URL_LOCK, parse_bool, d.url_lock),
            key_lock=_read(props, LTI_KEY_LOCK, parse_bool, d.key_lock),
            secret_lock=_read(props, LTI_SECRET_LOCK, parse_bool, d.secret_lock),
            release_names=_read(props, LTI_RELEASE_NAMES, parse_bool, d.release_names),
            release_names_lock=_read(props, LTI_RELEASE_NAMES_LOCK, parse_bool, d.release_names_lock),
            release_email=_read(props, LTI_RELEASE_EMAIL, parse_bool, d.release_email),
            release_email_lock=_read(props, LTI_RELEASE_EMAIL_LOCK, parse_bool, d.release_email_lock),
            release_principal=_read(props, LTI_RELEASE_PRINCIPAL, parse_bool, d.release_principal),
            release_principal_lock=_read(
                props, LTI_RELEASE_PRINCIPAL_LOCK, parse_bool, d.release_principal_lock
            ),
            debug=_read(props, LTI_DEBUG, parse_bool, d.debug),
            debug_lock=_read(props, LTI_DEBUG_LOCK, parse_bool, d.debug_lock),
        )

    def supports(self, tool_id: str) -> bool:
        return tool_id in self._members

    def launch_values(self, tool_id: str) -> dict[str, Any]:
        return {
            LTI_URL: f"{self.base_url}{PROVIDER_PATH}{tool_id}",
            FRAME_HEIGHT: self.frame_height,
            FRAME_HEIGHT_LOCK: self.frame_height_lock,
            LTI_URL_LOCK_KEY: self.url_lock,
            LTI_KEY_LOCK_KEY: self.key_lock,
            LTI_SECRET_LOCK_KEY: self.secret_lock,
            RELEASE_NAMES: self.release_names,
            RELEASE_NAMES_LOCK: self.release_names_lock,
            RELEASE_EMAIL: self.release_email,
            RELEASE_EMAIL_LOCK: self.release_email_lock,
            RELEASE_PRINCIPAL_NAME: self.release_principal,
            RELEASE_PRINCIPAL_NAME_LOCK: self.release_principal_lock,
            DEBUG: self.debug,
            DEBUG_LOCK: self.debug_lock,
        }

    def key_secret(self) -> dict[str, str]:
        return {LTI_KEY: self.lti_key, LTI_SECRET: self.lti_secret}

    def __repr__(self) -> str:
        return f"ToolRegistrySnapshot(tool_list={list(self.tool_list)!r}, base_url={self.base_url!r})"
