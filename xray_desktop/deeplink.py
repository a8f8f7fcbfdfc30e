"""Parsing of ``xraycp://import?baseUrl=...&token=...`` deep links.

Registering the scheme with the operating system is left to the packaging
layer; this module only turns an opened URL into import arguments.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional
from urllib.parse import parse_qs, urlsplit

from xray_desktop.constants import (
    DEEP_LINK_BASE_URL_SCHEMES,
    DEEP_LINK_IMPORT_ACTION,
    DEEP_LINK_SCHEME,
)
from xray_desktop.errors import ValidationError
from xray_desktop.models import ImportLink

_TOKEN_RE = re.compile(r"^[A-Za-z0-9_-]{16,}$")


def _first(query: dict[str, list[str]], key: str) -> str:
    values = query.get(key)
    return values[0].strip() if values else ""


def _check_base_url(base_url: str) -> None:
    try:
        parsed = urlsplit(base_url)
    except ValueError as exc:
        raise ValidationError("Invalid baseUrl parameter") from exc
    if not parsed.scheme:
        raise ValidationError("Invalid baseUrl parameter")
    if parsed.scheme.lower() not in DEEP_LINK_BASE_URL_SCHEMES:
        raise ValidationError("baseUrl must use http or https")
    if not parsed.netloc:
        raise ValidationError("Invalid baseUrl parameter")


def parse_import_link(raw_url: str) -> ImportLink:
    """Parse an import deep link.

    The action is taken from the host (``xraycp://import?...``) or, for
    host-less forms, from the path (``xraycp:import?...``). ``baseUrl`` must
    be an http(s) URL and ``token`` at least 16 characters of
    ``[A-Za-z0-9_-]``.

    Raises:
        ValidationError: For malformed URLs, other schemes or actions,
            missing parameters, a bad ``baseUrl`` or a bad token.
    """
    try:
        parsed = urlsplit(raw_url.strip())
    except ValueError as exc:
        raise ValidationError("Malformed deep link URL") from exc
    if not parsed.scheme:
        raise ValidationError("Malformed deep link URL")

    if parsed.scheme.lower() != DEEP_LINK_SCHEME:
        raise ValidationError("Unsupported deep link scheme")

    action = (parsed.hostname or parsed.path.lstrip("/")).lower()
    if action != DEEP_LINK_IMPORT_ACTION:
        raise ValidationError("Unsupported deep link action")

    query = parse_qs(parsed.query)
    base_url = _first(query, "baseUrl")
    token = _first(query, "token")

    if not base_url:
        raise ValidationError("Missing baseUrl parameter")
    if not token:
        raise ValidationError("Missing token parameter")

    _check_base_url(base_url)
    if not _TOKEN_RE.match(token):
        raise ValidationError("Invalid token format")

    return ImportLink(base_url=base_url, token=token)


def first_valid_link(raw_urls: Iterable[str]) -> tuple[Optional[ImportLink], list[tuple[str, str]]]:
    """Return the first URL in ``raw_urls`` that parses as an import link.

    Returns:
        ``(link, rejected)`` where ``link`` is None when no URL is valid and
        ``rejected`` lists ``(url, reason)`` for every URL skipped before it.
    """
    rejected: list[tuple[str, str]] = []
    for raw_url in raw_urls:
        try:
            return parse_import_link(raw_url), rejected
        except ValidationError as exc:
            rejected.append((raw_url, str(exc)))
    return None, rejected
