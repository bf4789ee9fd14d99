"""Scheme helpers for resource paths.

Resource paths may carry a URL scheme (``classpath:``, ``file://``) that tells
which loader owns them. These helpers classify and strip those prefixes
without corrupting plain filesystem paths:

- Drive letters (``c:\\tmp``) are never taken as schemes; a scheme needs at
  least two characters.
- ``file:/x``, ``file:///x`` and ``file:x`` keep the path part, while
  ``scheme://rest`` drops exactly the ``scheme://`` prefix.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .filesystem import FileSystem

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]+):")


@dataclass(frozen=True)
class ParsedUrl:
    """Components of a parsed resource URL.

    Attributes:
        protocol: Lower-cased scheme token
        authority: Text between ``//`` and the path, None when there is no ``//``
        host: Host part of the authority ("" when absent)
        port: Port number, -1 when absent
        file: Path plus query string
        ref: Fragment after ``#``, None when absent
    """

    protocol: str
    authority: str | None
    host: str
    port: int
    file: str
    ref: str | None = None

    def external_form(self) -> str:
        """Rebuild the URL string; an empty authority is dropped."""
        result = f"{self.protocol}:"
        if self.authority:
            result += f"//{self.authority}"
        result += self.file
        if self.ref is not None:
            result += f"#{self.ref}"
        return result


def parse_url(location: str) -> ParsedUrl | None:
    """Parse a URL string.

    Args:
        location: String such as ``file:///tmp/x`` or ``classpath:a/b``

    Returns:
        ParsedUrl, or None if the string has no scheme or a non-numeric port
    """
    match = _SCHEME_RE.match(location)
    if not match:
        return None

    protocol = match.group(1).lower()
    rest = location[match.end() :]

    ref = None
    if "#" in rest:
        rest, ref = rest.split("#", 1)

    authority = None
    host = ""
    port = -1
    if rest.startswith("//"):
        rest = rest[2:]
        end = len(rest)
        for delimiter in ("/", "?"):
            index = rest.find(delimiter)
            if index != -1:
                end = min(end, index)
        authority, rest = rest[:end], rest[end:]

        host_port = authority.rsplit("@", 1)[-1]
        if host_port.startswith("["):
            # IPv6 literal
            closing = host_port.find("]")
            if closing == -1:
                return None
            host, port_part = host_port[: closing + 1], host_port[closing + 1 :]
            if port_part and not port_part.startswith(":"):
                return None
            port_part = port_part[1:]
        else:
            host, _, port_part = host_port.partition(":")

        if port_part:
            if not port_part.isdigit():
                return None
            port = int(port_part)

    return ParsedUrl(protocol=protocol, authority=authority, host=host, port=port, file=rest, ref=ref)


def has_scheme(location: str) -> bool:
    """Check whether the location carries an explicit scheme prefix."""
    return bool(_SCHEME_RE.match(location))


def extract_scheme(location: str, filesystem: FileSystem | None = None) -> str:
    """Extract the scheme of a resource location.

    An explicit scheme prefix wins. Otherwise, a string the filesystem accepts
    as a path has the scheme of a path URI, ``file``.

    Args:
        location: Resource location
        filesystem: Filesystem used to validate bare paths (default: host filesystem)

    Returns:
        The scheme, or "" if none can be determined
    """
    match = _SCHEME_RE.match(location)
    if match:
        return match.group(1).lower()

    if filesystem is None:
        from .filesystem import LocalFileSystem

        filesystem = LocalFileSystem()

    if filesystem.is_valid(location):
        return "file"
    return ""


def strip_scheme(location: str) -> str:
    """Remove the leading scheme segment of a location.

    Backslashes are turned into forward slashes before parsing. When the URL
    has neither host nor authority (``file:/x``, ``file:///x``, ``file:c:/x``)
    the scheme and any run of slashes are removed and the file part kept;
    otherwise exactly ``scheme://`` is removed.

    Args:
        location: Resource location

    Returns:
        The bare path, or the input unchanged if it cannot be parsed
    """
    normalized = location.replace("\\", "/")
    url = parse_url(normalized)
    if url is None:
        return location

    external = url.external_form()
    if url.host == "" and not url.authority:
        prefix = url.file
        pattern = re.escape(url.protocol) + ":/*" + re.escape(prefix)
    else:
        prefix = ""
        pattern = re.escape(url.protocol) + "://"

    return prefix + re.sub("^" + pattern, "", external, count=1, flags=re.IGNORECASE)
