# services/validation.py
from __future__ import annotations

import ipaddress
import re
from urllib.parse import urlsplit

from exceptions import ValidationError
from models.record import ServerRecord

SCHEME = "samp"
SCHEME_PREFIX = f"{SCHEME}://"

# ports below are well-known/reserved, ports above are handed out as ephemeral
PORT_MIN = 1024
PORT_MAX = 49152

_HOST_CHARS = re.compile(r"[A-Za-z0-9._-]")
_LABEL = re.compile(r"^[A-Za-z0-9_]([A-Za-z0-9_-]{0,61}[A-Za-z0-9_])?$")


def _split_host_port(netloc: str) -> tuple[str, str | None]:
    """Split a netloc into host and raw port text; the port is None when not given."""
    hostport = netloc.rpartition("@")[2]
    if hostport.startswith("["):
        host, _, rest = hostport[1:].partition("]")
        port = rest[1:] if rest.startswith(":") else ""
    elif ":" in hostport:
        host, _, port = hostport.rpartition(":")
    else:
        host, port = hostport, ""
    return host, port or None


def _check_host(host: str, bracketed: bool) -> None:
    if not host:
        return
    if bracketed:
        try:
            ipaddress.IPv6Address(host)
        except ValueError:
            raise ValueError(f"invalid IPv6 host '{host}'") from None
        return
    for c in host:
        if not _HOST_CHARS.match(c):
            raise ValueError(f'invalid character "{c}" in host name')
    labels = host[:-1].split(".") if host.endswith(".") else host.split(".")
    if len(host) > 253 or not all(_LABEL.match(label) for label in labels):
        raise ValueError(f"invalid host name '{host}'")


def _parse(address: str):
    for c in address:
        if ord(c) < 0x20 or c == "\x7f":
            raise ValueError("invalid control character in URL")
    if address != address.strip():
        raise ValueError("leading or trailing space in URL")
    parts = urlsplit(address)
    if not parts.scheme:
        raise ValueError("missing protocol scheme")
    host, _ = _split_host_port(parts.netloc)
    _check_host(host, parts.netloc.rpartition("@")[2].startswith("["))
    return parts


def validate_address(address: str) -> list[ValidationError]:
    """
    Validate the address field of a server: host:port, optionally prefixed
    with "samp://". Every problem found is returned, except that an
    unparseable address or port ends the checks early.
    """
    errs: list[ValidationError] = []

    if len(address) < 1:
        errs.append(ValidationError("address is empty"))

    value = address if "://" in address else SCHEME_PREFIX + address

    try:
        parts = _parse(value)
    except ValueError as e:
        errs.append(ValidationError(f"failed to parse address '{address}': {e}"))
        return errs

    if parts.username is not None:
        errs.append(ValidationError("address contains a user:password component"))

    if parts.scheme not in ("", SCHEME):
        errs.append(ValidationError(
            f"address contains invalid scheme '{parts.scheme}', must be either empty or '{SCHEME_PREFIX}'"
        ))

    _, port_str = _split_host_port(parts.netloc)
    if port_str is not None:
        digits = port_str.isascii() and port_str.isdigit()
        if not digits or len(port_str) > 5 or int(port_str) > 65535:
            errs.append(ValidationError(f"invalid port '{port_str}' specified"))
            return errs

        port = int(port_str)
        if port < PORT_MIN or port > PORT_MAX:
            errs.append(ValidationError(f"port {port} falls within reserved or ephemeral range"))

    return errs


def validate_server(server: ServerRecord) -> list[ValidationError]:
    """Check all the required fields of a server record."""
    errs = validate_address(server.address)

    if len(server.hostname) < 1:
        errs.append(ValidationError("hostname is empty"))

    if server.max_players == 0:
        errs.append(ValidationError("maxplayers is empty"))

    if len(server.gamemode) < 1:
        errs.append(ValidationError("gamemode is empty"))

    return errs


def canonical_address(address: str) -> str:
    """
    Return the host[:port] part of an address, the form servers are stored
    under. Scheme, credentials, path, query and fragment are dropped.
    """
    value = address if "://" in address else SCHEME_PREFIX + address
    try:
        netloc = urlsplit(value).netloc
    except ValueError:
        return address
    return netloc.rpartition("@")[2]
