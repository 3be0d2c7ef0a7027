"""
Content negotiation for license representations.

Turns a raw ``Accept`` header into exactly one of the media types the
license routes can serve. Malformed entries never abort negotiation, they
are dropped from the candidate list, and a header that names nothing we
support falls back to plain text.
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# RFC 7230 "token" characters
_TOKEN = r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+"
_TOKEN_RE = re.compile(rf"^{_TOKEN}$")
_PARAM_RE = re.compile(rf'\s*;\s*({_TOKEN})\s*=\s*({_TOKEN}|"(?:[^"\\]|\\.)*")\s*')
# Decimal or exponent form, plus inf/nan spellings. No underscores or padding.
_WEIGHT_RE = re.compile(r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|(?i:inf|infinity|nan))")

DEFAULT_WEIGHT = 1.0


class MediaType(str, Enum):
    """The representations a license can be served as."""

    PLAIN = "text/plain"
    HTML = "text/html"
    JSON = "application/json"


# Client-sent media types we know how to satisfy.
_SUPPORTED: Dict[str, MediaType] = {
    "text/plain": MediaType.PLAIN,
    "*/*": MediaType.PLAIN,
    "text/html": MediaType.HTML,
    "application/xhtml+xml": MediaType.HTML,
    "application/json": MediaType.JSON,
}

FALLBACK = MediaType.PLAIN


class MediaRangeError(ValueError):
    """Raised when an Accept entry cannot be parsed as a media type."""


@dataclass(frozen=True)
class AcceptType:
    """A single weighted entry from an Accept header."""

    media_type: str
    weight: float = DEFAULT_WEIGHT


def parse_media_range(value: str) -> Tuple[str, Dict[str, str]]:
    """
    Parse ``type/subtype; name=value`` into its media type and parameters.

    Type, subtype and parameter names are lowercased. Quoted parameter
    values are unquoted.

    Args:
        value: A single media range, e.g. ``"text/html; q=0.9"``.

    Returns:
        Tuple of the normalized media type and a dict of parameters.

    Raises:
        MediaRangeError: If the value is empty or malformed.
    """
    head, sep, rest = value.partition(";")
    media_type = head.strip().lower()
    if not media_type:
        raise MediaRangeError("no media type")

    main, slash, sub = media_type.partition("/")
    if not slash or not _TOKEN_RE.match(main) or not _TOKEN_RE.match(sub):
        raise MediaRangeError(f"invalid media type: {media_type!r}")

    params: Dict[str, str] = {}
    if sep:
        rest = ";" + rest
        pos = 0
        while pos < len(rest):
            match = _PARAM_RE.match(rest, pos)
            if match is None:
                if rest[pos:].strip(" \t;") == "":
                    break
                raise MediaRangeError(f"invalid parameter in {value!r}")
            name = match.group(1).lower()
            raw = match.group(2)
            if raw.startswith('"'):
                raw = re.sub(r"\\(.)", r"\1", raw[1:-1])
            if name in params:
                raise MediaRangeError(f"duplicate parameter {name!r}")
            params[name] = raw
            pos = match.end()

    return media_type, params


def parse_weight(raw: Optional[str]) -> float:
    """Return the relative weight for a ``q`` value, clamped into [0, 1]."""
    if raw is None or not _WEIGHT_RE.fullmatch(raw):
        return DEFAULT_WEIGHT
    weight = float(raw)
    if math.isnan(weight):
        return 0.0
    return min(max(weight, 0.0), 1.0)


def parse_accept(header: str) -> List[AcceptType]:
    """
    Parse an Accept header into candidates ordered by preference.

    Candidates are sorted by weight, highest first. The sort is stable, so
    entries with the same weight keep the order the client listed them in.

    Args:
        header: Raw ``Accept`` header value (may be empty).

    Returns:
        List of AcceptType, most preferred first.
    """
    candidates = []
    if not header:
        return candidates

    for token in header.split(","):
        try:
            media_type, params = parse_media_range(token)
        except MediaRangeError as exc:
            logger.debug(f"Ignoring Accept entry {token!r}: {exc}")
            continue
        candidates.append(AcceptType(media_type=media_type, weight=parse_weight(params.get("q"))))

    return sorted(candidates, key=lambda candidate: -candidate.weight)


def resolve(accept_header: str) -> MediaType:
    """
    Pick the representation to serve for an Accept header.

    Unsupported types are skipped whatever their weight; when nothing
    matches, plain text is served.

    Args:
        accept_header: Raw ``Accept`` header value.

    Returns:
        The negotiated MediaType.
    """
    for candidate in parse_accept(accept_header):
        supported = _SUPPORTED.get(candidate.media_type)
        if supported is not None:
            return supported
    return FALLBACK
