"""
Share-link codec.

A share token is the LZ-String ``compressToEncodedURIComponent`` form of the
compact JSON text of a state projection. Its alphabet (``A-Za-z0-9+-$``) is
safe inside a query value, so it is appended to URLs without escaping.

``decode`` returns the raw parsed object, never an ``AppState``: tokens may come
from older versions and must go through ``migrate`` before use.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from lzstring import LZString

from boxtracker.constants import DEFAULT_SHARE_PARAM
from boxtracker.state import AppState

_logger = logging.getLogger(__name__)
_lz = LZString()


class Projection(str, Enum):
    FULL = "full"        # teams, score, pools
    SHARED = "shared"    # teams, pools
    POOLS = "pools"      # pools only, teams/score fixed locally


_PROJECTION_KEYS = {
    Projection.FULL: ("teams", "score", "pools"),
    Projection.SHARED: ("teams", "pools"),
    Projection.POOLS: ("pools",),
}


@dataclass(frozen=True, slots=True)
class DecodeFailure:
    """Malformed or truncated token. Callers fall back to stored state."""
    reason: str


def project(state: AppState, projection: Projection = Projection.FULL) -> dict:
    full = state.to_dict()
    return {key: full[key] for key in _PROJECTION_KEYS[Projection(projection)]}


def encode(state: Union[AppState, dict], projection: Projection = Projection.FULL) -> str:
    payload = project(state, projection) if isinstance(state, AppState) else state
    # ensure_ascii keeps the compressor input to single code units
    text = json.dumps(payload, separators=(",", ":"), ensure_ascii=True)
    return _lz.compressToEncodedURIComponent(text)


def decode(token: Any) -> Union[dict, DecodeFailure]:
    if not isinstance(token, str) or not token:
        return DecodeFailure("empty token")
    try:
        text = _lz.decompressFromEncodedURIComponent(token)
    except Exception as exc:  # the decompressor has no error type of its own
        _logger.warning("Share token could not be decompressed: %s", exc)
        return DecodeFailure("malformed token")
    if not text:
        return DecodeFailure("malformed token")
    try:
        value = json.loads(text)
    except ValueError:
        _logger.warning("Share token did not contain JSON")
        return DecodeFailure("invalid JSON")
    if not isinstance(value, dict):
        return DecodeFailure(f"expected an object, got {type(value).__name__}")
    return value


def build_share_url(base_url: str, token: str, param: str = DEFAULT_SHARE_PARAM) -> str:
    parts = urlsplit(base_url)
    kept = urlencode([(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != param])
    query = f"{kept}&{param}={token}" if kept else f"{param}={token}"
    return urlunsplit(parts._replace(query=query))


def consume_share_url(url: str, param: str = DEFAULT_SHARE_PARAM) -> Tuple[Optional[str], str]:
    """Split ``url`` into its share token (if any) and the URL without it."""
    parts = urlsplit(url)
    pairs = parse_qsl(parts.query, keep_blank_values=True)
    tokens = [v for k, v in pairs if k == param]
    if not tokens:
        return None, url
    kept = urlencode([(k, v) for k, v in pairs if k != param])
    return tokens[0], urlunsplit(parts._replace(query=kept))
