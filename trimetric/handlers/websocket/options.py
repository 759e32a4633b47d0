"""Upgrade query option parsing for the live push channel."""

from __future__ import annotations

import re
from collections.abc import Mapping

from trimetric.errors import OptionsError
from trimetric.state.session import SessionOptions
from trimetric.config.websocket import WS_OPT_STATIC, WS_OPT_VERSION, WS_OPT_CHUNKIFY, WS_MAX_PROTOCOL_VERSION

_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}
_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_bool(option: str, raw: str) -> bool:
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise OptionsError(option, raw, "expected a boolean")


def parse_version(raw: str) -> int:
    if not _INT_RE.fullmatch(raw):
        raise OptionsError(WS_OPT_VERSION, raw, "expected an integer")
    version = int(raw)
    if version < 0 or version > WS_MAX_PROTOCOL_VERSION:
        raise OptionsError(WS_OPT_VERSION, raw, f"expected 0..{WS_MAX_PROTOCOL_VERSION}")
    return version


def parse_session_options(params: Mapping[str, str]) -> SessionOptions:
    """Build session options from query parameters; absent or empty values keep defaults."""
    defaults = SessionOptions()

    raw_version = params.get(WS_OPT_VERSION) or ""
    raw_chunkify = params.get(WS_OPT_CHUNKIFY) or ""
    raw_static = params.get(WS_OPT_STATIC) or ""

    return SessionOptions(
        version=parse_version(raw_version) if raw_version else defaults.version,
        chunkify=parse_bool(WS_OPT_CHUNKIFY, raw_chunkify) if raw_chunkify else defaults.chunkify,
        static=parse_bool(WS_OPT_STATIC, raw_static) if raw_static else defaults.static,
    )


__all__ = ["parse_bool", "parse_session_options", "parse_version"]
