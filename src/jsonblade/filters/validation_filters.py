"""Validation and encoding filters.

Predicates (``isEmail``, ``isURL``, ``minLength``...) return booleans and
never raise. Encoders (``base64Encode``, ``escape``, ``urlEncode``...)
return strings; decoding failures degrade to ``""`` or the input text.

``md5`` and ``sha256`` are placeholders that wrap the input text rather
than hashing it.
"""

from __future__ import annotations

import base64
import binascii
import math
import re
from typing import Any
from urllib.parse import quote, unquote, urlsplit

from jsonblade.environment.registry import FilterFunction, FilterRegistry, filter_registry
from jsonblade.utils.coerce import is_nan, js_truthy, number_arg, to_js_string, to_number

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_UUID_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)
_PHONE_RE = re.compile(r"(\+33|0)[1-9](?:[0-9]{8})")
_WHITESPACE_RE = re.compile(r"\s")
_SCHEME_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9+.\-]*")
_BAD_PERCENT_RE = re.compile(r"%(?![0-9a-fA-F]{2})")

# Schemes that are meaningless without a host
_HOST_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})

# Characters left unescaped by urlEncode besides ASCII alphanumerics
_URL_SAFE = "-_.!~*'()"

_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#x27;"),
)


def _is_email(value: Any) -> bool:
    return _EMAIL_RE.fullmatch(to_js_string(value)) is not None


def _is_url(value: Any) -> bool:
    """Absolute URL check: a scheme is required, plus a host for web schemes."""
    text = to_js_string(value).strip()
    try:
        parts = urlsplit(text)
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME_RE.fullmatch(parts.scheme):
        return False
    if parts.scheme.lower() in _HOST_SCHEMES:
        return bool(parts.hostname)
    return True


def _is_uuid(value: Any) -> bool:
    return _UUID_RE.fullmatch(to_js_string(value)) is not None


def _is_number(value: Any) -> bool:
    num = to_number(value)
    return not is_nan(num) and not math.isinf(num)


def _is_integer(value: Any) -> bool:
    num = to_number(value)
    if is_nan(num) or math.isinf(num):
        return False
    return float(num).is_integer()


def _is_phone_number(value: Any) -> bool:
    """French phone numbers: ``+33`` or ``0`` prefix, then nine digits."""
    compact = _WHITESPACE_RE.sub("", to_js_string(value))
    return _PHONE_RE.fullmatch(compact) is not None


def _min_length(value: Any, *args: Any) -> bool:
    minimum = number_arg(args)
    if not js_truthy(minimum):
        minimum = 0
    return len(to_js_string(value)) >= minimum


def _max_length(value: Any, *args: Any) -> bool:
    maximum = number_arg(args)
    if not js_truthy(maximum):
        maximum = math.inf
    return len(to_js_string(value)) <= maximum


def _matches(value: Any, *args: Any) -> bool:
    pattern = args[0] if args else None
    if not js_truthy(pattern):
        return False
    try:
        compiled = re.compile(to_js_string(pattern))
    except re.error:
        return False
    return compiled.search(to_js_string(value)) is not None


def _base64_encode(value: Any) -> str:
    try:
        raw = to_js_string(value).encode("utf-8")
    except UnicodeEncodeError:
        return ""
    return base64.b64encode(raw).decode("ascii")


def _base64_decode(value: Any) -> str:
    """Lenient decode: URL-safe alphabet and missing padding are accepted."""
    text = _WHITESPACE_RE.sub("", to_js_string(value)).replace("-", "+").replace("_", "/")
    text = text.rstrip("=")
    text += "=" * (-len(text) % 4)
    try:
        raw = base64.b64decode(text)
    except (binascii.Error, ValueError):
        return ""
    return raw.decode("utf-8", errors="replace")


def _escape(value: Any) -> str:
    text = to_js_string(value)
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def _unescape(value: Any) -> str:
    text = to_js_string(value)
    for char, entity in _ESCAPES:
        text = text.replace(entity, char)
    return text


def _url_encode(value: Any) -> str:
    return quote(to_js_string(value), safe=_URL_SAFE)


def _url_decode(value: Any) -> str:
    text = to_js_string(value)
    if _BAD_PERCENT_RE.search(text):
        return text
    try:
        return unquote(text, errors="strict")
    except UnicodeDecodeError:
        return text


def _md5(value: Any) -> str:
    return f"md5({to_js_string(value)})"


def _sha256(value: Any) -> str:
    return f"sha256({to_js_string(value)})"


VALIDATION_FILTERS: dict[str, FilterFunction] = {
    "isEmail": _is_email,
    "isURL": _is_url,
    "isUUID": _is_uuid,
    "isNumber": _is_number,
    "isInteger": _is_integer,
    "isPhoneNumber": _is_phone_number,
    "minLength": _min_length,
    "maxLength": _max_length,
    "matches": _matches,
    "base64Encode": _base64_encode,
    "base64Decode": _base64_decode,
    "escape": _escape,
    "unescape": _unescape,
    "urlEncode": _url_encode,
    "urlDecode": _url_decode,
    "md5": _md5,
    "sha256": _sha256,
}


def register_validation_filters(registry: FilterRegistry | None = None) -> None:
    target = filter_registry if registry is None else registry
    target.register_many(VALIDATION_FILTERS)
