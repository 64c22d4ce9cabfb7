# Canonical form for signed request payloads.
# Object keys are sorted at every depth, arrays keep their order, and a
# top-level object gets a millisecond ``timestamp`` when it has no truthy one.
# canonical_json() reproduces JSON.stringify output byte for byte so that
# signatures interoperate with the JavaScript host library.
import json
import math
import re
import time

_SURROGATE_PAIR_RE = re.compile("([\ud800-\udbff])([\udc00-\udfff])")
_LONE_SURROGATE_RE = re.compile("[\ud800-\udfff]")


def now_ms() -> int:
    return int(time.time() * 1000)


def _js_falsy(value) -> bool:
    # JavaScript truthiness: empty arrays and objects are truthy.
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value == ""
    return False


def sort_keys(o):
    if isinstance(o, dict):
        return {k: sort_keys(o[k]) for k in sorted(o.keys())}
    elif isinstance(o, (list, tuple)):
        return [sort_keys(i) for i in o]
    else:
        return o


def canonicalize(value):
    if isinstance(value, dict):
        stamped = dict(value)
        if _js_falsy(stamped.get("timestamp")):
            stamped["timestamp"] = now_ms()
        return sort_keys(stamped)
    return sort_keys(value)


def js_number(x: float) -> str:
    """Format a float the way ECMAScript Number::toString does.

    ``repr`` already yields the shortest round-tripping digits; only the
    placement of the decimal point and the exponent style differ.
    """
    if not math.isfinite(x):
        return "null"
    if x == 0:
        return "0"
    sign = "-" if x < 0 else ""
    mantissa, _, exp = repr(abs(x)).partition("e")
    whole, _, frac = mantissa.partition(".")
    digits = whole + frac
    # value == 0.<digits> * 10**n
    n = len(whole) + int(exp or 0)
    stripped = digits.lstrip("0")
    n -= len(digits) - len(stripped)
    digits = stripped.rstrip("0")
    k = len(digits)
    if k <= n <= 21:
        out = digits + "0" * (n - k)
    elif 0 < n <= 21:
        out = digits[:n] + "." + digits[n:]
    elif -6 < n <= 0:
        out = "0." + "0" * -n + digits
    else:
        e = n - 1
        head = digits if k == 1 else digits[0] + "." + digits[1:]
        out = f"{head}e{'+' if e >= 0 else '-'}{abs(e)}"
    return sign + out


def _js_string(s: str) -> str:
    # Surrogates that form a pair become one character, unpaired ones are
    # escaped as \udXXX the way JSON.stringify writes them.
    s = _SURROGATE_PAIR_RE.sub(
        lambda m: chr(0x10000 + ((ord(m.group(1)) - 0xD800) << 10) + ord(m.group(2)) - 0xDC00), s
    )
    text = json.dumps(s, ensure_ascii=False)
    return _LONE_SURROGATE_RE.sub(lambda m: "\\u%04x" % ord(m.group(0)), text)


def _js_key(k) -> str:
    if isinstance(k, str):
        return _js_string(k)
    if k is None or isinstance(k, (bool, int, float)):
        return _js_string(_encode(k))
    raise TypeError(f"keys must be str, int, float, bool or None, not {type(k).__name__}")


def _encode(o) -> str:
    if o is None:
        return "null"
    if o is True:
        return "true"
    if o is False:
        return "false"
    if isinstance(o, str):
        return _js_string(o)
    if isinstance(o, int):
        return int.__repr__(o)
    if isinstance(o, float):
        return js_number(o)
    if isinstance(o, dict):
        return "{" + ",".join(f"{_js_key(k)}:{_encode(v)}" for k, v in o.items()) + "}"
    if isinstance(o, (list, tuple)):
        return "[" + ",".join(_encode(i) for i in o) + "]"
    raise TypeError(f"Object of type {type(o).__name__} is not JSON serializable")


def canonical_json(value) -> bytes:
    # compact, UTF-8, JavaScript number and string escaping
    return _encode(value).encode("utf-8")
