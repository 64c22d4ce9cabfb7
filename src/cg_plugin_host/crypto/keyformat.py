"""Key text normalization: raw base64 or PEM in, DER out.

Keys usually arrive through environment variables, either as the bare base64
body of a PKCS#8 / SPKI document or as the full PEM block. PEM is detected by
looking for a ``-----BEGIN`` marker anywhere in the whitespace-stripped text.
A raw base64 value that happens to contain that substring is treated as PEM;
that is a known limitation of the heuristic and is kept as is.
"""
from __future__ import annotations

import base64
import re
from typing import Literal

from asn1crypto import keys

PEM_MARKER = "-----BEGIN"
PEM_LINE_WIDTH = 64

KeyLabel = Literal["PRIVATE KEY", "PUBLIC KEY"]

_WS_RE = re.compile(r"\s")
_BEGIN_RE = re.compile(r"-----BEGIN [^-]+-----")
_END_RE = re.compile(r"-----END [^-]+-----")


def ensure_pem_format(key: str, label: KeyLabel) -> str:
    clean = _WS_RE.sub("", key)
    if PEM_MARKER in clean:
        return key
    lines = [clean[i:i + PEM_LINE_WIDTH] for i in range(0, len(clean), PEM_LINE_WIDTH)] or [clean]
    body = "\n".join(lines)
    return f"-----BEGIN {label}-----\n{body}\n-----END {label}-----"


def pem_to_der(pem: str) -> bytes:
    """Strip the armor from ``pem`` and decode the base64 body.

    Only the first BEGIN/END pair is removed. Raises ``binascii.Error`` when
    the body is not valid base64 (for example a truncated key).
    """
    body = _BEGIN_RE.sub("", pem, count=1)
    body = _END_RE.sub("", body, count=1)
    body = _WS_RE.sub("", body)
    return base64.b64decode(body)


def is_pkcs8(der: bytes) -> bool:
    """True when ``der`` is an unencrypted PKCS#8 PrivateKeyInfo.

    SEC1 and PKCS#1 keys carry an OCTET STRING or INTEGER where the
    AlgorithmIdentifier belongs, and EncryptedPrivateKeyInfo starts with a
    SEQUENCE instead of the version, so all of them fail to parse here.
    """
    try:
        info = keys.PrivateKeyInfo.load(der, strict=True)
        # children are parsed lazily; reading them forces the structure check
        info["version"].native
        info["private_key_algorithm"]["algorithm"].native
        info["private_key"].contents
    except (ValueError, TypeError):
        return False
    return True


def is_spki(der: bytes) -> bool:
    """True when ``der`` is a SubjectPublicKeyInfo (not a bare PKCS#1 key)."""
    try:
        info = keys.PublicKeyInfo.load(der, strict=True)
        info["algorithm"]["algorithm"].native
        info["public_key"].contents
    except (ValueError, TypeError):
        return False
    return True


def der_to_pem(der: bytes, label: KeyLabel) -> str:
    return ensure_pem_format(base64.b64encode(der).decode(), label)


__all__ = [
    "PEM_MARKER",
    "ensure_pem_format",
    "pem_to_der",
    "is_pkcs8",
    "is_spki",
    "der_to_pem",
]
