"""Algorithm registry for request signing.

Supported algorithms, in detection order:
  - ECDSA over P-256 with SHA-256 (default; what ``generate_key_pair`` emits)
  - RSASSA-PKCS1-v1_5 with SHA-256 (legacy Common Ground keys)

Key import walks ``ALGORITHMS`` in order and keeps the first entry that
accepts *both* the PKCS#8 private key and the SPKI public key. Supporting a
new algorithm means appending one ``AlgorithmSpec`` to the tuple.

Signature encoding:
  ECDSA signatures are emitted as the raw 64-byte ``r || s`` concatenation
  (IEEE P1363), the format WebCrypto produces and expects, not DER.
  RSA signatures are the raw PKCS#1 v1.5 signature bytes.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence, Tuple

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from .keyformat import is_pkcs8, is_spki
from ..utils.logging import get_logger

log = get_logger()

P256_COORD_BYTES = 32


class AlgorithmTag(str, enum.Enum):
    ECDSA_P256_SHA256 = "ECDSA-P256-SHA256"
    RSA_PKCS1V15_SHA256 = "RSA-PKCS1v15-SHA256"


@dataclass(frozen=True)
class AlgorithmSpec:
    tag: AlgorithmTag
    label: str
    load_private: Callable[[bytes], Any] = field(repr=False)
    load_public: Callable[[bytes], Any] = field(repr=False)
    sign: Callable[[Any, bytes], bytes] = field(repr=False)
    verify: Callable[[Any, bytes, bytes], None] = field(repr=False)


def _load_pkcs8(der: bytes):
    if not is_pkcs8(der):
        raise ValueError("private key is not an unencrypted PKCS#8 PrivateKeyInfo")
    return serialization.load_der_private_key(der, password=None)


def _load_spki(der: bytes):
    if not is_spki(der):
        raise ValueError("public key is not a SubjectPublicKeyInfo")
    return serialization.load_der_public_key(der)


# ECDSA P-256

def _ecdsa_private(der: bytes) -> ec.EllipticCurvePrivateKey:
    key = _load_pkcs8(der)
    if not isinstance(key, ec.EllipticCurvePrivateKey) or not isinstance(key.curve, ec.SECP256R1):
        raise ValueError("private key is not an ECDSA P-256 key")
    return key


def _ecdsa_public(der: bytes) -> ec.EllipticCurvePublicKey:
    key = _load_spki(der)
    if not isinstance(key, ec.EllipticCurvePublicKey) or not isinstance(key.curve, ec.SECP256R1):
        raise ValueError("public key is not an ECDSA P-256 key")
    return key


def _ecdsa_sign(key: ec.EllipticCurvePrivateKey, data: bytes) -> bytes:
    r, s = decode_dss_signature(key.sign(data, ec.ECDSA(hashes.SHA256())))
    return r.to_bytes(P256_COORD_BYTES, "big") + s.to_bytes(P256_COORD_BYTES, "big")


def _ecdsa_verify(key: ec.EllipticCurvePublicKey, signature: bytes, data: bytes) -> None:
    if len(signature) != 2 * P256_COORD_BYTES:
        raise InvalidSignature("ECDSA P-256 signature must be 64 bytes")
    r = int.from_bytes(signature[:P256_COORD_BYTES], "big")
    s = int.from_bytes(signature[P256_COORD_BYTES:], "big")
    key.verify(encode_dss_signature(r, s), data, ec.ECDSA(hashes.SHA256()))


# RSASSA-PKCS1-v1_5

def _rsa_private(der: bytes) -> rsa.RSAPrivateKey:
    key = _load_pkcs8(der)
    if not isinstance(key, rsa.RSAPrivateKey):
        raise ValueError("private key is not an RSA key")
    return key


def _rsa_public(der: bytes) -> rsa.RSAPublicKey:
    key = _load_spki(der)
    if not isinstance(key, rsa.RSAPublicKey):
        raise ValueError("public key is not an RSA key")
    return key


def _rsa_sign(key: rsa.RSAPrivateKey, data: bytes) -> bytes:
    return key.sign(data, padding.PKCS1v15(), hashes.SHA256())


def _rsa_verify(key: rsa.RSAPublicKey, signature: bytes, data: bytes) -> None:
    key.verify(signature, data, padding.PKCS1v15(), hashes.SHA256())


ECDSA_P256 = AlgorithmSpec(
    tag=AlgorithmTag.ECDSA_P256_SHA256,
    label="ECDSA P-256",
    load_private=_ecdsa_private,
    load_public=_ecdsa_public,
    sign=_ecdsa_sign,
    verify=_ecdsa_verify,
)

RSA_PKCS1V15 = AlgorithmSpec(
    tag=AlgorithmTag.RSA_PKCS1V15_SHA256,
    label="RSA PKCS#1 v1.5 (SHA-256)",
    load_private=_rsa_private,
    load_public=_rsa_public,
    sign=_rsa_sign,
    verify=_rsa_verify,
)

ALGORITHMS: Tuple[AlgorithmSpec, ...] = (ECDSA_P256, RSA_PKCS1V15)


@dataclass(frozen=True)
class KeyMaterial:
    """Imported key handles plus the algorithm they were imported under.

    Handles are kept out of ``repr`` and never exported again.
    """

    spec: AlgorithmSpec
    _private_key: Any = field(repr=False)
    _public_key: Any = field(repr=False)

    @property
    def algorithm(self) -> AlgorithmTag:
        return self.spec.tag

    def sign(self, data: bytes) -> bytes:
        return self.spec.sign(self._private_key, data)

    def verify(self, signature: bytes, data: bytes) -> bool:
        try:
            self.spec.verify(self._public_key, signature, data)
            return True
        except InvalidSignature:
            return False

    def is_matched_pair(self) -> bool:
        spki = serialization.PublicFormat.SubjectPublicKeyInfo
        der = serialization.Encoding.DER
        return self._private_key.public_key().public_bytes(der, spki) == self._public_key.public_bytes(der, spki)


def import_key_pair(
    private_der: bytes,
    public_der: bytes,
    algorithms: Sequence[AlgorithmSpec] = ALGORITHMS,
) -> KeyMaterial:
    """Import both keys under the first algorithm that accepts them.

    Raises ``ValueError`` naming every algorithm tried when none does.
    """
    reasons = []
    for spec in algorithms:
        log.debug("Attempting %s import", spec.label)
        try:
            private_key = spec.load_private(private_der)
            public_key = spec.load_public(public_der)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            log.debug("%s import failed: %s", spec.label, exc)
            reasons.append(f"{spec.label}: {exc}")
            continue
        log.debug("%s import successful", spec.label)
        return KeyMaterial(spec, private_key, public_key)
    labels = " or ".join(spec.label for spec in algorithms)
    raise ValueError(f"Unable to import keys as either {labels} ({'; '.join(reasons)})")


__all__ = [
    "AlgorithmTag",
    "AlgorithmSpec",
    "ALGORITHMS",
    "ECDSA_P256",
    "RSA_PKCS1V15",
    "KeyMaterial",
    "import_key_pair",
]
