import pytest
from cryptography.hazmat.primitives.asymmetric import ed25519

from cg_plugin_host.crypto.alg_registry import (
    ALGORITHMS,
    ECDSA_P256,
    RSA_PKCS1V15,
    AlgorithmTag,
    import_key_pair,
)
from keyutil import pkcs8_der, spki_der


def test_detection_order():
    assert [spec.tag for spec in ALGORITHMS] == [
        AlgorithmTag.ECDSA_P256_SHA256,
        AlgorithmTag.RSA_PKCS1V15_SHA256,
    ]


def test_first_matching_candidate_wins(ec_key, rsa_key):
    assert import_key_pair(pkcs8_der(ec_key), spki_der(ec_key.public_key())).spec is ECDSA_P256
    assert import_key_pair(pkcs8_der(rsa_key), spki_der(rsa_key.public_key())).spec is RSA_PKCS1V15


def test_candidate_list_is_the_only_source_of_algorithms(ec_key):
    with pytest.raises(ValueError, match="Unable to import keys as either RSA PKCS#1 v1.5"):
        import_key_pair(pkcs8_der(ec_key), spki_der(ec_key.public_key()), algorithms=(RSA_PKCS1V15,))


def test_unsupported_key_type_reports_every_candidate():
    sk = ed25519.Ed25519PrivateKey.generate()
    with pytest.raises(ValueError) as exc:
        import_key_pair(pkcs8_der(sk), spki_der(sk.public_key()))
    msg = str(exc.value)
    assert "ECDSA P-256: private key is not an ECDSA P-256 key" in msg
    assert "RSA PKCS#1 v1.5 (SHA-256): private key is not an RSA key" in msg


def test_key_material_sign_verify(ec_key):
    keys = import_key_pair(pkcs8_der(ec_key), spki_der(ec_key.public_key()))
    sig = keys.sign(b"payload")
    assert keys.verify(sig, b"payload")
    assert not keys.verify(sig, b"payload!")
    assert not keys.verify(sig[:-1], b"payload")
    assert keys.is_matched_pair()
    assert "_private_key" not in repr(keys)
