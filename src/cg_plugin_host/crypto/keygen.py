from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives import serialization
import base64
from typing import Dict


def generate_key_pair() -> Dict[str, str]:
    """Generate a development ECDSA P-256 key pair.

    Returns base64 PKCS#8 / SPKI DER under the ``privateKey`` / ``publicKey``
    keys, ready to paste into environment variables. RSA material is never
    generated here.
    """
    sk = ec.generate_private_key(ec.SECP256R1())
    private_der = sk.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption()
    )
    public_der = sk.public_key().public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo
    )
    return {
        "privateKey": base64.b64encode(private_der).decode(),
        "publicKey": base64.b64encode(public_der).decode(),
    }
