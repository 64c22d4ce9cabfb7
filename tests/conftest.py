import asyncio

import pytest
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from cg_plugin_host import CgPluginLibHost
from keyutil import EC_SCALAR, encodings


@pytest.fixture(scope="session")
def ec_key():
    return ec.derive_private_key(EC_SCALAR, ec.SECP256R1())


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_keys(ec_key):
    return encodings(ec_key)


@pytest.fixture(scope="session")
def rsa_keys(rsa_key):
    return encodings(rsa_key)


@pytest.fixture(scope="session")
def ec_host(ec_keys):
    return asyncio.run(CgPluginLibHost.initialize(ec_keys["private_b64"], ec_keys["public_b64"]))


@pytest.fixture(scope="session")
def rsa_host(rsa_keys):
    return asyncio.run(CgPluginLibHost.initialize(rsa_keys["private_b64"], rsa_keys["public_b64"]))


@pytest.fixture(params=["ecdsa", "rsa"], scope="session")
def host(request, ec_host, rsa_host):
    return ec_host if request.param == "ecdsa" else rsa_host
