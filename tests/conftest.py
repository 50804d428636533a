import datetime
import os
from unittest import mock

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
)
from cryptography.x509.oid import NameOID

PROXY_VARIABLES = ("HTTP_PROXY", "http_proxy", "HTTPS_PROXY", "https_proxy")


@pytest.fixture(autouse=True)
def no_proxy_environment():
    # Proxies configured on the machine running the tests must not leak in.
    environ = {k: v for k, v in os.environ.items() if k not in PROXY_VARIABLES}
    with mock.patch.dict(os.environ, environ, clear=True):
        yield


@pytest.fixture(scope="session")
def tls_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def tls_certificate(tls_key):
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "recorder-1")])
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(tls_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=1))
        .sign(tls_key, hashes.SHA256())
    )


@pytest.fixture(scope="session")
def tls_pem(tls_key, tls_certificate) -> bytes:
    """Key and certificate in a single PEM document."""
    return tls_key.private_bytes(
        Encoding.PEM, PrivateFormat.TraditionalOpenSSL, NoEncryption()
    ) + tls_certificate.public_bytes(Encoding.PEM)


@pytest.fixture(scope="session")
def tls_pem_file(tmp_path_factory, tls_pem) -> str:
    path = tmp_path_factory.mktemp("tls") / "recorder-1.pem"
    path.write_bytes(tls_pem)
    return str(path)


@pytest.fixture(scope="session")
def ca_file(tmp_path_factory, tls_certificate) -> str:
    path = tmp_path_factory.mktemp("ca") / "cacert.pem"
    path.write_bytes(tls_certificate.public_bytes(Encoding.PEM))
    return str(path)
