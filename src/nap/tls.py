"""Resolution of the TLS request options into an ssl.SSLContext."""

import logging
import os
import re
import ssl
import tempfile
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Tuple, Union

import certifi
from cryptography import x509
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    load_pem_private_key,
)

from nap.error import InvalidArgumentError

logger = logging.getLogger(__name__)


def default_ca_file() -> str:
    """Path of the CA bundle used to verify peers when no CA file is given."""
    return certifi.where()


PEM_BLOCK = re.compile(
    rb"-----BEGIN ([A-Z0-9 ]+)-----\r?\n.*?-----END \1-----", re.DOTALL
)


def _pem_block(pem: Union[str, bytes], matches: Callable[[str], bool]) -> bytes:
    if isinstance(pem, str):
        pem = pem.encode()
    for block in PEM_BLOCK.finditer(pem):
        if matches(block.group(1).decode()):
            return block.group(0)
    raise InvalidArgumentError("PEM data holds no matching key or certificate")


def private_key_from_pem(
    pem: Union[str, bytes], password: Optional[bytes] = None
) -> PrivateKeyTypes:
    """Returns the first private key found in a PEM representation."""
    block = _pem_block(pem, lambda label: label.endswith("PRIVATE KEY"))
    return load_pem_private_key(block, password=password)


def certificate_from_pem(pem: Union[str, bytes]) -> x509.Certificate:
    """Returns the first certificate found in a PEM representation."""
    block = _pem_block(pem, lambda label: label == "CERTIFICATE")
    return x509.load_pem_x509_certificate(block)


def key_and_certificate_from_pem(
    pem: Union[str, bytes],
) -> Tuple[PrivateKeyTypes, x509.Certificate]:
    """Returns the private key and the certificate stored together in a single
    PEM representation."""
    return private_key_from_pem(pem), certificate_from_pem(pem)


@dataclass(frozen=True)
class TLSSettings:
    verify: bool = False
    ca_file: Optional[str] = None
    key: Optional[PrivateKeyTypes] = None
    certificate: Optional[x509.Certificate] = None

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "TLSSettings":
        """Resolve the tls_* request options.

        The key and certificate come from a single source: the tls_key and
        tls_certificate objects when both are set, otherwise the PEM data in
        tls_key_and_certificate, otherwise the PEM file at
        tls_key_and_certificate_file.

        tls_ca_file is only used when tls_verify is set, in which case it
        defaults to the bundled CA file.
        """
        key = options.get("tls_key")
        certificate = options.get("tls_certificate")

        if key is None or certificate is None:
            pem = options.get("tls_key_and_certificate")
            if pem is None:
                path = options.get("tls_key_and_certificate_file")
                if path is not None:
                    with open(path, "rb") as f:
                        pem = f.read()
            if pem is not None:
                key, certificate = key_and_certificate_from_pem(pem)
            elif key is not None or certificate is not None:
                raise InvalidArgumentError(
                    "a TLS client key and certificate must be configured together"
                )

        verify = bool(options.get("tls_verify"))
        ca_file = None
        if verify:
            ca_file = options.get("tls_ca_file") or default_ca_file()

        return cls(verify=verify, ca_file=ca_file, key=key, certificate=certificate)

    def ssl_context(self) -> ssl.SSLContext:
        """Build the context used for https connections."""
        if self.verify:
            logger.debug("verifying peer certificates against %s", self.ca_file)
            context = ssl.create_default_context(cafile=self.ca_file)
        else:
            logger.debug("not verifying peer certificates")
            context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE

        if self.key is not None and self.certificate is not None:
            load_key_and_certificate(context, self.key, self.certificate)
        return context


def load_key_and_certificate(
    context: ssl.SSLContext, key: PrivateKeyTypes, certificate: x509.Certificate
):
    """Load a client key and certificate into context.

    The ssl module only loads certificate chains from files, so both are
    written to a private temporary file that is removed afterwards.
    """
    pem = certificate.public_bytes(Encoding.PEM) + key.private_bytes(
        Encoding.PEM, PrivateFormat.PKCS8, NoEncryption()
    )
    fd, path = tempfile.mkstemp(suffix=".pem")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(pem)
        context.load_cert_chain(path)
    finally:
        os.unlink(path)
    logger.debug("loaded TLS client certificate %s", certificate.subject.rfc4514_string())
