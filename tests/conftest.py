"""
Shared fixtures for the HTTP signature test suite
"""

import time

import pytest

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from http_signature.crypto.algorithms import PlatformInfo
from http_signature.crypto.keys import RSAKeyPair
from http_signature.signing.signer import Signer

TEST_PASSPHRASE = "correct horse battery staple"
TEST_LOGIN = "jdoe"
TEST_FINGERPRINT = "aa:bb:cc"
TEST_DATE = "Thu Jan 01 00:00:00 1970 GMT"


@pytest.fixture(scope="session")
def rsa_private_key():
    """Fixed 2048-bit RSA private key shared by the whole session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_rsa_private_key():
    """A second, unrelated RSA private key."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def key_pair(rsa_private_key):
    """Key pair built from the session key."""
    return RSAKeyPair.from_private_key(rsa_private_key)


@pytest.fixture
def other_key_pair(other_rsa_private_key):
    """Key pair built from the unrelated session key."""
    return RSAKeyPair.from_private_key(other_rsa_private_key)


@pytest.fixture
def pkcs1_pem(rsa_private_key):
    """Unencrypted traditional OpenSSL (PKCS#1) PEM."""
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption()
    )


@pytest.fixture
def pkcs8_pem(rsa_private_key):
    """Unencrypted PKCS#8 PEM."""
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption()
    )


@pytest.fixture
def encrypted_pkcs1_pem(rsa_private_key):
    """Passphrase-protected traditional OpenSSL PEM (Proc-Type header)."""
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.BestAvailableEncryption(TEST_PASSPHRASE.encode('utf-8'))
    )


@pytest.fixture
def encrypted_pkcs8_pem(rsa_private_key):
    """Passphrase-protected PKCS#8 PEM."""
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.BestAvailableEncryption(TEST_PASSPHRASE.encode('utf-8'))
    )


@pytest.fixture
def supported_platform():
    """Platform on which native acceleration may be attempted."""
    return PlatformInfo(os_name="Linux", arch="x86_64")


@pytest.fixture
def unsupported_platform():
    """Platform without native acceleration support."""
    return PlatformInfo(os_name="Windows", arch="AMD64")


@pytest.fixture
def host_timezone(monkeypatch):
    """Switch the process timezone with a POSIX TZ string; restored on teardown."""
    if not hasattr(time, 'tzset'):
        pytest.skip("time.tzset is not available on this platform")

    def set_timezone(tz):
        monkeypatch.setenv("TZ", tz)
        time.tzset()

    yield set_timezone

    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def signer():
    """Signer pinned to the software backend."""
    return Signer(use_native=False)
