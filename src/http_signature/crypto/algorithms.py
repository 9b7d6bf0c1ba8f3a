"""
RSA/SHA-256 signature algorithms for the HTTP signature library

Two interchangeable backends implement ``rsa-sha256`` (SHA-256 digest, RSA
signature, PKCS#1 v1.5 padding):

- SoftwareRSASHA256 uses the cryptography package.
- NativeRSASHA256 performs the modular exponentiation with GMP through gmpy2.

Signatures produced by either backend verify under the other. A backend is
chosen once per signer by ``choose_algorithm`` and always falls back to the
software implementation when the native one cannot be used.
"""

import hashlib
import hmac
import logging
import platform
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed

from ..exceptions import (
    AlgorithmUnavailableError,
    InvalidKeyError,
    SignatureComputationError,
)

logger = logging.getLogger(__name__)

SIGNATURE_ALGORITHM_LABEL = "rsa-sha256"

SOFTWARE_ALGORITHM_NAME = "SHA256withRSA"
NATIVE_ALGORITHM_NAME = "SHA256withNativeRSA"

# Platforms with native GMP support, compared case-insensitively
SUPPORTED_NATIVE_OS = frozenset({"linux", "mac os x", "darwin", "sunos"})
SUPPORTED_NATIVE_ARCH = frozenset({"amd64", "x86_64"})

# DER encoding of the SHA-256 DigestInfo header (RFC 8017, section 9.2, note 1)
SHA256_DIGEST_INFO_PREFIX = bytes.fromhex("3031300d060960864801650304020105000420")


@dataclass(frozen=True)
class PlatformInfo:
    """
    Host platform signals used to decide on native acceleration.

    Attributes:
        os_name: Operating system name (e.g. "Linux", "Darwin")
        arch: CPU architecture (e.g. "x86_64", "AMD64")
    """
    os_name: str
    arch: str

    @property
    def native_supported(self) -> bool:
        return (self.os_name.lower() in SUPPORTED_NATIVE_OS
                and self.arch.lower() in SUPPORTED_NATIVE_ARCH)


def detect_platform(os_name: Optional[str] = None, arch: Optional[str] = None) -> PlatformInfo:
    """
    Detect the host platform, allowing either signal to be overridden.

    Args:
        os_name: Operating system name override
        arch: CPU architecture override

    Returns:
        PlatformInfo: Platform signals for backend selection
    """
    return PlatformInfo(
        os_name=platform.system() if os_name is None else os_name,
        arch=platform.machine() if arch is None else arch,
    )


def _require_private_key(private_key: Any) -> rsa.RSAPrivateKey:
    if private_key is None:
        raise InvalidKeyError("Key pair has no private key; it can only be used for verification")
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise InvalidKeyError(
            f"{SIGNATURE_ALGORITHM_LABEL} requires an RSA private key, got {type(private_key).__name__}"
        )
    return private_key


def _require_public_key(public_key: Any) -> rsa.RSAPublicKey:
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise InvalidKeyError(
            f"{SIGNATURE_ALGORITHM_LABEL} requires an RSA public key, got {type(public_key).__name__}"
        )
    return public_key


def emsa_pkcs1_v15_encode(digest: bytes, em_length: int) -> bytes:
    """
    Encode a SHA-256 digest with EMSA-PKCS1-v1_5 (RFC 8017, section 9.2).

    Args:
        digest: SHA-256 digest of the message
        em_length: Intended encoded length, the modulus length in bytes

    Returns:
        bytes: Encoded message of exactly ``em_length`` bytes

    Raises:
        InvalidKeyError: If the modulus is too short for the encoding
    """
    t = SHA256_DIGEST_INFO_PREFIX + digest
    if em_length < len(t) + 11:
        raise InvalidKeyError("RSA modulus too short for a SHA-256 PKCS#1 v1.5 signature")
    ps = b'\xff' * (em_length - len(t) - 3)
    return b'\x00\x01' + ps + b'\x00' + t


class SignatureContext:
    """
    Single-use signing or verification state.

    Data is fed with ``update`` and the operation is finished with ``sign``
    or ``verify``. A context belongs to one operation and is never shared.
    """

    def update(self, data: bytes) -> None:
        raise NotImplementedError

    def sign(self) -> bytes:
        raise NotImplementedError

    def verify(self, signature: bytes) -> bool:
        raise NotImplementedError


class SignatureAlgorithm:
    """Common interface for rsa-sha256 backends"""

    name: str = ""
    native: bool = False
    label: str = SIGNATURE_ALGORITHM_LABEL

    def new_signing_context(self, private_key: rsa.RSAPrivateKey) -> SignatureContext:
        raise NotImplementedError

    def new_verification_context(self, public_key: rsa.RSAPublicKey) -> SignatureContext:
        raise NotImplementedError

    def sign(self, private_key: rsa.RSAPrivateKey, data: bytes) -> bytes:
        """Sign ``data`` in a fresh context."""
        context = self.new_signing_context(private_key)
        context.update(data)
        return context.sign()

    def verify(self, public_key: rsa.RSAPublicKey, data: bytes, signature: bytes) -> bool:
        """Verify ``signature`` over ``data`` in a fresh context."""
        context = self.new_verification_context(public_key)
        context.update(data)
        return context.verify(signature)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name='{self.name}', native={self.native})"


class _SoftwareSigningContext(SignatureContext):

    def __init__(self, private_key: rsa.RSAPrivateKey):
        self._private_key = private_key
        self._hash = hashes.Hash(hashes.SHA256())

    def update(self, data: bytes) -> None:
        self._hash.update(data)

    def sign(self) -> bytes:
        digest = self._hash.finalize()
        return self._private_key.sign(digest, padding.PKCS1v15(), Prehashed(hashes.SHA256()))


class _SoftwareVerificationContext(SignatureContext):

    def __init__(self, public_key: rsa.RSAPublicKey):
        self._public_key = public_key
        self._hash = hashes.Hash(hashes.SHA256())

    def update(self, data: bytes) -> None:
        self._hash.update(data)

    def verify(self, signature: bytes) -> bool:
        digest = self._hash.finalize()
        try:
            self._public_key.verify(signature, digest, padding.PKCS1v15(), Prehashed(hashes.SHA256()))
            return True
        except InvalidSignature:
            return False


class SoftwareRSASHA256(SignatureAlgorithm):
    """rsa-sha256 implemented entirely by the cryptography package"""

    name = SOFTWARE_ALGORITHM_NAME
    native = False

    def __init__(self):
        try:
            hashes.Hash(hashes.SHA256())
        except UnsupportedAlgorithm as e:
            raise AlgorithmUnavailableError(
                f"SHA-256 is not available from the cryptography backend: {e}"
            ) from e

    def new_signing_context(self, private_key: rsa.RSAPrivateKey) -> SignatureContext:
        return _SoftwareSigningContext(_require_private_key(private_key))

    def new_verification_context(self, public_key: rsa.RSAPublicKey) -> SignatureContext:
        return _SoftwareVerificationContext(_require_public_key(public_key))


class _NativeSigningContext(SignatureContext):

    def __init__(self, gmpy2: Any, private_key: rsa.RSAPrivateKey):
        self._gmpy2 = gmpy2
        self._numbers = private_key.private_numbers()
        self._length = (private_key.key_size + 7) // 8
        self._hash = hashlib.sha256()

    def update(self, data: bytes) -> None:
        self._hash.update(data)

    def sign(self) -> bytes:
        gmpy2 = self._gmpy2
        numbers = self._numbers
        public = numbers.public_numbers

        em = emsa_pkcs1_v15_encode(self._hash.digest(), self._length)
        m = gmpy2.mpz(int.from_bytes(em, 'big'))
        p = gmpy2.mpz(numbers.p)
        q = gmpy2.mpz(numbers.q)

        # RSA-CRT with constant-time exponentiation
        m1 = gmpy2.powmod_sec(m % p, gmpy2.mpz(numbers.dmp1), p)
        m2 = gmpy2.powmod_sec(m % q, gmpy2.mpz(numbers.dmq1), q)
        h = (gmpy2.mpz(numbers.iqmp) * (m1 - m2)) % p
        s = m2 + h * q

        if gmpy2.powmod(s, public.e, public.n) != m:
            raise SignatureComputationError("RSA-CRT signature failed its consistency check")

        return int(s).to_bytes(self._length, 'big')


class _NativeVerificationContext(SignatureContext):

    def __init__(self, gmpy2: Any, public_key: rsa.RSAPublicKey):
        self._gmpy2 = gmpy2
        self._numbers = public_key.public_numbers()
        self._length = (public_key.key_size + 7) // 8
        self._hash = hashlib.sha256()

    def update(self, data: bytes) -> None:
        self._hash.update(data)

    def verify(self, signature: bytes) -> bool:
        if len(signature) != self._length:
            return False

        s = int.from_bytes(signature, 'big')
        if s >= self._numbers.n:
            return False

        m = self._gmpy2.powmod(s, self._numbers.e, self._numbers.n)
        expected = emsa_pkcs1_v15_encode(self._hash.digest(), self._length)
        return hmac.compare_digest(int(m).to_bytes(self._length, 'big'), expected)


class NativeRSASHA256(SignatureAlgorithm):
    """
    rsa-sha256 with modular exponentiation delegated to libgmp via gmpy2.

    Construction fails with ImportError or AttributeError when gmpy2 (2.1 or
    later) is not installed; ``choose_algorithm`` treats that as a fallback.
    """

    name = NATIVE_ALGORITHM_NAME
    native = True

    def __init__(self):
        import gmpy2

        if not hasattr(gmpy2, 'powmod_sec'):
            raise ImportError("gmpy2 2.1 or later is required for native RSA")
        self._gmpy2 = gmpy2

    def new_signing_context(self, private_key: rsa.RSAPrivateKey) -> SignatureContext:
        return _NativeSigningContext(self._gmpy2, _require_private_key(private_key))

    def new_verification_context(self, public_key: rsa.RSAPublicKey) -> SignatureContext:
        return _NativeVerificationContext(self._gmpy2, _require_public_key(public_key))


def choose_algorithm(use_native: bool = True,
                     platform_info: Optional[PlatformInfo] = None) -> SignatureAlgorithm:
    """
    Choose the rsa-sha256 backend for a signer.

    The native backend is attempted only when ``use_native`` is set and the
    platform is supported. If ANYTHING goes wrong while creating it, the
    software backend is returned instead.

    Args:
        use_native: True to allow native acceleration
        platform_info: Platform signals (detected when None)

    Returns:
        SignatureAlgorithm: Ready-to-use backend

    Raises:
        AlgorithmUnavailableError: If not even the software backend can be created
    """
    if platform_info is None:
        platform_info = detect_platform()

    if not use_native:
        logger.debug("Native RSA disabled by caller; using software implementation")
    elif not platform_info.native_supported:
        logger.debug(
            f"Native RSA not supported on {platform_info.os_name}/{platform_info.arch}; "
            "using software implementation"
        )
    else:
        try:
            algorithm = NativeRSASHA256()
            logger.debug(f"Using native RSA signing backend {algorithm.name}")
            return algorithm
        except Exception as e:
            logger.debug(f"Native RSA backend unavailable, falling back to software: {e!r}")

    return SoftwareRSASHA256()


def check_platform_compatibility(platform_info: Optional[PlatformInfo] = None) -> Dict[str, Any]:
    """
    Check platform compatibility for rsa-sha256 operations.

    Returns:
        dict: Software and native backend availability plus platform details
    """
    if platform_info is None:
        platform_info = detect_platform()

    compatibility = {
        'software_available': False,
        'native_supported_platform': platform_info.native_supported,
        'native_available': False,
        'platform_info': {
            'system': platform_info.os_name,
            'machine': platform_info.arch,
            'python_version': sys.version,
        }
    }

    try:
        SoftwareRSASHA256()
        compatibility['software_available'] = True
    except AlgorithmUnavailableError:
        compatibility['software_available'] = False

    if platform_info.native_supported:
        try:
            NativeRSASHA256()
            compatibility['native_available'] = True
        except Exception:
            compatibility['native_available'] = False

    return compatibility
