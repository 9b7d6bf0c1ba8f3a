#!/usr/bin/env python3
"""
HTTP signature - Request Signing Example

This example signs a request date with a throwaway RSA key, verifies the
resulting Authorization header, and prepares a signed request with requests.
"""

import sys
import os

import requests
from cryptography.hazmat.primitives.asymmetric import rsa

# Add src to path for development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from http_signature import (
    RSAKeyPair,
    Signer,
    HttpSignatureAuth,
    key_fingerprint,
    check_platform_compatibility,
    verify_request_headers,
)


def header_signing_example(signer, key_pair, fingerprint):
    """Sign and verify an Authorization header"""
    print("=== Authorization Header Example ===")

    date = signer.default_sign_date_as_string()
    header = signer.create_authorization_header("jdoe", fingerprint, key_pair, date)

    print(f"   Date: {date}")
    print(f"   Authorization: {header[:80]}...")
    print(f"   Valid: {signer.verify_authorization_header(key_pair, header, date)}")
    print(f"   Valid with another date: "
          f"{signer.verify_authorization_header(key_pair, header, 'Thu Jan 1 00:00:00 1970 GMT')}")


def requests_example(signer, key_pair, fingerprint):
    """Attach signing to a requests call without sending it"""
    print("\n=== requests Integration Example ===")

    auth = HttpSignatureAuth("jdoe", fingerprint, key_pair, signer=signer)
    prepared = requests.Request('GET', "https://api.example.com/jdoe/stor", auth=auth).prepare()

    print(f"   Date header: {prepared.headers['Date']}")
    print(f"   Server-side check: {verify_request_headers(signer, key_pair, prepared.headers)}")


def main():
    compatibility = check_platform_compatibility()
    print(f"Native RSA available: {compatibility['native_available']}")

    key_pair = RSAKeyPair.from_private_key(
        rsa.generate_private_key(public_exponent=65537, key_size=2048)
    )
    fingerprint = key_fingerprint(key_pair)
    signer = Signer()
    print(f"Using {signer.algorithm.name} with key {fingerprint}\n")

    header_signing_example(signer, key_pair, fingerprint)
    requests_example(signer, key_pair, fingerprint)


if __name__ == "__main__":
    main()
