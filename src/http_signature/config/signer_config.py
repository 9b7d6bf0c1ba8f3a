"""
Signer configuration management

Loads the login, key fingerprint, key location and acceleration preference
from environment variables or JSON documents, and turns them into ready
signers, key pairs and requests authentication handlers.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ..crypto.keys import RSAKeyPair, load_key_pair_from_file
from ..exceptions import ConfigurationError
from ..signing.integration import HttpSignatureAuth
from ..signing.signer import Signer

logger = logging.getLogger(__name__)

ENV_LOGIN = "HTTP_SIGNATURE_LOGIN"
ENV_KEY_ID = "HTTP_SIGNATURE_KEY_ID"
ENV_KEY_PATH = "HTTP_SIGNATURE_KEY_PATH"
ENV_KEY_PASSPHRASE = "HTTP_SIGNATURE_KEY_PASSPHRASE"
ENV_NATIVE = "HTTP_SIGNATURE_NATIVE"

DEFAULT_KEY_PATH = "~/.ssh/id_rsa"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: Union[str, bool], name: str) -> bool:
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean value for {name}: {value}", details={"setting": name})


@dataclass
class SignerConfig:
    """
    Configuration for signing requests

    Attributes:
        login: Account/login name
        fingerprint: RSA key fingerprint used in the keyId
        key_path: Path to the PEM private key
        key_passphrase: Passphrase for an encrypted key (optional)
        use_native: Whether to enable native signing acceleration
    """
    login: str
    fingerprint: str
    key_path: str = DEFAULT_KEY_PATH
    key_passphrase: Optional[str] = field(default=None, repr=False)
    use_native: bool = True

    def __post_init__(self):
        """Validate configuration after initialization"""
        if not self.login:
            raise ConfigurationError("Login cannot be empty", details={"setting": "login"})

        if not self.fingerprint:
            raise ConfigurationError("Fingerprint cannot be empty", details={"setting": "fingerprint"})

        if not self.key_path:
            raise ConfigurationError("Key path cannot be empty", details={"setting": "key_path"})

        self.use_native = _parse_bool(self.use_native, "use_native")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'SignerConfig':
        """Load configuration from HTTP_SIGNATURE_* environment variables"""
        env = os.environ if environ is None else environ

        login = env.get(ENV_LOGIN)
        fingerprint = env.get(ENV_KEY_ID)
        if not login or not fingerprint:
            raise ConfigurationError(
                f"{ENV_LOGIN} and {ENV_KEY_ID} must be set",
                details={"missing": [name for name in (ENV_LOGIN, ENV_KEY_ID) if not env.get(name)]}
            )

        return cls(
            login=login,
            fingerprint=fingerprint,
            key_path=env.get(ENV_KEY_PATH) or DEFAULT_KEY_PATH,
            key_passphrase=env.get(ENV_KEY_PASSPHRASE) or None,
            use_native=_parse_bool(env.get(ENV_NATIVE, "true"), ENV_NATIVE),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SignerConfig':
        """Load configuration from a dictionary"""
        try:
            return cls(
                login=data['login'],
                fingerprint=data['fingerprint'],
                key_path=data.get('key_path', DEFAULT_KEY_PATH),
                key_passphrase=data.get('key_passphrase'),
                use_native=data.get('use_native', True),
            )
        except KeyError as e:
            raise ConfigurationError(f"Missing configuration setting: {e}", details={"setting": str(e)})
        except (TypeError, AttributeError) as e:
            raise ConfigurationError(f"Invalid configuration format: {e}")

    @classmethod
    def from_json(cls, json_string: str) -> 'SignerConfig':
        """Load configuration from a JSON string"""
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Failed to parse configuration JSON: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError("Configuration JSON must be an object")

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'SignerConfig':
        """Load configuration from a JSON file"""
        try:
            path = Path(file_path)
            with open(path, 'r', encoding='utf-8') as f:
                json_string = f.read()
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file: {e}")

        return cls.from_json(json_string)

    def load_key_pair(self) -> RSAKeyPair:
        """Read the configured key pair from disk"""
        return load_key_pair_from_file(self.key_path, self.key_passphrase)

    def create_signer(self) -> Signer:
        """Create a Signer honoring the acceleration preference"""
        return Signer(use_native=self.use_native)

    def create_auth(self, key_pair: Optional[RSAKeyPair] = None) -> HttpSignatureAuth:
        """
        Create a requests authentication handler for this configuration.

        The key pair is read from ``key_path`` when not given.
        """
        if key_pair is None:
            key_pair = self.load_key_pair()

        logger.debug(f"Creating request signing auth for login: {self.login}")
        return HttpSignatureAuth(self.login, self.fingerprint, key_pair, signer=self.create_signer())


def load_config_from_env(environ: Optional[Mapping[str, str]] = None) -> SignerConfig:
    """Load signer configuration from environment variables"""
    return SignerConfig.from_env(environ)


def load_config_from_json(json_string: str) -> SignerConfig:
    """Load signer configuration from JSON string"""
    return SignerConfig.from_json(json_string)


def load_config_from_file(file_path: Union[str, Path]) -> SignerConfig:
    """Load signer configuration from file"""
    return SignerConfig.from_file(file_path)
