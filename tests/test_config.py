"""
Test suite for signer configuration
"""

import json

import pytest

from http_signature.config import (
    SignerConfig,
    load_config_from_env,
    load_config_from_file,
    load_config_from_json,
)
from http_signature.config.signer_config import DEFAULT_KEY_PATH
from http_signature.exceptions import ConfigurationError, KeyNotFoundError
from http_signature.signing import HttpSignatureAuth

from conftest import TEST_DATE, TEST_FINGERPRINT, TEST_LOGIN, TEST_PASSPHRASE


class TestSignerConfig:
    """Test SignerConfig construction and validation"""

    def test_defaults(self):
        config = SignerConfig(login=TEST_LOGIN, fingerprint=TEST_FINGERPRINT)

        assert config.key_path == DEFAULT_KEY_PATH
        assert config.key_passphrase is None
        assert config.use_native is True

    def test_passphrase_not_in_repr(self):
        config = SignerConfig(login=TEST_LOGIN, fingerprint=TEST_FINGERPRINT, key_passphrase="s3cret")
        assert "s3cret" not in repr(config)

    @pytest.mark.parametrize("kwargs", [
        {"login": "", "fingerprint": TEST_FINGERPRINT},
        {"login": TEST_LOGIN, "fingerprint": ""},
        {"login": TEST_LOGIN, "fingerprint": TEST_FINGERPRINT, "key_path": ""},
        {"login": TEST_LOGIN, "fingerprint": TEST_FINGERPRINT, "use_native": "maybe"},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigurationError):
            SignerConfig(**kwargs)

    def test_use_native_string(self):
        config = SignerConfig(login=TEST_LOGIN, fingerprint=TEST_FINGERPRINT, use_native="off")
        assert config.use_native is False


class TestLoadFromEnv:
    """Test loading configuration from environment variables"""

    def test_full_environment(self):
        environ = {
            "HTTP_SIGNATURE_LOGIN": TEST_LOGIN,
            "HTTP_SIGNATURE_KEY_ID": TEST_FINGERPRINT,
            "HTTP_SIGNATURE_KEY_PATH": "/keys/id_rsa",
            "HTTP_SIGNATURE_KEY_PASSPHRASE": TEST_PASSPHRASE,
            "HTTP_SIGNATURE_NATIVE": "false",
        }
        config = load_config_from_env(environ)

        assert config.login == TEST_LOGIN
        assert config.fingerprint == TEST_FINGERPRINT
        assert config.key_path == "/keys/id_rsa"
        assert config.key_passphrase == TEST_PASSPHRASE
        assert config.use_native is False

    def test_minimal_environment(self):
        config = SignerConfig.from_env({
            "HTTP_SIGNATURE_LOGIN": TEST_LOGIN,
            "HTTP_SIGNATURE_KEY_ID": TEST_FINGERPRINT,
        })

        assert config.key_path == DEFAULT_KEY_PATH
        assert config.key_passphrase is None
        assert config.use_native is True

    def test_process_environment(self, monkeypatch):
        monkeypatch.setenv("HTTP_SIGNATURE_LOGIN", TEST_LOGIN)
        monkeypatch.setenv("HTTP_SIGNATURE_KEY_ID", TEST_FINGERPRINT)
        monkeypatch.delenv("HTTP_SIGNATURE_NATIVE", raising=False)

        assert SignerConfig.from_env().login == TEST_LOGIN

    def test_missing_variables(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_from_env({"HTTP_SIGNATURE_LOGIN": TEST_LOGIN})

        assert exc_info.value.details["missing"] == ["HTTP_SIGNATURE_KEY_ID"]

    def test_invalid_native_flag(self):
        with pytest.raises(ConfigurationError):
            load_config_from_env({
                "HTTP_SIGNATURE_LOGIN": TEST_LOGIN,
                "HTTP_SIGNATURE_KEY_ID": TEST_FINGERPRINT,
                "HTTP_SIGNATURE_NATIVE": "sometimes",
            })


class TestLoadFromJson:
    """Test loading configuration from JSON"""

    def test_json_string(self):
        config = load_config_from_json(json.dumps({
            "login": TEST_LOGIN,
            "fingerprint": TEST_FINGERPRINT,
            "use_native": False,
        }))

        assert config.login == TEST_LOGIN
        assert config.use_native is False

    def test_json_file(self, tmp_path):
        config_file = tmp_path / "signer.json"
        config_file.write_text(json.dumps({
            "login": TEST_LOGIN,
            "fingerprint": TEST_FINGERPRINT,
            "key_path": "/keys/id_rsa",
        }), encoding='utf-8')

        config = load_config_from_file(config_file)
        assert config.key_path == "/keys/id_rsa"

    @pytest.mark.parametrize("document", [
        "not json",
        "[1, 2, 3]",
        json.dumps({"login": TEST_LOGIN}),
    ])
    def test_invalid_json(self, document):
        with pytest.raises(ConfigurationError):
            load_config_from_json(document)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config_from_file(tmp_path / "missing.json")


class TestConfiguredSigning:
    """Test turning a configuration into working signing objects"""

    def test_create_auth_reads_key(self, tmp_path, encrypted_pkcs8_pem, key_pair):
        key_file = tmp_path / "id_rsa"
        key_file.write_bytes(encrypted_pkcs8_pem)
        config = SignerConfig(
            login=TEST_LOGIN,
            fingerprint=TEST_FINGERPRINT,
            key_path=str(key_file),
            key_passphrase=TEST_PASSPHRASE,
            use_native=False,
        )

        auth = config.create_auth()

        assert isinstance(auth, HttpSignatureAuth)
        assert auth.signer.native_enabled is False
        header = auth.signer.create_authorization_header(TEST_LOGIN, TEST_FINGERPRINT, auth.key_pair, TEST_DATE)
        assert auth.signer.verify_authorization_header(key_pair, header, TEST_DATE)

    def test_create_auth_with_key_pair(self, key_pair):
        config = SignerConfig(login=TEST_LOGIN, fingerprint=TEST_FINGERPRINT, key_path="/nonexistent/id_rsa")
        auth = config.create_auth(key_pair)

        assert auth.key_pair is key_pair

    def test_missing_key_file(self, tmp_path):
        config = SignerConfig(login=TEST_LOGIN, fingerprint=TEST_FINGERPRINT, key_path=str(tmp_path / "id_rsa"))

        with pytest.raises(KeyNotFoundError):
            config.load_key_pair()

    def test_create_signer(self):
        config = SignerConfig(login=TEST_LOGIN, fingerprint=TEST_FINGERPRINT, use_native=False)
        assert config.create_signer().native_enabled is False
