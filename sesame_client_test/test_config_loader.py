"""Tests for SesameClientConfig, EndpointConfig and the client factory."""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sesame_client.client.client_factory import create_sesame_client
from sesame_client.client.config.client_config_loader import SesameClientConfig
from sesame_client.client.config.endpoint_config import DEFAULT_SERVER_URL, Credentials, EndpointConfig
from sesame_client.client.request import formats
from sesame_client.client.transport.http_transport import RequestsTransport
from sesame_client.client.utils.client_utils import ConfigError
from sesame_client.mock.mock_transport import MockSesameTransport
from sesame_client_test.fixtures import sample_results

CONFIG_YAML = '''
server:
  url: http://sesame.example.org:8080/openrdf-sesame
  repository: people
  encoding: ISO-8859-1
auth:
  username: admin
  password: secret
client:
  timeout: 15
  use_mock_client: false
'''


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / 'sesameclient-config.yaml'
    path.write_text(CONFIG_YAML, encoding='utf-8')
    return str(path)


class TestEndpointConfig:

    def test_defaults(self):
        config = EndpointConfig()

        assert config.base_address == DEFAULT_SERVER_URL
        assert config.repository is None
        assert config.encoding == 'utf-8'
        assert config.credentials is None
        assert config.charset_suffix() == ';charset=utf-8'

    @pytest.mark.parametrize('base_address', ['', '   ', 'ftp://example.org', 'localhost:8080'])
    def test_invalid_base_address(self, base_address):
        with pytest.raises(ConfigError):
            EndpointConfig.create(base_address=base_address)

    @pytest.mark.parametrize('encoding', ['', '   ', 'no-such-charset', 'utf-9'])
    def test_invalid_encoding(self, encoding):
        with pytest.raises(ConfigError):
            EndpointConfig.create(repository='test-repo', encoding=encoding)

    def test_with_encoding_checks_codec(self):
        config = EndpointConfig(repository='test-repo')

        with pytest.raises(ConfigError, match="unknown encoding"):
            config.with_encoding('no-such-charset')
        assert config.with_encoding('latin-1').encoding == 'latin-1'

    def test_with_methods_return_new_configs(self):
        config = EndpointConfig(repository='a')

        assert config.with_repository('b').repository == 'b'
        assert config.with_encoding('UTF-16').encoding == 'UTF-16'
        assert config.with_credentials('admin', 'pw').credentials == Credentials(username='admin', password='pw')
        assert config.with_credentials('admin').with_credentials(None).credentials is None
        assert config.repository == 'a'
        assert config.credentials is None

    def test_credentials_repr_hides_password(self):
        assert 'secret' not in repr(Credentials(username='admin', password='secret'))


class TestSesameClientConfig:

    def test_load_yaml(self, config_file):
        config = SesameClientConfig(config_file)

        assert config.get_server_url() == 'http://sesame.example.org:8080/openrdf-sesame'
        assert config.get_repository() == 'people'
        assert config.get_credentials() == ('admin', 'secret')
        assert config.get_timeout() == 15
        assert config.use_mock_client() is False

        endpoint = config.to_endpoint_config()
        assert endpoint.repository == 'people'
        assert endpoint.encoding == 'ISO-8859-1'
        assert endpoint.credentials.username == 'admin'

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            SesameClientConfig(str(tmp_path / 'missing.yaml'))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / 'broken.yaml'
        path.write_text('server: [unclosed', encoding='utf-8')
        with pytest.raises(ConfigError):
            SesameClientConfig(str(path))

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / 'list.yaml'
        path.write_text('- a\n- b\n', encoding='utf-8')
        with pytest.raises(ConfigError):
            SesameClientConfig(str(path))

    def test_built_in_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv('HOME', str(tmp_path))

        config = SesameClientConfig()

        assert config.config_path == '<built-in defaults>'
        assert config.get_server_url() == DEFAULT_SERVER_URL
        assert config.get_repository() is None
        assert config.get_credentials() == (None, None)
        assert config.to_endpoint_config() == EndpointConfig()

    def test_default_location_in_working_directory(self, tmp_path, monkeypatch):
        (tmp_path / 'sesameclient-config.yaml').write_text(CONFIG_YAML, encoding='utf-8')
        monkeypatch.chdir(tmp_path)

        assert SesameClientConfig().get_repository() == 'people'

    def test_environment_overrides(self, config_file, monkeypatch):
        monkeypatch.setenv('SESAME_CLIENT_SERVER_URL', 'https://other.example.org/sesame')
        monkeypatch.setenv('SESAME_CLIENT_REPOSITORY', 'other')
        monkeypatch.setenv('SESAME_CLIENT_TIMEOUT', '2.5')
        monkeypatch.setenv('SESAME_CLIENT_USE_MOCK_CLIENT', 'yes')

        config = SesameClientConfig(config_file)

        assert config.get_server_url() == 'https://other.example.org/sesame'
        assert config.get_repository() == 'other'
        assert config.get_timeout() == 2.5
        assert config.use_mock_client() is True
        assert config.get_credentials() == ('admin', 'secret')

    def test_environment_ignored_when_disabled(self, config_file, monkeypatch):
        monkeypatch.setenv('SESAME_CLIENT_REPOSITORY', 'other')
        assert SesameClientConfig(config_file, use_env=False).get_repository() == 'people'

    def test_invalid_encoding_from_environment(self, config_file, monkeypatch):
        monkeypatch.setenv('SESAME_CLIENT_ENCODING', 'no-such-charset')
        config = SesameClientConfig(config_file)

        with pytest.raises(ConfigError):
            config.to_endpoint_config()

    def test_invalid_timeout_from_environment(self, config_file, monkeypatch):
        monkeypatch.setenv('SESAME_CLIENT_TIMEOUT', 'soon')
        with pytest.raises(ConfigError):
            SesameClientConfig(config_file)

    def test_env_file(self, config_file, tmp_path):
        env_file = tmp_path / '.env'
        env_file.write_text('SESAME_CLIENT_AUTH_USERNAME=reader\n', encoding='utf-8')
        try:
            config = SesameClientConfig(config_file, env_file=str(env_file))
            assert config.get_credentials() == ('reader', 'secret')
        finally:
            os.environ.pop('SESAME_CLIENT_AUTH_USERNAME', None)

    @pytest.mark.parametrize('section, key, value', [
        ('server', 'url', 'ftp://example.org'),
        ('server', 'repository', 42),
        ('auth', 'username', ''),
        ('client', 'timeout', -1),
        ('client', 'use_mock_client', 'maybe'),
    ])
    def test_validation(self, config_file, section, key, value):
        config = SesameClientConfig(config_file)
        config.config_data[section][key] = value

        with pytest.raises(ConfigError):
            config.to_endpoint_config()


class TestClientFactory:

    def test_mock_client(self, config_file, monkeypatch):
        monkeypatch.setenv('SESAME_CLIENT_USE_MOCK_CLIENT', 'true')

        client = create_sesame_client(config_file)

        assert isinstance(client.transport, MockSesameTransport)
        assert 'people' in client.transport.repositories
        client.append(sample_results.PEOPLE_TURTLE, input_format=formats.TURTLE)
        assert client.size() == 3
        assert client.transport.last_request.auth == ('admin', 'secret')

    def test_http_client(self, config_file):
        client = create_sesame_client(config=SesameClientConfig(config_file))

        assert isinstance(client.transport, RequestsTransport)
        assert client.transport.timeout == 15
        assert client.config.base_address == 'http://sesame.example.org:8080/openrdf-sesame'
        assert client.config.credentials == Credentials(username='admin', password='secret')

    def test_invalid_config(self, tmp_path):
        path = tmp_path / 'bad.yaml'
        path.write_text('server:\n  url: localhost\n', encoding='utf-8')
        with pytest.raises(ConfigError):
            create_sesame_client(str(path))
