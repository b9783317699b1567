"""Tests for YAML config loading."""
import pytest

from autodeploy.config.loader import ConfigLoader, apply_env_overrides, extract_deploy_options
from autodeploy.core.errors import ConfigError
from autodeploy.models.config import Transport


class TestExtractDeployOptions:
    """Single extraction point for the option record."""

    def test_deploy_section(self):
        document = {
            'deploy': {'remote_host': 'h', 'remote_target_dir': '/srv'},
            'other_tool': {'x': 1},
        }

        assert extract_deploy_options(document) == {'remote_host': 'h', 'remote_target_dir': '/srv'}

    def test_top_level_options(self):
        document = {'remoteHost': 'h', 'remoteTargetDir': '/srv'}

        assert extract_deploy_options(document) == {'remote_host': 'h', 'remote_target_dir': '/srv'}

    def test_non_mapping_document(self):
        with pytest.raises(ConfigError):
            extract_deploy_options(['remote_host', 'h'])

    def test_non_mapping_section(self):
        with pytest.raises(ConfigError):
            extract_deploy_options({'deploy': 'h:/srv'})


class TestEnvOverrides:
    """AUTODEPLOY_<FIELD> variables override file values."""

    def test_overrides(self):
        options = {'remote_host': 'file-host', 'remote_target_dir': '/srv'}
        environ = {
            'AUTODEPLOY_REMOTE_HOST': 'env-host',
            'AUTODEPLOY_AUTO_CONFIRM': 'true',
            'UNRELATED': 'x',
        }

        merged = apply_env_overrides(options, environ)

        assert merged == {
            'remote_host': 'env-host',
            'remote_target_dir': '/srv',
            'auto_confirm': 'true',
        }
        assert options['remote_host'] == 'file-host'

    def test_empty_variable_ignored(self):
        merged = apply_env_overrides({'remote_host': 'h'}, {'AUTODEPLOY_REMOTE_HOST': ''})

        assert merged == {'remote_host': 'h'}


class TestConfigLoader:
    """Loading from disk."""

    def test_load_and_normalize(self, tmp_path):
        config_file = tmp_path / "autodeploy.yml"
        config_file.write_text(
            "deploy:\n"
            "  remote_host: 203.0.113.10\n"
            "  remote_target_dir: /var/www/app\n"
            "  remote_port: 2222\n"
            "  transport: rsync\n"
        )

        config = ConfigLoader(str(config_file)).deployment_config(environ={})

        assert config.remote_host == '203.0.113.10'
        assert config.remote_port == 2222
        assert config.transport is Transport.SYNC
        assert config.backup_dir == '/var/www/app_backups'

    def test_env_applied_to_file(self, tmp_path):
        config_file = tmp_path / "autodeploy.yml"
        config_file.write_text("remote_host: a\nremote_target_dir: /srv\n")

        config = ConfigLoader(str(config_file)).deployment_config(
            environ={'AUTODEPLOY_REMOTE_PORT': '2022'}
        )

        assert config.remote_port == 2022

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader(str(tmp_path / "nope.yml")).load()

        assert "not found" in str(exc_info.value)

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / "autodeploy.yml"
        config_file.write_text("")

        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader(str(config_file)).load()

        assert "empty" in str(exc_info.value)

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "autodeploy.yml"
        config_file.write_text("deploy: [unclosed\n")

        with pytest.raises(ConfigError):
            ConfigLoader(str(config_file)).load()

    def test_missing_required_option(self, tmp_path):
        config_file = tmp_path / "autodeploy.yml"
        config_file.write_text("deploy:\n  remote_target_dir: /srv\n")

        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader(str(config_file)).deployment_config(environ={})

        assert "remote_host" in str(exc_info.value)
