"""Configuration tests."""

import logging
from logging.handlers import RotatingFileHandler

import pytest
import yaml

from post_analysis.common import ConfigError, LoggingConfig, RootConfig, load_config
from post_analysis.connectors import Publisher, PubSubConfig, StorageConnector
from post_analysis.inference import LanguageClient

from conftest import TOPIC_ARN


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML config and return its path."""

    def write(config) -> str:
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump(config))
        return str(path)

    return write


class TestLoadConfig:
    """Test suite for loading the YAML configuration."""

    def test_defaults(self, config_file, monkeypatch):
        """Test an empty file falls back to defaults."""
        monkeypatch.delenv("PORT", raising=False)
        config = load_config(config_file({}))

        assert config.server.port == 3000
        assert config.storage == {}
        assert config.logging is None

    def test_port_from_environment(self, config_file, monkeypatch):
        """Test PORT overrides the configured port."""
        monkeypatch.setenv("PORT", "8080")
        config = load_config(config_file({"server": {"port": 9000}}))
        assert config.server.port == 8080

    def test_config_path_from_environment(self, config_file, monkeypatch):
        """Test POST_ANALYSIS_CONFIG selects the file."""
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.setenv("POST_ANALYSIS_CONFIG", config_file({"server": {"port": 4000}}))
        assert load_config().server.port == 4000

    def test_missing_file(self, tmp_path):
        """Test a missing file is a config error."""
        with pytest.raises(ConfigError, match="not found"):
            load_config(str(tmp_path / "nope.yaml"))

    def test_unknown_section(self, config_file):
        """Test unknown keys are rejected."""
        with pytest.raises(ConfigError, match="Invalid root configuration"):
            load_config(config_file({"database": {}}))

    def test_not_a_mapping(self, tmp_path):
        """Test non-mapping documents are rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(str(path))


class TestComponentConfig:
    """Test suite for component configuration."""

    def test_storage_defaults(self):
        """Test storage falls back to the default bucket layout."""
        storage = StorageConnector.from_config({})

        assert storage.config.bucket == "rube_goldberg_project"
        assert storage.config.prefix == "reddit_data"
        assert storage.config.timeout == 50

    def test_region_from_environment(self, monkeypatch):
        """Test AWS_REGION sets the default region."""
        monkeypatch.setenv("AWS_REGION", "us-east-1")
        assert LanguageClient.from_config({}).config.region == "us-east-1"

    def test_invalid_component_config(self):
        """Test validation errors surface as config errors."""
        with pytest.raises(ConfigError, match="LanguageClient"):
            LanguageClient.from_config({"requests_per_minute": 0})

    def test_extra_keys_rejected(self):
        """Test unknown component keys are rejected."""
        with pytest.raises(ConfigError):
            StorageConnector.from_config({"bucket": "b", "table": "t"})

    def test_topic_required_when_enabled(self, monkeypatch):
        """Test an enabled publisher needs a topic."""
        monkeypatch.delenv("SNS_TOPIC_ARN", raising=False)
        with pytest.raises(ConfigError, match="topic_arn"):
            Publisher.from_config({})

    def test_topic_from_environment(self, monkeypatch):
        """Test SNS_TOPIC_ARN provides the topic."""
        monkeypatch.setenv("SNS_TOPIC_ARN", TOPIC_ARN)
        assert PubSubConfig().topic_arn == TOPIC_ARN

    def test_topic_optional_when_disabled(self, monkeypatch):
        """Test a disabled publisher needs no topic."""
        monkeypatch.delenv("SNS_TOPIC_ARN", raising=False)
        assert Publisher.from_config({"enabled": False}).topic_arn is None

    def test_invalid_topic_arn(self):
        """Test malformed ARNs are rejected."""
        with pytest.raises(ConfigError):
            Publisher.from_config({"topic_arn": "rube_goldberg"})


class TestLoggingConfig:
    """Test suite for logging configuration."""

    def test_root_config_parses_logging(self):
        """Test the logging section is validated."""
        config = RootConfig.from_dict({"logging": {"level": "DEBUG"}})
        assert config.logging.level == "DEBUG"

    def test_file_handler(self, tmp_path):
        """Test a rotating file handler is attached when a file is set."""
        root = logging.getLogger()
        before = list(root.handlers)

        LoggingConfig(filename=str(tmp_path / "service.log"), backup_count=2).configure()

        added = [h for h in root.handlers if h not in before]
        try:
            assert len(added) == 1
            assert isinstance(added[0], RotatingFileHandler)
            assert added[0].backupCount == 2
        finally:
            for handler in added:
                root.removeHandler(handler)
                handler.close()
