import pytest
from pydantic import ValidationError

from poolguard.config import RuleConfig


def test_rule_config_defaults_match_client_signature():
    config = RuleConfig()

    assert "jdbc.Client" in config.target_constructors
    assert config.pool_param_names == ("connectionPool", "connection_pool")
    assert config.total_param_count == 5
    assert config.config_param_index == 4


def test_rule_config_rejects_index_outside_signature():
    with pytest.raises(ValidationError):
        RuleConfig(total_param_count=3, config_param_index=3)


def test_rule_config_is_frozen():
    config = RuleConfig()

    with pytest.raises(ValidationError):
        config.total_param_count = 2  # type: ignore[misc]
