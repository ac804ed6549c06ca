"""Tests for the secret-masking log helpers."""

import logging

from mcp_jira_cloud.utils.logging import log_config_param, mask_sensitive


def test_mask_sensitive():
    assert mask_sensitive(None) == "Not Provided"
    assert mask_sensitive("") == "Not Provided"
    assert mask_sensitive("short") == "*****"
    assert mask_sensitive("abcdefghijkl") == "********ijkl"
    assert mask_sensitive("abcdefghijkl", keep_chars=2) == "**********kl"


def test_log_config_param_masks_sensitive(caplog):
    logger = logging.getLogger("tests.config")
    with caplog.at_level(logging.INFO, logger="tests.config"):
        log_config_param(logger, "Jira", "API Token", "supersecrettoken", sensitive=True)
        log_config_param(logger, "Jira", "Email", "user@example.com")
        log_config_param(logger, "Jira", "Site", None)
    assert "supersecret" not in caplog.text
    assert "Jira API Token: ************oken" in caplog.text
    assert "Jira Email: user@example.com" in caplog.text
    assert "Jira Site: Not Provided" in caplog.text
