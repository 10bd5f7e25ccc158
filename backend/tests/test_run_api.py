"""Tests for the server entry point's startup checks."""

from run_api import REQUIRED_SECRETS, unset_secrets
from shared.config import Settings


def test_everything_unset_by_default():
    assert set(unset_secrets(Settings(_env_file=None))) == set(REQUIRED_SECRETS)


def test_set_secrets_not_reported():
    settings = Settings(_env_file=None, retell_api_key="key_default", cron_secret="s3cret")

    missing = unset_secrets(settings)

    assert "retell_api_key" not in missing
    assert "cron_secret" not in missing
    assert "retell_text_agent_id" in missing
