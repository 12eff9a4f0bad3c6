"""Tests for LnrContext and API key selection."""

import pytest

from lnr.clients.linear import LinearClient
from lnr.config import LnrConfig, OrganizationConfig
from lnr.core.context import LnrContext
from lnr.core.exceptions import AuthenticationError, ConfigError


class TestResolveToken:
    """Tests for LnrContext.resolve_token."""

    def test_explicit_organization(self, mock_config, fake_prompt):
        ctx = LnrContext(config=mock_config, organization="wayne", color=False, prompt=fake_prompt)
        assert ctx.resolve_token() == "lin_api_wayne_5678"
        assert fake_prompt.questions == []

    def test_explicit_organization_beats_env(self, mock_config, fake_prompt, monkeypatch):
        monkeypatch.setenv("LINEAR_API_KEY", "env-token")
        ctx = LnrContext(config=mock_config, organization="acme", color=False, prompt=fake_prompt)
        assert ctx.resolve_token() == "lin_api_acme_1234"

    def test_unknown_organization(self, mock_config, fake_prompt):
        ctx = LnrContext(config=mock_config, organization="gotham", color=False, prompt=fake_prompt)
        with pytest.raises(ConfigError):
            ctx.resolve_token()

    def test_env_before_config(self, mock_context, fake_prompt, monkeypatch):
        monkeypatch.setenv("LINEAR_API_KEY", "env-token")
        assert mock_context.resolve_token() == "env-token"
        assert fake_prompt.questions == []

    def test_prompts_between_organizations(self, mock_context, fake_prompt):
        fake_prompt.answers = [1]
        assert mock_context.resolve_token() == "lin_api_wayne_5678"
        assert fake_prompt.questions == ["Select an organization"]

    def test_single_organization(self, fake_prompt):
        config = LnrConfig(organizations={"acme": OrganizationConfig(token="only")})
        ctx = LnrContext(config=config, color=False, prompt=fake_prompt)
        assert ctx.resolve_token() == "only"
        assert fake_prompt.questions == []

    def test_nothing_configured(self, fake_prompt):
        ctx = LnrContext(config=LnrConfig(), color=False, prompt=fake_prompt)
        with pytest.raises(AuthenticationError, match="No Linear API key found"):
            ctx.resolve_token()

    def test_organization_without_token(self, fake_prompt):
        config = LnrConfig(organizations={"acme": OrganizationConfig(token="from_env")})
        ctx = LnrContext(config=config, organization="acme", color=False, prompt=fake_prompt)
        with pytest.raises(AuthenticationError, match="acme"):
            ctx.resolve_token()


class TestLnrContext:
    """Tests for context settings."""

    def test_linear_client_is_cached(self, mock_context, monkeypatch):
        monkeypatch.setenv("LINEAR_API_KEY", "env-token")
        client = mock_context.linear
        assert isinstance(client, LinearClient)
        assert mock_context.linear is client
        mock_context.close()
        assert mock_context.linear is not client

    def test_dry_run_from_config(self, fake_prompt):
        config = LnrConfig(**{"global": {"dry_run": True}})
        ctx = LnrContext(config=config, color=False, prompt=fake_prompt)
        assert ctx.dry_run is True

    def test_color_never(self, fake_prompt):
        config = LnrConfig(**{"global": {"color": "never"}})
        ctx = LnrContext(config=config, prompt=fake_prompt)
        assert ctx.output.color is False

