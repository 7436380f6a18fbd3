"""Tests for configuration."""

import pytest
from pydantic import ValidationError

from namesweep.config import GEMINI_OPENAI_BASE_URL, Config, LLMProvider


class TestConfig:
    """Tests for Config defaults and environment handling."""

    def test_gemini_defaults(self, clean_env):
        """Gemini is the default provider with its OpenAI-compatible endpoint."""
        config = Config()

        assert config.llm_provider == LLMProvider.GEMINI
        assert config.pass1_model == "gemini-2.5-flash-lite"
        assert config.pass2_model == "gemini-3-flash-preview"
        assert config.llm_base_url == GEMINI_OPENAI_BASE_URL
        assert config.chunk_size == 150
        assert config.rename_single_sweep is False
        assert config.llm_api_key is None

    def test_api_key_from_provider_env(self, clean_env):
        """The credential falls back to the provider's env var."""
        clean_env.setenv("GEMINI_API_KEY", "gem-key")

        assert Config().llm_api_key == "gem-key"

    def test_api_key_env_depends_on_provider(self, clean_env):
        """Each provider reads its own env var."""
        clean_env.setenv("GEMINI_API_KEY", "gem-key")
        clean_env.setenv("ANTHROPIC_API_KEY", "ant-key")

        config = Config(llm_provider=LLMProvider.ANTHROPIC)

        assert config.llm_api_key == "ant-key"
        assert config.api_key_env_var == "ANTHROPIC_API_KEY"

    def test_explicit_api_key_wins(self, clean_env):
        """An explicit key is not replaced by the env var."""
        clean_env.setenv("OPENAI_API_KEY", "env-key")

        config = Config(llm_provider=LLMProvider.OPENAI, llm_api_key="cli-key")

        assert config.llm_api_key == "cli-key"

    def test_model_overrides_from_env(self, clean_env):
        """PASS1_MODEL and PASS2_MODEL override the built-in names."""
        clean_env.setenv("PASS1_MODEL", "fast-one")
        clean_env.setenv("NAMESWEEP_PASS2_MODEL", "strong-one")

        config = Config()

        assert config.pass1_model == "fast-one"
        assert config.pass2_model == "strong-one"

    def test_model_overrides_from_kwargs(self, clean_env):
        """Models can be passed directly."""
        config = Config(pass1_model="m1", pass2_model="m2")

        assert (config.pass1_model, config.pass2_model) == ("m1", "m2")

    def test_provider_model_defaults(self, clean_env):
        """Non-Gemini providers get their own defaults and no base URL."""
        config = Config(llm_provider=LLMProvider.OPENAI)

        assert config.pass1_model == "gpt-4o-mini"
        assert config.pass2_model == "gpt-4o"
        assert config.llm_base_url is None

    def test_prefixed_env_settings(self, clean_env):
        """NAMESWEEP_ settings are read from the environment."""
        clean_env.setenv("NAMESWEEP_LLM_PROVIDER", "anthropic")
        clean_env.setenv("NAMESWEEP_CHUNK_SIZE", "40")

        config = Config()

        assert config.llm_provider == LLMProvider.ANTHROPIC
        assert config.chunk_size == 40

    def test_chunk_size_must_be_positive(self, clean_env):
        """Chunk size below one is rejected."""
        with pytest.raises(ValidationError):
            Config(chunk_size=0)
