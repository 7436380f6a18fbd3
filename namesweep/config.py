"""Configuration management for namesweep."""

import os
from enum import Enum
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings

# Load .env from multiple locations
# 1. Current working directory
load_dotenv()
# 2. Project directory (where this package is installed)
_package_dir = Path(__file__).parent
load_dotenv(_package_dir.parent / ".env")
# 3. Home directory config
load_dotenv(Path.home() / ".config" / "namesweep" / ".env")


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    GEMINI = "gemini"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


# Environment variable holding the credential for each provider
API_KEY_ENV_VARS = {
    LLMProvider.GEMINI: "GEMINI_API_KEY",
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
}

# (pass1 model, pass2 model) per provider
DEFAULT_MODELS = {
    LLMProvider.GEMINI: ("gemini-2.5-flash-lite", "gemini-3-flash-preview"),
    LLMProvider.OPENAI: ("gpt-4o-mini", "gpt-4o"),
    LLMProvider.ANTHROPIC: ("claude-haiku-4-5", "claude-sonnet-4-5"),
}

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class Config(BaseSettings):
    """Configuration for namesweep."""

    # LLM Settings
    llm_provider: LLMProvider = Field(default=LLMProvider.GEMINI, description="LLM provider to use")
    llm_api_key: Optional[str] = Field(default=None, description="API key for the LLM provider")
    llm_base_url: Optional[str] = Field(default=None, description="Base URL for API (for custom endpoints)")
    pass1_model: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("pass1_model", "namesweep_pass1_model"),
        description="Fast model used to rewrite each chunk",
    )
    pass2_model: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("pass2_model", "namesweep_pass2_model"),
        description="Strong model used for the global consistency pass",
    )
    llm_max_tokens: int = Field(default=8192, description="Maximum tokens for LLM response")
    llm_temperature: float = Field(default=0.3, description="Temperature for LLM generation")

    # Processing Settings
    chunk_size: int = Field(default=150, ge=1, description="Source lines per Pass 1 request")
    language: Optional[str] = Field(
        default=None,
        description="Source language name (inferred from the file suffix when unset)",
    )
    rename_single_sweep: bool = Field(
        default=False,
        description="Apply the Pass 2 mapping in one regex sweep instead of pair by pair",
    )

    model_config = {
        "env_prefix": "NAMESWEEP_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @model_validator(mode="after")
    def fill_provider_defaults(self) -> "Config":
        """Fill credential, endpoint and model names from provider defaults."""
        if not self.llm_api_key:
            self.llm_api_key = os.environ.get(API_KEY_ENV_VARS[self.llm_provider]) or None

        if self.llm_provider == LLMProvider.GEMINI and not self.llm_base_url:
            self.llm_base_url = GEMINI_OPENAI_BASE_URL

        pass1_default, pass2_default = DEFAULT_MODELS[self.llm_provider]
        if not self.pass1_model:
            self.pass1_model = pass1_default
        if not self.pass2_model:
            self.pass2_model = pass2_default
        return self

    @property
    def api_key_env_var(self) -> str:
        """Name of the environment variable expected to hold the credential."""
        return API_KEY_ENV_VARS[self.llm_provider]


# LLM Prompt templates
PROMPTS = {
    "rewrite_chunk": """De-obfuscate this {language} code. Rename variables/functions descriptively. Output valid {language} only. No preamble.

```{fence_tag}
{chunk}
```""",

    "reconcile_names": """
I am providing the ENTIRE de-obfuscated codebase (approx {size} characters).
The code was de-obfuscated in chunks, so naming might be inconsistent.

YOUR TASK:
1. Analyze the entire file to identify inconsistent names for the same logical entities.
2. Provide a JSON mapping of {{ "old_inconsistent_name": "new_consistent_name" }} for all variables and functions that should be unified.
3. Ensure the names are descriptive and follow the project's logic.
4. Output ONLY the JSON mapping. No preamble.

CODE:
```{fence_tag}
{code}
```
""",
}
