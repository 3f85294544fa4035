"""
Settings management for the OpenRouter adapter.

Handles loading and saving adapter settings.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from basket_openrouter.types import ModelInfo, ReasoningEffort

logger = logging.getLogger(__name__)

OPENROUTER_DEFAULT_PROVIDER_NAME = "[default]"


class OpenRouterSettings(BaseModel):
    """Options for a single OpenRouter provider instance."""

    api_key: Optional[str] = Field(None, alias="openRouterApiKey")
    base_url: Optional[str] = Field(None, alias="openRouterBaseUrl")
    model_id: Optional[str] = Field(None, alias="openRouterModelId")
    model_info: Optional[ModelInfo] = Field(None, alias="openRouterModelInfo")
    # User overrides; max tokens only apply to thinking models
    model_max_tokens: Optional[int] = Field(None, alias="modelMaxTokens")
    model_max_thinking_tokens: Optional[int] = Field(None, alias="modelMaxThinkingTokens")
    model_temperature: Optional[float] = Field(None, alias="modelTemperature")
    reasoning_effort: Optional[ReasoningEffort] = Field(None, alias="reasoningEffort")
    prompt_caching_enabled: bool = Field(False, alias="promptCachingEnabled")
    specific_provider: Optional[str] = Field(None, alias="openRouterSpecificProvider")
    use_middle_out_transform: bool = Field(True, alias="openRouterUseMiddleOutTransform")

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    @property
    def provider_order(self) -> Optional[str]:
        """Specific upstream provider to route to, if one was chosen."""
        if self.specific_provider and self.specific_provider != OPENROUTER_DEFAULT_PROVIDER_NAME:
            return self.specific_provider
        return None


class SettingsManager:
    """
    Manages loading and saving settings.

    Settings are stored in JSON format at ~/.basket/openrouter.json
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            config_dir: Configuration directory (default: ~/.basket)
        """
        if config_dir is None:
            config_dir = Path.home() / ".basket"

        self.config_dir = Path(config_dir)
        self.config_file = self.config_dir / "openrouter.json"

    def load(self) -> OpenRouterSettings:
        """
        Load settings from file.

        Returns:
            Settings object (defaults if file doesn't exist)
        """
        if not self.config_file.exists():
            return OpenRouterSettings()

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
            return OpenRouterSettings(**data)
        except Exception as e:
            logger.warning("Failed to load settings, using defaults: %s", e)
            return OpenRouterSettings()

    def save(self, settings: OpenRouterSettings) -> None:
        """
        Save settings to file.

        Args:
            settings: Settings to save
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(settings.model_dump(mode="json", by_alias=True, exclude_none=True), f, indent=2)

    def update(self, **kwargs: Any) -> OpenRouterSettings:
        """
        Update settings and save.

        Args:
            **kwargs: Settings fields to update

        Returns:
            Updated settings
        """
        settings = self.load()

        for key, value in kwargs.items():
            if hasattr(settings, key):
                setattr(settings, key, value)

        self.save(settings)
        return settings


__all__ = [
    "OPENROUTER_DEFAULT_PROVIDER_NAME",
    "OpenRouterSettings",
    "SettingsManager",
]
