from pathlib import Path
from typing import List, Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from services.motivation_service import DEFAULT_PHRASES


class BotConfig(BaseModel):
    telegram_token: str
    username: str = ""


class DialogueConfig(BaseModel):
    skip_tokens: List[str] = ["no"]

    @field_validator("skip_tokens")
    @classmethod
    def _not_empty(cls, tokens: List[str]) -> List[str]:
        if not [t for t in tokens if t.strip()]:
            raise ValueError("at least one skip token is required")
        return tokens


class MotivationConfig(BaseModel):
    phrases: List[str] = Field(default_factory=lambda: list(DEFAULT_PHRASES), min_length=1)


class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


class Settings(BaseModel):
    bot: BotConfig
    dialogue: DialogueConfig = DialogueConfig()
    motivation: MotivationConfig = MotivationConfig()
    logging: LoggingConfig = LoggingConfig()

    @classmethod
    def load(cls, environment: str, directory: Path = Path(".")) -> "Settings":
        """Load all configuration from a YAML file for the given environment."""
        path = directory / f"config-{environment}.yaml"
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)
