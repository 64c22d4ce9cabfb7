import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

load_dotenv()

# Same variable names the Common Ground plugin templates use
PRIVATE_KEY_ENV = "NEXT_PRIVATE_PRIVKEY"
PUBLIC_KEY_ENV = "NEXT_PUBLIC_PUBKEY"
LOG_LEVEL_ENV = "CG_PLUGIN_HOST_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _env_key(name: str) -> Optional[str]:
    value = os.getenv(name)
    if not value:
        return None
    # .env files often carry PEM blocks on one line with literal "\n"
    return value.strip().strip('"').replace("\\n", "\n")


class HostConfig(BaseModel):
    private_key: Optional[str] = None
    public_key: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_level(cls, v):
        # unknown names fall back to INFO instead of breaking logger setup
        name = str(v or "").strip().upper()
        if isinstance(logging.getLevelName(name), int):
            return name
        return DEFAULT_LOG_LEVEL

    @property
    def has_keys(self) -> bool:
        return bool(self.private_key and self.public_key)


def load_config() -> HostConfig:
    return HostConfig(
        private_key=_env_key(PRIVATE_KEY_ENV),
        public_key=_env_key(PUBLIC_KEY_ENV),
        log_level=os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL),
    )
