"""
Business-plan planner - runtime configuration
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class Settings:
    """Environment-driven settings for the REST backend"""

    storage_path: str = field(
        default_factory=lambda: os.getenv("BIZPLAN_STORAGE_PATH", "user_data/business_plans.json")
    )
    export_dir: str = field(default_factory=lambda: os.getenv("BIZPLAN_EXPORT_DIR", "user_data/exports"))
    default_variant: str = field(default_factory=lambda: os.getenv("BIZPLAN_DEFAULT_VARIANT", "admin").lower())
    log_level: str = field(default_factory=lambda: os.getenv("BIZPLAN_LOG_LEVEL", "INFO").upper())
    host: str = field(default_factory=lambda: os.getenv("BIZPLAN_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("BIZPLAN_PORT", "8000")))

    def __post_init__(self):
        if self.default_variant not in {"admin", "agent"}:
            raise ValueError("BIZPLAN_DEFAULT_VARIANT must be 'admin' or 'agent'")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"BIZPLAN_LOG_LEVEL must be one of {', '.join(sorted(LOG_LEVELS))}")


settings = Settings()
