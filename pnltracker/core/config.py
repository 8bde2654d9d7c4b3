from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "P&L Tracker Analytics"
    env: str = Field(default="dev", alias="ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    database_url: str = Field(default="sqlite+pysqlite:///./pnltracker.db", alias="DATABASE_URL")

    # Withdrawals stay inside the expense total unless switched off
    withdrawals_in_expenses: bool = Field(default=True, alias="WITHDRAWALS_IN_EXPENSES")

settings = Settings()
