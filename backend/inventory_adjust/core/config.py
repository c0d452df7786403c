from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Inventory Adjustment Service"
    environment: str = "development"
    api_v1_prefix: str = "/api/v1"

    database_url: str = "sqlite:///./inventory_adjust.db"
    cors_origins: str = "http://localhost:3000"
    log_level: str = "INFO"

    store_backend: Literal["database", "netsuite"] = "database"
    seed_demo_data: bool = False

    netsuite_account_id: str = ""
    netsuite_base_url: str = ""
    netsuite_access_token: str = ""
    netsuite_timeout_seconds: float = 30.0
    netsuite_reason_code_record: str = "customrecord_ic_inv_adj_reason_code"
    netsuite_reason_code_account_field: str = "custrecord_ic_inv_adj_account"
    netsuite_reason_code_body_field: str = "custbody_ic_adjustment_reason_code"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def netsuite_rest_url(self) -> str:
        if self.netsuite_base_url:
            return self.netsuite_base_url.rstrip("/")
        account = self.netsuite_account_id.lower().replace("_", "-")
        return f"https://{account}.suitetalk.api.netsuite.com"


@lru_cache
def get_settings() -> Settings:
    return Settings()
