"""Update checker schema: registry endpoint, scan tuning, session timing."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ENDPOINT = "https://foundryvtt.com/_api/packages/get"


class NotifierConfig(BaseModel):
    endpoint: str = DEFAULT_ENDPOINT
    package_type: str = "module"
    host_version: str = "13.345"
    request_timeout_s: float = 30.0
    chunk_size: int = 500
    initial_check_delay_s: float = 7.5
    readme_url: str = Field(
        "https://github.com/mouse0270/module-outdated-notifier#readme",
        description="Setup instructions linked from the API key message",
    )

    model_config = ConfigDict(extra="forbid")
