from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # Inspection data (JSON array). http(s) URLs are fetched, anything else is a file path
    DATA_URL: str = "data/inspection_data.json"
    FETCH_TIMEOUT_SECONDS: float = 30.0

    # Result shaping
    TOP_N: int = 10

    # Choices offered by the status control
    STATUS_OPTIONS: List[str] = [
        "Pass",
        "Conditional",
        "Fail",
        "Unknown",
    ]

    # City filtering always ignores case. When this is False the city dropdown
    # also folds case ("X" and "x" become one option); True keeps every spelling.
    CITY_OPTIONS_CASE_SENSITIVE: bool = False

    # API Settings
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
