from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "ecsa-fee-calculator"
    PRACTICE_NAME: str = ""
    REPORT_TITLE: str = "ECSA Fee Calculation Report"
    CURRENCY_SYMBOL: str = "R"
    EXPORT_FILENAME: str = "ecsa-fee-calculation"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
