from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "LOAN_CALC_",
    }

    # Upper bound on the number of repayment periods a single schedule may
    # span (10_000 covers a 30 year loan repaid daily with room to spare)
    max_periods: int = 10_000

    # App
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
