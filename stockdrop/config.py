from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    fmp_api_key: str = ""
    fmp_base_url: str = "https://financialmodelingprep.com/api/v3"

    # Per-endpoint timeouts in seconds
    quote_timeout: float = 10.0
    historical_timeout: float = 15.0
    screener_timeout: float = 15.0

    quote_batch_size: int = 10
    quote_batch_concurrency: int = 2
    screener_limit: int = 50
    # Screener symbols quoted when building the losers list
    losers_candidate_limit: int = 30

    search_limit: int = 10
    details_chart_points: int = 50
    details_news_limit: int = 2

    widget_symbols: list[str] = ["AAPL", "MSFT", "GOOGL", "AMZN", "TSLA", "META", "NVDA", "NFLX"]
    widget_refresh_seconds: int = 1800

    log_level: str = "INFO"

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}


settings = Settings()
