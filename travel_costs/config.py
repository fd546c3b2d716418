"""
Konfigurácia aplikácie / Application configuration.
Používa pydantic-settings na načítanie z .env alebo premenných prostredia.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Cestovné náhrady"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True

    # Database - SQLite pre vývoj / SQLite by default for development
    DATABASE_URL: str = "sqlite+aiosqlite:///./travel_costs.db"

    # CORS - povolené originy / allowed origins
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Predvolené sadzby (stravné + základná náhrada) / Default allowance rates
    # Použité iba pri prvom štarte na založenie nastavení / Only used to seed settings on first start
    DEFAULT_MEAL_RATE_LOW: float = 7.80    # 5 - 12 h
    DEFAULT_MEAL_RATE_MID: float = 11.60   # 12 - 18 h
    DEFAULT_MEAL_RATE_HIGH: float = 17.40  # nad 18 h / over 18 h
    DEFAULT_AMORTIZATION_RATE: float = 0.252  # EUR/km

    # Štatistický úrad SR - týždenné ceny palív / Statistical office weekly fuel prices
    STAT_OFFICE_DATASET_URL: str = "https://data.statistics.sk/api/v2/dataset/sp0207ts"
    STAT_OFFICE_TIMEOUT_SECONDS: float = 30.0
    STAT_OFFICE_WEEKS: int = 8

    # Dashboard
    DASHBOARD_TOP_PROJECTS: int = 5

    DEFAULT_COUNTRY: str = "Slovensko"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
