"""
Konfiguration für das Grow-Ledger Backend
"""
from decimal import Decimal
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Anwendungseinstellungen aus Umgebungsvariablen"""

    # Anwendung
    app_name: str = "Grow Ledger"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Datenbank
    database_url: str = "sqlite:///./grow_ledger.db"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Stromkosten-Modell: $/kWh * kW pro Lampe * Stunden pro Tag
    electricity_rate_per_kwh: Decimal = Decimal("0.15")
    light_power_kw: Decimal = Decimal("1")
    light_hours_per_day: Decimal = Decimal("18")

    # Chargen
    flip_days: int = 14
    percentage_tolerance: Decimal = Decimal("0.1")

    # Ernte: Einheitspreis für gespeicherte Ernten ohne Preisangaben
    harvest_fallback_price_per_lb: Decimal = Decimal("100")

    # Dashboard
    dashboard_net_income_ratio: Decimal = Decimal("0.15")

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def electricity_cost_per_light_per_day(self) -> Decimal:
        """Geschätzte Stromkosten pro Lampe und Tag (Standard: $2.70)"""
        return self.electricity_rate_per_kwh * self.light_power_kw * self.light_hours_per_day


@lru_cache
def get_settings() -> Settings:
    """Cached Settings-Instanz"""
    return Settings()
