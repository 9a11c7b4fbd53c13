"""
Application Settings.

All configuration comes from .env / environment variables
(prefix HIREWISE_). Core classes never read Settings directly: they
receive the policy values built by the helpers below.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from hirewise.core.entities.policy import ExpiryThresholds, JourneyWeights, TrustWeights


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    # --- App ---
    env: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # --- Database ---
    database_url: str = "sqlite:///hirewise.db"

    # --- Expiry ---
    critical_threshold_days: int = 7
    warning_threshold_days: int = 30
    expiring_soon_days: int = 30

    # --- Trust score (single document) ---
    trust_weight_verified: int = 40
    trust_weight_verification_date: int = 20
    trust_weight_future_expiry: int = 20
    trust_weight_file_present: int = 10
    trust_weight_categorized: int = 10

    # --- Verification journey ---
    journey_weight_identity: int = 40
    journey_weight_address: int = 30
    journey_weight_education: int = 20
    journey_weight_professional: int = 10

    model_config = SettingsConfigDict(
        env_prefix="HIREWISE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def expiry_thresholds(self) -> ExpiryThresholds:
        return ExpiryThresholds(
            critical_days=self.critical_threshold_days,
            warning_days=self.warning_threshold_days,
        )

    def trust_weights(self) -> TrustWeights:
        return TrustWeights(
            verified=self.trust_weight_verified,
            verification_date=self.trust_weight_verification_date,
            future_expiry=self.trust_weight_future_expiry,
            file_present=self.trust_weight_file_present,
            categorized=self.trust_weight_categorized,
        )

    def journey_weights(self) -> JourneyWeights:
        return JourneyWeights(weights={
            "identity": self.journey_weight_identity,
            "address": self.journey_weight_address,
            "education": self.journey_weight_education,
            "professional": self.journey_weight_professional,
        })


@lru_cache
def get_settings() -> Settings:
    """Settings singleton."""
    return Settings()
