"""Application configuration."""
import sys
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql://adcert_user:adcert_pass@db:5432/adcert_db"
    SECRET_KEY: str = "dev-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440
    JWT_ISSUER: str | None = None
    JWT_AUDIENCE: str | None = None

    # Environment configuration
    ENVIRONMENT: str = "development"  # "development" or "production"
    LOG_LEVEL: str = "INFO"

    # CORS configuration - comma-separated origins
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:8080"

    # Certificate issuance
    VERIFICATION_BASE_URL: str = "http://localhost:8080"
    CERTIFICATE_NUMBER_PREFIX: str = "ARCON"
    CERTIFICATE_VALIDITY_DAYS: int = Field(365, gt=0)
    CERTIFICATE_NUMBER_MAX_ATTEMPTS: int = Field(5, gt=0)
    REGULATOR_NAME: str = "Advertising Regulatory Council of Nigeria (ARCON)"

    class Config:
        env_file = ".env"

    def get_cors_origins(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def validate_production_settings(self) -> None:
        """Validate settings for production environment.

        Raises SystemExit if critical security settings are misconfigured.
        """
        if self.ENVIRONMENT == "production":
            if self.SECRET_KEY == "dev-secret-key-change-in-production":
                print("FATAL: SECRET_KEY must be changed in production!", file=sys.stderr)
                print("Set a secure random SECRET_KEY environment variable.", file=sys.stderr)
                sys.exit(1)

            if self.VERIFICATION_BASE_URL.startswith("http://localhost"):
                print("WARNING: VERIFICATION_BASE_URL points at localhost in production!", file=sys.stderr)
                print("Printed certificates will carry an unreachable verification link.", file=sys.stderr)


settings = Settings()
# Validate on startup
settings.validate_production_settings()
