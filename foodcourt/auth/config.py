from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="AUTH_", env_file=".env", extra="ignore")

    secret: str = "foodcourt-dev-secret-change-me-in-production"  # 🔐 Replace with something strong and secure
    jwt_lifetime_seconds: int = 3600
    jwt_algorithm: str = "HS256"
    jwt_audience: str = "foodcourt:auth"


auth_config = AuthConfig()
