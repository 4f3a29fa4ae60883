from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


class Settings(BaseSettings):
    """애플리케이션 설정"""

    environment: str = "development"
    app_version: str = "1.0.0"

    # 서버
    host: str = "0.0.0.0"
    port: int = 3000

    # 데이터베이스 - 서버 기동 시 필수
    database_url: str = ""
    db_echo: bool = False

    # CORS - 프로덕션에서는 FRONTEND_URL만 허용
    frontend_url: str = ""

    # 인증
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    require_auth: bool = False

    # 요청 제한
    rate_limit_default: str = "120/minute"

    # 로깅 설정
    log_level: str = "INFO"

    # PDF
    pdf_author: str = "Resume Builder"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_allowed_origins(self) -> list[str]:
        if self.is_production:
            return [o.strip() for o in self.frontend_url.split(",") if o.strip()]
        return DEV_CORS_ORIGINS

    def validate_for_startup(self) -> list[str]:
        """서버 기동 전 필수 설정 검증 후 누락된 항목 반환"""
        errors = []
        if not self.database_url:
            errors.append("DATABASE_URL")
        if self.is_production:
            if not self.frontend_url:
                errors.append("FRONTEND_URL")
            if self.require_auth and not self.jwt_secret:
                errors.append("JWT_SECRET")
        return errors

    @model_validator(mode="after")
    def validate_auth_settings(self):
        """인증 강제 시 서명 키 필수"""
        if self.require_auth and not self.jwt_secret:
            raise ValueError("REQUIRE_AUTH=true 이면 JWT_SECRET 설정이 필요합니다")
        return self


settings = Settings()
