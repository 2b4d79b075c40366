"""
Configuration Management
Environment-based configuration for Supabase and application settings
"""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator
import logging

logger = logging.getLogger(__name__)


class SupabaseConfig(BaseSettings):
    """Supabase Configuration"""

    supabase_url: str = ""
    supabase_anon_key: str = ""
    # Optional; used for leaderboard reads and RPC when present
    supabase_service_key: Optional[str] = None

    class Config:
        env_prefix = ""
        case_sensitive = False
        env_file = ".env"
        extra = "ignore"

    @field_validator('supabase_url')
    @classmethod
    def validate_supabase_url(cls, v):
        v = v.strip().rstrip('/')
        if v and not v.startswith(('http://', 'https://')):
            raise ValueError('SUPABASE_URL must start with http:// or https://')
        return v

    def is_configured(self) -> bool:
        """Check if URL and anon key are both present"""
        return bool(self.supabase_url and self.supabase_anon_key)

    def log_config(self):
        """Log configuration (without sensitive data)"""
        logger.info(f"Supabase URL: {self.supabase_url or '<not set>'}")
        logger.info(f"Anon key: {'Yes' if self.supabase_anon_key else 'No'}")
        logger.info(f"Service key: {'Yes' if self.supabase_service_key else 'No'}")


class AppConfig(BaseSettings):
    """Application Configuration"""

    # Service info
    service_name: str = "scoreboard"
    service_version: str = "1.0.0"
    debug: bool = False

    # Comma separated lists
    cors_origins: str = "http://localhost:5173"
    admin_emails: str = ""

    # Auth flow
    password_reset_redirect_url: str = "http://localhost:5173/auth/reset-password"

    # Leaderboard
    default_points_award: int = 10

    # Logging
    log_level: str = "INFO"
    log_format: str = "default"
    log_config_path: Optional[str] = None

    class Config:
        env_prefix = "APP_"
        case_sensitive = False
        env_file = ".env"
        extra = "ignore"

    @field_validator('default_points_award')
    @classmethod
    def validate_default_points_award(cls, v):
        if v < 1:
            raise ValueError('Default points award must be at least 1')
        return v

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v):
        if v not in ('default', 'detailed', 'json'):
            raise ValueError("Log format must be 'default', 'detailed' or 'json'")
        return v

    def get_cors_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def get_admin_emails(self) -> List[str]:
        return [e.strip().lower() for e in self.admin_emails.split(",") if e.strip()]

    def log_config(self):
        """Log configuration (without sensitive data)"""
        logger.info(f"Service: {self.service_name} {self.service_version}")
        logger.info(f"CORS origins: {', '.join(self.get_cors_origins())}")
        logger.info(f"Admins configured: {len(self.get_admin_emails())}")
        logger.info(f"Password reset redirect: {self.password_reset_redirect_url}")


# Global configuration instances
_supabase_config: Optional[SupabaseConfig] = None
_app_config: Optional[AppConfig] = None


def get_supabase_config() -> SupabaseConfig:
    """Get Supabase configuration instance"""
    global _supabase_config
    if _supabase_config is None:
        _supabase_config = SupabaseConfig()
    return _supabase_config


def get_app_config() -> AppConfig:
    """Get application configuration instance"""
    global _app_config
    if _app_config is None:
        _app_config = AppConfig()
    return _app_config


def reset_config():
    """Drop cached configuration so the next access re-reads the environment"""
    global _supabase_config, _app_config
    _supabase_config = None
    _app_config = None


def validate_configuration():
    """Validate all configuration settings"""
    try:
        supabase_config = get_supabase_config()
        app_config = get_app_config()

        supabase_config.log_config()
        app_config.log_config()

        if not supabase_config.is_configured():
            logger.warning("Supabase credentials not found in environment")

        if not app_config.get_admin_emails():
            logger.warning("No admin emails configured; point adjustments are disabled")

        logger.info("Configuration validation completed")
        return True

    except Exception as e:
        logger.error(f"Configuration validation failed: {e}")
        raise
