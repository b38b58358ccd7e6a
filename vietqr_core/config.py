"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
The core components never read the environment themselves; they receive a
VietQRConfig instance (or explicit arguments) at construction time.
"""

from pydantic_settings import BaseSettings


class VietQRConfig(BaseSettings):
    """VietQR core configuration"""

    # Primary account lookup provider
    lookup_url: str = "https://api.vietqr.io/v2/lookup"
    client_id: str = ""  # Empty = demo credentials are sent, lookup will usually fail over
    api_key: str = ""
    lookup_timeout: float = 8.0  # seconds, the whole primary request is bounded by this

    # Simulated provider latency bounds
    simulated_delay_min_ms: int = 800
    simulated_delay_max_ms: int = 2000

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8090

    class Config:
        env_prefix = "VIETQR_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = VietQRConfig()


def get_config() -> VietQRConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> VietQRConfig:
    """Reload configuration from environment"""
    global config
    config = VietQRConfig()
    return config
