"""
Configuration loader utility for environment-specific settings.
"""

import logging
import os
from pathlib import Path
from typing import Optional
from .settings import Settings, Environment

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Utility class for loading environment-specific configurations"""

    @staticmethod
    def load_environment_config(environment: Optional[str] = None) -> Settings:
        """
        Load configuration for the specified environment.

        Args:
            environment: Target environment (development, staging, production, testing)
                        If None, uses ENVIRONMENT env var or defaults to development

        Returns:
            Settings instance with environment-specific configuration
        """
        if environment is None:
            environment = os.getenv("ENVIRONMENT", "development")

        env = Environment(environment.lower())
        env_file = Path(f".env.{env.value}")

        if not env_file.exists():
            logger.warning(f"Environment file {env_file} not found, using default settings")
            return Settings(environment=env)

        return Settings(_env_file=str(env_file))

    @staticmethod
    def get_available_environments() -> list[str]:
        """Get list of available environment configurations"""
        env_names = []
        for env_file in Path(".").glob(".env.*"):
            if env_file.name.endswith(".sample"):
                continue
            env_names.append(env_file.name.replace(".env.", ""))
        return sorted(env_names)

    @staticmethod
    def validate_environment_config(environment: str) -> bool:
        """
        Validate that an environment configuration exists and is valid.

        Args:
            environment: Environment name to validate

        Returns:
            True if configuration is valid, False otherwise
        """
        try:
            env = Environment(environment.lower())
        except ValueError:
            return False

        if not Path(f".env.{env.value}").exists():
            return False

        try:
            loaded = ConfigLoader.load_environment_config(env.value)
        except ValueError as e:
            logger.error(f"Invalid configuration for {env.value}: {e}")
            return False

        required_settings = [
            loaded.app_name,
            loaded.environment,
            loaded.database.url,
            loaded.security.jwt_secret,
        ]
        return all(setting for setting in required_settings)

    @staticmethod
    def create_sample_env_file(environment: str, output_path: Optional[str] = None) -> str:
        """
        Create a sample .env file for the specified environment.

        Returns:
            Path to the created sample file
        """
        env = Environment(environment.lower())

        if output_path is None:
            output_path = f".env.{env.value}.sample"

        defaults = Settings()

        sample_content = f"""# Sample configuration for {env.value} environment
# Copy this file to .env.{env.value} and modify as needed

# Application Configuration
APP_NAME={defaults.app_name}
APP_VERSION={defaults.app_version}
ENVIRONMENT={env.value}
DEBUG={'true' if env == Environment.DEVELOPMENT else 'false'}

# Server Configuration
HOST={defaults.host}
PORT={defaults.port}
RELOAD={'true' if env == Environment.DEVELOPMENT else 'false'}
WORKERS={1 if env == Environment.DEVELOPMENT else 4}

# Logging Configuration
LOG_LEVEL={defaults.log_level.value}
LOG_FORMAT={defaults.log_format}

# Database Configuration
DATABASE_URL={defaults.database.url}

# Security Configuration
SECURITY_JWT_SECRET=change-me-{env.value}
SECURITY_ACCESS_TOKEN_EXPIRE_MINUTES={defaults.security.access_token_expire_minutes}
SECURITY_CORS_ORIGINS=["*"]

# Publication validation bounds
VALIDATION_TITLE_MAX_LENGTH={defaults.validation.title_max_length}
VALIDATION_CAPTION_MAX_LENGTH={defaults.validation.caption_max_length}
VALIDATION_MAX_STAGES={defaults.validation.max_stages}
"""

        with open(output_path, "w") as f:
            f.write(sample_content)

        return output_path


def load_config_for_environment(environment: Optional[str] = None) -> Settings:
    """Convenience function to load configuration for an environment"""
    return ConfigLoader.load_environment_config(environment)
