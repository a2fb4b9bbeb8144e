import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file for local development
load_dotenv()

logger = logging.getLogger(__name__)

class Config:
    """
    Configuration management for the content API.
    Centralizes all environment variables with strict validation.
    """
    # --- Supabase Configuration (Required) ---
    SUPABASE_URL = os.getenv("SUPABASE_URL")
    SUPABASE_SERVICE_KEY = os.getenv("SUPABASE_SERVICE_KEY")
    SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")
    # Required for auth_middleware.py to verify JWT signatures
    SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET")
    ASSETS_BUCKET = os.getenv("ASSETS_BUCKET", "assets")

    # --- Content Generation ---
    # "template" keeps generation offline, "openai" calls the chat API
    AI_PROVIDER = os.getenv("AI_PROVIDER", "template").strip().lower()
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

    # --- Server Configuration ---
    ENVIRONMENT = os.getenv("ENVIRONMENT", "production")
    PORT = int(os.getenv("PORT", "5000"))
    HOST = os.getenv("HOST", "0.0.0.0")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "info")

    # --- Security ---
    ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "").strip()

    # --- Limits ---
    FILE_SIZE_LIMIT = int(os.getenv("FILE_SIZE_LIMIT", str(50 * 1024 * 1024)))  # 50MB default
    ASSETS_PER_PAGE = int(os.getenv("ASSETS_PER_PAGE", "12"))
    MAX_COPY_VARIATIONS = int(os.getenv("MAX_COPY_VARIATIONS", "10"))
    REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "30"))

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENVIRONMENT == "production"

    @classmethod
    def validate(cls):
        """
        Validates that all required environment variables are present.
        Missing values are fatal in production and only logged elsewhere.
        """
        missing = []
        warnings = []

        required_vars = [
            ("SUPABASE_URL", cls.SUPABASE_URL),
            ("SUPABASE_SERVICE_KEY", cls.SUPABASE_SERVICE_KEY or cls.SUPABASE_ANON_KEY),
            ("SUPABASE_JWT_SECRET", cls.SUPABASE_JWT_SECRET)
        ]
        if cls.AI_PROVIDER == "openai":
            required_vars.append(("OPENAI_API_KEY", cls.OPENAI_API_KEY))
        elif cls.AI_PROVIDER != "template":
            warnings.append(f"Unknown AI_PROVIDER '{cls.AI_PROVIDER}' - falling back to templates")

        for name, value in required_vars:
            if not value:
                missing.append(name)

        if cls.is_production():
            if not cls.ALLOWED_ORIGINS or cls.ALLOWED_ORIGINS == "*":
                warnings.append("ALLOWED_ORIGINS not set or set to '*' - CORS is wide open!")

        if missing:
            error_msg = f"❌ CRITICAL: Missing required environment variables: {', '.join(missing)}"
            if cls.is_production():
                logger.error(error_msg)
                raise ValueError(error_msg)
            warnings.append(f"Missing environment variables: {', '.join(missing)}")

        for warning in warnings:
            logger.warning(f"⚠️  {warning}")

        logger.info("✅ Configuration validated")
        logger.info(f"   Environment: {cls.ENVIRONMENT}")
        logger.info(f"   AI provider: {cls.AI_PROVIDER}")
        logger.info(f"   Assets bucket: {cls.ASSETS_BUCKET}")

        return True

    @classmethod
    def get_cors_origins(cls):
        """Parse ALLOWED_ORIGINS into a list"""
        if not cls.ALLOWED_ORIGINS or cls.ALLOWED_ORIGINS == "*":
            if cls.is_production():
                logger.warning("⚠️  Using wildcard CORS in production!")
            return ["*"]

        origins = [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",")]
        origins = [origin for origin in origins if origin]

        return origins if origins else ["*"]

# Global instance
config = Config()

# Validate configuration on import for fail-fast behavior
try:
    config.validate()
except ValueError as e:
    raise SystemExit(f"Configuration validation failed: {e}")
