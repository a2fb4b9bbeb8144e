import logging
from supabase import create_client, Client
from config import config

logger = logging.getLogger(__name__)

class SupabaseConfig:
    """Supabase configuration"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(SupabaseConfig, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Initialize Supabase client"""
        self.url = config.SUPABASE_URL
        self.anon_key = config.SUPABASE_ANON_KEY
        self.service_key = config.SUPABASE_SERVICE_KEY
        self.client = None

        logger.info(f"🔗 Supabase URL: {self.url}")

        # Service key bypasses RLS; client scoping is enforced by the API
        if self.url and self.service_key:
            key, label = self.service_key, "SERVICE ROLE"
        elif self.url and self.anon_key:
            key, label = self.anon_key, "ANON"
        else:
            logger.warning("⚠️  Supabase credentials not found")
            return

        try:
            self.client = create_client(self.url, key)
            logger.info(f"✅ Supabase client initialized with {label} key")
        except Exception as e:
            logger.error(f"❌ Failed to initialize Supabase client with {label} key: {e}")
            self.client = None

    def get_client(self) -> Client:
        """Get Supabase client"""
        return self.client

    def is_configured(self) -> bool:
        """Check if Supabase is properly configured"""
        return self.client is not None

# Global instance
supabase_config = SupabaseConfig()
