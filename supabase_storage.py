import uuid
import logging
from typing import Optional, Dict
from urllib.parse import urlparse, unquote
from supabase_config import supabase_config
from config import config

logger = logging.getLogger(__name__)

class AssetStorage:
    """
    Handler for client asset files in Supabase Storage.
    Objects are laid out as {client_id}/{asset_type}/{random}.{ext}.
    """

    def __init__(self):
        # The bucket must exist in the Supabase project
        self.bucket_name = config.ASSETS_BUCKET

    def _get_client(self):
        if not supabase_config or not supabase_config.is_configured():
            raise ConnectionError("Supabase Storage is not configured. Check environment variables.")
        return supabase_config.get_client()

    @staticmethod
    def build_storage_path(client_id: str, asset_type: str, filename: str) -> str:
        ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
        return f"{client_id}/{asset_type}/{uuid.uuid4().hex[:13]}.{ext}"

    def upload_asset(
        self,
        client_id: str,
        asset_type: str,
        filename: str,
        data: bytes,
        content_type: Optional[str] = None
    ) -> Dict:
        """Upload raw file bytes and return the storage path and public URL"""
        storage_path = self.build_storage_path(client_id, asset_type, filename)
        client = self._get_client()
        bucket = client.storage.from_(self.bucket_name)

        logger.info(f"Uploading to Supabase bucket '{self.bucket_name}': {storage_path}")
        bucket.upload(
            path=storage_path,
            file=data,
            file_options={
                "content-type": content_type or "application/octet-stream",
                "cache-control": "3600"
            }
        )

        public_url = bucket.get_public_url(storage_path)
        logger.info(f"✅ Stored asset file: {storage_path}")

        return {
            "storage_path": storage_path,
            "public_url": public_url,
            "filename": storage_path.split("/")[-1]
        }

    def storage_path_from_url(self, url: str) -> Optional[str]:
        """Recover the object path from a public URL (segments after the bucket name)"""
        if not url:
            return None
        parts = unquote(urlparse(url).path).split("/")
        if self.bucket_name not in parts:
            return None
        path = "/".join(parts[parts.index(self.bucket_name) + 1:])
        return path or None

    def remove_asset(self, storage_path: str) -> bool:
        """Delete an object. Failures are logged; callers still drop the DB record."""
        try:
            client = self._get_client()
            client.storage.from_(self.bucket_name).remove([storage_path])
            logger.info(f"🗑️  Removed asset file: {storage_path}")
            return True
        except Exception as e:
            logger.error(f"Supabase Storage remove error for {storage_path}: {e}")
            return False

# Global instance for app-wide use
storage = AssetStorage()
