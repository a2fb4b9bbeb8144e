import uuid
import logging
from datetime import datetime
from typing import Dict, List, Optional, Any
from supabase_config import supabase_config
from models import MatrixItemStatus, ExecutionStatus

logger = logging.getLogger(__name__)

class ContentDB:
    """
    Table operations for the content platform on Supabase.
    Maps between the shape the API returns and the table schema, including
    the two motivation/copy schema versions still present in deployed projects.
    """

    def __init__(self):
        self.table_clients = "clients"
        self.table_assets = "assets"
        self.table_templates = "templates"
        self.table_motivations = "strategic_motivations"
        self.table_copy = "copy_variations"
        self.table_matrix_configs = "matrix_configurations"
        self.table_matrices = "visual_matrices"
        self.table_matrix_items = "visual_matrix_items"
        self.table_executions = "executions"

    def _get_client(self):
        """Get initialized Supabase client or raise"""
        if supabase_config and supabase_config.is_configured():
            return supabase_config.get_client()
        raise ConnectionError("Supabase is not configured. Check environment variables.")

    # --- Generic helpers ---

    def _insert(self, table: str, data: Dict) -> Dict:
        record = {
            "id": str(uuid.uuid4()),
            "created_at": datetime.now().isoformat(),
            **data
        }
        client = self._get_client()
        response = client.table(table).insert(record).execute()

        if not response.data:
            logger.error(f"Failed to persist row in {table}: {record['id']}")
            raise RuntimeError("Database insertion failed")

        logger.info(f"Row persisted in {table}: {record['id']}")
        return response.data[0]

    def _list_by(self, table: str, column: str, value: str) -> List[Dict]:
        client = self._get_client()
        response = client.table(table) \
            .select("*") \
            .eq(column, value) \
            .order("created_at") \
            .execute()
        return response.data or []

    def _get_by_id(self, table: str, record_id: str) -> Optional[Dict]:
        client = self._get_client()
        response = client.table(table) \
            .select("*") \
            .eq("id", record_id) \
            .limit(1) \
            .execute()
        return response.data[0] if response.data else None

    def _update(self, table: str, record_id: str, updates: Dict) -> Optional[Dict]:
        client = self._get_client()
        response = client.table(table) \
            .update(updates) \
            .eq("id", record_id) \
            .execute()
        return response.data[0] if response.data else None

    def _delete(self, table: str, record_id: str) -> bool:
        client = self._get_client()
        response = client.table(table) \
            .delete() \
            .eq("id", record_id) \
            .execute()
        return bool(response.data)

    # --- Clients ---

    def get_clients(self) -> List[Dict]:
        client = self._get_client()
        response = client.table(self.table_clients).select("*").order("created_at").execute()
        return response.data or []

    def get_client_by_id(self, client_id: str) -> Optional[Dict]:
        return self._get_by_id(self.table_clients, client_id)

    def create_client(self, name: str, branding_colors: List[str]) -> Dict:
        return self._insert(self.table_clients, {
            "name": name,
            "branding_colors": branding_colors
        })

    # --- Assets ---

    def get_assets_by_client_id(self, client_id: str) -> List[Dict]:
        return self._list_by(self.table_assets, "client_id", client_id)

    def get_asset_by_id(self, asset_id: str) -> Optional[Dict]:
        return self._get_by_id(self.table_assets, asset_id)

    def create_asset(
        self,
        client_id: str,
        name: str,
        asset_type: str,
        url: str,
        tags: List[str],
        metadata: Dict[str, Any],
        is_client_provided: bool = False
    ) -> Dict:
        return self._insert(self.table_assets, {
            "client_id": client_id,
            "name": name[:255],
            "type": asset_type,
            "url": url,
            "tags": tags,
            "metadata": metadata,
            "is_client_provided": is_client_provided
        })

    def update_asset_tags(self, asset_id: str, tags: List[str]) -> Optional[Dict]:
        return self._update(self.table_assets, asset_id, {"tags": tags})

    def delete_asset(self, asset_id: str) -> bool:
        return self._delete(self.table_assets, asset_id)

    # --- Templates ---

    def get_templates_by_client_id(self, client_id: str) -> List[Dict]:
        return self._list_by(self.table_templates, "client_id", client_id)

    def get_template_by_id(self, template_id: str) -> Optional[Dict]:
        return self._get_by_id(self.table_templates, template_id)

    def create_template(
        self,
        client_id: str,
        name: str,
        description: str,
        creatomate_id: str,
        aspect_ratio: str,
        dynamic_fields: List[str]
    ) -> Dict:
        return self._insert(self.table_templates, {
            "client_id": client_id,
            "name": name,
            "description": description,
            "creatomate_id": creatomate_id,
            "aspect_ratio": aspect_ratio,
            "dynamic_fields": dynamic_fields
        })

    def delete_template(self, template_id: str) -> bool:
        return self._delete(self.table_templates, template_id)

    # --- Strategic motivations ---

    @staticmethod
    def normalize_motivation(row: Dict) -> Dict:
        """Fill the legacy fields from whichever schema version produced the row"""
        motivation = dict(row)
        motivation["content"] = row.get("content") or row.get("description") or row.get("title") or ""
        motivation["is_approved"] = bool(row.get("is_approved", False))
        return motivation

    def get_motivations_by_client_id(self, client_id: str) -> List[Dict]:
        rows = self._list_by(self.table_motivations, "client_id", client_id)
        return [self.normalize_motivation(row) for row in rows]

    def get_motivation_by_id(self, motivation_id: str) -> Optional[Dict]:
        row = self._get_by_id(self.table_motivations, motivation_id)
        return self.normalize_motivation(row) if row else None

    def create_motivation(self, client_id: str, content: str, user_id: Optional[str] = None) -> Dict:
        data = {
            "client_id": client_id,
            "content": content,
            "title": content[:255],
            "description": content,
            "is_approved": False
        }
        if user_id:
            data["user_id"] = user_id
        return self.normalize_motivation(self._insert(self.table_motivations, data))

    def approve_motivation(self, motivation_id: str) -> Optional[Dict]:
        row = self._update(self.table_motivations, motivation_id, {"is_approved": True})
        return self.normalize_motivation(row) if row else None

    # --- Copy variations ---

    @staticmethod
    def normalize_copy_variation(row: Dict) -> Dict:
        copy = dict(row)
        copy["content"] = row.get("content") or row.get("copy_text") or ""
        copy["is_approved"] = bool(row.get("is_approved", False))
        return copy

    def get_copy_variations_by_client_id(self, client_id: str) -> List[Dict]:
        rows = self._list_by(self.table_copy, "client_id", client_id)
        return [self.normalize_copy_variation(row) for row in rows]

    def get_copy_variation_by_id(self, copy_id: str) -> Optional[Dict]:
        row = self._get_by_id(self.table_copy, copy_id)
        return self.normalize_copy_variation(row) if row else None

    def create_copy_variation(
        self,
        client_id: str,
        motivation_id: str,
        content: str,
        tone: str,
        length: str,
        variation_number: int
    ) -> Dict:
        row = self._insert(self.table_copy, {
            "client_id": client_id,
            "motivation_id": motivation_id,
            "content": content,
            "copy_text": content,
            "variation_number": variation_number,
            "tone": tone,
            "length": length,
            "is_approved": False
        })
        return self.normalize_copy_variation(row)

    def approve_copy_variation(self, copy_id: str) -> Optional[Dict]:
        row = self._update(self.table_copy, copy_id, {"is_approved": True})
        return self.normalize_copy_variation(row) if row else None

    # --- Matrix configurations ---

    def get_matrix_configurations_by_client_id(self, client_id: str) -> List[Dict]:
        return self._list_by(self.table_matrix_configs, "client_id", client_id)

    def create_matrix_configuration(
        self,
        client_id: str,
        template_id: str,
        field_configurations: Dict[str, List[str]]
    ) -> Dict:
        return self._insert(self.table_matrix_configs, {
            "client_id": client_id,
            "template_id": template_id,
            "field_configurations": field_configurations
        })

    # --- Visual matrices ---

    def get_matrices_by_client_id(self, client_id: str) -> List[Dict]:
        return self._list_by(self.table_matrices, "client_id", client_id)

    def get_matrix_by_id(self, matrix_id: str) -> Optional[Dict]:
        return self._get_by_id(self.table_matrices, matrix_id)

    def create_matrix(self, client_id: str, name: str, description: str) -> Dict:
        return self._insert(self.table_matrices, {
            "client_id": client_id,
            "name": name,
            "description": description
        })

    def get_matrix_items_by_matrix_id(self, matrix_id: str) -> List[Dict]:
        return self._list_by(self.table_matrix_items, "matrix_id", matrix_id)

    def get_matrix_item_by_id(self, item_id: str) -> Optional[Dict]:
        return self._get_by_id(self.table_matrix_items, item_id)

    def create_matrix_item(
        self,
        matrix_id: str,
        client_id: str,
        platform_id: str,
        format_id: str,
        template_id: str,
        copy_id: str,
        asset_ids: List[str]
    ) -> Dict:
        return self._insert(self.table_matrix_items, {
            "matrix_id": matrix_id,
            "client_id": client_id,
            "platform_id": platform_id,
            "format_id": format_id,
            "template_id": template_id,
            "copy_id": copy_id,
            "asset_ids": asset_ids,
            "status": MatrixItemStatus.DRAFT.value
        })

    def update_matrix_item(self, item_id: str, updates: Dict[str, Any]) -> Optional[Dict]:
        """Overwrite item fields; status changes are plain field writes"""
        protected = {"id", "matrix_id", "client_id", "created_at"}
        data = {k: v for k, v in updates.items() if k not in protected}
        if "status" in data:
            data["status"] = MatrixItemStatus(data["status"]).value
        if not data:
            return self.get_matrix_item_by_id(item_id)
        return self._update(self.table_matrix_items, item_id, data)

    def delete_matrix_item(self, item_id: str) -> bool:
        return self._delete(self.table_matrix_items, item_id)

    # --- Executions ---

    def get_executions_by_client_id(self, client_id: str) -> List[Dict]:
        return self._list_by(self.table_executions, "client_id", client_id)

    def get_execution_by_id(self, execution_id: str) -> Optional[Dict]:
        return self._get_by_id(self.table_executions, execution_id)

    def create_execution(self, client_id: str, matrix_id: str) -> Dict:
        return self._insert(self.table_executions, {
            "client_id": client_id,
            "matrix_id": matrix_id,
            "status": ExecutionStatus.PENDING.value,
            "output_url": None
        })

    def update_execution_status(
        self,
        execution_id: str,
        status: str,
        output_url: Optional[str] = None
    ) -> Optional[Dict]:
        updates = {"status": ExecutionStatus(status).value}
        if output_url:
            updates["output_url"] = output_url
        return self._update(self.table_executions, execution_id, updates)

    def ping(self) -> bool:
        """Cheap connectivity probe used by the health check"""
        client = self._get_client()
        client.table(self.table_clients).select("id").limit(1).execute()
        return True

# Global instance for app-wide use
db = ContentDB()
