"""
Client-scoped operations behind the HTTP routes.

Each function loads what it needs through ``db`` / ``storage``, checks that
the records belong to the client in the URL, performs the mutation and
returns fresh rows. Lookups that miss raise ``NotFoundError``; bad input
raises ``InvalidInputError``.
"""
import time
import logging
from typing import Dict, List, Optional

from asset_gallery import filter_assets, paginate
from config import config
from copy_generator import generate_copy_variations as generate_copy_texts
from models import (
    DEFAULT_BRANDING_COLORS,
    AssetType,
    CopyLength,
    ExecutionStatus,
    MatrixItemStatus,
    format_name,
    platform_name,
)
from motivation_generator import generate_strategic_motivations as generate_motivation_texts
from brief_sources import build_brief_context
from supabase_db import db
from supabase_storage import storage

logger = logging.getLogger(__name__)


class WorkflowError(Exception):
    pass


class NotFoundError(WorkflowError):
    pass


class InvalidInputError(WorkflowError):
    pass


# --- Clients ---

def resolve_selected_client(clients: List[Dict], saved_client_id: Optional[str]) -> Optional[Dict]:
    """The saved selection when it still exists, else the first client"""
    if not clients:
        return None
    if saved_client_id:
        for client in clients:
            if client["id"] == saved_client_id:
                return client
    return clients[0]


def list_clients(saved_client_id: Optional[str] = None) -> Dict:
    clients = db.get_clients()
    return {
        "clients": clients,
        "selected_client": resolve_selected_client(clients, saved_client_id)
    }


def create_client(name: str, branding_colors: Optional[List[str]] = None) -> Dict:
    name = (name or "").strip()
    if not name:
        raise InvalidInputError("Client name is required")
    colors = [c.strip() for c in (branding_colors or []) if c and c.strip()]
    return db.create_client(name, colors or list(DEFAULT_BRANDING_COLORS))


def require_client(client_id: str) -> Dict:
    client = db.get_client_by_id(client_id)
    if not client:
        raise NotFoundError(f"Client {client_id} not found")
    return client


def _require_owned(record: Optional[Dict], client_id: str, label: str, record_id: str) -> Dict:
    if not record or record.get("client_id") != client_id:
        raise NotFoundError(f"{label} {record_id} not found")
    return record


# --- Assets ---

def upload_asset(
    client_id: str,
    filename: str,
    data: bytes,
    asset_type: str,
    tags: Optional[List[str]] = None,
    is_client_provided: bool = False,
    content_type: Optional[str] = None
) -> Dict:
    require_client(client_id)

    try:
        asset_type = AssetType(asset_type).value
    except ValueError:
        raise InvalidInputError(f"Unsupported asset type: {asset_type}")
    if not data:
        raise InvalidInputError("Uploaded file is empty")
    if len(data) > config.FILE_SIZE_LIMIT:
        raise InvalidInputError(
            f"File size exceeds {config.FILE_SIZE_LIMIT // (1024 * 1024)}MB limit"
        )

    stored = storage.upload_asset(client_id, asset_type, filename, data, content_type)

    return db.create_asset(
        client_id=client_id,
        name=filename,
        asset_type=asset_type,
        url=stored["public_url"],
        tags=tags or [],
        metadata={
            "size": len(data),
            "type": content_type,
            "storage_path": stored["storage_path"],
            "uploaded_at": int(time.time() * 1000)
        },
        is_client_provided=is_client_provided
    )


def list_assets(
    client_id: str,
    asset_type: str = "all",
    search: str = "",
    page: int = 1,
    per_page: Optional[int] = None
) -> Dict:
    require_client(client_id)
    assets = db.get_assets_by_client_id(client_id)
    filtered = filter_assets(assets, asset_type, search)
    return paginate(filtered, page, per_page or config.ASSETS_PER_PAGE)


def update_asset_tags(client_id: str, asset_id: str, tags: List[str]) -> Dict:
    _require_owned(db.get_asset_by_id(asset_id), client_id, "Asset", asset_id)
    cleaned = [tag.strip() for tag in tags if tag and tag.strip()]
    return db.update_asset_tags(asset_id, cleaned)


def delete_asset(client_id: str, asset_id: str) -> None:
    asset = _require_owned(db.get_asset_by_id(asset_id), client_id, "Asset", asset_id)

    storage_path = (asset.get("metadata") or {}).get("storage_path") \
        or storage.storage_path_from_url(asset.get("url"))
    if storage_path:
        storage.remove_asset(storage_path)
    else:
        logger.warning(f"⚠️ No storage path for asset {asset_id}, removing record only")

    db.delete_asset(asset_id)
    logger.info(f"🗑️  Asset deleted: {asset_id}")


# --- Templates ---

def import_template(
    client_id: str,
    name: str,
    creatomate_id: str,
    aspect_ratio: str,
    dynamic_fields: List[str],
    description: str = ""
) -> Dict:
    require_client(client_id)

    name = (name or "").strip()
    creatomate_id = (creatomate_id or "").strip()
    if not name:
        raise InvalidInputError("Template name is required")
    if not creatomate_id:
        raise InvalidInputError("Creatomate Template ID is required")

    fields = []
    for field in dynamic_fields:
        field = (field or "").strip()
        if field and field not in fields:
            fields.append(field)

    return db.create_template(
        client_id=client_id,
        name=name,
        description=description.strip(),
        creatomate_id=creatomate_id,
        aspect_ratio=aspect_ratio,
        dynamic_fields=fields
    )


def list_templates(client_id: str) -> List[Dict]:
    require_client(client_id)
    return db.get_templates_by_client_id(client_id)


def delete_template(client_id: str, template_id: str) -> None:
    _require_owned(db.get_template_by_id(template_id), client_id, "Template", template_id)
    db.delete_template(template_id)


# --- Strategic motivations & copy ---

def generate_strategic_motivations(
    client_id: str,
    brief: str,
    user_id: Optional[str] = None,
    deck_text: str = "",
    page_text: str = ""
) -> List[Dict]:
    require_client(client_id)
    if not (brief or "").strip():
        raise InvalidInputError("Please enter a client brief")

    context = build_brief_context(brief, deck_text, page_text)
    texts = generate_motivation_texts(context)

    created = [db.create_motivation(client_id, text, user_id=user_id) for text in texts]
    logger.info(f"✅ {len(created)} strategic motivations stored for client {client_id}")
    return created


def list_motivations(client_id: str) -> List[Dict]:
    require_client(client_id)
    return db.get_motivations_by_client_id(client_id)


def approve_motivation(client_id: str, motivation_id: str) -> Dict:
    _require_owned(db.get_motivation_by_id(motivation_id), client_id, "Motivation", motivation_id)
    return db.approve_motivation(motivation_id)


def generate_copy_variations(
    client_id: str,
    motivation_id: str,
    tone: str,
    length: str,
    count: int,
    include_cta: bool = False
) -> List[Dict]:
    motivation = _require_owned(
        db.get_motivation_by_id(motivation_id), client_id, "Motivation", motivation_id
    )

    try:
        length = CopyLength(length).value
    except ValueError:
        raise InvalidInputError(f"Unsupported copy length: {length}")
    if count < 1 or count > config.MAX_COPY_VARIATIONS:
        raise InvalidInputError(f"count must be between 1 and {config.MAX_COPY_VARIATIONS}")

    texts = generate_copy_texts(motivation["content"], tone, length, count, include_cta)

    return [
        db.create_copy_variation(
            client_id=client_id,
            motivation_id=motivation_id,
            content=text,
            tone=tone,
            length=length,
            variation_number=number
        )
        for number, text in enumerate(texts, start=1)
    ]


def list_copy_variations(client_id: str, motivation_id: Optional[str] = None) -> List[Dict]:
    require_client(client_id)
    variations = db.get_copy_variations_by_client_id(client_id)
    if motivation_id:
        variations = [v for v in variations if v.get("motivation_id") == motivation_id]
    return variations


def approve_copy_variation(client_id: str, copy_id: str) -> Dict:
    _require_owned(db.get_copy_variation_by_id(copy_id), client_id, "Copy variation", copy_id)
    return db.approve_copy_variation(copy_id)


# --- Visual matrix ---

def create_matrix(client_id: str, name: str, description: str = "") -> Dict:
    require_client(client_id)
    name = (name or "").strip()
    if not name:
        raise InvalidInputError("Matrix name is required")
    return db.create_matrix(client_id, name, (description or "").strip())


def list_matrices(client_id: str) -> List[Dict]:
    require_client(client_id)
    return db.get_matrices_by_client_id(client_id)


def require_matrix(client_id: str, matrix_id: str) -> Dict:
    return _require_owned(db.get_matrix_by_id(matrix_id), client_id, "Matrix", matrix_id)


def describe_item(item: Dict) -> Dict:
    """Attach display names for the platform and format ids"""
    return {
        **item,
        "platform_name": platform_name(item.get("platform_id", "")),
        "format_name": format_name(item.get("format_id", ""))
    }


def open_matrix(client_id: str, matrix_id: str) -> Dict:
    matrix = require_matrix(client_id, matrix_id)
    items = db.get_matrix_items_by_matrix_id(matrix_id)
    return {"matrix": matrix, "items": [describe_item(item) for item in items]}


def add_matrix_item(
    client_id: str,
    matrix_id: str,
    platform_id: str,
    format_id: str,
    template_id: str,
    copy_id: str,
    asset_ids: Optional[List[str]] = None
) -> Dict:
    require_matrix(client_id, matrix_id)
    if not all([platform_id, format_id, template_id, copy_id]):
        raise InvalidInputError("Platform, format, template and copy are required")

    item = db.create_matrix_item(
        matrix_id=matrix_id,
        client_id=client_id,
        platform_id=platform_id,
        format_id=format_id,
        template_id=template_id,
        copy_id=copy_id,
        asset_ids=list(asset_ids or [])
    )
    return describe_item(item)


def _require_item(client_id: str, matrix_id: str, item_id: str) -> Dict:
    require_matrix(client_id, matrix_id)
    item = db.get_matrix_item_by_id(item_id)
    if not item or item.get("matrix_id") != matrix_id:
        raise NotFoundError(f"Matrix item {item_id} not found")
    return item


def update_matrix_item(client_id: str, matrix_id: str, item_id: str, updates: Dict) -> Dict:
    _require_item(client_id, matrix_id, item_id)

    if "status" in updates and updates["status"] is not None:
        try:
            updates["status"] = MatrixItemStatus(updates["status"]).value
        except ValueError:
            raise InvalidInputError(f"Unsupported status: {updates['status']}")

    updated = db.update_matrix_item(item_id, updates)
    if not updated:
        raise NotFoundError(f"Matrix item {item_id} not found")
    return describe_item(updated)


def remove_matrix_item(client_id: str, matrix_id: str, item_id: str) -> None:
    _require_item(client_id, matrix_id, item_id)
    db.delete_matrix_item(item_id)


# --- Matrix configurations & executions ---

def create_matrix_configuration(
    client_id: str,
    template_id: str,
    field_configurations: Dict[str, List[str]]
) -> Dict:
    _require_owned(db.get_template_by_id(template_id), client_id, "Template", template_id)
    return db.create_matrix_configuration(client_id, template_id, field_configurations)


def list_matrix_configurations(client_id: str) -> List[Dict]:
    require_client(client_id)
    return db.get_matrix_configurations_by_client_id(client_id)


def create_execution(client_id: str, matrix_id: str) -> Dict:
    require_matrix(client_id, matrix_id)
    return db.create_execution(client_id, matrix_id)


def list_executions(client_id: str) -> List[Dict]:
    require_client(client_id)
    return db.get_executions_by_client_id(client_id)


def update_execution_status(
    client_id: str,
    execution_id: str,
    status: str,
    output_url: Optional[str] = None
) -> Dict:
    _require_owned(db.get_execution_by_id(execution_id), client_id, "Execution", execution_id)
    try:
        status = ExecutionStatus(status).value
    except ValueError:
        raise InvalidInputError(f"Unsupported execution status: {status}")
    return db.update_execution_status(execution_id, status, output_url)
