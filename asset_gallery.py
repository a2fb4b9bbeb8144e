import math
from typing import Dict, List, Optional

def parse_tags(raw: Optional[str]) -> List[str]:
    """Split a comma separated tag string, dropping blanks"""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]

def filter_assets(assets: List[Dict], asset_type: str = "all", search: str = "") -> List[Dict]:
    """
    Filter a client's assets the way the gallery does.

    ``asset_type`` of "all" (or empty) keeps every type. ``search`` is a
    case-insensitive substring match against the asset name and each tag.
    """
    result = list(assets)

    if asset_type and asset_type != "all":
        result = [asset for asset in result if asset.get("type") == asset_type]

    term = (search or "").strip().lower()
    if term:
        result = [
            asset for asset in result
            if term in (asset.get("name") or "").lower()
            or any(term in str(tag).lower() for tag in asset.get("tags") or [])
        ]

    return result

def paginate(items: List[Dict], page: int = 1, per_page: int = 12) -> Dict:
    """1-based page slice; pages past the end are empty"""
    if per_page < 1:
        raise ValueError("per_page must be at least 1")
    page = max(page, 1)
    total = len(items)
    start = (page - 1) * per_page

    return {
        "items": items[start:start + per_page],
        "page": page,
        "per_page": per_page,
        "total": total,
        "page_count": math.ceil(total / per_page)
    }
