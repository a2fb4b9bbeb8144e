from enum import Enum
from typing import Dict, List

class AssetType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    COPY = "copy"
    VOICEOVER = "voiceover"

class CopyLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

class MatrixItemStatus(str, Enum):
    """
    Review state of a visual matrix item.
    Any status may be written over any other; there is no transition table.
    """
    DRAFT = "draft"
    IN_REVIEW = "in_review"
    APPROVED = "approved"
    REJECTED = "rejected"

class ExecutionStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

PLATFORMS: List[Dict[str, str]] = [
    {"id": "facebook", "name": "Facebook"},
    {"id": "instagram", "name": "Instagram"},
    {"id": "twitter", "name": "Twitter"},
    {"id": "linkedin", "name": "LinkedIn"},
    {"id": "tiktok", "name": "TikTok"},
    {"id": "youtube", "name": "YouTube"},
    {"id": "display", "name": "Display Ads"},
    {"id": "email", "name": "Email"},
]

FORMATS: List[Dict[str, str]] = [
    {"id": "post", "name": "Post"},
    {"id": "story", "name": "Story"},
    {"id": "reel", "name": "Reel"},
    {"id": "carousel", "name": "Carousel"},
    {"id": "video", "name": "Video"},
    {"id": "banner", "name": "Banner"},
    {"id": "newsletter", "name": "Newsletter"},
]

ASPECT_RATIOS: List[Dict[str, str]] = [
    {"id": "16:9", "name": "16:9 (Landscape)"},
    {"id": "9:16", "name": "9:16 (Portrait)"},
    {"id": "1:1", "name": "1:1 (Square)"},
    {"id": "4:5", "name": "4:5 (Instagram)"},
    {"id": "2.39:1", "name": "2.39:1 (Cinematic)"},
]
DEFAULT_ASPECT_RATIO = "16:9"

TONES = ["Professional", "Friendly", "Enthusiastic", "Authoritative", "Humorous"]

DEFAULT_BRANDING_COLORS = ["#FF5733", "#33FF57", "#3357FF"]

def platform_name(platform_id: str) -> str:
    """Display name for a platform id, or the id itself when unknown"""
    for platform in PLATFORMS:
        if platform["id"] == platform_id:
            return platform["name"]
    return platform_id

def format_name(format_id: str) -> str:
    for fmt in FORMATS:
        if fmt["id"] == format_id:
            return fmt["name"]
    return format_id
