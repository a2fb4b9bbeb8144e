from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from models import (
    DEFAULT_ASPECT_RATIO,
    DEFAULT_BRANDING_COLORS,
    CopyLength,
    ExecutionStatus,
    MatrixItemStatus,
)


class SignUpRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    full_name: str = ""


class SignInRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class ResetPasswordRequest(BaseModel):
    email: str = Field(..., min_length=3)


class UpdatePasswordRequest(BaseModel):
    password: str = Field(..., min_length=6)


class ClientCreate(BaseModel):
    name: str = Field(..., min_length=1)
    branding_colors: List[str] = Field(default_factory=lambda: list(DEFAULT_BRANDING_COLORS))


class AssetTagsUpdate(BaseModel):
    tags: List[str] = Field(default_factory=list)


class TemplateImport(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    creatomate_id: str = Field(..., min_length=1)
    aspect_ratio: str = DEFAULT_ASPECT_RATIO
    dynamic_fields: List[str] = Field(default_factory=list)


class CopyGenerationRequest(BaseModel):
    motivation_id: str = Field(..., min_length=1)
    tone: str = "Professional"
    length: CopyLength = CopyLength.MEDIUM
    count: int = Field(3, ge=1, le=10)
    include_cta: bool = False


class MatrixCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""


class MatrixItemCreate(BaseModel):
    platform_id: str = Field(..., min_length=1)
    format_id: str = Field(..., min_length=1)
    template_id: str = Field(..., min_length=1)
    copy_id: str = Field(..., min_length=1)
    asset_ids: List[str] = Field(default_factory=list)


class MatrixItemUpdate(BaseModel):
    platform_id: Optional[str] = Field(None, min_length=1)
    format_id: Optional[str] = Field(None, min_length=1)
    template_id: Optional[str] = Field(None, min_length=1)
    copy_id: Optional[str] = Field(None, min_length=1)
    asset_ids: Optional[List[str]] = None
    status: Optional[MatrixItemStatus] = None


class MatrixConfigurationCreate(BaseModel):
    template_id: str = Field(..., min_length=1)
    field_configurations: Dict[str, List[str]] = Field(default_factory=dict)


class ExecutionCreate(BaseModel):
    matrix_id: str = Field(..., min_length=1)


class ExecutionStatusUpdate(BaseModel):
    status: ExecutionStatus
    output_url: Optional[str] = None
