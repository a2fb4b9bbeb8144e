import asyncio
import logging
from datetime import datetime
from typing import Optional
from urllib.parse import urlparse

from fastapi import FastAPI, UploadFile, File, Form, HTTPException, Depends, Request, Query
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

# Configure structured logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

# Suppress noisy logs
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)

from config import config
from auth_middleware import get_current_user_id, get_bearer_token, get_user_id_from_token
from auth_service import auth_service, AuthServiceError
from brief_sources import extract_deck_text, fetch_page_text
from asset_gallery import parse_tags
from models import ASPECT_RATIOS, FORMATS, PLATFORMS, TONES, AssetType, MatrixItemStatus
from schemas import (
    AssetTagsUpdate,
    ClientCreate,
    CopyGenerationRequest,
    ExecutionCreate,
    ExecutionStatusUpdate,
    MatrixConfigurationCreate,
    MatrixCreate,
    MatrixItemCreate,
    MatrixItemUpdate,
    ResetPasswordRequest,
    SignInRequest,
    SignUpRequest,
    TemplateImport,
    UpdatePasswordRequest,
)
from supabase_db import db
import workflows
from workflows import InvalidInputError, NotFoundError

ENVIRONMENT = config.ENVIRONMENT
VERSION = "1.0.0"

app = FastAPI(
    title="AIrWAVE Content API",
    description="Client assets, templates, generated copy and visual matrices on Supabase",
    version=VERSION,
    docs_url="/docs" if ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if ENVIRONMENT != "production" else None,
    openapi_url="/openapi.json" if ENVIRONMENT != "production" else None,
)

allowed_origins = config.get_cors_origins()

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-User-ID"],
    max_age=3600,
)

app.add_middleware(GZipMiddleware, minimum_size=1000)

@app.get("/")
async def index():
    """Root endpoint with API information"""
    return {
        "message": "🚀 AIrWAVE Content API",
        "version": VERSION,
        "status": "running",
        "environment": ENVIRONMENT,
        "ai_provider": config.AI_PROVIDER,
        "endpoints": {
            "GET /api/catalog": "Platforms, formats, aspect ratios, tones and statuses",
            "POST /api/auth/signin": "Sign in with email and password",
            "GET /api/clients": "List clients and the resolved selection",
            "GET /api/clients/{id}/assets": "Filtered, paginated asset gallery",
            "POST /api/clients/{id}/motivations/generate": "Generate strategic motivations",
            "POST /api/clients/{id}/copy-variations/generate": "Generate copy variations",
            "GET /api/clients/{id}/matrices/{matrix_id}": "Open a visual matrix with its items",
            "GET /health": "Health check"
        }
    }

@app.get("/health")
async def health_check():
    """Health check with a Supabase probe"""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "service": "airwave-content-api",
        "version": VERSION,
        "environment": ENVIRONMENT,
        "components": {}
    }

    try:
        db.ping()
        health_status["components"]["database"] = {"status": "healthy", "type": "supabase"}
    except ConnectionError as e:
        health_status["components"]["database"] = {"status": "unhealthy", "error": str(e)}
        health_status["status"] = "unhealthy"
    except Exception as e:
        health_status["components"]["database"] = {
            "status": "degraded",
            "error": f"Query failed: {str(e)[:100]}"
        }
        health_status["status"] = "degraded"

    health_status["components"]["content_generation"] = {
        "status": "healthy",
        "provider": config.AI_PROVIDER
    }

    if health_status["status"] == "unhealthy":
        return JSONResponse(status_code=503, content=health_status)

    return health_status

@app.get("/api/catalog")
async def get_catalog():
    return {
        "success": True,
        "platforms": PLATFORMS,
        "formats": FORMATS,
        "aspect_ratios": ASPECT_RATIOS,
        "tones": TONES,
        "asset_types": [t.value for t in AssetType],
        "statuses": [s.value for s in MatrixItemStatus]
    }

# --- Auth ---

@app.post("/api/auth/signup")
async def sign_up(body: SignUpRequest):
    result = auth_service.sign_up(body.email, body.password, body.full_name)
    return {"success": True, **result}

@app.post("/api/auth/signin")
async def sign_in(body: SignInRequest):
    result = auth_service.sign_in(body.email, body.password)
    return {"success": True, **result}

@app.post("/api/auth/signout")
async def sign_out(access_token: str = Depends(get_bearer_token)):
    auth_service.sign_out(access_token)
    return {"success": True}

@app.get("/api/auth/user")
async def current_user(access_token: str = Depends(get_bearer_token)):
    return {"success": True, "user": auth_service.get_current_user(access_token)}

@app.post("/api/auth/reset-password")
async def reset_password(body: ResetPasswordRequest):
    auth_service.reset_password(body.email)
    return {"success": True, "message": "Password reset email sent"}

@app.post("/api/auth/update-password")
async def update_password(body: UpdatePasswordRequest, user_id: str = Depends(get_user_id_from_token)):
    user = auth_service.update_password(user_id, body.password)
    return {"success": True, "user": user}

# --- Clients ---

@app.get("/api/clients")
async def list_clients(
    selected: Optional[str] = Query(None, description="Previously selected client id"),
    user_id: str = Depends(get_current_user_id)
):
    result = workflows.list_clients(selected)
    return {"success": True, "count": len(result["clients"]), **result}

@app.post("/api/clients", status_code=201)
async def create_client(body: ClientCreate, user_id: str = Depends(get_current_user_id)):
    client = workflows.create_client(body.name, body.branding_colors)
    logger.info(f"✅ Client created: {client['id']} by {user_id[:8]}...")
    return {"success": True, "client": client}

@app.get("/api/clients/{client_id}")
async def get_client(client_id: str, user_id: str = Depends(get_current_user_id)):
    return {"success": True, "client": workflows.require_client(client_id)}

# --- Assets ---

@app.get("/api/clients/{client_id}/assets")
async def list_assets(
    client_id: str,
    type: str = "all",
    search: str = "",
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1, le=100),
    user_id: str = Depends(get_current_user_id)
):
    result = workflows.list_assets(client_id, type, search, page, per_page)
    return {
        "success": True,
        "assets": result["items"],
        "page": result["page"],
        "per_page": result["per_page"],
        "total": result["total"],
        "page_count": result["page_count"]
    }

@app.post("/api/clients/{client_id}/assets", status_code=201)
async def upload_asset(
    client_id: str,
    file: UploadFile = File(...),
    type: str = Form(...),
    tags: str = Form(""),
    is_client_provided: bool = Form(False),
    user_id: str = Depends(get_current_user_id)
):
    logger.info(f"📤 Asset upload for client {client_id}: {file.filename}")
    data = await file.read()
    asset = workflows.upload_asset(
        client_id=client_id,
        filename=file.filename or "upload",
        data=data,
        asset_type=type,
        tags=parse_tags(tags),
        is_client_provided=is_client_provided,
        content_type=file.content_type
    )
    return {"success": True, "asset": asset}

@app.patch("/api/clients/{client_id}/assets/{asset_id}/tags")
async def update_asset_tags(
    client_id: str,
    asset_id: str,
    body: AssetTagsUpdate,
    user_id: str = Depends(get_current_user_id)
):
    asset = workflows.update_asset_tags(client_id, asset_id, body.tags)
    return {"success": True, "asset": asset}

@app.delete("/api/clients/{client_id}/assets/{asset_id}")
async def delete_asset(client_id: str, asset_id: str, user_id: str = Depends(get_current_user_id)):
    workflows.delete_asset(client_id, asset_id)
    return {"success": True, "deleted": asset_id}

# --- Templates ---

@app.get("/api/clients/{client_id}/templates")
async def list_templates(client_id: str, user_id: str = Depends(get_current_user_id)):
    templates = workflows.list_templates(client_id)
    return {"success": True, "count": len(templates), "templates": templates}

@app.post("/api/clients/{client_id}/templates", status_code=201)
async def import_template(client_id: str, body: TemplateImport, user_id: str = Depends(get_current_user_id)):
    template = workflows.import_template(
        client_id=client_id,
        name=body.name,
        creatomate_id=body.creatomate_id,
        aspect_ratio=body.aspect_ratio,
        dynamic_fields=body.dynamic_fields,
        description=body.description
    )
    return {"success": True, "template": template}

@app.delete("/api/clients/{client_id}/templates/{template_id}")
async def delete_template(client_id: str, template_id: str, user_id: str = Depends(get_current_user_id)):
    workflows.delete_template(client_id, template_id)
    return {"success": True, "deleted": template_id}

# --- Strategic motivations ---

@app.get("/api/clients/{client_id}/motivations")
async def list_motivations(client_id: str, user_id: str = Depends(get_current_user_id)):
    motivations = workflows.list_motivations(client_id)
    return {"success": True, "count": len(motivations), "motivations": motivations}

@app.post("/api/clients/{client_id}/motivations/generate", status_code=201)
async def generate_motivations(
    client_id: str,
    brief: str = Form(...),
    website_url: Optional[str] = Form(None),
    brief_file: Optional[UploadFile] = File(None),
    user_id: str = Depends(get_current_user_id)
):
    """
    Generate strategic motivations from a client brief.
    A website URL and a PPTX deck may be added as extra brief sources.
    """
    page_text = ""
    deck_text = ""

    if website_url:
        parsed = urlparse(website_url)
        if not all([parsed.scheme, parsed.netloc]):
            raise HTTPException(status_code=400, detail="Invalid website URL")
        page_text = await asyncio.to_thread(fetch_page_text, website_url, config.REQUEST_TIMEOUT)

    if brief_file is not None and brief_file.filename:
        if not brief_file.filename.lower().endswith(".pptx"):
            raise HTTPException(status_code=400, detail="Only PPTX brief files are supported")
        content = await brief_file.read()
        if len(content) > config.FILE_SIZE_LIMIT:
            raise HTTPException(status_code=400, detail="Brief file is too large")
        deck_text = extract_deck_text(content)

    motivations = await asyncio.to_thread(
        workflows.generate_strategic_motivations,
        client_id,
        brief,
        user_id,
        deck_text,
        page_text
    )
    return {"success": True, "count": len(motivations), "motivations": motivations}

@app.post("/api/clients/{client_id}/motivations/{motivation_id}/approve")
async def approve_motivation(client_id: str, motivation_id: str, user_id: str = Depends(get_current_user_id)):
    return {"success": True, "motivation": workflows.approve_motivation(client_id, motivation_id)}

# --- Copy variations ---

@app.get("/api/clients/{client_id}/copy-variations")
async def list_copy_variations(
    client_id: str,
    motivation_id: Optional[str] = None,
    user_id: str = Depends(get_current_user_id)
):
    variations = workflows.list_copy_variations(client_id, motivation_id)
    return {"success": True, "count": len(variations), "copy_variations": variations}

@app.post("/api/clients/{client_id}/copy-variations/generate", status_code=201)
async def generate_copy_variations(
    client_id: str,
    body: CopyGenerationRequest,
    user_id: str = Depends(get_current_user_id)
):
    variations = await asyncio.to_thread(
        workflows.generate_copy_variations,
        client_id,
        body.motivation_id,
        body.tone,
        body.length.value,
        body.count,
        body.include_cta
    )
    return {"success": True, "count": len(variations), "copy_variations": variations}

@app.post("/api/clients/{client_id}/copy-variations/{copy_id}/approve")
async def approve_copy_variation(client_id: str, copy_id: str, user_id: str = Depends(get_current_user_id)):
    return {"success": True, "copy_variation": workflows.approve_copy_variation(client_id, copy_id)}

# --- Visual matrices ---

@app.get("/api/clients/{client_id}/matrices")
async def list_matrices(client_id: str, user_id: str = Depends(get_current_user_id)):
    matrices = workflows.list_matrices(client_id)
    return {"success": True, "count": len(matrices), "matrices": matrices}

@app.post("/api/clients/{client_id}/matrices", status_code=201)
async def create_matrix(client_id: str, body: MatrixCreate, user_id: str = Depends(get_current_user_id)):
    matrix = workflows.create_matrix(client_id, body.name, body.description)
    return {"success": True, "matrix": matrix}

@app.get("/api/clients/{client_id}/matrices/{matrix_id}")
async def open_matrix(client_id: str, matrix_id: str, user_id: str = Depends(get_current_user_id)):
    return {"success": True, **workflows.open_matrix(client_id, matrix_id)}

@app.post("/api/clients/{client_id}/matrices/{matrix_id}/items", status_code=201)
async def add_matrix_item(
    client_id: str,
    matrix_id: str,
    body: MatrixItemCreate,
    user_id: str = Depends(get_current_user_id)
):
    item = workflows.add_matrix_item(
        client_id,
        matrix_id,
        body.platform_id,
        body.format_id,
        body.template_id,
        body.copy_id,
        body.asset_ids
    )
    return {"success": True, "item": item}

@app.patch("/api/clients/{client_id}/matrices/{matrix_id}/items/{item_id}")
async def update_matrix_item(
    client_id: str,
    matrix_id: str,
    item_id: str,
    body: MatrixItemUpdate,
    user_id: str = Depends(get_current_user_id)
):
    updates = body.model_dump(exclude_none=True, mode="json")
    item = workflows.update_matrix_item(client_id, matrix_id, item_id, updates)
    return {"success": True, "item": item}

@app.delete("/api/clients/{client_id}/matrices/{matrix_id}/items/{item_id}")
async def remove_matrix_item(
    client_id: str,
    matrix_id: str,
    item_id: str,
    user_id: str = Depends(get_current_user_id)
):
    workflows.remove_matrix_item(client_id, matrix_id, item_id)
    return {"success": True, "deleted": item_id}

# --- Matrix configurations & executions ---

@app.get("/api/clients/{client_id}/matrix-configurations")
async def list_matrix_configurations(client_id: str, user_id: str = Depends(get_current_user_id)):
    configurations = workflows.list_matrix_configurations(client_id)
    return {"success": True, "count": len(configurations), "configurations": configurations}

@app.post("/api/clients/{client_id}/matrix-configurations", status_code=201)
async def create_matrix_configuration(
    client_id: str,
    body: MatrixConfigurationCreate,
    user_id: str = Depends(get_current_user_id)
):
    configuration = workflows.create_matrix_configuration(
        client_id, body.template_id, body.field_configurations
    )
    return {"success": True, "configuration": configuration}

@app.get("/api/clients/{client_id}/executions")
async def list_executions(client_id: str, user_id: str = Depends(get_current_user_id)):
    executions = workflows.list_executions(client_id)
    return {"success": True, "count": len(executions), "executions": executions}

@app.post("/api/clients/{client_id}/executions", status_code=201)
async def create_execution(client_id: str, body: ExecutionCreate, user_id: str = Depends(get_current_user_id)):
    return {"success": True, "execution": workflows.create_execution(client_id, body.matrix_id)}

@app.patch("/api/clients/{client_id}/executions/{execution_id}")
async def update_execution(
    client_id: str,
    execution_id: str,
    body: ExecutionStatusUpdate,
    user_id: str = Depends(get_current_user_id)
):
    execution = workflows.update_execution_status(
        client_id, execution_id, body.status.value, body.output_url
    )
    return {"success": True, "execution": execution}

# Error handlers
def _error_response(request: Request, status_code: int, detail) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": detail,
            "status_code": status_code,
            "timestamp": datetime.now().isoformat(),
            "path": request.url.path
        }
    )

@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    logger.warning(f"⚠️ HTTP {exc.status_code} at {request.url.path}: {exc.detail}")
    return _error_response(request, exc.status_code, exc.detail)

@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.warning(f"⚠️ Not found at {request.url.path}: {exc}")
    return _error_response(request, 404, str(exc))

@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    return _error_response(request, 400, str(exc))

@app.exception_handler(AuthServiceError)
async def auth_error_handler(request: Request, exc: AuthServiceError):
    logger.warning(f"⚠️ Auth error at {request.url.path}: {exc.message}")
    return _error_response(request, exc.status_code, exc.message)

@app.exception_handler(ConnectionError)
async def backend_unavailable_handler(request: Request, exc: ConnectionError):
    logger.error(f"❌ Backend unavailable at {request.url.path}: {exc}")
    return _error_response(request, 503, "Database service temporarily unavailable")

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Log internally, return generic error"""
    logger.error(f"❌ Unhandled exception at {request.url.path}: {exc}", exc_info=True)
    return _error_response(request, 500, "Internal server error")

@app.on_event("startup")
async def startup_event():
    logger.info(f"🚀 AIrWAVE Content API {VERSION} starting ({ENVIRONMENT})")
    logger.info(f"✅ CORS allowed origins: {allowed_origins}")
    if not db_configured():
        logger.warning("⚠️ Supabase is not configured; data routes will return 503")

def db_configured() -> bool:
    try:
        db._get_client()
        return True
    except ConnectionError:
        return False

# For local development only
if __name__ == "__main__":
    import uvicorn

    logger.info(f"🏃 Starting development server on {config.HOST}:{config.PORT}")

    uvicorn.run(
        "app:app",
        host=config.HOST,
        port=config.PORT,
        reload=ENVIRONMENT == "development",
        log_level=config.LOG_LEVEL
    )
