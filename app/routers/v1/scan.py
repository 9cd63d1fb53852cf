from fastapi import APIRouter, UploadFile, File, Form, Depends, HTTPException, Response, Request
from app.dependencies import get_gemini_service, get_services
from app.exceptions import PermissionDenied, RemoteServiceError, UserCancelled
from app.routers.v1.views import result_view
from app.schemas.scan import ScanMode, ScanResultResponse
from app.services.gemini import GeminiService
from app.services.parser import DEFAULT_TITLE
from app.services.scan import ScanService
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/scan", response_model=ScanResultResponse, responses={204: {"description": "No image selected"}})
async def scan_plant(
    request: Request,
    file: UploadFile = File(...),
    mode: ScanMode = Form(ScanMode.IDENTIFY),
    camera_permission_denied: bool = Form(False, description="Set by clients whose camera access was refused"),
    gemini: GeminiService = Depends(get_gemini_service),
):
    """
    Identify a plant or diagnose its problem from an uploaded image and
    record the result at the top of the history.
    """
    services = get_services(request)
    try:
        if camera_permission_denied:
            raise PermissionDenied()

        image_bytes = await file.read()
        scanner = ScanService(
            services.history,
            gemini,
            image_dir=services.settings.IMAGE_DIR,
            image_quality=services.settings.IMAGE_QUALITY,
        )
        result = await scanner.scan(image_bytes, mode=mode, filename=file.filename, content_type=file.content_type)
    except UserCancelled:
        return Response(status_code=204)
    except PermissionDenied as e:
        raise HTTPException(status_code=403, detail={"code": e.code, "message": str(e)})
    except RemoteServiceError as e:
        raise HTTPException(status_code=502, detail=f"Scan failed: {e}")

    return result_view(0, result, default_title=DEFAULT_TITLE)
