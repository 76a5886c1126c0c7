from fastapi import APIRouter, Depends, HTTPException

from common import CurrentUser

from ..config import get_settings
from ..schemas import ScreenshotUploadIn, ScreenshotUploadOut
from ..security import get_current_user
from ..services import RegistrationServiceError, decode_base64_image, upload_screenshot
from ..storage import StorageFactory, get_storage_factory

router = APIRouter(prefix="/api/uploads", tags=["uploads"])


@router.post("/screenshot", response_model=ScreenshotUploadOut)
async def upload_payment_screenshot(
	payload: ScreenshotUploadIn,
	current_user: CurrentUser = Depends(get_current_user),
	storage_factory: StorageFactory = Depends(get_storage_factory),
) -> ScreenshotUploadOut:
	try:
		screenshot = decode_base64_image(payload.file, payload.content_type)
		url = await upload_screenshot(
			storage_factory,
			owner_id=current_user.id,
			screenshot=screenshot,
			max_bytes=get_settings().max_screenshot_bytes,
		)
	except RegistrationServiceError as exc:
		raise HTTPException(status_code=exc.status_code, detail=exc.message)
	return ScreenshotUploadOut(download_url=url)
