# portfolio/routes/upload.py
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from portfolio.config import UPLOAD_REQUIRE_AUTH
from portfolio.deps import require_admin
from portfolio.services import cloudinary_client

router = APIRouter(
    prefix="/upload",
    tags=["Upload"],
    dependencies=[Depends(require_admin)] if UPLOAD_REQUIRE_AUTH else [],
)


@router.post("")
async def upload_file(file: Optional[UploadFile] = File(None, description="Image to relay to the asset host")):
    """
    Relay an image to Cloudinary and return its public URL.
    The bytes are held in memory for the duration of the request only.
    """
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded.")
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="No file uploaded.")

    try:
        secure_url = await cloudinary_client.upload_image(data, file.filename, file.content_type)
    except cloudinary_client.UploadNotConfigured:
        raise HTTPException(status_code=503, detail="Image uploads are not configured.")
    except cloudinary_client.UploadFailed as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"secure_url": secure_url}
