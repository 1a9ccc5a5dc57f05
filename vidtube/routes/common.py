"""
Helpers shared by the route modules
"""
from fastapi import HTTPException, UploadFile
from typing import Dict, Any, Optional

from vidtube.errors import status_code_for
from vidtube.services.media_service import MediaUpload


def unwrap(result: Dict[str, Any]) -> Dict[str, Any]:
    """Return a successful service result or raise the mapped HTTP error"""
    if not result.get("success"):
        raise HTTPException(
            status_code=status_code_for(result.get("error_type")),
            detail=result.get("error")
        )
    return result


async def read_upload(file: Optional[UploadFile]) -> Optional[MediaUpload]:
    """Read a multipart file into memory; None when no file was sent"""
    if file is None or not file.filename:
        return None
    content = await file.read()
    return MediaUpload(content=content, filename=file.filename, content_type=file.content_type)
