"""Profile image upload and download, stored as ``{user_id}.jpg`` in the bucket."""

from typing import Annotated

from fastapi import APIRouter, File, HTTPException, Response, UploadFile, status
from fastapi.responses import StreamingResponse

from src.events_api.api.dependencies import BlobStoreDep, SettingsDep
from src.events_api.core.storage import BlobStoreError
from src.events_api.schemas.auth import MessageResponse

router = APIRouter(tags=["profile-images"])


def image_key(user_id: int) -> str:
    return f"{user_id}.jpg"


@router.post(
    "/upload-profile-image/{user_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "No image provided"},
        413: {"description": "Image too large"},
        500: {"description": "Failed to upload image"},
    },
)
async def upload_profile_image(
    user_id: int,
    store: BlobStoreDep,
    settings: SettingsDep,
    image: Annotated[UploadFile | None, File(alias="imageFormData")] = None,
) -> MessageResponse:
    if image is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No image provided")

    max_bytes = max(1, settings.max_image_bytes)
    contents = await image.read(max_bytes + 1)
    if not contents:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No image provided")
    if len(contents) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="Image too large",
        )

    try:
        await store.put(image_key(user_id), contents, image.content_type or "image/jpeg")
    except BlobStoreError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload image",
        ) from e
    return MessageResponse(message="Image uploaded successfully")


@router.get(
    "/get-profile-image/{user_id}",
    response_class=StreamingResponse,
    responses={
        200: {"content": {"image/jpeg": {}}, "description": "The image"},
        204: {"description": "No image stored for this user"},
    },
)
async def get_profile_image(user_id: int, store: BlobStoreDep) -> Response:
    try:
        chunks = await store.open(image_key(user_id))
    except BlobStoreError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch image",
        ) from e

    if chunks is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return StreamingResponse(chunks, media_type="image/jpeg")
