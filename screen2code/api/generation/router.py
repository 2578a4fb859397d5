from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile
from pydantic import BaseModel, Field
from sse_starlette.sse import EventSourceResponse

from screen2code.agents.generation import GenerationStatus, stream_generation_progress
from screen2code.api import ApiModelRegistry
from screen2code.api.dependencies import get_session
from screen2code.core.exceptions import ConfigurationError, Screen2CodeError
from screen2code.core.models import ImageInput, NormalizedCode
from screen2code.core.types import CodeFormat, DeviceType
from screen2code.session import ImageRecord, ImageSession
from screen2code.utils import FancyLogger

LOG = FancyLogger(__name__)

router = APIRouter()


class ImageView(BaseModel):
    id: str
    filename: str
    media_type: str
    description: str
    code: Optional[NormalizedCode] = None
    status: str
    error: Optional[str] = None

    @classmethod
    def from_record(cls, record: ImageRecord) -> "ImageView":
        return cls(
            id=record.id,
            filename=record.filename,
            media_type=record.image.media_type,
            description=record.description,
            code=record.code,
            status=record.status.to_string(),
            error=record.error,
        )


class DescriptionBody(BaseModel):
    description: str


class CodeBody(BaseModel):
    code: str
    code_format: CodeFormat = CodeFormat.REACT_MUI


class GenerateBody(BaseModel):
    code_format: CodeFormat = CodeFormat.REACT_MUI
    device_type: DeviceType = DeviceType.DESKTOP
    user_prompt: str = ""


class GenerateAllBody(GenerateBody):
    concurrency: int = Field(default=1, ge=1, le=8)


@ApiModelRegistry.register
class ServerSentGenerationEvent(BaseModel):
    event: str  # GenerationStatus name
    data: str  # JSON of StreamingGenerationResult or GenerationProgress


@router.post("/images")
async def upload_images(
    files: List[UploadFile] = File(...),
    describe: bool = True,
    session: ImageSession = Depends(get_session),
) -> List[ImageView]:
    """Upload screenshots; each is described unless ``describe=false``.

    A failed description is recorded on its image and does not fail the upload.
    """
    for upload in files:
        if not (upload.content_type or "").startswith("image/"):
            raise ConfigurationError(f"{upload.filename} is not an image ({upload.content_type})")

    records = []
    for upload in files:
        image = ImageInput(
            data=await upload.read(),
            media_type=upload.content_type,
            filename=upload.filename,
        )
        records.append(session.add(image, upload.filename))

    if describe:
        for record in records:
            try:
                await session.describe(record.id)
            except Screen2CodeError as e:
                LOG.warning(f"Could not describe {record.filename}: {e}")

    return [ImageView.from_record(r) for r in records]


@router.get("/images")
async def list_images(session: ImageSession = Depends(get_session)) -> List[ImageView]:
    return [ImageView.from_record(r) for r in session.list()]


@router.delete("/images/{image_id}")
async def delete_image(image_id: str, session: ImageSession = Depends(get_session)):
    session.remove(image_id)
    return {"status": "deleted", "id": image_id}


@router.put("/images/{image_id}/description")
async def update_description(
    image_id: str,
    body: DescriptionBody,
    session: ImageSession = Depends(get_session),
) -> ImageView:
    return ImageView.from_record(session.set_description(image_id, body.description))


@router.put("/images/{image_id}/code")
async def update_code(
    image_id: str,
    body: CodeBody,
    session: ImageSession = Depends(get_session),
) -> ImageView:
    return ImageView.from_record(session.set_code(image_id, body.code, body.code_format))


@router.post("/images/generate-all")
async def generate_all(
    body: GenerateAllBody,
    session: ImageSession = Depends(get_session),
):
    """
    Generate code for every uploaded image, streaming progress with server-sent events (SSE)
    """
    progress_stream = session.generate_all(
        code_format=body.code_format,
        device_type=body.device_type,
        user_prompt=body.user_prompt,
        concurrency=body.concurrency,
    )

    async def event_generator():
        async for progress in progress_stream:
            yield ServerSentGenerationEvent(
                event=progress.status.to_string(),
                data=progress.model_dump_json(),
            ).model_dump()

    return EventSourceResponse(event_generator())


@router.post("/images/{image_id}/description")
async def describe_image(image_id: str, session: ImageSession = Depends(get_session)) -> ImageView:
    return ImageView.from_record(await session.describe(image_id))


@router.post("/images/{image_id}/code")
async def generate_image_code(
    image_id: str,
    body: GenerateBody,
    session: ImageSession = Depends(get_session),
) -> ImageView:
    record = await session.generate(
        image_id,
        code_format=body.code_format,
        device_type=body.device_type,
        user_prompt=body.user_prompt,
    )
    return ImageView.from_record(record)


@router.get("/images/{image_id}/code/stream")
async def stream_image_code(
    image_id: str,
    code_format: CodeFormat = CodeFormat.REACT_MUI,
    device_type: DeviceType = DeviceType.DESKTOP,
    user_prompt: str = "",
    session: ImageSession = Depends(get_session),
):
    """
    Streaming code generation endpoint that uses server-sent events (SSE)
    """
    record = session.get(image_id)

    async def event_generator():
        async for result in stream_generation_progress(
            ui_description=record.description or None,
            image=record.image,
            user_prompt=user_prompt,
            device_type=device_type,
            code_format=code_format,
            llm_config=session.llm_config,
            preview_config=session.preview_config,
            invoker=session.invoker,
        ):
            if result.status == GenerationStatus.COMPLETE:
                record.description = result.ui_description
                record.code = result.code
                record.status = GenerationStatus.COMPLETE
                record.error = None
            elif result.status == GenerationStatus.ERROR:
                record.status = GenerationStatus.ERROR
                record.error = result.error_message
                if result.code is not None:
                    record.code = result.code

            yield ServerSentGenerationEvent(
                event=result.status.to_string(),
                data=result.model_dump_json(),
            ).model_dump()

    return EventSourceResponse(event_generator())
