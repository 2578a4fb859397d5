from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from screen2code.api.dependencies import get_app_config, get_project_writer
from screen2code.configs import AppConfig
from screen2code.core.exceptions import PreviewUnavailableError
from screen2code.core.models import NormalizedCode
from screen2code.core.types import CodeFormat, DeviceType
from screen2code.normalizer import normalize
from screen2code.preview import PreviewAdapterFactory, PreviewResource, SandpackPreviewAdapter
from screen2code.publish import ProjectWriter, PublishResult
from screen2code.utils import FancyLogger

LOG = FancyLogger(__name__)

router = APIRouter()


class PreviewBody(BaseModel):
    code: str
    code_format: CodeFormat = CodeFormat.REACT_MUI
    register_sandbox: bool = Field(default=False, description="Upload react-mui bundles to CodeSandbox")


class PreviewResponse(BaseModel):
    code: NormalizedCode
    preview: PreviewResource
    embed_url: Optional[str] = None


class PublishBody(BaseModel):
    code: str
    code_format: CodeFormat = CodeFormat.REACT_MUI
    device_type: DeviceType = DeviceType.DESKTOP
    metadata: dict = Field(default_factory=dict)


@router.post("/preview")
async def preview_code(
    body: PreviewBody,
    config: AppConfig = Depends(get_app_config),
) -> PreviewResponse:
    """Normalize code and build a fresh preview resource for it."""
    code = normalize(body.code, body.code_format)
    adapter = PreviewAdapterFactory.create(code.code_format, config.preview)
    resource = adapter.build(code)

    embed_url = None
    if body.register_sandbox:
        if not isinstance(adapter, SandpackPreviewAdapter):
            raise PreviewUnavailableError(f"{code.code_format} previews are already URLs")
        embed_url = await adapter.register(resource)

    return PreviewResponse(code=code, preview=resource, embed_url=embed_url)


@router.post("/publish")
async def publish_code(
    body: PublishBody,
    writer: ProjectWriter = Depends(get_project_writer),
) -> PublishResult:
    code = normalize(body.code, body.code_format)
    if code.is_fallback:
        LOG.warning(f"Publishing placeholder component: {code.fallback_reason}")
    return await writer.publish(code, body.device_type, body.metadata)
