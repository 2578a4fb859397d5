"""In-memory list of uploaded screenshots and what was generated for them."""

import asyncio
import uuid
from typing import AsyncGenerator, Dict, List, Optional

from pydantic import BaseModel, Field

from screen2code.agents.generation import GenerationStatus, generate_code
from screen2code.configs.config import LLMConfig, PreviewConfig
from screen2code.core.exceptions import (
    ConfigurationError,
    ImageNotFoundError,
    RefinementExhaustedError,
    Screen2CodeError,
)
from screen2code.core.models import ImageInput, NormalizedCode, coerce_code_format
from screen2code.core.types import CodeFormat, DeviceType
from screen2code.llm import Invoker, invoke
from screen2code.normalizer import normalize
from screen2code.prompts import build_description_prompt
from screen2code.utils import FancyLogger

LOG = FancyLogger(__name__)


class ImageRecord(BaseModel):
    id: str
    filename: str
    image: ImageInput = Field(exclude=True)
    description: str = ""
    code: Optional[NormalizedCode] = None
    status: GenerationStatus = GenerationStatus.UNSPECIFIED
    error: Optional[str] = None


class GenerationProgress(BaseModel):
    """One step of a generate-all run"""

    image_id: str
    status: GenerationStatus
    completed: int
    total: int
    error: Optional[str] = None

    @property
    def fraction(self) -> float:
        return self.completed / self.total if self.total else 1.0


class ImageSession:
    """Uploaded images keyed by id, in upload order.

    Every operation on one image records its outcome on that image's record;
    a failure never touches other records.
    """

    def __init__(
        self,
        llm_config: Optional[LLMConfig] = None,
        preview_config: Optional[PreviewConfig] = None,
        invoker: Optional[Invoker] = None,
    ):
        self.llm_config = llm_config or LLMConfig()
        self.preview_config = preview_config or PreviewConfig()
        self.invoker: Invoker = invoker or invoke
        self._records: Dict[str, ImageRecord] = {}

    def add(self, image: ImageInput, filename: Optional[str] = None) -> ImageRecord:
        record = ImageRecord(
            id=uuid.uuid4().hex,
            filename=filename or image.filename or "image",
            image=image,
        )
        self._records[record.id] = record
        LOG.debug(f"Added image {record.id} ({record.filename})", extra={"image_id": record.id})
        return record

    def get(self, image_id: str) -> ImageRecord:
        try:
            return self._records[image_id]
        except KeyError:
            raise ImageNotFoundError(image_id) from None

    def list(self) -> List[ImageRecord]:
        return list(self._records.values())

    def remove(self, image_id: str) -> None:
        self.get(image_id)
        del self._records[image_id]

    def set_description(self, image_id: str, description: str) -> ImageRecord:
        record = self.get(image_id)
        record.description = description
        return record

    def set_code(self, image_id: str, code: str, code_format) -> ImageRecord:
        """Store hand-edited code; it is normalized like model output."""
        record = self.get(image_id)
        record.code = normalize(code, code_format)
        return record

    async def describe(self, image_id: str) -> ImageRecord:
        """
        Generate the UI description of one image.

        Raises:
            ImageNotFoundError: unknown id
            ConfigurationError, ModelInvocationError: recorded on the image, then re-raised
        """
        record = self.get(image_id)
        record.status = GenerationStatus.DESCRIBING
        record.error = None
        try:
            description = await self.invoker(
                build_description_prompt(),
                record.image,
                config=self.llm_config,
            )
        except Screen2CodeError as e:
            record.status = GenerationStatus.ERROR
            record.error = str(e)
            raise

        record.description = description.strip()
        record.status = GenerationStatus.UNSPECIFIED
        return record

    async def generate(
        self,
        image_id: str,
        code_format=CodeFormat.REACT_MUI,
        device_type=DeviceType.DESKTOP,
        user_prompt: str = "",
    ) -> ImageRecord:
        """
        Generate code for one image, describing it first if needed.

        Raises:
            ImageNotFoundError: unknown id
            Screen2CodeError: recorded on the image, then re-raised
        """
        record = self.get(image_id)
        record.status = GenerationStatus.GENERATING
        record.error = None
        try:
            result = await generate_code(
                ui_description=record.description or None,
                image=record.image,
                user_prompt=user_prompt,
                device_type=device_type,
                code_format=code_format,
                llm_config=self.llm_config,
                preview_config=self.preview_config,
                invoker=self.invoker,
                with_preview=False,
            )
        except RefinementExhaustedError as e:
            record.code = e.code
            record.status = GenerationStatus.ERROR
            record.error = str(e)
            raise
        except Exception as e:
            record.status = GenerationStatus.ERROR
            record.error = str(e)
            raise

        record.description = result.ui_description
        record.code = result.code
        record.status = GenerationStatus.COMPLETE
        return record

    async def generate_all(
        self,
        code_format=CodeFormat.REACT_MUI,
        device_type=DeviceType.DESKTOP,
        user_prompt: str = "",
        concurrency: int = 1,
    ) -> AsyncGenerator[GenerationProgress, None]:
        """
        Generate code for every image, yielding progress as each finishes.

        Images run one at a time unless ``concurrency`` > 1. ``completed``
        only grows. A failed image is reported with its error and the run
        continues with the others.

        Raises:
            ConfigurationError: unknown code format or concurrency < 1, before any work starts
        """
        coerce_code_format(code_format)
        if concurrency < 1:
            raise ConfigurationError("concurrency must be at least 1")

        image_ids = [record.id for record in self.list()]
        total = len(image_ids)
        semaphore = asyncio.Semaphore(concurrency)

        async def run_one(image_id: str) -> GenerationProgress:
            async with semaphore:
                try:
                    await self.generate(image_id, code_format, device_type, user_prompt)
                    return GenerationProgress(
                        image_id=image_id, status=GenerationStatus.COMPLETE, completed=0, total=total
                    )
                except Exception as e:
                    LOG.warning(f"Generation failed for image {image_id}: {e}", extra={"image_id": image_id})
                    return GenerationProgress(
                        image_id=image_id, status=GenerationStatus.ERROR, completed=0, total=total, error=str(e)
                    )

        completed = 0
        if concurrency == 1:
            for image_id in image_ids:
                progress = await run_one(image_id)
                completed += 1
                yield progress.model_copy(update={"completed": completed})
            return

        tasks = [asyncio.create_task(run_one(image_id)) for image_id in image_ids]
        try:
            for next_done in asyncio.as_completed(tasks):
                progress = await next_done
                completed += 1
                yield progress.model_copy(update={"completed": completed})
        finally:
            for task in tasks:
                task.cancel()
