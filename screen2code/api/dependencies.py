from functools import lru_cache
from typing import Optional

from fastapi import Depends

from screen2code.configs import AppConfig
from screen2code.publish import ProjectWriter
from screen2code.session import ImageSession

_session: Optional[ImageSession] = None


@lru_cache
def get_app_config() -> AppConfig:
    return AppConfig()


async def get_session(config: AppConfig = Depends(get_app_config)) -> ImageSession:
    global _session
    if _session is None:
        _session = ImageSession(llm_config=config.llm, preview_config=config.preview)
    return _session


async def get_project_writer(config: AppConfig = Depends(get_app_config)) -> ProjectWriter:
    return ProjectWriter(config.publish)
