from typing import Dict, Type

from pydantic import BaseModel


class ApiModelRegistry:
    """Models that only appear inside streamed events, added to the OpenAPI schema."""

    _models: Dict[str, Type[BaseModel]] = {}

    @classmethod
    def register(cls, model: Type[BaseModel]) -> Type[BaseModel]:
        cls._models[model.__name__] = model
        return model

    @classmethod
    def models(cls) -> Dict[str, Type[BaseModel]]:
        return dict(cls._models)
