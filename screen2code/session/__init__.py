from .image_session import GenerationProgress, ImageRecord, ImageSession

__all__ = ["GenerationProgress", "ImageRecord", "ImageSession"]
