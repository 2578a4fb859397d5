from .project_writer import ProjectWriter, PublishResult

__all__ = ["ProjectWriter", "PublishResult"]
