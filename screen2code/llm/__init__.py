from .invocation import Invoker, invoke

__all__ = ["Invoker", "invoke"]
