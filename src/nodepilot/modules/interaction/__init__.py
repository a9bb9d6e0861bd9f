from .executor import InteractionExecutor

__all__ = ["InteractionExecutor"]
