from .scroll_search import ScrollSearchOrchestrator

__all__ = ["ScrollSearchOrchestrator"]
