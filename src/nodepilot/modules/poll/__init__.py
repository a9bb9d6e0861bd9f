from .retry import RetryPolicy, RetryPoller

__all__ = ["RetryPolicy", "RetryPoller"]
