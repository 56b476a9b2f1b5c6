from memoboard.client.api import ApiClient, ApiError

__all__ = ["ApiClient", "ApiError"]
