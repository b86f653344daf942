from .api import ApiError, NoctoonClient, FETCH_ERRORS

__all__ = ["ApiError", "NoctoonClient", "FETCH_ERRORS"]
