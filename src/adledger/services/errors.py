"""Error codes carried in ``ServiceError.code``."""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    INVALID_PARAMETERS = "INVALID_PARAMETERS"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    INVALID_STATUS = "INVALID_STATUS"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    AD_NOT_OPEN = "AD_NOT_OPEN"
    SELF_BID = "SELF_BID"
    DUPLICATE_BID = "DUPLICATE_BID"
    STORE_ERROR = "STORE_ERROR"
