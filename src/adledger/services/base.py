"""BaseService — abstract foundation for ledger services.

Every service receives a :class:`Ledger` at construction time. The Ledger
provides locked, transactional access to the ad record store.
Services own their transaction boundaries via ``self._ledger.transaction()``.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, ParamSpec

from sqlalchemy.exc import SQLAlchemyError

from adledger.services.errors import ErrorCode
from adledger.services.result import ServiceResult

if TYPE_CHECKING:
    from adledger.infrastructure.ledger import Ledger

logger = logging.getLogger(__name__)

_P = ParamSpec("_P")


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class AdService(BaseService):
            def bid_on_ad(self, ad_id: str, ...) -> ServiceResult:
                with self._ledger.transaction(ad_id) as txn:
                    ...
    """

    def __init__(self, ledger: Ledger) -> None:
        self._ledger = ledger

    def _reject(self, op: str, code: ErrorCode, message: str, **detail: object) -> ServiceResult:
        """Build a failure result and log the rejection."""
        logger.info("%s rejected: %s (%s)", op, code, message)
        return ServiceResult.failure(op, str(code), message, detail=dict(detail))


def store_guarded(func: Callable[_P, ServiceResult]) -> Callable[_P, ServiceResult]:
    """Decorator: convert storage faults into a ``STORE_ERROR`` result.

    The wrapped method's name is used as the result ``op``. The open
    transaction has already rolled back by the time the error is caught.
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> ServiceResult:
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as exc:
            logger.exception("Storage failure in %s", func.__name__)
            return ServiceResult.failure(
                func.__name__,
                str(ErrorCode.STORE_ERROR),
                f"Storage failure: {exc.__class__.__name__}",
            )

    return wrapper
