"""
Error translation decorators for Roster.

Service methods talk to the document store and the notification gateway.
Failures from those collaborators leave the service layer as InternalError
so callers only ever see RosterError.
"""

import functools
import logging
from typing import Any, Callable

from ..errors import InternalError
from ..notifications.base import NotificationError
from ..store import StoreError

logger = logging.getLogger(__name__)


def internal_errors(func: Callable) -> Callable:
    """
    Decorator translating store and notification failures into InternalError.

    Usage:
        ```python
        class AccountManager:
            @internal_errors
            async def get(self, account_id: str) -> Optional[Account]:
                doc = await self.store.get("accounts", account_id)
                ...
        ```
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except (StoreError, NotificationError) as e:
            logger.error("%s failed: %s", func.__qualname__, e)
            raise InternalError(str(e)) from e

    return wrapper
