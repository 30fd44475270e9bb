import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from backoffice.cache import QueryCache
from backoffice.client import ApiError
from backoffice.notifications import Notifier

logger = logging.getLogger("backoffice.mutations")


@dataclass
class MutationResult:
    ok: bool
    data: Any = None
    error: Optional[ApiError] = None


@dataclass
class Mutation:
    """
    One write against the API followed by cache invalidation.

    On failure the cache is left as it was and a destructive notification is sent.
    """
    cache: QueryCache
    notifier: Notifier
    invalidates: Iterable[str] = field(default_factory=tuple)
    success_title: str = "Success"
    success_message: str = ""
    failure_title: str = "Error"
    failure_message: str = "Something went wrong, please try again."
    # deleting a record someone else already removed counts as done
    not_found_is_success: bool = False

    def run(self, call: Callable[[], Any]) -> MutationResult:
        try:
            data = call()
        except ApiError as e:
            if not (self.not_found_is_success and e.is_not_found):
                logger.error(f"{self.failure_title}: {str(e)}")
                self.notifier.failure(self.failure_title, self.failure_message)
                return MutationResult(ok=False, error=e)
            logger.info(f"Record was already gone: {str(e)}")
            data = None

        self.cache.invalidate(*self.invalidates)
        self.notifier.success(self.success_title, self.success_message)
        return MutationResult(ok=True, data=data)
