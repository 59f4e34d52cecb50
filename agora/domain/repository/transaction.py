"""Transaction boundary interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class TransactionManager(ABC):
    """Groups repository writes into one atomic unit.

    Everything executed inside ``atomic()`` is committed together or not at
    all. Services wrap each check-then-act sequence in it.
    """

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic block.

        Usage:
            async with transaction_manager.atomic():
                ...
        """
        pass
