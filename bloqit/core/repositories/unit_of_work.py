from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager


class UnitOfWork(ABC):
    """
    Transaction boundary shared by the repositories of one request.
    """

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """
        Commit every write made inside the block, or none of them.

        Storage failures inside the block are raised as UnavailableError.
        """
        raise NotImplementedError
