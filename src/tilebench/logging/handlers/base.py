from abc import ABC, abstractmethod


class BaseLogHandler(ABC):
    """Destination for batches of formatted log lines."""

    def close(self) -> None:
        """Release any resources held by the handler."""

    @abstractmethod
    def push(self, buffer: list[str]) -> None:
        """
        Write one flushed batch.

        Args:
            buffer (list[str]): Formatted log lines, oldest first.
        """
        pass
