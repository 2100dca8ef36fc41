from pathlib import Path

from tilebench.logging.handlers.base import BaseLogHandler


class FileLogHandler(BaseLogHandler):
    """Appends flushed log lines to the ``--log-file`` text file.

    The file is opened per flush rather than held open, so a session that
    dies on a fatal error still leaves every line up to the diagnostic on
    disk.
    """

    def __init__(self, filepath: str | Path, create: bool = False) -> None:
        """
        Args:
            filepath: Destination, must end with ".txt".
            create: Create the file and any missing parent directories.

        Raises:
            ValueError: If ``filepath`` does not end with ".txt".
        """
        self.filepath = Path(filepath)
        if self.filepath.suffix != ".txt":
            raise ValueError(
                f"Invalid filepath; expected a path ending with '.txt' but got {filepath}"
            )

        if create:
            self.filepath.parent.mkdir(parents=True, exist_ok=True)
            self.filepath.touch(exist_ok=True)

    def push(self, buffer: list[str]) -> None:
        with self.filepath.open("a", encoding="utf-8") as file:
            file.write("\n".join(buffer) + "\n")
