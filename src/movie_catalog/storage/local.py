import os
import tempfile
from contextlib import contextmanager
from typing import BinaryIO, Generator

from .base import BaseStorage


class LocalStorage(BaseStorage):
    """A client for storing assets on the local filesystem."""

    def __init__(self, base_dir: str):
        self.base_dir = base_dir

    def path_for(self, filename: str) -> str:
        """Constructs the absolute filename in local storage.

        Args:
            filename (str): The name of the file.

        Return:
            str: The absolute filename in local storage.
        """
        return os.path.abspath(os.path.join(self.base_dir, filename))

    def file_exists(self, filename: str) -> bool:
        """
        Check if a file exists in local storage

        Args:
            filename (str): The name of the file.

        Returns:
            bool: True if the file exists, False otherwise.
        """
        return os.path.isfile(self.path_for(filename))

    def available_name(self, filename: str) -> str:
        stem, ext = os.path.splitext(filename)
        candidate = filename
        n = 1
        while self.file_exists(candidate):
            candidate = f"{stem}-{n}{ext}"
            n += 1
        return candidate

    @contextmanager
    def open_write(self, filename: str) -> Generator[BinaryIO, None, None]:
        """Open a file under the storage directory for binary writing.

        Bytes go to a hidden temporary file in the same directory, which is
        flushed, fsync'ed and then renamed over filename. If the block raises,
        the temporary file is removed and filename is left as it was.

        Args:
            filename (str): The name of the file to write.

        Raises:
            RuntimeError: If the storage directory or the file cannot be created.
        """
        try:
            os.makedirs(self.base_dir, exist_ok=True)
            file = tempfile.NamedTemporaryFile(
                dir=self.base_dir, prefix=f".{filename}.", suffix=".part", delete=False
            )
        except OSError as e:
            raise RuntimeError(f"Error opening file in local storage: {e}") from e

        committed = False
        try:
            with file:
                yield file
                file.flush()
                os.fsync(file.fileno())
            os.replace(file.name, self.path_for(filename))
            committed = True
        finally:
            if not committed and os.path.exists(file.name):
                os.remove(file.name)

    def delete(self, filename: str) -> None:
        path = self.path_for(filename)
        if os.path.exists(path):
            os.remove(path)
