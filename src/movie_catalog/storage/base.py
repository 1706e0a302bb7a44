from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import BinaryIO


class BaseStorage(ABC):
    """
    Abstract base class for asset storage.

    Assets are addressed by a bare filename; the storage decides where the
    bytes physically live.
    """

    @abstractmethod
    def file_exists(self, filename: str) -> bool:
        """
        Check if a file exists.

        Args:
            filename (str): The name of the file.

        Returns:
            bool: True if the file exists, False otherwise.
        """

    @abstractmethod
    def available_name(self, filename: str) -> str:
        """Return filename, or a numbered variant of it when filename is taken."""

    @abstractmethod
    def open_write(self, filename: str) -> AbstractContextManager[BinaryIO]:
        """Open a scoped binary write target for a file.

        The bytes are durable once the context manager exits without error.
        If the block raises, an existing file of the same name is untouched.

        Args:
            filename (str): The name of the file to write.

        Raises:
            RuntimeError: If the write target cannot be opened.
        """

    @abstractmethod
    def delete(self, filename: str) -> None:
        """Remove a file, ignoring files that do not exist."""

    @abstractmethod
    def path_for(self, filename: str) -> str:
        """Constructs the absolute filename/path.

        Args:
            filename (str): The name of the file.

        Returns:
            str: The absolute filename/path.
        """
