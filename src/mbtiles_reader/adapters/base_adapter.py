from abc import ABC, abstractmethod


class BaseAdapter(ABC):
    """Base adapter class for file backed tile containers"""

    def __init__(self, file_path: str, name: str):
        self.file_path = file_path
        self.name = name

    @abstractmethod
    def close(self) -> None:
        """Release the underlying store"""
        pass

    def get_name(self) -> str:
        """Get tileset identifier"""
        return self.name

    def get_path(self) -> str:
        """Get container file path"""
        return self.file_path

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False
