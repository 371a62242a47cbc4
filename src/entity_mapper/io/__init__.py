from .definition_loader import (
    load_entities,
    load_entities_from_data,
    load_entities_from_text,
)
from .file_loader import FileLoader

__all__ = [
    "FileLoader",
    "load_entities",
    "load_entities_from_data",
    "load_entities_from_text",
]
