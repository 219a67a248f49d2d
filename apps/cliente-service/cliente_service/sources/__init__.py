"""Cliente lookup sources."""

from .base import LookupSource
from .sql_api import SqlApiSource
from .csv_file import CsvFileSource

__all__ = [
    "LookupSource",
    "SqlApiSource",
    "CsvFileSource",
]
