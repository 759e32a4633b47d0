from .json_file import JsonFileDatasets
from .base import ALL_RECORDS, DatasetProvider

__all__ = ["ALL_RECORDS", "DatasetProvider", "JsonFileDatasets"]
