from ._serialization import diagnostic_rows, format_text
from .json_loader import JsonReportLoader
from .text_loader import TextReportLoader
from .yaml_loader import YamlReportLoader

__all__ = [
    "JsonReportLoader",
    "TextReportLoader",
    "YamlReportLoader",
    "diagnostic_rows",
    "format_text",
]
