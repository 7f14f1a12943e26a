from .client import ReadwiseAPIClient
from .models import ReadwiseBookResult, ReadwiseExportHighlight, ReadwiseExportResponse, ReadwiseTag

__all__ = [
    "ReadwiseAPIClient",
    "ReadwiseBookResult",
    "ReadwiseExportHighlight",
    "ReadwiseExportResponse",
    "ReadwiseTag",
]
