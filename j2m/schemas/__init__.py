from j2m.schemas.schemas import (
    ConvertRequest, ConvertResponse, PreviewResponse,
    HealthResponse,
)

__all__ = [
    "ConvertRequest", "ConvertResponse", "PreviewResponse",
    "HealthResponse",
]
