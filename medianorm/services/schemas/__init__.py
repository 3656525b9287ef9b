from medianorm.services.schemas.media_info import (
    NormalizedMediaInfoRead,
)

__all__ = [
    "NormalizedMediaInfoRead",
]
