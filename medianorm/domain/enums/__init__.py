from medianorm.domain.enums.dynamic_range import VideoDynamicRange
from medianorm.domain.enums.stream_kind import StreamKind
__all__ = [
    "VideoDynamicRange",
    "StreamKind",
]
