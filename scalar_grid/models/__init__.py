from .encoding import ByteOrder, SampleEncoding, SourceFormat
from .results import NormalizationResult
from .volume import DEFAULT_SCALE, ScalarField, VolumeDescriptor

__all__ = [
    "ByteOrder",
    "SampleEncoding",
    "SourceFormat",
    "NormalizationResult",
    "DEFAULT_SCALE",
    "ScalarField",
    "VolumeDescriptor",
]
