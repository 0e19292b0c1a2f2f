from .archive import ArchiveWriter, PrintPackageBuilder, get_package_builder
from .models import ProgressEvent, ProgressStage, ResizedImage, SourceImage

__all__ = [
    "ArchiveWriter",
    "PrintPackageBuilder",
    "get_package_builder",
    "ProgressEvent",
    "ProgressStage",
    "ResizedImage",
    "SourceImage",
]
