from .image_worker import ImageSignals, ImageWorker

__all__ = [
    "ImageSignals",
    "ImageWorker",
]
