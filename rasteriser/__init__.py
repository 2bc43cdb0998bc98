"""Software triangle rasteriser with perspective projection, near-plane clipping, lighting and bloom."""

__version__ = "0.1.0"

__all__ = ["bloom", "camera", "cli", "geometry", "renderer", "scene"]