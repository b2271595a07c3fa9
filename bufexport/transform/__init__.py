"""Transform modules for the buffer exporter."""

from .normalize import compute_channel_bytes, expand_to_rgba, apply_layout, build_rgba_plane

__all__ = [
    'compute_channel_bytes',
    'expand_to_rgba',
    'apply_layout',
    'build_rgba_plane',
]
