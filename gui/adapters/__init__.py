"""GUI adapter layer.

This package provides thin Qt-shaped adapters over engine components.

Notes
-----
Adapters exist to:
- keep GUI pages free of the worker's transport,
- deliver worker events on the UI thread via queued signals,
- translate engine domain errors into user-visible messages.
"""
