"""
User-facing compositing API.

- :py:mod:`photobooth.api.pipeline`: single-image filter, frame and overlays
- :py:mod:`photobooth.api.collage`: grid collage compositor
- :py:mod:`photobooth.api.gif`: animated GIF assembly
- :py:mod:`photobooth.api.session`: in-memory gallery, selection and overlay
  editing helpers
- :py:mod:`photobooth.api.models`: overlay, layout and option value types
- :py:mod:`photobooth.api.pil_io`: image source decoding and data URI encoding
"""
