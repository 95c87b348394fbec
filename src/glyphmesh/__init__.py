"""glyphmesh - Turn font outlines into GPU-ready text geometry.

glyphmesh flattens glyph outlines into contours, resolves outer shapes,
holes and islands, triangulates them with ear clipping and lays out text
(word wrap, alignment, overflow, kerning) so the result can be uploaded as a
single vertex/index buffer. A parallel pipeline builds textured quads from
BMFont or msdfgen signed-distance-field atlases.

Example:
    $ glyphmesh mesh Roboto-Regular.ttf "Hello World" --font-size 48
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
