"""Output sinks and image handling.

The PDF renderer lives in blockflow.render.pdf, imported on its own since it
depends on the composer.
"""

from blockflow.render.image import Graphic, load_image_from_bytes
from blockflow.render.sink import OutputSink, Placement, RecordingSink, TextStyle

__all__ = [
    "Graphic",
    "OutputSink",
    "Placement",
    "RecordingSink",
    "TextStyle",
    "load_image_from_bytes",
]
