"""rastertrace - Trace binary raster masks into polygon rings.

rastertrace walks a binary mask with marching squares, links the emitted
boundary segments into closed rings as soon as each ring closes, and can
simplify the resulting rings while keeping junction points shared by more
than two rings.

Example:
    $ rastertrace mask.txt

This will create mask.contours.json with one ring per boundary of the mask.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
