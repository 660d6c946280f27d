# =============================================================================
# Rendering Module
# =============================================================================
# The heart of Navim: web pages rendered as text in the terminal.
#
# The rendering pipeline:
#   1. Parse the page HTML
#   2. Select the main-content subtree (content.py)
#   3. Walk it, formatting headings, lists, tables, quotes and code (text.py)
#   4. Convert a few admitted images to character art (admission.py, images.py)
#   5. Clean up the text for a fixed-width viewport
# =============================================================================

from navim.rendering.engine import RenderEngine, RenderResult

__all__ = ["RenderEngine", "RenderResult"]
