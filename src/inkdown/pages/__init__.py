"""NiceGUI pages for Inkdown.

Import this module to register all page routes with NiceGUI.
"""

from inkdown.pages import editor

__all__ = ["editor"]

# Touch modules to prevent linter from removing "unused" imports.
# These imports register @ui.page decorators as a side effect.
_PAGES = (editor,)
