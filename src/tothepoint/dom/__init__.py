"""Document accessor capability and its adapters."""

from tothepoint.dom.accessor import DocumentAccessor
from tothepoint.dom.soup import SoupAccessor

__all__ = ["DocumentAccessor", "SoupAccessor"]
