class CatalogError(Exception):
    """Base class for Tycho-2 catalog failures."""


class FormatError(CatalogError, ValueError):
    """A text input (region index, HD cross-reference, identifier) is malformed."""


class CatalogIOError(CatalogError, OSError):
    """The binary catalog cannot be opened, seeked or fully read."""


class OutOfRangeError(CatalogError, IndexError):
    """A tyc1 group number falls outside the region index."""
