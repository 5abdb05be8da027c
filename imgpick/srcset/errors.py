from __future__ import annotations


class SrcsetError(ValueError):
    """Raised by strict parsing when a candidate list breaks a srcset rule."""


class MalformedCountError(SrcsetError):
    pass


class FallbackConflictError(SrcsetError):
    pass


class NotANumberError(SrcsetError):
    pass


class InvalidWidthError(SrcsetError):
    pass


class InvalidDensityError(SrcsetError):
    pass


class UnsupportedDescriptorError(SrcsetError):
    pass


class DuplicateDescriptorError(SrcsetError):
    pass
