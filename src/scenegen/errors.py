"""Exception types raised by the scene generation pipeline."""


class ScenegenError(Exception):
    """Base class for scenegen errors."""


class ValidationError(ScenegenError, ValueError):
    """The generation request is malformed. Never recovered by fallback."""


class CapabilityError(ScenegenError):
    """The text generation call failed or timed out."""


class EnhancementFailure(ScenegenError):
    """The image prompt enhancement pass produced no usable result."""
