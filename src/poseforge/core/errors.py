"""Exception types shared across PoseForge."""


class PoseForgeError(Exception):
    """Base class for PoseForge errors."""


class JointTableError(PoseForgeError, ValueError):
    """The static joint table is malformed. Fatal at startup."""


class ParameterFileError(PoseForgeError, ValueError):
    """A parameter file or partial parameter set could not be used."""


class UnsupportedFormatError(ParameterFileError):
    """The file extension is not an importable parameter format."""
