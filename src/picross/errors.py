"""Exception taxonomy raised by the picross solver."""


class PicrossError(Exception):
    """Base class for every recoverable solver failure."""


class ConfigError(PicrossError):
    """Bad construction input: zero-length line, empty clue list, invalid clue."""


class ContradictionError(PicrossError):
    """An incoming hint disagrees with a cell the line has already decided."""


class UnsolvableError(PicrossError):
    """No filling of a line honors its clue under the current hint."""


class DubiousError(PicrossError):
    """A full round made no progress while cells are still undecided."""
