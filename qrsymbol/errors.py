class QRError(ValueError):
    pass


class CapacityExceededError(QRError):
    """No symbol type/version/error correction combination fits the payload."""


class CharacterCountOutOfRangeError(QRError):
    pass


class InvalidModeError(QRError):
    pass


class UnsupportedVersionError(QRError):
    pass
