class AssetverError(Exception):
    """Base exception for all assetver errors."""

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)


class VersionParseError(AssetverError):
    """Raised when a version cannot be normalized into the target grammar."""


class ConstraintParseError(AssetverError):
    """Raised when a translated constraint string cannot be parsed."""


class AssetTypeError(AssetverError):
    """Raised for an unknown asset type name."""


class ManifestError(AssetverError):
    """Raised when an asset manifest (package.json, bower.json) cannot be read."""
