from typing import TYPE_CHECKING

from assetver.converter.exceptions import VersionParseError
from assetver.converter.version import convert_version
from assetver.converter.version_parser import DEFAULT_BRANCHES, normalize, normalize_branch

if TYPE_CHECKING:
    from assetver.assets.asset_type import AssetType

# Numeric branches normalize to this upper-bound form and are not usable as branch names.
_NUMERIC_BRANCH_MARKER = ".9999999-dev"


def validate_branch(branch: str) -> str | None:
    """Return the normalized branch, or None when the branch is numeric (``1.x``, ``2.0.*``)."""
    normalized = normalize_branch(branch)
    if _NUMERIC_BRANCH_MARKER in normalized:
        return None
    return normalized


def validate_tag(tag: str, asset_type: "AssetType | None" = None) -> str | None:
    """Return the normalized tag, or None when the tag is not a version.

    The tag is converted from the asset's dialect first, so ``1.0.0-rc1``
    validates as ``1.0.0.0-RC1``. ``master``, ``trunk`` and ``default`` are
    branches, never tags.

    Args:
        tag: The candidate tag.
        asset_type: The asset type whose version dialect the tag is written in.
            Every supported asset type shares the npm/bower dialect.
    """
    if tag in DEFAULT_BRANCHES:
        return None

    converter = asset_type.convert_version if asset_type is not None else convert_version
    try:
        return normalize(converter(tag))
    except VersionParseError:
        return None
