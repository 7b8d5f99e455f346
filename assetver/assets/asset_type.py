"""Asset types: the source ecosystems (npm, bower) whose manifests get translated.

Each type decides the vendor namespace its packages land in (``npm-asset/...``),
the package type of synthesized packages, and the few dependency rewrites
specific to its manifest format.
"""

import re
from enum import StrEnum, unique

from pydantic import BaseModel, ConfigDict

from assetver.converter.exceptions import AssetTypeError
from assetver.converter.range import convert_range
from assetver.converter.version import convert_version

_URL_PATTERN = re.compile(r"(://)|@")
_GITHUB_SHORTHAND_PATTERN = re.compile(r"^[A-Za-z0-9\-_]+/[A-Za-z0-9\-_.]+")


@unique
class AssetTypeName(StrEnum):
    NPM = "npm"
    BOWER = "bower"


class AssetType(BaseModel):
    """Naming and version-conversion rules for one source ecosystem."""

    model_config = ConfigDict(frozen=True)

    name: AssetTypeName
    filename: str

    @property
    def vendor_name(self) -> str:
        return f"{self.name}-asset"

    @property
    def composer_type(self) -> str:
        return f"{self.name}-asset-library"

    @property
    def vcs_repository_type(self) -> str:
        return f"{self.name}-vcs"

    def format_composer_name(self, name: str) -> str:
        """Prefix a dependency name with the vendor namespace (``jquery`` -> ``npm-asset/jquery``).

        URLs and names already in the namespace are returned unchanged.
        """
        prefix = f"{self.vendor_name}/"
        if _URL_PATTERN.search(name) or name.startswith(prefix):
            return name
        return prefix + name

    def convert_version(self, version: str | None) -> str:
        return convert_version(version)

    def convert_range(self, range_expr: str) -> str:
        return convert_range(range_expr)

    def convert_name(self, name: str) -> str:
        """Turn a package name of the source registry into a valid name in the vendor namespace."""
        return name

    def revert_name(self, name: str) -> str:
        """Undo :meth:`convert_name`."""
        return name

    def source_name(self, composer_name: str) -> str:
        """Recover the registry name from a package name: ``npm-asset/scope--pkg`` -> ``@scope/pkg``."""
        return self.revert_name(composer_name.removeprefix(f"{self.vendor_name}/"))

    def prepare_dependency(self, name: str, version: str) -> tuple[str, str]:
        """Rewrite a raw manifest entry before the specifier checks run."""
        return self.convert_name(name), version


class NpmAssetType(AssetType):
    name: AssetTypeName = AssetTypeName.NPM
    filename: str = "package.json"

    def convert_name(self, name: str) -> str:
        return convert_npm_name(name)

    def revert_name(self, name: str) -> str:
        return revert_npm_name(name)


class BowerAssetType(AssetType):
    name: AssetTypeName = AssetTypeName.BOWER
    filename: str = "bower.json"

    def prepare_dependency(self, name: str, version: str) -> tuple[str, str]:
        return self.convert_name(name), expand_github_shorthand(version)


def create_asset_type(name: str) -> AssetType:
    """Create the asset type registered under a name.

    Raises:
        AssetTypeError: If the name is not a supported asset type.
    """
    try:
        asset_type_name = AssetTypeName(name)
    except ValueError as exc:
        accepted = '", "'.join(AssetTypeName)
        msg = f'The asset type "{name}" does not exist, only "{accepted}" are accepted'
        raise AssetTypeError(msg) from exc

    match asset_type_name:
        case AssetTypeName.NPM:
            return NpmAssetType()
        case AssetTypeName.BOWER:
            return BowerAssetType()


def convert_npm_name(name: str) -> str:
    """Flatten a scoped npm name: ``@angular/core`` -> ``angular--core``."""
    if name.startswith("@") and "/" in name:
        return name.replace("/", "--").lstrip("@")
    return name


def revert_npm_name(name: str) -> str:
    """Restore a scoped npm name: ``angular--core`` -> ``@angular/core``."""
    if "--" in name:
        return "@" + name.replace("--", "/")
    return name


def expand_github_shorthand(version: str) -> str:
    """Expand bower's ``owner/repo#ref`` into ``git://github.com/owner/repo.git#ref``."""
    if _GITHUB_SHORTHAND_PATTERN.match(version) is None:
        return version
    repository, hash_sign, ref = version.partition("#")
    return f"git://github.com/{repository}.git{hash_sign}{ref}"
