"""Classification of raw dependency specifiers found in asset manifests.

A manifest maps a dependency name to a "version" that may really be a URL, a
repository alias (``other-name#1.2.0``), a commit SHA, a branch name, or an
ordinary range. :func:`resolve_dependency` runs the checks in order and
returns the possibly renamed dependency, the version to hand to the range
translator, and any side repository the dependency needs to be resolvable.

None of these checks raise: a value that fails tag or branch validation
widens the result instead.
"""

import logging
import re

from pydantic import BaseModel, ConfigDict, Field

from assetver.assets.asset_type import AssetType
from assetver.assets.vcs_hosts import DEFAULT_VCS_HOSTS, VcsHostRegistry
from assetver.converter.validator import validate_branch, validate_tag
from assetver.converter.version import ANY_VERSION

logger = logging.getLogger(__name__)

ARCHIVE_EXTENSIONS: tuple[str, ...] = (
    ".zip",
    ".tar",
    ".tar.gz",
    ".tar.bz2",
    ".tar.Z",
    ".tar.xz",
    ".bz2",
    ".gz",
)

DEFAULT_BRANCH_PREFIX = "dev-default#"
FILE_DIST_TYPE = "file"
PACKAGE_REPOSITORY_TYPE = "package"
# Stands for "no version after the URL".
EMPTY_VERSION_TAIL = "#"
UNKNOWN_FILE_VERSION = "0.0.0.0"

_URL_PATTERN = re.compile(r"(://)|@")
_TRAILING_SHA_PATTERN = re.compile(r"[0-9a-f]{40}$")
_SHORT_SHA_PATTERN = re.compile(r"^[0-9a-f]{4,40}$")
_RANGE_CHARS_PATTERN = re.compile(r"[<>=^~ ]")
_URL_VERSION_PATTERN = re.compile(r"(\d+)(\.\d+)(\.\d+)?(\.\d+)?")
_TAG_NOISE_CHARS = (" ", "<", ">", "=", "^", "~")
# Values a manifest uses to mean "no constraint"; a lone "0" counts as empty.
_EMPTY_VERSIONS: frozenset[str] = frozenset({"", "0"})


class FileDist(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    type: str = FILE_DIST_TYPE


class FilePackageDescriptor(BaseModel):
    """An inline package whose only distribution is a downloadable file."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    version: str
    dist: FileDist


class SideRepository(BaseModel):
    """A repository the resolver must know about for a URL dependency to resolve.

    Either a VCS repository (``type``, ``url``, ``name``) or an inline
    ``package`` repository (``type`` and ``package``).
    """

    model_config = ConfigDict(frozen=True)

    type: str
    url: str | None = None
    name: str | None = None
    package: FilePackageDescriptor | None = None

    def to_config(self) -> dict[str, object]:
        """The repository as a resolver configuration entry, without unset keys."""
        return self.model_dump(exclude_none=True)


class ResolvedSpecifier(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    side_repositories: list[SideRepository] = Field(default_factory=list)


def resolve_dependency(
    asset_type: AssetType,
    name: str,
    raw_version: str,
    package_name: str | None = None,
    vcs_hosts: VcsHostRegistry = DEFAULT_VCS_HOSTS,
) -> ResolvedSpecifier:
    """Classify a dependency and rewrite its name and version.

    Args:
        asset_type: The asset type of the manifest.
        name: The dependency name as written in the manifest.
        raw_version: The dependency value, e.g. ``^1.2.0``, ``#a1b2c3d``,
            ``https://example.com/lib-1.0.0.zip``, ``other-lib#1.0.0``.
        package_name: Full name of the package declaring the dependency, used
            to name synthesized file packages.
        vcs_hosts: Matchers deciding which URLs are VCS repositories.

    Returns:
        The resolved name and version, and zero or one side repository. The
        version is still in the source dialect, ready for range translation.
    """
    name, raw_version = asset_type.prepare_dependency(name, raw_version)
    url_check = check_url_version(asset_type, name, raw_version, package_name=package_name, vcs_hosts=vcs_hosts)
    name, version = check_alias_version(asset_type, url_check.name, url_check.version)
    name, version = convert_dependency_version(asset_type, name, version)
    logger.debug("Resolved dependency '%s': '%s' -> '%s' as '%s'", url_check.name, raw_version, version, name)
    return ResolvedSpecifier(name=name, version=version, side_repositories=url_check.side_repositories)


def check_url_version(
    asset_type: AssetType,
    name: str,
    version: str,
    package_name: str | None = None,
    vcs_hosts: VcsHostRegistry = DEFAULT_VCS_HOSTS,
) -> ResolvedSpecifier:
    """Turn a URL dependency into a side repository.

    A non-archive URL served by a known VCS host becomes a VCS repository and
    keeps the dependency name. Anything else is downloaded as a file: the
    dependency is renamed ``<package>-<name>-file`` and an inline package is
    synthesized for it.
    """
    if _URL_PATTERN.search(version) is None:
        return ResolvedSpecifier(name=name, version=version)

    url, version_tail = _split_url_version(version)
    if not is_url_archive(url) and vcs_hosts.is_known_vcs_host(url):
        logger.debug("Dependency '%s' is served by the VCS repository '%s'", name, url)
        repository = SideRepository(
            type=asset_type.vcs_repository_type,
            url=url,
            name=asset_type.format_composer_name(name),
        )
        return ResolvedSpecifier(name=name, version=version_tail, side_repositories=[repository])

    file_name = _url_file_dependency_name(asset_type, name, package_name)
    logger.debug("Dependency '%s' is downloaded from '%s' as '%s'", name, url, file_name)
    repository = SideRepository(
        type=PACKAGE_REPOSITORY_TYPE,
        package=FilePackageDescriptor(
            name=asset_type.format_composer_name(file_name),
            type=asset_type.composer_type,
            version=_url_file_dependency_version(asset_type, url, version_tail),
            dist=FileDist(url=url),
        ),
    )
    return ResolvedSpecifier(name=file_name, version=version_tail, side_repositories=[repository])


def is_url_archive(url: str) -> bool:
    """Only ``http(s)`` URLs are considered archives."""
    return url.startswith("http") and url.endswith(ARCHIVE_EXTENSIONS)


def check_alias_version(asset_type: AssetType, name: str, version: str) -> tuple[str, str]:
    """Split ``other-name#tag`` into the aliased dependency and its version.

    When the tag is a concrete version, it is appended to the name so several
    pins of the same dependency do not collide: ``lib#0.9.0`` -> ``lib-0.9.0``.
    A trailing 40-character SHA is a commit pin, not an alias.
    """
    position = version.find("#")
    if position <= 0 or _TRAILING_SHA_PATTERN.search(version):
        return name, version

    name, version = version[:position], version[position:]
    tag = version[1:]
    if "*" not in version and validate_tag(tag, asset_type) is not None:
        name += "-" + version.replace("#", "")
    return name, version


def convert_dependency_version(asset_type: AssetType, name: str, version: str) -> tuple[str, str]:
    """Classify what is left of the version as a SHA pin, a branch, or a range.

    ``#a1b2c3d`` -> ``dev-default#a1b2c3d``; ``master`` -> ``dev-master``;
    ``1.x`` -> ``dev-1.x || 1.x``; ranges and tags pass through.
    """
    contains_hash = "#" in version
    version = version.replace("#", "")
    version = ANY_VERSION if version in _EMPTY_VERSIONS else version.strip()
    search_version = version
    for char in _TAG_NOISE_CHARS:
        search_version = search_version.replace(char, "")

    if contains_hash and _SHORT_SHA_PATTERN.match(version):
        return name, DEFAULT_BRANCH_PREFIX + version
    if version != ANY_VERSION and validate_tag(search_version, asset_type) is None and not depends_on_range(version):
        return name, convert_branch_version(asset_type, version)
    return name, version


def depends_on_range(version: str) -> bool:
    return _RANGE_CHARS_PATTERN.search(version.strip()) is not None


def convert_branch_version(asset_type: AssetType, version: str) -> str:
    """Pin a branch, keeping the raw value as an alternative when it is not a usable branch name."""
    branch = "dev-" + asset_type.convert_version(version)
    if validate_branch(version) is None:
        branch += " || " + version
    return branch


def _split_url_version(version: str) -> tuple[str, str]:
    url, hash_sign, tail = version.partition("#")
    if not hash_sign:
        return url, EMPTY_VERSION_TAIL
    return url, hash_sign + tail


def _url_file_dependency_name(asset_type: AssetType, name: str, package_name: str | None) -> str:
    prefix = ""
    if package_name:
        prefix = package_name[len(asset_type.vendor_name) + 1 :] + "-"
    return f"{prefix}{name}-file"


def _url_file_dependency_version(asset_type: AssetType, url: str, version_tail: str) -> str:
    if version_tail != EMPTY_VERSION_TAIL:
        return version_tail[1:]
    version_match = _URL_VERSION_PATTERN.search(url)
    if version_match is not None:
        return asset_type.convert_version(version_match.group(0))
    return UNKNOWN_FILE_VERSION
