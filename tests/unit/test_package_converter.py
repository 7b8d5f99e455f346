import logging

import pytest

from assetver.assets.asset_type import AssetType, create_asset_type
from assetver.assets.package_converter import (
    convert_authors,
    convert_dependencies,
    convert_dist,
    convert_licenses,
    convert_manifest,
    extra_key_name,
)


@pytest.fixture
def npm() -> AssetType:
    return create_asset_type("npm")


@pytest.fixture
def bower() -> AssetType:
    return create_asset_type("bower")


class TestConvertDependencies:
    """Tests for dependency map conversion."""

    def test_caret_range(self, npm: AssetType):
        conversion = convert_dependencies(npm, {"lib1": "^1.2.0"})
        assert conversion.require == {"npm-asset/lib1": ">=1.2.0,<2.0.0"}
        assert conversion.side_repositories == []

    def test_mixed_dependencies(self, bower: AssetType):
        conversion = convert_dependencies(
            bower,
            {
                "library1": ">= 1.0.0",
                "library3": "*",
                "library4": "1.2.3",
                "library5": "#0a1b2c3d4e5f6a7b8c9d0e1f2a3b4c5d6e7f8a9b",
                "library6": "branch",
                "library9": "master",
                "library12": ">=1 <2",
                "library16": "",
            },
        )
        assert conversion.require == {
            "bower-asset/library1": ">=1.0.0",
            "bower-asset/library3": "*",
            "bower-asset/library4": "1.2.3",
            "bower-asset/library5": "dev-default#0a1b2c3d4e5f6a7b8c9d0e1f2a3b4c5d6e7f8a9b",
            "bower-asset/library6": "dev-branch",
            "bower-asset/library9": "dev-master",
            "bower-asset/library12": ">=1,<2",
            "bower-asset/library16": "*",
        }

    def test_url_dependency_adds_side_repository(self, npm: AssetType):
        conversion = convert_dependencies(
            npm,
            {"library17": "https://example.com/library17-1.2.3.zip"},
            package_name="npm-asset/test",
        )
        assert conversion.require == {"npm-asset/test-library17-file": "*"}
        (repository,) = conversion.side_repositories
        assert repository.package is not None
        assert repository.package.name == "npm-asset/test-library17-file"
        assert repository.package.version == "1.2.3"

    def test_scoped_npm_dependency(self, npm: AssetType):
        conversion = convert_dependencies(npm, {"@scope/library1": "~1.2"})
        assert conversion.require == {"npm-asset/scope--library1": "~1.2"}

    def test_self_reference_is_dropped(self, npm: AssetType):
        conversion = convert_dependencies(npm, {"dev": "master"})
        assert conversion.require == {}

    def test_non_string_version_is_skipped(self, npm: AssetType, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="assetver.assets.package_converter"):
            conversion = convert_dependencies(npm, {"lib1": {"version": "1.0"}, "lib2": "1.0.0"})
        assert conversion.require == {"npm-asset/lib2": "1.0.0"}
        assert "Skipping dependency 'lib1'" in caplog.text


class TestConvertManifest:
    def test_npm_manifest(self, npm: AssetType):
        conversion = convert_manifest(
            npm,
            {
                "name": "@scope/pkg",
                "version": "1.0.0-beta",
                "description": "A package",
                "keywords": ["a", "b"],
                "homepage": "https://example.com",
                "license": [{"type": "MIT"}, {"name": "ISC"}, "BSD"],
                "author": "Jane Doe",
                "contributors": ["John Doe"],
                "main": "index.js",
                "bundledDependencies": ["lib2"],
                "dependencies": {"lib1": "^1.2.0"},
            },
        )
        package = conversion.package
        assert package["name"] == "npm-asset/scope--pkg"
        assert package["type"] == "npm-asset-library"
        assert package["version"] == "1.0.0-beta1"
        assert package["description"] == "A package"
        assert package["keywords"] == ["a", "b"]
        assert package["homepage"] == "https://example.com"
        assert package["license"] == ["MIT", "ISC", "BSD"]
        assert package["authors"] == ["Jane Doe", "John Doe"]
        assert package["require"] == {"npm-asset/lib1": ">=1.2.0,<2.0.0"}
        assert package["extra"] == {
            "npm-asset-main": "index.js",
            "npm-asset-bundled-dependencies": ["lib2"],
        }
        assert conversion.repositories == []

    def test_bower_manifest(self, bower: AssetType):
        conversion = convert_manifest(
            bower,
            {
                "name": "test",
                "version": "1.0.0-pre",
                "homepage": "https://example.com",
                "license": "MIT",
                "ignore": ["tests"],
                "private": True,
                "dependencies": {"file-lib": "https://example.com/file-lib-1.2.3.zip"},
            },
        )
        config = conversion.to_config()
        assert config["name"] == "bower-asset/test"
        assert config["version"] == "1.0.0-beta1"
        assert config["license"] == "MIT"
        assert "homepage" not in config
        assert config["require"] == {"bower-asset/test-file-lib-file": "*"}
        assert config["extra"] == {"bower-asset-ignore": ["tests"], "bower-asset-private": True}
        assert config["repositories"] == [
            {
                "type": "package",
                "package": {
                    "name": "bower-asset/test-file-lib-file",
                    "type": "bower-asset-library",
                    "version": "1.2.3",
                    "dist": {"url": "https://example.com/file-lib-1.2.3.zip", "type": "file"},
                },
            }
        ]

    def test_minimal_manifest(self, npm: AssetType):
        config = convert_manifest(npm, {}).to_config()
        assert config == {"type": "npm-asset-library"}

    def test_npm_bin_and_dist(self, npm: AssetType):
        package = convert_manifest(
            npm,
            {
                "name": "pkg",
                "bin": "./cli.js",
                "dist": {"tarball": "http://registry.example.com/pkg-1.0.0.tgz", "shasum": "abc123"},
            },
        ).package
        assert package["bin"] == ["./cli.js"]
        assert package["dist"] == {"type": "tar", "url": "https://registry.example.com/pkg-1.0.0.tgz", "shasum": "abc123"}

    def test_bower_keeps_license_and_bin_and_ignores_authors(self, bower: AssetType):
        package = convert_manifest(
            bower,
            {
                "name": "pkg",
                "license": [{"type": "MIT"}],
                "bin": "./cli.js",
                "author": "Jane Doe",
                "contributors": ["John Doe"],
                "dist": {"tarball": "https://example.com/pkg.tgz"},
            },
        ).package
        assert package["license"] == [{"type": "MIT"}]
        assert package["bin"] == "./cli.js"
        assert "authors" not in package
        assert "dist" not in package


class TestHelpers:
    @pytest.mark.parametrize(
        ("key", "expected"),
        [("main", "npm-asset-main"), ("bundledDependencies", "npm-asset-bundled-dependencies"), ("engineStrict", "npm-asset-engine-strict")],
    )
    def test_extra_key_name(self, npm: AssetType, key: str, expected: str):
        assert extra_key_name(npm, key) == expected

    def test_convert_licenses_keeps_strings(self):
        assert convert_licenses("MIT") == "MIT"

    def test_convert_authors(self):
        assert convert_authors(None, None) == []
        assert convert_authors({"name": "Jane"}, "not a list") == [{"name": "Jane"}]

    @pytest.mark.parametrize(
        ("dist", "expected"),
        [
            ({"zip": "http://example.com/lib.zip"}, {"type": "zip", "url": "https://example.com/lib.zip"}),
            ({"git": "git://example.com/lib.git", "unknown": "x", "shasum": None}, {"type": "git", "url": "git://example.com/lib.git"}),
            ("https://example.com/lib.zip", "https://example.com/lib.zip"),
        ],
    )
    def test_convert_dist(self, dist: object, expected: object):
        assert convert_dist(dist) == expected
