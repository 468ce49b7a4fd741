"""Unit tests for ProjectLocator and TargetFinder.

Tests project discovery, target matching, exclusion pruning, handling
of unreadable directories, and symlink behaviour, against both real
temporary trees and in-memory listings.
"""

import os
from collections.abc import Callable
from pathlib import Path

import pytest
from cleanctl.filesystem.models import DirectoryEntry, DirectoryLister
from cleanctl.filesystem.scanner import (
    ProjectLocator,
    TargetFinder,
    find_project_directories,
    find_target_directories,
    list_directory,
)

MakeTree = Callable[..., Path]
MemoryLister = Callable[[dict[str, list[str] | None]], DirectoryLister]


class TestListDirectory:
    """Tests for the real directory lister."""

    def test_lists_sorted_entries(self, make_tree: MakeTree) -> None:
        """Entries are returned in name order with their type."""
        root = make_tree("b/", "a.txt", "c/")

        entries = list_directory(root)

        assert entries == [
            DirectoryEntry(name="a.txt", is_dir=False),
            DirectoryEntry(name="b", is_dir=True),
            DirectoryEntry(name="c", is_dir=True),
        ]

    def test_symlink_to_directory_is_not_a_directory(self, make_tree: MakeTree) -> None:
        """Symlinks are never reported as directories."""
        root = make_tree("real/")
        (root / "link").symlink_to(root / "real")

        entries = {e.name: e.is_dir for e in list_directory(root)}

        assert entries == {"link": False, "real": True}

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        """Listing a missing directory raises OSError."""
        with pytest.raises(OSError):
            list_directory(tmp_path / "missing")


class TestProjectLocator:
    """Tests for ProjectLocator."""

    def test_single_project_root(self, make_tree: MakeTree) -> None:
        """A manifest at the root makes the root a project."""
        root = make_tree("package.json", "src/index.js")

        assert ProjectLocator().find(root) == [root]

    def test_monorepo_parent_before_children(self, make_tree: MakeTree) -> None:
        """Nested projects are found after their parent."""
        root = make_tree(
            "package.json",
            "packages/a/package.json",
            "packages/b/package.json",
        )

        projects = ProjectLocator().find(root)

        assert projects[0] == root
        assert set(projects) == {root, root / "packages/a", root / "packages/b"}

    def test_pre_order_within_branch(self, make_tree: MakeTree) -> None:
        """A project is listed before projects nested beneath it."""
        root = make_tree("apps/web/package.json", "apps/web/plugins/x/package.json")

        projects = ProjectLocator().find(root)

        assert projects == [root / "apps/web", root / "apps/web/plugins/x"]

    def test_no_manifest(self, make_tree: MakeTree) -> None:
        """A tree without manifests yields no projects."""
        root = make_tree("readme.txt", "src/")

        assert ProjectLocator().find(root) == []

    def test_manifest_directory_is_not_a_manifest(self, make_tree: MakeTree) -> None:
        """A directory named like the manifest does not mark a project."""
        root = make_tree("package.json/")

        assert ProjectLocator().find(root) == []

    def test_never_descends_into_excluded(self, make_tree: MakeTree) -> None:
        """Manifests inside excluded directories are ignored."""
        root = make_tree(
            "package.json",
            "node_modules/lodash/package.json",
            ".git/hooks/package.json",
            ".idea/package.json",
        )

        projects = ProjectLocator().find(root)

        assert projects == [root]

    def test_no_result_beneath_excluded_directory(self, make_tree: MakeTree) -> None:
        """No returned project lies beneath an excluded directory."""
        root = make_tree(
            "package.json",
            "packages/a/package.json",
            "packages/a/node_modules/dep/package.json",
            "packages/a/.turbo/cache/package.json",
        )

        projects = ProjectLocator().find(root)

        for project in projects:
            relative = project.relative_to(root).parts
            assert not any(part in ("node_modules", ".turbo") for part in relative)

    def test_custom_manifest_name(self, make_tree: MakeTree) -> None:
        """The manifest name is configurable."""
        root = make_tree("package.json", "py/pyproject.toml")

        projects = ProjectLocator("pyproject.toml").find(root)

        assert projects == [root / "py"]

    def test_custom_exclusions(self, make_tree: MakeTree) -> None:
        """Extra excluded names prune descent."""
        root = make_tree("vendor/lib/package.json", "app/package.json")

        projects = ProjectLocator(excluded=frozenset({"vendor"})).find(root)

        assert projects == [root / "app"]

    def test_does_not_follow_symlinks(self, make_tree: MakeTree) -> None:
        """Symlinked directories are not walked."""
        root = make_tree("real/package.json", "other/")
        (root / "other" / "link").symlink_to(root / "real")

        assert ProjectLocator().find(root) == [root / "real"]

    def test_unreadable_directory_skipped(self, memory_lister: MemoryLister) -> None:
        """Unreadable directories are skipped and siblings still walked."""
        lister = memory_lister(
            {
                "/r": ["package.json", "locked/", "open/"],
                "/r/locked": None,
                "/r/open": ["package.json"],
            }
        )

        projects = ProjectLocator(lister=lister).find(Path("/r"))

        assert projects == [Path("/r"), Path("/r/open")]

    def test_unreadable_root_yields_nothing(self, memory_lister: MemoryLister) -> None:
        """An unreadable root is not an error for the locator."""
        lister = memory_lister({"/r": None})

        assert ProjectLocator(lister=lister).find(Path("/r")) == []

    def test_sibling_order_follows_listing(self, memory_lister: MemoryLister) -> None:
        """Siblings are visited in listing order."""
        lister = memory_lister(
            {
                "/r": ["z/", "a/"],
                "/r/z": ["package.json"],
                "/r/a": ["package.json"],
            }
        )

        projects = ProjectLocator(lister=lister).find(Path("/r"))

        assert projects == [Path("/r/z"), Path("/r/a")]

    @pytest.mark.skipif(
        os.name != "posix" or os.geteuid() == 0, reason="requires non-root POSIX permissions"
    )
    def test_permission_denied_on_real_tree(self, make_tree: MakeTree) -> None:
        """A directory without read permission is skipped on a real tree."""
        root = make_tree("package.json", "locked/package.json", "open/package.json")
        locked = root / "locked"
        locked.chmod(0o000)
        try:
            projects = ProjectLocator().find(root)
        finally:
            locked.chmod(0o755)

        assert projects == [root, root / "open"]

    def test_module_function(self, make_tree: MakeTree) -> None:
        """find_project_directories walks the real filesystem."""
        root = make_tree("package.json")

        assert find_project_directories(root) == [root]


class TestTargetFinder:
    """Tests for TargetFinder."""

    def test_finds_nested_matches(self, make_tree: MakeTree) -> None:
        """Matches at any depth are found."""
        root = make_tree("pkg1/dist/", "pkg2/deep/er/dist/", "dist/")

        found = TargetFinder().find(root, "dist")

        assert set(found) == {root / "dist", root / "pkg1/dist", root / "pkg2/deep/er/dist"}

    def test_base_itself_not_matched(self, make_tree: MakeTree) -> None:
        """The base directory is never a match even if its name equals the target."""
        root = make_tree("dist/sub/")

        found = TargetFinder().find(root / "dist", "dist")

        assert found == []

    def test_does_not_descend_into_match(self, make_tree: MakeTree) -> None:
        """Nested instances inside a matched directory are not reported."""
        root = make_tree("build/build/build/", "build/x/build/")

        found = TargetFinder().find(root, "build")

        assert found == [root / "build"]

    def test_skips_excluded_directories(self, make_tree: MakeTree) -> None:
        """Matches inside excluded directories are not found."""
        root = make_tree(".git/node_modules/", "node_modules/", ".git/objects/dist/")

        assert TargetFinder().find(root, "node_modules") == [root / "node_modules"]
        assert TargetFinder().find(root, "dist") == []

    def test_excluded_name_can_match(self, make_tree: MakeTree) -> None:
        """A directory with an excluded name is still recorded as a match."""
        root = make_tree("a/.turbo/", "b/.turbo/cache/")

        found = TargetFinder().find(root, ".turbo")

        assert set(found) == {root / "a/.turbo", root / "b/.turbo"}

    def test_files_never_match(self, make_tree: MakeTree) -> None:
        """Files named like the target are ignored."""
        root = make_tree("dist", "src/dist")

        assert TargetFinder().find(root, "dist") == []

    def test_no_matches(self, make_tree: MakeTree) -> None:
        """No matches yields an empty list."""
        root = make_tree("src/app/")

        assert TargetFinder().find(root, "coverage") == []

    def test_unreadable_directory_skipped(self, memory_lister: MemoryLister) -> None:
        """Unreadable directories are skipped, the search continues."""
        lister = memory_lister(
            {
                "/r": ["locked/", "ok/"],
                "/r/locked": None,
                "/r/ok": ["dist/"],
            }
        )

        found = TargetFinder(lister=lister).find(Path("/r"), "dist")

        assert found == [Path("/r/ok/dist")]

    def test_unreadable_directory_logged(
        self, memory_lister: MemoryLister, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Unreadable directories are logged at debug level."""
        lister = memory_lister({"/r": ["locked/"], "/r/locked": None})

        with caplog.at_level("DEBUG", logger="cleanctl.filesystem.scanner"):
            TargetFinder(lister=lister).find(Path("/r"), "dist")

        assert "/r/locked" in caplog.text

    def test_match_is_never_listed(self) -> None:
        """A matched directory is never listed (never recursed into)."""
        listed: list[Path] = []

        def lister(path: Path) -> list[DirectoryEntry]:
            listed.append(path)
            if path == Path("/r"):
                return [DirectoryEntry("dist", True), DirectoryEntry("src", True)]
            return []

        found = TargetFinder(lister=lister).find(Path("/r"), "dist")

        assert found == [Path("/r/dist")]
        assert Path("/r/dist") not in listed
        assert Path("/r/src") in listed

    def test_custom_exclusions(self, make_tree: MakeTree) -> None:
        """Extra excluded names prune the search."""
        root = make_tree("vendor/lib/dist/", "app/dist/")

        found = TargetFinder(excluded=frozenset({"vendor"})).find(root, "dist")

        assert found == [root / "app/dist"]

    def test_module_function(self, make_tree: MakeTree) -> None:
        """find_target_directories walks the real filesystem."""
        root = make_tree("a/coverage/")

        assert find_target_directories(root, "coverage") == [root / "a/coverage"]
