"""Default cleanup targets for Node.js projects.

This module defines the manifest that marks a project directory and
the ordered list of directories a cleanup pass removes. Order decides
the order of removal and reporting.
"""

from cleanctl.models.target import CleanupTarget, TargetScope

# Marker file whose presence identifies a project root
DEFAULT_MANIFEST: str = "package.json"

DEFAULT_TARGETS: tuple[CleanupTarget, ...] = (
    # Dependencies, only next to a manifest
    CleanupTarget("node_modules", "Node.js dependencies", TargetScope.PROJECTS),
    # Build outputs and caches, anywhere in the tree
    CleanupTarget(".turbo", "Turbo cache"),
    CleanupTarget(".BUILD", "Build directory"),
    CleanupTarget(".dist", "Distribution directory"),
    CleanupTarget(".test-report", "Test report directory"),
    CleanupTarget("dist", "Distribution directory (alternative naming)"),
    CleanupTarget("build", "Build output directory"),
    CleanupTarget("coverage", "Test coverage reports"),
    CleanupTarget(".nyc_output", "NYC coverage output"),
    CleanupTarget(".next", "Next.js cache and build files"),
    CleanupTarget(".nuxt", "Nuxt.js cache and build files"),
    CleanupTarget(".vite", "Vite cache directory"),
    CleanupTarget("tmp", "Temporary files"),
    CleanupTarget("temp", "Temporary files"),
)
