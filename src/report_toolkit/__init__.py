"""Top-level package for the inspection report toolkit.

Provides subpackages:
- report_toolkit.core – immutable records, suggestion contracts, serialization
- report_toolkit.layout – height estimation, photo planning, pagination
- report_toolkit.editing – edit operations, drag reorder reducer, editor session
- report_toolkit.output – screen, print and document renderers
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.1"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("report-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
