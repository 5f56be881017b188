"""create-airfoil-app — interactive Next.js project scaffolder.

Clones a starter template, installs dependencies with the package
manager of your choice, and rolls everything back if any step fails.
"""

from create_airfoil_app.version import __version__

__all__: list[str] = ["__version__"]
