"""GitHub organization administration tools.

Provides two operator-run command line tools:
- `sync-labels` reconciles repository labels against a canonical set
- `master-to-main` renames `master` default branches to `main`
"""

__version__ = "0.1.0"

from github_org_admin.config import AdminSettings

__all__ = ["__version__", "AdminSettings"]
