"""
Repository installation service — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate layer (data → domain → detection → execution →
orchestration)::

    from nfinstall.core.services.repo_install import run_install
"""

# ── L1: Domain ──
from nfinstall.core.services.repo_install.domain.capability import (  # noqa: F401
    resolve_first_available,
)
from nfinstall.core.services.repo_install.domain.checksum import (  # noqa: F401
    content_digest,
    contents_match,
)
from nfinstall.core.services.repo_install.domain.errors import (  # noqa: F401
    InstallerError,
    InstallFailureError,
    KeyImportError,
    MetadataRefreshError,
    MissingToolError,
    RepoWriteError,
    UnsupportedDistributionError,
)

# ── L3: Detection ──
from nfinstall.core.services.repo_install.detection.distro import (  # noqa: F401
    detect_distribution,
)

# ── L5: Orchestration ──
from nfinstall.core.services.repo_install.orchestration.orchestrator import (  # noqa: F401
    run_install,
)
