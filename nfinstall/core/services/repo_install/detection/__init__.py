"""
L3 Detection — read-only host probes.

These functions READ system state but never WRITE.
"""

from nfinstall.core.services.repo_install.detection.apt_version import (  # noqa: F401
    get_apt_version,
    use_deb822,
)
from nfinstall.core.services.repo_install.detection.distro import (  # noqa: F401
    DETECTION_TABLE,
    detect_distribution,
)
