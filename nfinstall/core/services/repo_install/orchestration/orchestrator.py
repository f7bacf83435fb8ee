"""
L5 Orchestration — One installer run, start to finish.

    Detecting → Configuring → (Installing)? → (PostExec)? → Done

Fatal conditions propagate as ``InstallerError`` subclasses and stop
the run wherever they happen.  Verification and post-exec problems are
logged and recorded in the report.
"""

from __future__ import annotations

import logging
from pathlib import Path

from nfinstall.core.models.install import InstallReport, InstallRequest, PackageCheck
from nfinstall.core.models.settings import RepositorySettings
from nfinstall.core.services.repo_install.detection.distro import detect_distribution
from nfinstall.core.services.repo_install.domain.errors import UnsupportedDistributionError
from nfinstall.core.services.repo_install.execution.debian import (
    configure_debian_repo,
    install_debian_packages,
)
from nfinstall.core.services.repo_install.execution.redhat import (
    configure_redhat_repo,
    install_redhat_packages,
)
from nfinstall.core.services.repo_install.execution.subprocess_runner import _run_subprocess

logger = logging.getLogger(__name__)


def run_post_exec(path: Path) -> bool:
    """Run the operator's post-install hook.  Never fatal.

    A relative path is taken from the current directory, not looked up
    on $PATH.
    """
    path = path.absolute()
    logger.info("Running post-exec %s", path)
    result = _run_subprocess([str(path)], capture=False)
    if not result["ok"]:
        logger.warning("Post-exec %s failed: %s", path, result["error"])
        return False
    return True


def run_install(
    request: InstallRequest,
    settings: RepositorySettings,
) -> InstallReport:
    """Configure the repository and install any requested packages.

    Raises:
        UnsupportedDistributionError: Host family not recognised.
        InstallerError: Any other fatal condition from the steps.
    """
    # ── Detecting ──
    family = detect_distribution(settings.host_root)
    if family == "unsupported":
        raise UnsupportedDistributionError(
            "Unsupported Linux distribution family. NetFoundry packages are "
            "available for Debian and Red Hat family of distros."
        )

    # ── Configuring ──
    logger.info("Configuring NetFoundry repository for %s family", family)
    if family == "redhat":
        repo_file = settings.rpm_repo_file
        repo_action = configure_redhat_repo(request, settings)
    else:
        repo_file, repo_action = configure_debian_repo(request, settings)

    report = InstallReport(family=family, repo_file=repo_file, repo_action=repo_action)
    if not request.packages:
        return report

    # ── Installing ──
    logger.info("Installing %s", " ".join(request.packages))
    checks: list[PackageCheck]
    if family == "redhat":
        checks = install_redhat_packages(request)
    else:
        checks = install_debian_packages(request)
    report.packages = checks

    # ── PostExec ──
    if request.post_exec is not None:
        report.post_exec_ok = run_post_exec(request.post_exec)

    return report
