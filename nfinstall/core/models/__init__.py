"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from nfinstall.core.models import Channel, InstallRequest, RepositorySettings
"""

from nfinstall.core.models.install import (
    Channel,
    Credentials,
    DistroFamily,
    InstallReport,
    InstallRequest,
    PackageCheck,
    RepoAction,
    Track,
    Visibility,
)
from nfinstall.core.models.settings import RepositorySettings

__all__ = [
    # install.py
    "Channel",
    "Credentials",
    "DistroFamily",
    "InstallReport",
    "InstallRequest",
    "PackageCheck",
    "RepoAction",
    # settings.py
    "RepositorySettings",
    "Track",
    "Visibility",
]
