"""
L1 Domain — Repository definition rendering.

Pure functions: channel + settings in, file text out.  Every artifact
ends with a newline so that re-rendering the same inputs always yields
byte-identical output.
"""

from __future__ import annotations

from nfinstall.core.models.install import Channel
from nfinstall.core.models.settings import RepositorySettings
from nfinstall.core.services.repo_install.data.constants import (
    DEB_COMPONENT,
    DEB_SUITES,
)


def render_template(template: str, inputs: dict[str, str]) -> str:
    """Substitute ``{var}`` placeholders with input values.

    Simple string replacement — no Jinja, no escaping.  Unknown
    placeholders are left untouched.
    """
    result = template
    for key, value in inputs.items():
        result = result.replace(f"{{{key}}}", str(value))
    return result


# ── RPM ─────────────────────────────────────────────────────────


def rpm_base_url(settings: RepositorySettings, rpm_repo: str, channel: Channel) -> str:
    """Private repos are flat; public ones are split per architecture."""
    root = f"{settings.base_url}/{rpm_repo}"
    if channel.private:
        return root
    return f"{root}/redhat/$basearch"


def render_rpm_repo(
    settings: RepositorySettings,
    rpm_repo: str,
    channel: Channel,
) -> str:
    """Render the ``.repo`` INI stanza for yum/dnf."""
    baseurl = rpm_base_url(settings, rpm_repo, channel)
    lines = [
        f"[{settings.rpm_repo_id}]",
        f"name={settings.rpm_repo_name}",
        f"baseurl={baseurl}",
        "enabled=1",
        "gpgcheck=0",
        f"gpgkey={baseurl}/repodata/repomd.xml.key",
        "repo_gpgcheck=1",
    ]
    return "\n".join(lines) + "\n"


# ── Debian ──────────────────────────────────────────────────────


def deb_repo_url(settings: RepositorySettings, deb_repo: str) -> str:
    return f"{settings.base_url}/{deb_repo}"


def deb_suites(channel: Channel) -> str:
    """``debian`` for public; private subscribers get both suites."""
    return DEB_SUITES[channel.visibility]


def deb_key_url(settings: RepositorySettings, deb_repo: str) -> str:
    return render_template(
        settings.deb_key_url,
        {"base_url": settings.base_url, "deb_repo": deb_repo},
    )


def render_deb822(settings: RepositorySettings, deb_repo: str, channel: Channel) -> str:
    """Render a DEB822 ``.sources`` paragraph."""
    lines = [
        "Types: deb",
        f"URIs: {deb_repo_url(settings, deb_repo)}",
        f"Suites: {deb_suites(channel)}",
        f"Components: {DEB_COMPONENT}",
        f"Signed-By: {settings.keyring_path}",
    ]
    return "\n".join(lines) + "\n"


def render_deb_legacy(settings: RepositorySettings, deb_repo: str, channel: Channel) -> str:
    """Render a one-line ``.list`` entry."""
    return (
        f"deb [signed-by={settings.keyring_path}] "
        f"{deb_repo_url(settings, deb_repo)} {deb_suites(channel)} {DEB_COMPONENT}\n"
    )


def render_apt_auth(host: str, username: str, password: str) -> str:
    """Render an ``auth.conf.d`` machine/login/password stanza."""
    return f"machine {host}\nlogin {username}\npassword {password}\n"
