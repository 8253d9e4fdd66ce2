"""Service account credentials for firebase-tools."""

import tempfile

from hosting_deploy.models.deployment import AuthContext


def create_gac_file(google_application_credentials: str) -> str:
    """Write the service account JSON to a temp file and return its path.

    The file is not removed; the runner discards it with the job.
    """
    with tempfile.NamedTemporaryFile(
        mode="w", suffix=".json", delete=False, encoding="utf-8"
    ) as f:
        f.write(google_application_credentials)
        return f.name


def build_auth_context(service_account: str, token: str = "") -> AuthContext:
    """Credentials from the action inputs; either may be absent."""
    return AuthContext(
        credential_file_ref=create_gac_file(service_account) if service_account else None,
        token=token or None,
    )
