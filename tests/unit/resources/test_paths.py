from typing import Dict

from hypothesis import given

from vault_provider.resources.paths import (
    approle_login_path,
    approle_role_path,
    certificate_issue_path,
    certificate_revoke_path,
    login_path,
    login_url,
    role_id_path,
    secret_id_destroy_path,
    secret_id_path,
)
from vault_provider.test_utils.hypothesis.strategies.vault import tenancy_triples


class TestPaths:
    """Tests for Vault path conventions."""

    def test_approle_paths(self):
        """Test the documented AppRole layout."""
        role_path = approle_role_path("acme.io", "acme", "my-repo")

        assert role_path == "auth/approle/acme.io/acme/role/my-repo"
        assert role_id_path(role_path) == f"{role_path}/role-id"
        assert secret_id_path(role_path) == f"{role_path}/secret-id"
        assert secret_id_destroy_path(role_path) == f"{role_path}/secret-id/destroy"

    def test_certificate_paths(self):
        """Test that certificates are issued under the organization role."""
        assert certificate_issue_path("pki_int", "acme") == "pki_int/issue/acme"
        assert certificate_revoke_path("pki_int") == "pki_int/revoke"

    def test_login_paths(self):
        """Test login paths and the URL exposed to client applications."""
        assert login_path("github", "acme.io", "acme") == "auth/github/acme.io/acme/login"
        assert approle_login_path("acme.io", "acme") == "auth/approle/acme.io/acme/login"
        assert (
            login_url("https://vault.test:8200/", "auth/approle/acme.io/acme/login")
            == "https://vault.test:8200/v1/auth/approle/acme.io/acme/login"
        )

    @given(triple=tenancy_triples())
    def test_role_path_is_deterministic(self, triple: Dict[str, str]):
        """Test that identical inputs always give identical paths."""
        first = approle_role_path(**triple)
        second = approle_role_path(**triple)
        assert first == second

    @given(triple=tenancy_triples())
    def test_role_path_segments_are_well_formed(self, triple: Dict[str, str]):
        """Test that non-empty inputs never produce empty segments."""
        role_path = approle_role_path(**triple)
        segments = role_path.split("/")

        assert all(segments)
        assert segments == [
            "auth",
            "approle",
            triple["namespace_domain"],
            triple["organization"],
            "role",
            triple["repository"],
        ]

    @given(triple=tenancy_triples())
    def test_login_path_segments_are_well_formed(self, triple: Dict[str, str]):
        """Test that the login path keeps namespace before organization."""
        path = login_path("github", triple["namespace_domain"], triple["organization"])
        assert path.split("/") == [
            "auth",
            "github",
            triple["namespace_domain"],
            triple["organization"],
            "login",
        ]
