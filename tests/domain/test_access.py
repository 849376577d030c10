"""Unit tests for the management role gate."""

import pytest

from catalog.domain.exceptions import AccessDenied
from catalog.domain.model.access import Role, has_access, require_access


class TestHasAccess:

    def test_admin_allowed(self):
        assert has_access("ADMIN")
        assert has_access(Role.ADMIN.value)

    @pytest.mark.parametrize("role", ["USER", "admin", " ADMIN", "", None])
    def test_everything_else_denied(self, role):
        assert not has_access(role)


class TestRequireAccess:

    def test_admin_passes(self):
        require_access("ADMIN")

    def test_user_denied(self):
        with pytest.raises(AccessDenied, match="Access denied"):
            require_access("USER")
