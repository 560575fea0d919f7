"""
Tests for page permission resolution.

Covers the OR-merge of role_permissions rows, the fail-closed short circuits
and the propagation of store failures.
"""
import itertools

import pytest

from app.core.errors import LookupFailure, PermissionLookupError
from app.modules.permissions.schemas import EffectivePermission
from app.modules.permissions.service import PermissionResolver, merge_permissions

ALL_FALSE = EffectivePermission()


def row(**flags):
    base = {"can_view": False, "can_add": False, "can_edit": False, "can_delete": False, "can_print": False}
    base.update(flags)
    return base


@pytest.fixture
def resolver(fake_supabase) -> PermissionResolver:
    return PermissionResolver(fake_supabase)


class TestMergePermissions:
    def test_empty_rows_are_all_false(self):
        assert merge_permissions([]) == ALL_FALSE

    def test_single_row_is_copied(self):
        merged = merge_permissions([row(can_view=True, can_print=True)])
        assert merged == EffectivePermission(can_view=True, can_print=True)

    def test_flags_are_ored_independently(self):
        merged = merge_permissions([
            row(can_view=True),
            row(can_edit=True),
            row(can_delete=True, can_view=False),
        ])
        assert merged == EffectivePermission(can_view=True, can_edit=True, can_delete=True)

    def test_missing_and_null_flags_count_as_false(self):
        merged = merge_permissions([{"can_view": None}, {"can_add": True}])
        assert merged == EffectivePermission(can_add=True)

    def test_order_does_not_matter(self):
        rows = [row(can_view=True), row(can_edit=True, can_print=True), row(), row(can_add=True)]
        expected = merge_permissions(rows)
        for permutation in itertools.permutations(rows):
            assert merge_permissions(list(permutation)) == expected

    def test_accepts_generators(self):
        merged = merge_permissions(r for r in [row(can_print=True)])
        assert merged.can_print is True


class TestEffectivePermission:
    def test_can_accepts_short_and_flag_names(self):
        perms = EffectivePermission(can_edit=True)
        assert perms.can("edit") is True
        assert perms.can("can_edit") is True
        assert perms.can("delete") is False

    def test_unknown_action_is_denied(self):
        assert EffectivePermission(can_view=True).can("approve") is False

    def test_allowed_actions(self):
        perms = EffectivePermission(can_view=True, can_print=True)
        assert perms.allowed_actions() == ["view", "print"]


class TestResolveScenarios:
    def test_single_role(self, resolver):
        """Editor on projects gets exactly view, add and print."""
        perms = resolver.resolve("projects", "user-editor")
        assert perms.model_dump() == {
            "can_view": True,
            "can_add": True,
            "can_edit": False,
            "can_delete": False,
            "can_print": True,
        }

    def test_union_across_roles(self, resolver):
        """Editor + viewer: can_edit comes from viewer, the rest from editor."""
        perms = resolver.resolve("projects", "user-both")
        assert perms == EffectivePermission(can_view=True, can_add=True, can_edit=True, can_print=True)

    def test_unknown_page_is_all_false(self, resolver, fake_supabase):
        assert resolver.resolve("unknown_page", "user-admin") == ALL_FALSE
        assert "user_roles" not in fake_supabase.queried_tables()

    def test_anonymous_user_short_circuits(self, resolver, fake_supabase):
        assert resolver.resolve("projects", None) == ALL_FALSE
        assert fake_supabase.executed == []

    def test_role_permissions_failure_is_reported(self, resolver, fake_supabase):
        fake_supabase.fail("role_permissions")
        with pytest.raises(PermissionLookupError) as exc_info:
            resolver.resolve("projects", "user-editor")
        assert exc_info.value.step == "role_permissions"
        assert "connection to role_permissions lost" in exc_info.value.message
        assert isinstance(exc_info.value, LookupFailure)

    def test_user_without_roles(self, resolver, fake_supabase):
        assert resolver.resolve("projects", "user-norole") == ALL_FALSE
        assert "role_permissions" not in fake_supabase.queried_tables()

    def test_page_without_rows_for_role(self, resolver):
        # editor has no row on the dashboard page
        assert resolver.resolve("dashboard", "user-editor") == ALL_FALSE

    def test_blank_page_code_is_rejected(self, resolver):
        with pytest.raises(ValueError):
            resolver.resolve("  ", "user-editor")


class TestResolveFailures:
    def test_page_lookup_failure_aborts(self, resolver, fake_supabase):
        fake_supabase.fail("pages")
        with pytest.raises(PermissionLookupError) as exc_info:
            resolver.resolve("projects", "user-editor")
        assert exc_info.value.step == "pages"
        assert fake_supabase.queried_tables() == ["pages"]

    def test_role_lookup_failure_aborts(self, resolver, fake_supabase):
        fake_supabase.fail("user_roles")
        with pytest.raises(PermissionLookupError) as exc_info:
            resolver.resolve("projects", "user-editor")
        assert exc_info.value.step == "user_roles"
        assert "role_permissions" not in fake_supabase.queried_tables()

    def test_failure_is_not_retried(self, resolver, fake_supabase):
        fake_supabase.fail("role_permissions")
        with pytest.raises(PermissionLookupError):
            resolver.resolve("projects", "user-editor")
        assert fake_supabase.queried_tables().count("role_permissions") == 1


class TestResolveProperties:
    def _set_roles(self, fake_supabase, user_id, role_ids):
        fake_supabase.tables["user_roles"] = [
            r for r in fake_supabase.tables["user_roles"] if r["user_id"] != user_id
        ] + [{"user_id": user_id, "role_id": role_id} for role_id in role_ids]

    def test_adding_roles_never_revokes(self, resolver, fake_supabase):
        roles = ["editor", "viewer", "admin"]
        for size in range(len(roles) + 1):
            for subset in itertools.combinations(roles, size):
                self._set_roles(fake_supabase, "user-x", subset)
                smaller = resolver.resolve("projects", "user-x").model_dump()
                for extra in roles:
                    self._set_roles(fake_supabase, "user-x", set(subset) | {extra})
                    larger = resolver.resolve("projects", "user-x").model_dump()
                    for flag, granted in smaller.items():
                        assert not granted or larger[flag]

    def test_resolution_is_idempotent(self, resolver):
        first = resolver.resolve("projects", "user-both")
        second = resolver.resolve("projects", "user-both")
        assert first == second

    def test_row_order_in_store_is_irrelevant(self, resolver, fake_supabase):
        expected = resolver.resolve("projects", "user-both")
        fake_supabase.tables["role_permissions"].reverse()
        assert resolver.resolve("projects", "user-both") == expected


class TestListPages:
    def test_pages_sorted_by_code(self, resolver):
        pages = resolver.list_pages()
        assert [p.code for p in pages] == ["dashboard", "documents", "projects"]

    def test_store_failure(self, resolver, fake_supabase):
        fake_supabase.fail("pages")
        with pytest.raises(PermissionLookupError):
            resolver.list_pages()
