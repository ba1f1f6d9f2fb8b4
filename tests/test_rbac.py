import base64
import json
import unittest
from unittest.mock import patch

from dashboard.core.catalog import SECTIONS, Component
from dashboard.core.models import RolePermissions
from dashboard.core.rbac import (
    DEFAULT_POLICY,
    AccessPolicy,
    ComponentState,
    RoleKind,
    component_state,
    get_restricted_components,
    get_role_permissions,
    get_user_role,
    has_edit_delete_permission,
    resolve_permissions,
    should_show_component,
)


def make_token(payload) -> str:
    payload_b64 = base64.urlsafe_b64encode(
        json.dumps(payload, ensure_ascii=False).encode("utf-8")
    ).decode().rstrip("=")
    return f"eyJhbGciOiJIUzI1NiJ9.{payload_b64}.mock_signature"


def cookie_reader(**cookies):
    return cookies.get


def role_reader(user_name):
    return cookie_reader(accessToken=make_token({"userId": "1", "role": "factory", "userName": user_name}))


DENIED = RolePermissions(can_access=False, can_edit=False, can_delete=False)
GRANTED_ALL = RolePermissions(can_access=True, can_edit=True, can_delete=True)


class TestUserRole(unittest.TestCase):

    def test_role_from_token(self):
        self.assertEqual(get_user_role(role_reader("factory4")), "factory4")

    def test_no_token_means_no_role(self):
        self.assertEqual(get_user_role(cookie_reader()), "")

    def test_no_token_ignores_legacy_cookie(self):
        self.assertEqual(get_user_role(cookie_reader(userRole="admin")), "")

    def test_token_without_user_name_falls_back_to_legacy_cookie(self):
        reader = cookie_reader(accessToken=make_token({"role": "factory"}), userRole="factory2")
        self.assertEqual(get_user_role(reader), "factory2")

    def test_malformed_token_falls_back_to_legacy_cookie(self):
        reader = cookie_reader(accessToken="garbage", userRole="factory1")
        self.assertEqual(get_user_role(reader), "factory1")

    def test_malformed_token_without_legacy_cookie(self):
        self.assertEqual(get_user_role(cookie_reader(accessToken="garbage")), "")

    def test_non_string_user_name_is_ignored(self):
        reader = cookie_reader(accessToken=make_token({"userName": ["admin"]}))
        self.assertEqual(get_user_role(reader), "")

    @patch("dashboard.core.rbac.load_cookie")
    def test_default_reader_is_cookie_store(self, mock_load_cookie):
        mock_load_cookie.side_effect = {"accessToken": make_token({"userName": "factory5"})}.get
        self.assertEqual(get_user_role(), "factory5")


class TestRolePermissions(unittest.TestCase):

    def test_admin_has_full_access(self):
        reader = role_reader("admin")
        for name in [None, Component.GAZA_CENTER, "anything at all", ""]:
            with self.subTest(name=name):
                self.assertEqual(get_role_permissions(name, reader=reader), GRANTED_ALL)

    def test_unknown_roles_are_denied(self):
        for role in ["factory9", "user", "ADMIN", "Admin ", ""]:
            for name in [None, Component.BALLINA_WORKERS, "حساب تجار سنتر غزة"]:
                with self.subTest(role=role, name=name):
                    self.assertEqual(get_role_permissions(name, reader=role_reader(role)), DENIED)

    def test_factory3_merchants(self):
        reader = role_reader("factory3")
        self.assertTrue(get_role_permissions("حسابات تجار سنتر دلع الهوانم", reader=reader).can_access)
        self.assertFalse(get_role_permissions("سنتر دلع الهوانم", reader=reader).can_access)

    def test_factory5_gaza_traders_read_only(self):
        permissions = get_role_permissions("حساب تجار سنتر غزة", reader=role_reader("factory5"))
        self.assertEqual(permissions, RolePermissions(can_access=True, can_edit=False, can_delete=False))

    def test_factory_roles_never_edit_or_delete(self):
        for role in ["factory1", "factory2", "factory3", "factory4", "factory5"]:
            for component in Component:
                with self.subTest(role=role, component=component):
                    permissions = resolve_permissions(role, component)
                    self.assertFalse(permissions.can_edit)
                    self.assertFalse(permissions.can_delete)

    def test_missing_component_is_denied(self):
        self.assertEqual(get_role_permissions(reader=role_reader("factory1")), DENIED)

    def test_names_are_matched_exactly(self):
        reader = role_reader("factory1")
        self.assertTrue(get_role_permissions("حساب عمال البلينا", reader=reader).can_access)
        self.assertFalse(get_role_permissions(" حساب عمال البلينا", reader=reader).can_access)
        self.assertFalse(get_role_permissions("حساب عمال البلينا ", reader=reader).can_access)

    def test_enum_and_label_agree(self):
        self.assertEqual(
            resolve_permissions("factory2", Component.GIRGA_SALES),
            resolve_permissions("factory2", "مبيعات جرجا مول العرب"),
        )

    def test_other_factory_sections_are_denied(self):
        self.assertFalse(resolve_permissions("factory1", Component.GAZA_SALES).can_access)
        self.assertFalse(resolve_permissions("factory5", Component.BALLINA_SALES).can_access)

    def test_idempotent(self):
        reader = role_reader("factory2")
        first = get_role_permissions(Component.GIRGA_WORKERS, reader=reader)
        second = get_role_permissions(Component.GIRGA_WORKERS, reader=reader)
        self.assertEqual(first, second)

    def test_token_change_takes_effect_on_next_call(self):
        cookies = {"accessToken": make_token({"userName": "factory1"})}
        self.assertFalse(get_role_permissions(Component.GAZA_SALES, reader=cookies.get).can_access)
        cookies["accessToken"] = make_token({"userName": "factory5"})
        self.assertTrue(get_role_permissions(Component.GAZA_SALES, reader=cookies.get).can_access)

    def test_has_edit_delete_permission(self):
        self.assertTrue(has_edit_delete_permission(role_reader("admin")))
        self.assertFalse(has_edit_delete_permission(role_reader("factory1")))
        self.assertFalse(has_edit_delete_permission(cookie_reader()))


class TestVisibility(unittest.TestCase):

    def test_factory2_mall_is_hidden(self):
        reader = role_reader("factory2")
        self.assertFalse(should_show_component("جرجا معرض مول العرب", reader=reader))
        self.assertTrue(should_show_component("some unrelated screen", reader=reader))
        self.assertTrue(should_show_component(Component.GIRGA_SALES, reader=reader))

    def test_admin_sees_everything(self):
        reader = role_reader("admin")
        for component in Component:
            self.assertTrue(should_show_component(component, reader=reader))

    def test_unknown_role_sees_unrestricted(self):
        self.assertTrue(should_show_component(Component.GAZA_CENTER, reader=cookie_reader()))

    def test_restricted_components(self):
        self.assertEqual(
            get_restricted_components(reader=role_reader("factory4")),
            frozenset({Component.SIMA_CENTER}),
        )
        self.assertEqual(get_restricted_components(reader=role_reader("admin")), frozenset())
        self.assertEqual(get_restricted_components(reader=cookie_reader()), frozenset())

    def test_component_state(self):
        self.assertIs(component_state("factory1", Component.BALLINA_SHOWROOM), ComponentState.HIDDEN)
        self.assertIs(component_state("factory1", Component.BALLINA_SALES), ComponentState.VISIBLE_UNLOCKED)
        self.assertIs(component_state("factory1", Component.GAZA_SALES), ComponentState.VISIBLE_LOCKED)
        self.assertIs(component_state("admin", Component.BALLINA_SHOWROOM), ComponentState.VISIBLE_UNLOCKED)


class TestAccessPolicy(unittest.TestCase):

    def test_classify(self):
        self.assertIs(DEFAULT_POLICY.classify("admin"), RoleKind.ADMIN)
        self.assertIs(DEFAULT_POLICY.classify("factory3"), RoleKind.NAMED)
        self.assertIs(DEFAULT_POLICY.classify("factory6"), RoleKind.UNKNOWN)
        self.assertIs(DEFAULT_POLICY.classify(""), RoleKind.UNKNOWN)

    def test_tables_are_read_only(self):
        with self.assertRaises(TypeError):
            DEFAULT_POLICY.access["factory1"] = frozenset()
        self.assertIsInstance(DEFAULT_POLICY.access["factory1"], frozenset)

    def test_admin_row_is_rejected(self):
        with self.assertRaises(ValueError):
            AccessPolicy(access={"admin": [Component.GAZA]}, restricted={})

    def test_unknown_component_is_rejected(self):
        with self.assertRaises(ValueError):
            AccessPolicy(access={"factory1": ["حساب عمال البلينا", "typo"]}, restricted={})
        with self.assertRaises(ValueError):
            AccessPolicy(access={}, restricted={"factory1": ["typo"]})

    def test_labels_are_accepted(self):
        policy = AccessPolicy(access={"clerk": ["سنتر غزة للحسابات"]}, restricted={})
        self.assertTrue(resolve_permissions("clerk", Component.GAZA, policy).can_access)
        self.assertFalse(resolve_permissions("factory1", Component.BALLINA, policy).can_access)

    def test_default_policy_has_no_drift(self):
        self.assertEqual(DEFAULT_POLICY.drift(), [])

    def test_drift_reports_locked_and_hidden_entries(self):
        policy = AccessPolicy(
            access={"factory1": [Component.BALLINA, Component.BALLINA_WORKERS, Component.BALLINA_SHOWROOM]},
            restricted={"factory1": [Component.BALLINA_SHOWROOM]},
        )
        drift = {(entry.component, entry.state) for entry in policy.drift(SECTIONS)}
        self.assertIn((Component.BALLINA_SHOWROOM, ComponentState.HIDDEN), drift)
        self.assertIn((Component.BALLINA_TRADERS, ComponentState.VISIBLE_LOCKED), drift)
        self.assertIn((Component.BALLINA_SALES, ComponentState.VISIBLE_LOCKED), drift)
        self.assertNotIn((Component.BALLINA_WORKERS, ComponentState.VISIBLE_UNLOCKED), drift)


if __name__ == "__main__":
    unittest.main()
