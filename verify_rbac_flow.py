import sys

import requests

from dashboard.core.catalog import iter_ledgers
from dashboard.core.rbac import VALID_ROLES, resolve_permissions
from mock_server.core.init_db import dev_password

BASE_URL = "http://localhost:8000"


def sign_in(user_name):
    response = requests.post(
        f"{BASE_URL}/api/sample/auth/signin",
        json={"userName": user_name, "password": dev_password(user_name)},
    )
    if response.status_code != 200:
        print(f"Sign-in failed for {user_name}: {response.text}")
        sys.exit(1)
    return response.json()["accessToken"]


def verify_rbac_flow():
    """
    Signs in as every seeded role and checks the running mock server
    answers each ledger read the way the dashboard policy predicts.
    """
    failures = 0
    for role in VALID_ROLES:
        print(f"\n--- {role} ---")
        headers = {"Authorization": f"Bearer {sign_in(role)}"}
        for _section, sub, ledger in iter_ledgers():
            expected = resolve_permissions(role, sub.component).can_access
            response = requests.get(f"{BASE_URL}{ledger.endpoint}", headers=headers)
            allowed = response.status_code == 200
            status = "PASS" if allowed == expected else "FAIL"
            if allowed != expected:
                failures += 1
            print(f"{status} {ledger.slug}: expected {expected}, got {response.status_code}")

    if failures:
        print(f"\nFAILURE: {failures} mismatches")
        sys.exit(1)
    print("\nSUCCESS: server decisions match the dashboard policy")


if __name__ == "__main__":
    verify_rbac_flow()
