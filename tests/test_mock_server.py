import unittest
from datetime import timedelta

from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine, select
from sqlalchemy.pool import StaticPool

from dashboard.core.tokens import decode_token
from mock_server.auth.service import create_access_token
from mock_server.core.database import get_session
from mock_server.core.init_db import dev_password, seed_users
from mock_server.main import app
from mock_server.models.User import User


class TestMockServer(unittest.TestCase):

    def setUp(self):
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        SQLModel.metadata.create_all(self.engine)
        with Session(self.engine) as session:
            seed_users(session)

        def get_test_session():
            with Session(self.engine) as session:
                yield session

        app.dependency_overrides[get_session] = get_test_session
        self.addCleanup(app.dependency_overrides.clear)
        self.client = TestClient(app)

    def sign_in(self, user_name, password=None):
        return self.client.post(
            "/api/sample/auth/signin",
            json={"userName": user_name, "password": password or dev_password(user_name)},
        )

    def auth(self, user_name):
        token = self.sign_in(user_name).json()["accessToken"]
        return {"Authorization": f"Bearer {token}"}

    def test_sign_in_issues_decodable_token(self):
        resp = self.sign_in("factory3")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["role"], "factory")
        self.assertEqual(body["message"], "تم تسجيل الدخول بنجاح")

        claims = decode_token(body["accessToken"])
        self.assertEqual(claims["userName"], "factory3")
        self.assertEqual(claims["role"], "factory")
        self.assertIn("userId", claims)
        self.assertGreater(claims["exp"], claims["iat"])

    def test_sign_in_wrong_password(self):
        resp = self.sign_in("admin", "nope")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "اسم المستخدم أو كلمة المرور غير صحيحة")

    def test_sign_in_unknown_user(self):
        self.assertEqual(self.sign_in("ghost", "ghost123").status_code, 401)

    def test_seed_is_idempotent(self):
        with Session(self.engine) as session:
            seed_users(session)
            self.assertEqual(len(session.exec(select(User)).all()), 6)

    def test_missing_token(self):
        self.assertEqual(self.client.get("/api/worker-account").status_code, 401)

    def test_forged_token_is_rejected(self):
        # Unsigned token claiming admin: accepted by the dashboard decoder, not by the server
        forged = "eyJhbGciOiJIUzI1NiJ9.eyJ1c2VyTmFtZSI6ImFkbWluIn0.forged"
        self.assertEqual(decode_token(forged), {"userName": "admin"})
        resp = self.client.get("/api/worker-account", headers={"Authorization": f"Bearer {forged}"})
        self.assertEqual(resp.status_code, 401)

    def test_expired_token_is_rejected(self):
        with Session(self.engine) as session:
            user = session.exec(select(User).where(User.user_name == "admin")).first()
            token = create_access_token(user, expires_delta=timedelta(minutes=-5))
        resp = self.client.get("/api/worker-account", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 401)

    def test_unknown_ledger(self):
        resp = self.client.get("/api/no-such-ledger", headers=self.auth("admin"))
        self.assertEqual(resp.status_code, 404)

    def test_admin_crud(self):
        headers = self.auth("admin")

        resp = self.client.post(
            "/api/worker-account",
            json={"name": "أحمد", "day": "السبت", "withdrawal": "100"},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 201)
        created = resp.json()
        record_id = created["_id"]
        self.assertEqual(created["name"], "أحمد")
        self.assertIn("createdAt", created)

        resp = self.client.put(f"/api/worker-account/{record_id}", json={"withdrawal": "150"}, headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["withdrawal"], "150")
        self.assertEqual(resp.json()["name"], "أحمد")

        records = self.client.get("/api/worker-account", headers=headers).json()
        self.assertEqual([r["_id"] for r in records], [record_id])

        resp = self.client.delete(f"/api/worker-account/{record_id}", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.client.get("/api/worker-account", headers=headers).json(), [])

    def test_ledgers_are_isolated(self):
        headers = self.auth("admin")
        record_id = self.client.post("/api/worker-account", json={"name": "x"}, headers=headers).json()["_id"]
        self.assertEqual(self.client.get("/api/merchant-account", headers=headers).json(), [])
        resp = self.client.delete(f"/api/merchant-account/{record_id}", headers=headers)
        self.assertEqual(resp.status_code, 404)

    def test_factory_reads_and_adds_in_own_ledgers(self):
        headers = self.auth("factory5")
        resp = self.client.post("/api/center-gaza-sales", json={"name": "تاجر"}, headers=headers)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(len(self.client.get("/api/center-gaza-sales", headers=headers).json()), 1)

    def test_factory_cannot_edit_or_delete(self):
        record_id = self.client.post(
            "/api/center-gaza-sales", json={"name": "تاجر"}, headers=self.auth("admin")
        ).json()["_id"]
        headers = self.auth("factory5")

        resp = self.client.put(f"/api/center-gaza-sales/{record_id}", json={"name": "y"}, headers=headers)
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "غير مخول للوصول إلى هذه الصفحة")
        self.assertEqual(
            self.client.delete(f"/api/center-gaza-sales/{record_id}", headers=headers).status_code, 403
        )

    def test_factory_denied_outside_its_tables(self):
        headers = self.auth("factory5")
        self.assertEqual(self.client.get("/api/center-gaza-account", headers=headers).status_code, 403)
        self.assertEqual(self.client.get("/api/worker-account", headers=headers).status_code, 403)
        resp = self.client.post("/api/worker-account", json={"name": "x"}, headers=headers)
        self.assertEqual(resp.status_code, 403)

    def test_meta_fields_are_not_stored(self):
        headers = self.auth("admin")
        created = self.client.post(
            "/api/worker-account", json={"_id": "mine", "createdAt": "x", "name": "n"}, headers=headers
        ).json()
        self.assertNotEqual(created["_id"], "mine")
        self.assertNotEqual(created["createdAt"], "x")


if __name__ == "__main__":
    unittest.main()
