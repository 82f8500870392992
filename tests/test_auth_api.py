"""API tests for registration (admin bootstrap, duplicates) and login."""

from support import PASSWORD, ApiTestCase

from app.models import User


class TestRegister(ApiTestCase):
    """POST /api/auth/register."""

    def test_first_user_is_admin(self) -> None:
        res = self.register("johndoe", "john@example.com", passwordHint="my hint")
        self.assertEqual(res.status_code, 201)
        body = res.json()
        self.assertEqual(body["message"], "User registered successfully")
        self.assertIn("id", body["user"])
        self.assertEqual(body["user"]["username"], "johndoe")
        self.assertEqual(body["user"]["email"], "john@example.com")
        self.assertEqual(body["user"]["role"], "admin")
        self.assertNotIn("password", body["user"])
        self.assertNotIn("passwordHash", body["user"])

    def test_second_user_is_user(self) -> None:
        self.register("admin", "admin@example.com")
        res = self.register("janesmith", "jane@example.com")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.json()["user"]["role"], "user")

    def test_only_first_successful_registration_is_admin(self) -> None:
        # A rejected attempt before the first success does not consume the admin slot.
        bad = self.register("ghost", "not-an-email")
        self.assertEqual(bad.status_code, 400)
        roles = []
        for i in range(4):
            res = self.register(f"user{i}", f"user{i}@example.com")
            self.assertEqual(res.status_code, 201)
            roles.append(res.json()["user"]["role"])
            dup = self.register(f"user{i}", f"other{i}@example.com")
            self.assertEqual(dup.status_code, 400)
        self.assertEqual(roles, ["admin", "user", "user", "user"])

    def test_duplicate_username_rejected_and_store_unchanged(self) -> None:
        self.register("alice", "alice@example.com")
        res = self.register("alice", "alice2@example.com")
        self.assertEqual(res.status_code, 400)
        self.assertIn("error", res.json())
        with self.db() as db:
            self.assertEqual(db.query(User).count(), 1)
            self.assertEqual(db.query(User).one().email, "alice@example.com")

    def test_duplicate_email_rejected(self) -> None:
        self.register("alice", "alice@example.com")
        res = self.register("alice2", "alice@example.com")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(
            res.json()["error"], "User with this email or username already exists"
        )

    def test_missing_field_is_400(self) -> None:
        res = self.client.post(
            "/api/auth/register",
            json={"username": "x", "email": "x@example.com", "password": PASSWORD},
        )
        self.assertEqual(res.status_code, 400)
        self.assertIn("firstName", res.json()["error"])

    def test_short_password_is_400(self) -> None:
        res = self.register("shorty", "shorty@example.com", password="abc")
        self.assertEqual(res.status_code, 400)

    def test_password_is_stored_hashed(self) -> None:
        self.register("alice", "alice@example.com")
        with self.db() as db:
            user = db.query(User).one()
            self.assertNotEqual(user.password_hash, PASSWORD)
            self.assertTrue(user.password_hash.startswith("$2"))


class TestLogin(ApiTestCase):
    """POST /api/auth/login."""

    def setUp(self) -> None:
        super().setUp()
        self.register("alice", "alice@x.com")

    def test_login_with_username(self) -> None:
        res = self.client.post(
            "/api/auth/login", json={"username": "alice", "password": PASSWORD}
        )
        self.assertEqual(res.status_code, 200)
        body = res.json()
        self.assertTrue(body["token"])
        user = body["user"]
        self.assertEqual(user["username"], "alice")
        self.assertEqual(user["role"], "admin")
        self.assertEqual(user["firstName"], "Test")
        self.assertIn("profileImageUrl", user)
        self.assertNotIn("password", user)
        self.assertNotIn("passwordHash", user)

    def test_login_with_email_in_username_field(self) -> None:
        res = self.client.post(
            "/api/auth/login", json={"username": "alice@x.com", "password": PASSWORD}
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["user"]["username"], "alice")

    def test_login_with_email_field(self) -> None:
        res = self.client.post(
            "/api/auth/login", json={"email": "alice@x.com", "password": PASSWORD}
        )
        self.assertEqual(res.status_code, 200)

    def test_wrong_password_and_unknown_user_give_identical_error(self) -> None:
        wrong = self.client.post(
            "/api/auth/login", json={"username": "alice", "password": "wrong-password"}
        )
        unknown = self.client.post(
            "/api/auth/login", json={"username": "nobody", "password": PASSWORD}
        )
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(wrong.json(), unknown.json())
        self.assertEqual(wrong.json(), {"error": "Invalid credentials"})

    def test_missing_identifier_is_400(self) -> None:
        res = self.client.post("/api/auth/login", json={"password": PASSWORD})
        self.assertEqual(res.status_code, 400)

    def test_out_of_range_passwords_give_the_uniform_401(self) -> None:
        unknown = self.client.post(
            "/api/auth/login", json={"username": "nobody", "password": PASSWORD}
        )
        for password in ("", "x" * 129):
            with self.subTest(length=len(password)):
                res = self.client.post(
                    "/api/auth/login", json={"username": "alice", "password": password}
                )
                self.assertEqual(res.status_code, 401)
                self.assertEqual(res.json(), {"error": "Invalid credentials"})
                self.assertEqual(res.json(), unknown.json())
