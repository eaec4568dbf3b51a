import unittest
from types import SimpleNamespace
from unittest import mock

from firebase_admin import auth
from google.api_core import exceptions as google_exceptions

from storefront.core.errors import (
    IdentityProviderError,
    InvalidCredentialsError,
    TokenValidationError,
    UserAlreadyExistsError,
    ValidationError,
)
from storefront.store import (
    DocumentMissingError,
    FirebaseIdentityProvider,
    FirestoreDocumentStore,
)


def _snapshot(doc_id, data, exists=True):
    return SimpleNamespace(id=doc_id, exists=exists, to_dict=lambda: data)


class FirestoreDocumentStoreTests(unittest.TestCase):
    def setUp(self):
        self.client = mock.MagicMock()
        self.store = FirestoreDocumentStore(self.client)

    def test_get_returns_none_for_missing_snapshot(self):
        self.client.collection.return_value.document.return_value.get.return_value = (
            _snapshot("p1", None, exists=False)
        )
        self.assertIsNone(self.store.get("products", "p1"))
        self.client.collection.assert_called_with("products")

    def test_list_all_attaches_ids(self):
        self.client.collection.return_value.stream.return_value = [
            _snapshot("a", {"name": "A"}),
            _snapshot("b", {"name": "B"}),
        ]
        self.assertEqual(
            self.store.list_all("products"),
            [("a", {"name": "A"}), ("b", {"name": "B"})],
        )

    def test_add_uses_generated_document_id(self):
        doc_ref = self.client.collection.return_value.document.return_value
        doc_ref.id = "generated"

        self.assertEqual(self.store.add("products", {"name": "A"}), "generated")
        doc_ref.set.assert_called_once_with({"name": "A"})

    def test_add_many_commits_one_batch(self):
        batch = self.client.batch.return_value
        doc_ref = self.client.collection.return_value.document.return_value
        doc_ref.id = "x"

        ids = self.store.add_many("products", [{"name": "A"}, {"name": "B"}])

        self.assertEqual(ids, ["x", "x"])
        self.assertEqual(batch.create.call_count, 2)
        batch.commit.assert_called_once_with()

    def test_update_missing_document(self):
        doc_ref = self.client.collection.return_value.document.return_value
        doc_ref.update.side_effect = google_exceptions.NotFound("no document")

        with self.assertRaises(DocumentMissingError):
            self.store.update("users", "u1", {"lastLoginAt": 1})

    def test_has_any_probes_one_document(self):
        query = self.client.collection.return_value.limit.return_value
        query.get.return_value = []
        self.assertFalse(self.store.has_any("products"))
        self.client.collection.return_value.limit.assert_called_with(1)

        query.get.return_value = [_snapshot("a", {})]
        self.assertTrue(self.store.has_any("products"))


class FirebaseIdentityProviderTests(unittest.TestCase):
    def setUp(self):
        self.app = object()
        self.session = mock.MagicMock()
        self.provider = FirebaseIdentityProvider(
            self.app,
            web_api_key="web-key",
            identity_toolkit_url="https://identity.test/v1/",
            session=self.session,
        )

    def test_create_user_maps_record(self):
        user = SimpleNamespace(
            uid="u1",
            email="ada@example.com",
            display_name="Ada",
            photo_url=None,
            phone_number=None,
        )
        with mock.patch.object(auth, "create_user", return_value=user) as create_user:
            record = self.provider.create_user("ada@example.com", "secret1", "Ada")

        self.assertEqual(record.uid, "u1")
        self.assertEqual(record.display_name, "Ada")
        self.assertIs(create_user.call_args.kwargs["app"], self.app)

    def test_create_user_duplicate_email(self):
        error = auth.EmailAlreadyExistsError("exists", None, None)
        with mock.patch.object(auth, "create_user", side_effect=error):
            with self.assertRaises(UserAlreadyExistsError):
                self.provider.create_user("ada@example.com", "secret1")

    def test_create_user_invalid_argument(self):
        with mock.patch.object(auth, "create_user", side_effect=ValueError("bad phone")):
            with self.assertRaises(ValidationError):
                self.provider.create_user("ada@example.com", "secret1", phone_number="x")

    def test_get_user_not_found(self):
        with mock.patch.object(auth, "get_user", side_effect=auth.UserNotFoundError("gone")):
            self.assertIsNone(self.provider.get_user("u1"))

    def test_verify_id_token_checks_revocation(self):
        with mock.patch.object(
            auth, "verify_id_token", return_value={"uid": "u1"}
        ) as verify:
            self.assertEqual(self.provider.verify_id_token("tok"), "u1")
        self.assertTrue(verify.call_args.kwargs["check_revoked"])

    def test_verify_id_token_errors(self):
        for error in (
            auth.InvalidIdTokenError("bad"),
            auth.RevokedIdTokenError("revoked"),
            ValueError("malformed"),
        ):
            with self.subTest(error=type(error).__name__):
                with mock.patch.object(auth, "verify_id_token", side_effect=error):
                    with self.assertRaises(TokenValidationError):
                        self.provider.verify_id_token("tok")

    def test_verify_id_token_lets_certificate_outage_through(self):
        error = auth.CertificateFetchError("keys unavailable", None)
        with mock.patch.object(auth, "verify_id_token", side_effect=error):
            with self.assertRaises(auth.CertificateFetchError):
                self.provider.verify_id_token("tok")

    def test_revoke_unknown_user(self):
        with mock.patch.object(
            auth, "revoke_refresh_tokens", side_effect=auth.UserNotFoundError("gone")
        ):
            with self.assertRaises(IdentityProviderError):
                self.provider.revoke_refresh_tokens("u1")

    def test_sign_in_with_password(self):
        self.session.post.return_value = mock.MagicMock(
            status_code=200,
            json=lambda: {
                "localId": "u1",
                "idToken": "id-token",
                "refreshToken": "refresh",
                "expiresIn": "3600",
            },
        )

        result = self.provider.sign_in_with_password("ada@example.com", "secret1")

        self.assertEqual(result.uid, "u1")
        self.assertEqual(result.id_token, "id-token")
        args, kwargs = self.session.post.call_args
        self.assertEqual(args[0], "https://identity.test/v1/accounts:signInWithPassword")
        self.assertEqual(kwargs["params"], {"key": "web-key"})
        self.assertTrue(kwargs["json"]["returnSecureToken"])

    def test_sign_in_with_bad_password(self):
        self.session.post.return_value = mock.MagicMock(
            status_code=400,
            json=lambda: {"error": {"message": "INVALID_PASSWORD"}},
        )

        with self.assertRaises(InvalidCredentialsError) as ctx:
            self.provider.sign_in_with_password("ada@example.com", "wrong!")
        self.assertEqual(ctx.exception.error_code, "INVALID_PASSWORD")

    def test_sign_in_requires_web_api_key(self):
        provider = FirebaseIdentityProvider(self.app, session=self.session)
        with self.assertRaises(RuntimeError):
            provider.sign_in_with_password("ada@example.com", "secret1")
        self.session.post.assert_not_called()


if __name__ == "__main__":
    unittest.main()
