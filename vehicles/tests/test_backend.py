from unittest.mock import MagicMock, patch
import httpx

from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase, override_settings
from supabase import PostgrestAPIError

from vehicles.backend import AuthenticationError, BackendError, SupabaseGateway, build_gateway


class SupabaseGatewayTests(SimpleTestCase):
    """
    O gateway só traduz chamadas para o client do Supabase. Aqui o client é
    um MagicMock e conferimos a cadeia de chamadas montada.
    """

    def setUp(self):
        self.client = MagicMock()
        self.gateway = SupabaseGateway(self.client)

    def test_select_builds_ordered_filtered_query(self):
        query = self.client.table.return_value.select.return_value
        query.eq.return_value = query
        query.order.return_value = query
        query.limit.return_value = query
        query.execute.return_value.data = [{"id": "v1"}]

        rows = self.gateway.select("vehicles", order_by="created_at", ascending=False,
                                   filters={"brand": "Toyota"}, limit=3)

        self.assertEqual(rows, [{"id": "v1"}])
        self.client.table.assert_called_once_with("vehicles")
        query.eq.assert_called_once_with("brand", "Toyota")
        query.order.assert_called_once_with("created_at", desc=True)
        query.limit.assert_called_once_with(3)

    def test_select_one_without_row(self):
        chain = self.client.table.return_value.select.return_value.eq.return_value.maybe_single.return_value
        chain.execute.return_value = None
        self.assertIsNone(self.gateway.select_one("vehicles", "x"))

    def test_update_is_keyed_by_id(self):
        self.gateway.update("vehicles", "v1", {"price": 1.0})
        update = self.client.table.return_value.update
        update.assert_called_once_with({"price": 1.0})
        update.return_value.eq.assert_called_once_with("id", "v1")

    def test_postgrest_error_is_wrapped_verbatim(self):
        self.client.table.return_value.delete.return_value.eq.return_value.execute.side_effect = PostgrestAPIError(
            {"message": "permission denied for table vehicles", "code": "42501"}
        )
        with self.assertRaises(BackendError) as ctx:
            self.gateway.delete("vehicles", "v1")
        self.assertIn("permission denied", ctx.exception.message)

    def test_upload_and_public_url(self):
        bucket = self.client.storage.from_.return_value
        bucket.get_public_url.return_value = "https://x.supabase.co/storage/v1/object/public/vehicle-images/a.jpg"

        path = self.gateway.upload("vehicle-images", "a.jpg", b"123", "image/jpeg")

        self.assertEqual(path, "a.jpg")
        bucket.upload.assert_called_once_with(path="a.jpg", file=b"123", file_options={"content-type": "image/jpeg"})
        self.assertTrue(self.gateway.public_url("vehicle-images", path).endswith("/a.jpg"))

    def test_sign_in_transport_error(self):
        self.client.auth.sign_in_with_password.side_effect = httpx.ConnectError("connection refused")
        with self.assertRaises(AuthenticationError) as ctx:
            self.gateway.sign_in("admin@primemotors.com", "errada123")
        self.assertEqual(ctx.exception.message, "connection refused")

    def test_sign_in_returns_tokens(self):
        response = self.client.auth.sign_in_with_password.return_value
        response.session.access_token = "a"
        response.session.refresh_token = "r"
        response.session.user.id = "user-1"
        response.session.user.email = "admin@primemotors.com"

        session = self.gateway.sign_in("admin@primemotors.com", "segredo123")

        self.assertEqual((session.access_token, session.refresh_token), ("a", "r"))
        self.assertTrue(session.user.is_authenticated)

    def test_sign_up_sends_redirect(self):
        self.gateway.sign_up("novo@primemotors.com", "segredo123", "http://testserver/admin/")
        payload = self.client.auth.sign_up.call_args[0][0]
        self.assertEqual(payload["options"], {"email_redirect_to": "http://testserver/admin/"})

    def test_session_change_listener_translates_session(self):
        received = []
        self.gateway.on_session_change(lambda event, session: received.append((event, session)))
        listener = self.client.auth.on_auth_state_change.call_args[0][0]

        listener("SIGNED_OUT", None)

        self.assertEqual(received, [("SIGNED_OUT", None)])


class BuildGatewayTests(SimpleTestCase):
    @override_settings(SUPABASE_URL="", SUPABASE_ANON_KEY="")
    def test_missing_credentials(self):
        with self.assertRaises(ImproperlyConfigured):
            build_gateway()

    @override_settings(SUPABASE_URL="https://proj.supabase.co", SUPABASE_ANON_KEY="anon")
    @patch("vehicles.backend.create_client")
    def test_creates_client_from_settings(self, mock_create):
        gateway = build_gateway()
        self.assertIs(gateway.client, mock_create.return_value)
        self.assertEqual(mock_create.call_args[0], ("https://proj.supabase.co", "anon"))
