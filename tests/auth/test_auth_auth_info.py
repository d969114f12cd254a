import unittest

from boxdrive.auth import AuthInfo


class TestAuthInfo(unittest.TestCase):
    def test_auth_info_valid(self) -> None:
        info = AuthInfo(api_key="key", auth_token="token")
        self.assertEqual(info.api_key, "key")
        self.assertEqual(info.auth_token, "token")
        self.assertTrue(info.has_token)

    def test_auth_info_token_is_optional(self) -> None:
        info = AuthInfo(api_key="key")
        self.assertIsNone(info.auth_token)
        self.assertFalse(info.has_token)

    def test_auth_info_blank_api_key(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo(api_key="  ")

    def test_auth_info_blank_token(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo(api_key="key", auth_token="")

    def test_auth_info_token_type(self) -> None:
        with self.assertRaises(TypeError):
            AuthInfo(api_key="key", auth_token=123)  # type: ignore[arg-type]

    def test_with_token_returns_copy(self) -> None:
        info = AuthInfo(api_key="key")
        updated = info.with_token("t")
        self.assertIsNone(info.auth_token)
        self.assertEqual(updated.auth_token, "t")
        self.assertEqual(updated.api_key, "key")
        self.assertIsNone(updated.with_token(None).auth_token)


if __name__ == "__main__":
    unittest.main()
