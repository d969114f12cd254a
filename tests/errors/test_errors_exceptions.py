import unittest

from boxdrive.errors.exceptions import (
    STATUS_TO_KIND,
    AccountExceededError,
    BoxError,
    BoxStatusError,
    ErrorKind,
    GenericError,
    InvalidInputError,
    NotAuthorizedError,
    UnknownError,
    classify,
    exception_for,
    map_status_error,
)

EXPECTED_TABLE = {
    "application_restricted": ErrorKind.RESTRICTED,
    "wrong_input": ErrorKind.INVALID_INPUT,
    "Wrong input params": ErrorKind.INVALID_INPUT,
    "wrong input params": ErrorKind.INVALID_INPUT,
    "e_input_params": ErrorKind.INVALID_INPUT,
    "not_logged_in": ErrorKind.NOT_AUTHORIZED,
    "wrong auth token": ErrorKind.NOT_AUTHORIZED,
    "e_no_access": ErrorKind.NO_ACCESS,
    "e_access_denied": ErrorKind.NO_ACCESS,
    "access_denied": ErrorKind.NO_ACCESS,
    "email_invalid": ErrorKind.EMAIL_INVALID,
    "email_already_registered": ErrorKind.EMAIL_TAKEN,
    "get_auth_token_error": ErrorKind.GENERIC,
    "e_register": ErrorKind.GENERIC,
    "e_move_node": ErrorKind.GENERIC,
    "e_copy_node": ErrorKind.GENERIC,
    "e_rename_node": ErrorKind.GENERIC,
    "e_set_description": ErrorKind.GENERIC,
    "get_comments_error": ErrorKind.GENERIC,
    "add_comment_error": ErrorKind.GENERIC,
    "delete_comment_error": ErrorKind.GENERIC,
    "share_error": ErrorKind.GENERIC,
    "unshare_error": ErrorKind.GENERIC,
    "private_share_error": ErrorKind.GENERIC,
    "wrong_node": ErrorKind.INVALID_ITEM,
    "e_folder_id": ErrorKind.INVALID_FOLDER,
    "no_parent": ErrorKind.NO_PARENT,
    "invalid_folder_name": ErrorKind.INVALID_NAME,
    "e_no_folder_name": ErrorKind.INVALID_NAME,
    "folder_name_too_big": ErrorKind.INVALID_NAME,
    "upload_invalid_file_name": ErrorKind.INVALID_NAME,
    "e_filename_in_use": ErrorKind.NAME_TAKEN,
    "s_folder_exists": ErrorKind.NAME_TAKEN,
    "upload_some_files_failed": ErrorKind.UPLOAD_FAILED,
    "not_enough_free_space": ErrorKind.ACCOUNT_EXCEEDED,
    "filesize_limit_exceeded": ErrorKind.SIZE_EXCEEDED,
    "file_not_shared": ErrorKind.NOT_SHARED,
    "e_get_user_id": ErrorKind.USER_NOT_FOUND,
}


class TestClassify(unittest.TestCase):
    def test_every_documented_status_maps_to_its_kind(self) -> None:
        for status, kind in EXPECTED_TABLE.items():
            with self.subTest(status=status):
                self.assertIs(classify(status), kind)

    def test_table_has_no_extra_entries(self) -> None:
        self.assertEqual(dict(STATUS_TO_KIND), EXPECTED_TABLE)

    def test_unmapped_statuses_are_unknown(self) -> None:
        for status in ("", "listing_ok", "WRONG_INPUT", "Not_logged_in",
                       " wrong_input", "wrong_input ", "Wrong Input Params"):
            with self.subTest(status=status):
                self.assertIs(classify(status), ErrorKind.UNKNOWN)

    def test_non_string_is_unknown(self) -> None:
        self.assertIs(classify(None), ErrorKind.UNKNOWN)

    def test_table_is_read_only(self) -> None:
        with self.assertRaises(TypeError):
            STATUS_TO_KIND["new_status"] = ErrorKind.GENERIC  # type: ignore[index]


class TestExceptions(unittest.TestCase):
    def test_base_error_keeps_details_and_cause(self) -> None:
        cause = RuntimeError("root")
        err = BoxError("msg", details={"k": "v"}, cause=cause)
        self.assertEqual(str(err), "msg")
        self.assertEqual(err.details["k"], "v")
        self.assertIs(err.cause, cause)

    def test_every_kind_has_an_exception_class(self) -> None:
        for kind in ErrorKind:
            with self.subTest(kind=kind):
                exc_cls = exception_for(kind)
                self.assertTrue(issubclass(exc_cls, BoxStatusError))
                self.assertIs(exc_cls.kind, kind)

    def test_map_status_error_basic(self) -> None:
        err = map_status_error("not_logged_in")
        self.assertIsInstance(err, NotAuthorizedError)
        self.assertEqual(err.status, "not_logged_in")
        self.assertIs(err.kind, ErrorKind.NOT_AUTHORIZED)
        self.assertEqual(err.details["kind"], "NotAuthorized")

        self.assertIsInstance(map_status_error("Wrong input params"), InvalidInputError)
        self.assertIsInstance(map_status_error("e_move_node"), GenericError)
        self.assertIsInstance(map_status_error("not_enough_free_space"), AccountExceededError)

    def test_map_status_error_unknown(self) -> None:
        err = map_status_error("something_new", details={"action": "x"})
        self.assertIsInstance(err, UnknownError)
        self.assertEqual(err.details["action"], "x")
        self.assertEqual(err.details["status"], "something_new")

    def test_map_status_error_keeps_message_and_cause(self) -> None:
        cause = ValueError("x")
        err = map_status_error("wrong_node", message="bad node", cause=cause)
        self.assertEqual(str(err), "bad node")
        self.assertIs(err.cause, cause)


if __name__ == "__main__":
    unittest.main()
