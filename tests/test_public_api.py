import unittest

import boxdrive


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(boxdrive, "BoxAccount"))
        self.assertTrue(hasattr(boxdrive, "BoxController"))
        self.assertTrue(hasattr(boxdrive, "AuthInfo"))

        self.assertTrue(hasattr(boxdrive, "Folder"))
        self.assertTrue(hasattr(boxdrive, "File"))
        self.assertTrue(hasattr(boxdrive, "NOT_APPLICABLE"))

        self.assertTrue(hasattr(boxdrive, "BoxError"))
        self.assertTrue(hasattr(boxdrive, "ErrorKind"))
        self.assertTrue(hasattr(boxdrive, "classify"))

    def test___all___is_defined(self) -> None:
        self.assertTrue(hasattr(boxdrive, "__all__"))
        self.assertIn("BoxAccount", boxdrive.__all__)
        self.assertIn("BoxError", boxdrive.__all__)
        for name in boxdrive.__all__:
            self.assertTrue(hasattr(boxdrive, name), name)


if __name__ == "__main__":
    unittest.main()
