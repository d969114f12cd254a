import unittest
from datetime import datetime, timezone

from boxdrive.errors import InvalidArgumentError, MalformedResponseError, NotAuthorizedError
from boxdrive.items import NOT_APPLICABLE, File, Folder, Item


class FakeController:
    def __init__(self, snapshots=None, error=None) -> None:
        self.calls = []
        self.snapshots = list(snapshots or [])
        self.error = error

    def get_file_info(self, file_id: str):
        self.calls.append(("get_file_info", file_id))
        if self.error is not None:
            raise self.error
        return self.snapshots.pop(0)

    def rename_item(self, target: str, target_id: str, new_name: str) -> None:
        self.calls.append(("rename_item", target, target_id, new_name))

    def move_item(self, target: str, target_id: str, destination_id: str) -> None:
        self.calls.append(("move_item", target, target_id, destination_id))

    def copy_item(self, target: str, target_id: str, destination_id: str):
        self.calls.append(("copy_item", target, target_id, destination_id))
        return {"status": "s_copy_node"}

    def delete_item(self, target: str, target_id: str) -> None:
        self.calls.append(("delete_item", target, target_id))

    def set_description(self, target: str, target_id: str, description: str) -> None:
        self.calls.append(("set_description", target, target_id, description))


class TestItemLifecycle(unittest.TestCase):
    def test_placeholder_is_not_cached(self) -> None:
        controller = FakeController()
        item = File(controller, None, {"id": 5})

        self.assertEqual(item.id, "5")
        self.assertEqual(item.type, "file")
        self.assertFalse(item.cached_info)
        self.assertEqual(dict(item.attributes), {"id": "5"})
        self.assertEqual(controller.calls, [])

    def test_fragment_is_cached(self) -> None:
        controller = FakeController()
        item = File(controller, None, {"id": "5", "file_name": "a.txt"})

        self.assertTrue(item.cached_info)
        self.assertIs(item.info(), item)
        self.assertEqual(controller.calls, [])

    def test_info_fetches_once_until_refresh(self) -> None:
        controller = FakeController(
            snapshots=[
                {"id": "5", "file_name": "a.txt"},
                {"id": "5", "file_name": "b.txt"},
            ]
        )
        item = File(controller, None, {"id": "5"})

        item.info()
        item.info()
        self.assertEqual(len(controller.calls), 1)
        self.assertEqual(item.name, "a.txt")

        item.info(refresh=True)
        self.assertEqual(len(controller.calls), 2)
        self.assertEqual(item.name, "b.txt")

    def test_info_replaces_snapshot_wholesale(self) -> None:
        controller = FakeController(snapshots=[{"id": "5", "file_name": "a.txt"}])
        item = File(controller, None, {"id": "5", "file_name": "old", "sha1": "abc"})

        item.info(refresh=True)

        self.assertEqual(dict(item.attributes), {"id": "5", "file_name": "a.txt"})

    def test_fetch_errors_propagate_and_leave_item_uncached(self) -> None:
        controller = FakeController(error=NotAuthorizedError("nope", status="not_logged_in"))
        item = File(controller, None, {"id": "5"})

        with self.assertRaises(NotAuthorizedError):
            item.info()
        self.assertFalse(item.cached_info)

    def test_clear_info(self) -> None:
        controller = FakeController(snapshots=[{"id": "5", "file_name": "again"}])
        item = File(controller, None, {"id": "5", "file_name": "a.txt"})

        item.clear_info()
        self.assertFalse(item.cached_info)
        self.assertEqual(dict(item.attributes), {"id": "5"})

        item.info()
        self.assertEqual(len(controller.calls), 1)
        self.assertEqual(item.name, "again")

    def test_force_mark_cached_skips_fetch(self) -> None:
        controller = FakeController()
        item = File(controller, None, {"id": "5"})

        item.force_mark_cached()
        item.info()

        self.assertTrue(item.cached_info)
        self.assertEqual(controller.calls, [])

    def test_update_info_merges_and_marks_cached(self) -> None:
        item = File(FakeController(), None, {"id": "5"})

        item.update_info({"file_name": "a.txt", "size": "3"})
        item.update_info({"size": "4"})

        self.assertTrue(item.cached_info)
        self.assertEqual(dict(item.attributes), {"id": "5", "file_name": "a.txt", "size": "4"})

    def test_update_info_rejects_other_id(self) -> None:
        item = File(FakeController(), None, {"id": "5"})
        with self.assertRaises(MalformedResponseError):
            item.update_info({"id": "6"})

    def test_delete_info_drops_one_entry(self) -> None:
        item = File(FakeController(), None, {"id": "5", "file_name": "a.txt", "size": "3"})

        item.delete_info("size")

        self.assertFalse(item.cached_info)
        self.assertEqual(dict(item.attributes), {"id": "5", "file_name": "a.txt"})

    def test_requires_id(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            File(FakeController(), None, {"file_name": "a.txt"})

    def test_item_is_abstract(self) -> None:
        with self.assertRaises(TypeError):
            Item(FakeController(), None, {"id": "1"})  # type: ignore[abstract]


class TestItemAttributes(unittest.TestCase):
    def test_read_attribute_missing_is_not_applicable(self) -> None:
        controller = FakeController()
        item = File(controller, None, {"id": "5", "file_name": "a.txt"})

        self.assertIs(item.read_attribute("shared_link"), NOT_APPLICABLE)
        self.assertIsNone(item.get("shared_link"))
        self.assertEqual(item.get("shared_link", "-"), "-")
        with self.assertRaises(KeyError):
            item["shared_link"]
        self.assertEqual(controller.calls, [])

    def test_read_attribute_on_placeholder_fetches(self) -> None:
        controller = FakeController(snapshots=[{"id": "5", "file_name": "a.txt", "size": "3"}])
        item = File(controller, None, {"id": "5"})

        self.assertEqual(item["size"], "3")
        self.assertEqual(len(controller.calls), 1)

    def test_properties_are_readable(self) -> None:
        item = File(FakeController(), None, {"id": "5", "file_name": "a.txt"})
        self.assertEqual(item.read_attribute("type"), "file")
        self.assertEqual(item.read_attribute("id"), "5")
        self.assertEqual(item.read_attribute("name"), "a.txt")

    def test_path_and_name(self) -> None:
        controller = FakeController()
        root = Folder(controller, None, {"id": "0", "name": "All Files"})
        docs = Folder(controller, root, {"id": "1", "name": "Docs"})
        item = File(controller, docs, {"id": "5", "file_name": "a.txt"})

        self.assertEqual(root.path, "/")
        self.assertEqual(docs.path, "/Docs")
        self.assertEqual(item.path, "/Docs/a.txt")

    def test_timestamps(self) -> None:
        item = File(
            FakeController(),
            None,
            {"id": "5", "file_name": "a.txt", "created": "1325376000", "updated": "0"},
        )
        self.assertEqual(item.created, datetime(2012, 1, 1, tzinfo=timezone.utc))
        self.assertEqual(item.updated, datetime(1970, 1, 1, tzinfo=timezone.utc))

    def test_snapshot_backed_properties_read_attribute(self) -> None:
        item = File(
            FakeController(),
            None,
            {"id": "5", "file_name": "a.txt", "description": "d", "created": "0"},
        )

        self.assertEqual(item.read_attribute("description"), "d")
        self.assertEqual(item.read_attribute("created"), "0")
        self.assertIs(item.read_attribute("updated"), NOT_APPLICABLE)
        self.assertIsNone(item.updated)
        self.assertEqual(item.get("description"), "d")

    def test_description_on_placeholder_fetches_once(self) -> None:
        controller = FakeController(snapshots=[{"id": "5", "file_name": "a.txt"}])
        item = File(controller, None, {"id": "5"})

        self.assertIsNone(item.description)
        self.assertIsNone(item.created)
        self.assertEqual(len(controller.calls), 1)

    def test_repr_does_not_fetch(self) -> None:
        controller = FakeController()
        item = File(controller, None, {"id": "5"})
        self.assertEqual(repr(item), "File(id='5', name=None)")
        self.assertEqual(controller.calls, [])


class TestItemMutations(unittest.TestCase):
    def setUp(self) -> None:
        self.controller = FakeController()
        self.src = Folder(self.controller, None, {"id": "1", "name": "src"})
        self.dst = Folder(self.controller, None, {"id": "2", "name": "dst"})
        self.src.force_mark_cached()
        self.dst.force_mark_cached()
        self.item = File(self.controller, self.src, {"id": "5", "file_name": "a.txt"})

    def test_rename_updates_snapshot(self) -> None:
        self.item.rename("b.txt")
        self.assertEqual(self.item.name, "b.txt")
        self.assertIn(("rename_item", "file", "5", "b.txt"), self.controller.calls)

    def test_rename_rejects_empty(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            self.item.rename("")

    def test_move_invalidates_both_parents(self) -> None:
        self.item.move(self.dst)

        self.assertIs(self.item.parent, self.dst)
        self.assertFalse(self.src.cached_info)
        self.assertFalse(self.dst.cached_info)
        self.assertIn(("move_item", "file", "5", "2"), self.controller.calls)

    def test_copy_invalidates_destination(self) -> None:
        self.item.copy(self.dst)

        self.assertIs(self.item.parent, self.src)
        self.assertTrue(self.src.cached_info)
        self.assertFalse(self.dst.cached_info)

    def test_delete_invalidates_parent(self) -> None:
        self.item.delete()
        self.assertFalse(self.src.cached_info)
        self.assertIn(("delete_item", "file", "5"), self.controller.calls)

    def test_set_description(self) -> None:
        self.item.set_description("hello")
        self.assertEqual(self.item.description, "hello")


if __name__ == "__main__":
    unittest.main()
