import itertools
import unittest

from pathstore.core.errors import PermissionDenied, ValidationError
from pathstore.core.permission import Permission
from pathstore.core.store import Store


class TestStoreReadWrite(unittest.TestCase):
    def test_round_trip_primitives(self) -> None:
        store = Store()
        for i, value in enumerate(["text", 42, 3.5, True, False, None]):
            path = f"k{i}:leaf"
            self.assertEqual(store.write(path, value), value)
            self.assertEqual(store.read(path), value)

    def test_auto_vivification(self) -> None:
        store = Store()
        store.write("a:b:c", 5)
        self.assertIsInstance(store.read("a"), Store)
        self.assertIsInstance(store.read("a:b"), Store)
        self.assertEqual(store.read("a:b:c"), 5)

    def test_nested_container_defaults_to_rw(self) -> None:
        store = Store(default_policy="r", permissions={"a": "rw"})
        store.write("a:b:c", 1)
        child = store.read("a")
        self.assertEqual(child.default_policy, Permission.RW)

    def test_rewrite_keeps_sibling_data(self) -> None:
        store = Store()
        store.write("a:b:c", 1)
        store.write("a:b:d", 2)
        first = store.read("a:b")
        store.write("a:b:c", 3)
        self.assertIs(store.read("a:b"), first)
        self.assertEqual(store.read("a:b:c"), 3)
        self.assertEqual(store.read("a:b:d"), 2)

    def test_missing_key_reads_none(self) -> None:
        store = Store()
        self.assertIsNone(store.read("missing"))
        self.assertIsNone(store.read("missing:deeper:still"))

    def test_read_through_primitive_returns_none(self) -> None:
        # Traversing into a non-container is permissive: no error, no attribute access.
        store = Store()
        store.write("name", "abc")
        self.assertIsNone(store.read("name:upper"))
        self.assertIsNone(store.read("name:__class__"))

    def test_intermediate_primitive_is_overwritten(self) -> None:
        store = Store()
        store.write("a", 1)
        store.write("a:b", 2)
        self.assertIsInstance(store.read("a"), Store)
        self.assertEqual(store.read("a:b"), 2)

    def test_dict_value_is_materialized_as_store(self) -> None:
        store = Store()
        stored = store.write("user", {"name": "Ada", "address": {"city": "London"}})
        self.assertIsInstance(stored, Store)
        self.assertIsInstance(store.read("user:address"), Store)
        self.assertEqual(store.read("user:name"), "Ada")
        self.assertEqual(store.read("user:address:city"), "London")

    def test_list_value_is_materialized_with_index_keys(self) -> None:
        store = Store()
        store.write("tags", ["a", "b"])
        self.assertIsInstance(store.read("tags"), Store)
        self.assertEqual(store.read("tags:0"), "a")
        self.assertEqual(store.read("tags:1"), "b")
        self.assertIsNone(store.read("tags:2"))

    def test_existing_store_value_passes_through(self) -> None:
        store = Store()
        inner = Store(default_policy="r")
        self.assertIs(store.write("inner", inner), inner)
        self.assertIs(store.read("inner"), inner)

    def test_thunk_is_resolved_on_every_read(self) -> None:
        counter = itertools.count()
        store = Store()
        store.write("tick", lambda: next(counter))
        self.assertEqual(store.read("tick"), 0)
        self.assertEqual(store.read("tick"), 1)
        self.assertNotEqual(store.read("tick"), store.read("tick"))

    def test_thunk_returning_store_is_traversed(self) -> None:
        child = Store()
        child.write("value", "deep")
        store = Store()
        store.write("lazy", lambda: child)
        self.assertEqual(store.read("lazy:value"), "deep")

    def test_write_returns_thunk_unchanged(self) -> None:
        store = Store()

        def thunk():
            return 1

        self.assertIs(store.write("f", thunk), thunk)
        self.assertIs(store.entries()["f"], thunk)

    def test_write_entries_writes_each_key(self) -> None:
        store = Store()
        store.write_entries({"a": 1, "b:c": 2, "d": {"e": 3}})
        self.assertEqual(store.read("a"), 1)
        self.assertEqual(store.read("b:c"), 2)
        self.assertEqual(store.read("d:e"), 3)

    def test_invalid_paths_are_rejected(self) -> None:
        store = Store()
        for path in ("", "a::b", ":a", "a:"):
            with self.assertRaises(ValidationError) as cm:
                store.read(path)
            self.assertEqual(cm.exception.code, "path.invalid")
            with self.assertRaises(ValidationError):
                store.write(path, 1)


class TestStorePermissions(unittest.TestCase):
    def test_write_denied_leaves_storage_unchanged(self) -> None:
        store = Store(default_policy="none")
        with self.assertRaises(PermissionDenied) as cm:
            store.write("secret", 1)
        err = cm.exception
        self.assertEqual(err.operation, "write")
        self.assertEqual(err.key, "secret")
        self.assertEqual(err.path, "secret")
        self.assertEqual(err.code, "permission.denied")
        self.assertEqual(store.entries(), {})

    def test_read_denied(self) -> None:
        store = Store(permissions={"hidden": "w"})
        store.write("hidden", 1)
        with self.assertRaises(PermissionDenied) as cm:
            store.read("hidden")
        self.assertEqual(cm.exception.operation, "read")
        self.assertEqual(str(cm.exception), "permission.denied: Read access denied for key: hidden in path: hidden")

    def test_read_checks_every_segment(self) -> None:
        inner = Store(permissions={"b": "none"})
        store = Store()
        store.write("a", inner)
        with self.assertRaises(PermissionDenied) as cm:
            store.read("a:b:c")
        self.assertEqual(cm.exception.key, "b")
        self.assertEqual(cm.exception.path, "a:b:c")

    def test_read_denied_even_for_missing_key(self) -> None:
        store = Store(default_policy="w")
        with self.assertRaises(PermissionDenied):
            store.read("nothing")

    def test_intermediate_store_skips_write_check(self) -> None:
        store = Store(default_policy="rw", permissions={"a": "r"})
        store._storage["a"] = Store()
        store.write("a:b", 1)
        self.assertEqual(store.read("a:b"), 1)

    def test_intermediate_write_denied(self) -> None:
        store = Store(default_policy="r")
        with self.assertRaises(PermissionDenied) as cm:
            store.write("a:b", 1)
        self.assertEqual(cm.exception.operation, "write")
        self.assertEqual(cm.exception.key, "a")
        self.assertEqual(cm.exception.path, "a:b")
        self.assertEqual(store.entries(), {})

    def test_denied_in_nested_store_guard(self) -> None:
        store = Store()
        store.write("locked", Store(default_policy="r"))
        with self.assertRaises(PermissionDenied) as cm:
            store.write("locked:x", 1)
        self.assertEqual(cm.exception.key, "x")
        self.assertEqual(store.read("locked").entries(), {})

    def test_write_entries_aborts_without_rollback(self) -> None:
        store = Store(default_policy="rw", permissions={"b": "r"})
        with self.assertRaises(PermissionDenied):
            store.write_entries({"a": 1, "b": 2, "c": 3})
        self.assertEqual(store.read("a"), 1)
        self.assertIsNone(store.read("b"))
        self.assertIsNone(store.read("c"))

    def test_read_only_default_with_rw_override(self) -> None:
        store = Store(default_policy="r", permissions={"x": "rw"})
        store.write("x:y", True)
        self.assertIs(store.read("x:y"), True)
        with self.assertRaises(PermissionDenied):
            store.write("z", 1)

    def test_allowed_to_read_and_write(self) -> None:
        store = Store(default_policy="none", permissions={"a": "r", "b": "w"})
        self.assertTrue(store.allowed_to_read("a"))
        self.assertFalse(store.allowed_to_write("a"))
        self.assertFalse(store.allowed_to_read("b"))
        self.assertTrue(store.allowed_to_write("b"))
        self.assertFalse(store.allowed_to_read("c"))


if __name__ == "__main__":
    unittest.main()
