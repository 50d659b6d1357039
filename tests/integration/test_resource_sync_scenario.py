"""Integration tests for saving resources through ResourceRepository.

These tests drive the public save surface end to end against the in-memory
item store: bootstrap, lookup, create or update, content write and bucket
placement.
"""

from src.item_store import fields
from src.item_store.store import InMemoryItemStore
from src.resource_sync.models import ContentWritePolicy, RepositoryConfig
from src.resource_sync.repository import ResourceRepository
from tests.fixtures.sample_resources import (
    REPOSITORY_PATH,
    SAMPLE_MIME_TYPES,
    make_resource,
    payload,
)


def media_items(store, root):
    """Return every item below root that carries an external id."""
    found = []
    pending = [root]
    while pending:
        current = pending.pop()
        for child in store.get_children(current):
            if child.get_field(fields.EXTERNAL_ID) is not None:
                found.append(child)
            pending.append(child)
    return found


class TestLogoScenario:
    """A logo saved into an empty repository and then saved again."""

    def test_first_save_creates_one_item_in_bucket(self, repository, store):
        """One item 'Logo' under its planned bucket with a 17 byte png stream."""
        resource = make_resource(external_id="ext-1", name="Logo", mime_type="image/png", size=17)

        repository.save(resource)

        root = store.get_item(REPOSITORY_PATH)
        items = media_items(store, root)
        target = repository.planner.plan_parent(root, resource)
        assert len(items) == 1
        item = items[0]
        assert item.name == "Logo"
        assert store.get_parent(item).path == target.path
        assert len(target.segments) == 2
        assert item.get_field(fields.EXTENSION) == "png"
        assert item.get_field(fields.SIZE) == "17"
        assert item.get_field(fields.BLOB) == payload(17)

    def test_second_save_updates_same_item(self, repository, store):
        """Saving with a 9 byte payload rewrites the stream of the same item."""
        repository.save(make_resource(size=17))
        root = store.get_item(REPOSITORY_PATH)
        first = media_items(store, root)[0]
        count = len(store)

        repository.save(make_resource(size=9))

        items = media_items(store, root)
        assert len(store) == count
        assert [item.item_id for item in items] == [first.item_id]
        assert items[0].name == "Logo"
        assert items[0].get_field(fields.SIZE) == "9"
        assert items[0].get_field(fields.BLOB) == payload(9)


class TestRepositoryProperties:
    """Behavior across several saves through the public surface."""

    def test_identical_saves_equal_one_save(self, repository, store):
        """Two identical saves leave the same tree as one save."""
        resource = make_resource()
        repository.save(resource)
        root = store.get_item(REPOSITORY_PATH)
        item = media_items(store, root)[0]
        snapshot = (len(store), item.name, item.parent_id, dict(item.fields))

        repository.save(resource)

        assert (len(store), item.name, item.parent_id, dict(item.fields)) == snapshot

    def test_renamed_resource_keeps_its_item(self, repository, store):
        """A new name for the same external id renames rather than duplicates."""
        repository.save(make_resource(name="Logo"))
        repository.save(make_resource(name="Logo 2026"))

        items = media_items(store, store.get_item(REPOSITORY_PATH))
        assert [item.name for item in items] == ["Logo 2026"]

    def test_distinct_resources_get_distinct_items(self, repository, store):
        """Each external id maps to its own item."""
        for index in range(5):
            repository.save(make_resource(external_id=f"ext-{index}", name=f"Asset {index}"))

        items = media_items(store, store.get_item(REPOSITORY_PATH))
        assert len(items) == 5
        assert len({item.item_id for item in items}) == 5

    def test_misplaced_item_is_moved_back(self, repository, store):
        """An item moved out of its bucket returns there on the next save."""
        resource = make_resource()
        repository.save(resource)
        root = store.get_item(REPOSITORY_PATH)
        item = media_items(store, root)[0]
        stray = store.create_item("stray", root, "common/folder")
        store.move_item(item, stray)

        repository.save(resource)
        parent_after_fix = item.parent_id
        repository.save(resource)

        target = repository.planner.plan_parent(root, resource)
        assert store.get_parent(item).path == target.path
        assert item.parent_id == parent_after_fix

    def test_unregistered_mime_type_has_no_extension(self, repository, store):
        """Types outside the registry are stored without extension."""
        repository.save(make_resource(mime_type="text/plain"))

        item = media_items(store, store.get_item(REPOSITORY_PATH))[0]
        assert item.get_field(fields.EXTENSION) == ""

    def test_image_wildcard_uses_default_extension(self, repository, store):
        """Images without an exact mapping fall back to the default extension."""
        repository.save(make_resource(mime_type="image/unknown-x"))

        item = media_items(store, store.get_item(REPOSITORY_PATH))[0]
        assert item.get_field(fields.EXTENSION) == "jpg"


class TestFlatRepository:
    """A zero bucket depth files items directly under the root."""

    def test_items_live_under_root(self, fixed_clock):
        store = InMemoryItemStore()
        config = RepositoryConfig(
            repository_path=REPOSITORY_PATH,
            repository_template_id="resource-repository",
            bucket_depth=0,
            content_write_policy=ContentWritePolicy.LOG,
            mime_types=dict(SAMPLE_MIME_TYPES),
        )
        repository = ResourceRepository(store, config, clock=fixed_clock)

        repository.save(make_resource())

        root = store.get_item(REPOSITORY_PATH)
        assert [child.name for child in store.get_children(root)] == ["Logo"]
