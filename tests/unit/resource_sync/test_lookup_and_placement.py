"""Unit tests for key resolution, item location and placement planning."""

from unittest.mock import Mock

import pytest

from src.item_store.errors import ItemNotFoundError, ItemStoreUnavailableError
from src.resource_sync.item_locator import ItemLocator
from src.resource_sync.key_resolver import EntityKeyResolver
from src.resource_sync.placement_planner import PlacementPlanner
from tests.fixtures.sample_resources import make_resource


@pytest.fixture
def planner(store):
    return PlacementPlanner(
        store,
        repository_template_id="resource-repository",
        bucket_folder_template_id="bucket-folder",
        bucket_depth=3,
    )


@pytest.fixture
def repo_root(store):
    return store.create_path("/sitecore/media/Resources", "folder", "resource-repository")


class TestEntityKeyResolver:
    """Test cases for EntityKeyResolver.key."""

    def test_same_external_id_same_key(self, repo_root):
        """The key ignores everything but the external id."""
        resolver = EntityKeyResolver()
        first = resolver.key(repo_root, make_resource(name="Logo", mime_type="image/png"))
        second = resolver.key(repo_root, make_resource(name="Renamed", mime_type=None, size=3))

        assert first == second

    def test_different_external_ids_different_keys(self, repo_root):
        """Distinct external ids never share a key."""
        resolver = EntityKeyResolver()
        keys = {resolver.key(repo_root, make_resource(external_id=f"ext-{i}")) for i in range(200)}

        assert len(keys) == 200

    def test_key_is_scoped_to_root(self, store, repo_root):
        """The same external id under two roots yields two keys."""
        other_root = store.create_path("/sitecore/media/Other", "folder", "resource-repository")
        resolver = EntityKeyResolver()
        resource = make_resource()

        assert resolver.key(repo_root, resource) != resolver.key(other_root, resource)

    def test_key_is_hex(self, repo_root):
        """Keys are 32 lowercase hex characters."""
        key = EntityKeyResolver().key(repo_root, make_resource())

        assert len(key) == 32
        int(key, 16)


class TestItemLocator:
    """Test cases for ItemLocator.find."""

    def test_absent_returns_none(self, store, repo_root):
        """A key with no item is reported as None."""
        assert ItemLocator(store).find(repo_root, "0" * 32) is None

    def test_finds_item_below_root(self, store, repo_root):
        """An item with the key anywhere below root is found."""
        bucket = store.create_item("a", repo_root, "bucket-folder")
        item = store.create_item("Logo", bucket, "file", item_id="k1")

        assert ItemLocator(store).find(repo_root, "k1") is item

    def test_item_outside_root_is_absent(self, store, repo_root):
        """Items outside the root do not match."""
        store.create_item("Logo", store.tree_root, "file", item_id="k1")

        assert ItemLocator(store).find(repo_root, "k1") is None

    def test_lookup_failure_propagates(self, repo_root):
        """Store failures are not turned into 'not found'."""
        failing_store = Mock()
        failing_store.get_item_by_id.side_effect = ItemStoreUnavailableError("get_item_by_id")

        with pytest.raises(ItemStoreUnavailableError):
            ItemLocator(failing_store).find(repo_root, "k1")

    def test_find_has_no_side_effects(self, store, repo_root):
        """Lookups never mutate the store."""
        before = store.mutation_count
        ItemLocator(store).find(repo_root, "k1")

        assert store.mutation_count == before


class TestPlacementPlanner:
    """Test cases for PlacementPlanner."""

    def test_plan_uses_key_prefix(self, planner, repo_root):
        """Bucket segments are the leading characters of the key."""
        resource = make_resource()
        key = planner.key_resolver.key(repo_root, resource)

        target = planner.plan_parent(repo_root, resource)

        assert target.segments == tuple(key[:3])
        assert target.path == "/sitecore/media/Resources/" + "/".join(key[:3])
        assert target.root is repo_root

    def test_plan_is_deterministic(self, planner, repo_root):
        """Planning twice yields the same target."""
        resource = make_resource()

        assert planner.plan_parent(repo_root, resource) == planner.plan_parent(repo_root, resource)

    def test_plan_ignores_name(self, planner, repo_root):
        """Renaming a resource does not move its bucket."""
        first = planner.plan_parent(repo_root, make_resource(name="Logo"))
        second = planner.plan_parent(repo_root, make_resource(name="New Logo"))

        assert first.path == second.path

    def test_depth_zero_plans_root(self, store, repo_root):
        """With no bucket levels the root itself is the target."""
        planner = PlacementPlanner(store, "resource-repository", bucket_depth=0)

        target = planner.plan_parent(repo_root, make_resource())

        assert target.segments == ()
        assert target.path == repo_root.path
        assert planner.ensure_container(target) is repo_root

    def test_negative_depth_rejected(self, store):
        """Bucket depth cannot be negative."""
        with pytest.raises(ValueError):
            PlacementPlanner(store, "resource-repository", bucket_depth=-1)

    def test_ensure_container_creates_bucket_folders_once(self, store, planner, repo_root):
        """Bucket folders are created on first use and reused afterwards."""
        target = planner.plan_parent(repo_root, make_resource())

        container = planner.ensure_container(target)
        count = len(store)
        again = planner.ensure_container(target)

        assert container.path == target.path
        assert container.template_id == "bucket-folder"
        assert again is container
        assert len(store) == count

    def test_ensure_container_skips_same_named_media_item(self, store, planner, repo_root):
        """A non-bucket child named like a segment is not used as a bucket."""
        target = planner.plan_parent(repo_root, make_resource())
        impostor = store.create_item(target.segments[0], repo_root, "file")

        container = planner.ensure_container(target)

        assert container.template_id == "bucket-folder"
        assert not store.is_descendant(container, impostor)
        assert store.get_children(impostor) == []

    def test_plan_parent_of_existing_item(self, store, planner, repo_root):
        """Planning from an item climbs to its repository root."""
        resource = make_resource()
        container = planner.ensure_container(planner.plan_parent(repo_root, resource))
        item = store.create_item("Logo", container, "file")

        assert planner.plan_parent_of(item, resource) == planner.plan_parent(repo_root, resource)

    def test_plan_parent_of_item_without_root(self, store, planner):
        """Items outside any repository cannot be planned."""
        item = store.create_item("Logo", store.tree_root, "file")

        with pytest.raises(ItemNotFoundError):
            planner.plan_parent_of(item, make_resource())
