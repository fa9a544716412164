"""Unit tests for content nodes and the visibility value."""

import pydantic
import pytest

from portal_access.content.models import (
    Article,
    ContentTree,
    File,
    Folder,
    InstitutionalArea,
    JobPosting,
    Link,
    Visibility,
    is_active,
    owner,
    parse_node,
    visibility,
)
from portal_access.core.errors import NotFoundError, ValidationError


pytestmark = pytest.mark.unit


class TestVisibility:
    """Tests for the Visibility tagged union."""

    def test_from_stored_sentinel(self):
        """The legacy ['TODOS'] list means every department."""
        assert Visibility.from_stored(["TODOS"]) == Visibility.everyone()

    def test_from_stored_departments(self):
        v = Visibility.from_stored(["OPERACIONAL", "LIDERANÇA"])

        assert not v.all_departments
        assert v.departments == {"OPERACIONAL", "LIDERANÇA"}

    def test_from_stored_empty_is_nobody(self):
        """An empty list is visible to no department."""
        v = Visibility.from_stored([])

        assert not v.all_departments
        assert not v.admits(["OPERACIONAL"])

    def test_from_stored_missing_is_everyone(self):
        """A list that was never stored matches the node default."""
        assert Visibility.from_stored(None) == Visibility.everyone()
        assert Folder(id="f", owner_id="u", visible_departments=None).visibility == (
            Folder(id="g", owner_id="u").visibility
        )

    def test_mixed_list_rejected_in_strict_mode(self):
        """The sentinel is never combined with department names."""
        with pytest.raises(ValidationError):
            Visibility.from_stored(["TODOS", "OPERACIONAL"])

    def test_mixed_list_collapses_when_lenient(self):
        v = Visibility.from_stored(["TODOS", "OPERACIONAL"], strict=False)

        assert v == Visibility.everyone()

    def test_to_stored_round_trip_of_sentinel(self):
        assert Visibility.everyone().to_stored() == ["TODOS"]
        assert Visibility.only("B", "A").to_stored() == ["A", "B"]

    def test_sentinel_cannot_be_a_department(self):
        """Internal values never carry the token as a department name."""
        with pytest.raises(pydantic.ValidationError):
            Visibility.only("TODOS")

    def test_all_and_departments_are_exclusive(self):
        with pytest.raises(pydantic.ValidationError):
            Visibility(all_departments=True, departments=frozenset({"OPERACIONAL"}))

    def test_admits(self):
        v = Visibility.only("OPERACIONAL")

        assert v.admits({"OPERACIONAL", "ADMINISTRATIVA"})
        assert not v.admits({"ADMINISTRATIVA"})
        assert not v.admits(set())
        assert Visibility.everyone().admits(set())


class TestContentNode:
    """Tests for node construction and accessors."""

    def test_stored_visibility_accepted(self):
        """Nodes accept the persisted department list."""
        folder = Folder(id="f1", owner_id="u1", visible_departments=["OPERACIONAL"])

        assert folder.visibility == Visibility.only("OPERACIONAL")

    def test_default_visibility_is_everyone(self):
        article = Article(id="a1", owner_id="u1")

        assert article.visibility.all_departments

    def test_accessors(self):
        area = InstitutionalArea(
            id="i1",
            owner_id="u9",
            visibility=Visibility.only("OPERACIONAL"),
            active=False,
        )

        assert owner(area) == "u9"
        assert visibility(area) == Visibility.only("OPERACIONAL")
        assert is_active(area) is False

    def test_categories(self):
        """Each kind maps to the permission category that guards it."""
        assert Folder.category == File.category == Link.category == "files"
        assert InstitutionalArea.category == "institutional"
        assert JobPosting.category == "jobs"
        assert Article.category == "knowledge"

    def test_flat_items_cannot_have_parents(self):
        with pytest.raises(pydantic.ValidationError):
            JobPosting(id="j1", owner_id="u1", parent_id="f1")

    def test_node_cannot_be_its_own_parent(self):
        with pytest.raises(pydantic.ValidationError):
            Folder(id="f1", owner_id="u1", parent_id="f1")

    def test_nodes_are_immutable(self):
        folder = Folder(id="f1", owner_id="u1")

        with pytest.raises(pydantic.ValidationError):
            folder.owner_id = "u2"

    def test_parse_node_dispatches_on_kind(self):
        node = parse_node(
            {
                "kind": "link",
                "id": "l1",
                "owner_id": "u1",
                "url": "https://intranet.example.com",
                "visible_departments": ["TODOS"],
            }
        )

        assert isinstance(node, Link)
        assert node.visibility.all_departments


class TestContentTree:
    """Tests for ContentTree structural queries."""

    @pytest.fixture
    def tree(self) -> ContentTree:
        return ContentTree(
            [
                Folder(id="root", owner_id="u1"),
                Folder(id="docs", owner_id="u1", parent_id="root"),
                Folder(id="hr", owner_id="u2", parent_id="docs"),
                File(id="policy", owner_id="u2", parent_id="hr"),
                Link(id="portal", owner_id="u1", parent_id="root"),
                Article(id="a1", owner_id="u1"),
            ]
        )

    def test_ancestors_from_parent_to_root(self, tree: ContentTree):
        ids = [f.id for f in tree.ancestors(tree.get("policy"))]

        assert ids == ["hr", "docs", "root"]

    def test_root_has_no_ancestors(self, tree: ContentTree):
        assert tree.ancestors(tree.get("root")) == []

    def test_flat_items_have_no_ancestors(self, tree: ContentTree):
        assert tree.ancestors(tree.get("a1")) == []

    def test_children(self, tree: ContentTree):
        assert [n.id for n in tree.children("root")] == ["docs", "portal"]
        assert [n.id for n in tree.children(None)] == ["root"]

    def test_get_missing_node(self, tree: ContentTree):
        with pytest.raises(NotFoundError):
            tree.get("missing")

    def test_duplicate_ids_rejected(self, tree: ContentTree):
        with pytest.raises(ValidationError):
            tree.add(Folder(id="docs", owner_id="u3"))

    def test_cycle_detected(self):
        tree = ContentTree(
            [
                Folder(id="a", owner_id="u1", parent_id="b"),
                Folder(id="b", owner_id="u1", parent_id="a"),
            ]
        )

        with pytest.raises(ValidationError, match="cycle"):
            tree.ancestors(tree.get("a"))

    def test_parent_must_be_folder(self):
        tree = ContentTree(
            [
                File(id="f", owner_id="u1"),
                File(id="g", owner_id="u1", parent_id="f"),
            ]
        )

        with pytest.raises(ValidationError, match="not a folder"):
            tree.ancestors(tree.get("g"))

    def test_len_and_contains(self, tree: ContentTree):
        assert len(tree) == 6
        assert "hr" in tree
        assert "missing" not in tree
