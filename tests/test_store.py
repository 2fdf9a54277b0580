from __future__ import annotations

from work_protocol.models import CommitGroup, CommitInfo, Repository
from work_protocol.store import SelectionStore


def _store_with_repos() -> SelectionStore:
    store = SelectionStore()
    store.set_repositories([
        Repository(id="1", full_name="org/a"),
        Repository(id="2", full_name="org/b"),
        Repository(id="3", full_name="org/c"),
    ])
    return store


def _store_with_commits() -> SelectionStore:
    store = SelectionStore()
    store.set_commit_groups([
        ("org/a", [CommitInfo(sha="aaa1", message="one"), CommitInfo(sha="aaa2", message="two")]),
        ("org/b", [CommitInfo(sha="bbb1", message="three")]),
    ])
    return store


def test_set_repositories_starts_unselected() -> None:
    store = _store_with_repos()
    assert [e.selected for e in store.repositories] == [False, False, False]
    assert store.selected_repo_full_names() == []


def test_select_repository_keeps_other_entries() -> None:
    store = _store_with_repos()
    before = store.repositories

    store.select_repository("2")

    after = store.repositories
    assert after is not before
    assert after[0] is before[0]
    assert after[2] is before[2]
    assert after[1].selected is True
    assert after[1].repo is before[1].repo
    assert store.selected_repo_full_names() == ["org/b"]


def test_select_then_unselect_repository_round_trip() -> None:
    store = _store_with_repos()
    original = store.repositories

    store.select_repository("1")
    store.unselect_repository("1")

    assert [e.selected for e in store.repositories] == [False, False, False]
    assert store.repositories[1] is original[1]
    assert store.repositories[2] is original[2]


def test_unknown_repository_is_noop() -> None:
    store = _store_with_repos()
    before = store.repositories

    store.select_repository("missing")
    store.unselect_repository("missing")

    assert store.repositories is before
    assert store.find_repository("missing") is None


def test_selected_names_recomputed_after_replacing_repositories() -> None:
    store = _store_with_repos()
    store.select_repository("1")
    assert store.selected_repo_full_names() == ["org/a"]

    store.set_repositories([Repository(id="1", full_name="org/a")])
    assert store.selected_repo_full_names() == []


def test_set_commit_groups_starts_unselected() -> None:
    store = _store_with_commits()
    assert [g.repo_full_name for g in store.commit_groups] == ["org/a", "org/b"]
    assert all(not e.selected for g in store.commit_groups for e in g.commits)
    assert store.selected_commit_count() == 0


def test_set_commit_groups_accepts_groups_and_mappings() -> None:
    store = _store_with_commits()
    store.select_all_commits()

    store.set_commit_groups(list(store.commit_groups) + [
        {"repo_full_name": "org/c", "commits": [CommitInfo(sha="ccc1", message="four")]},
    ])

    assert [g.repo_full_name for g in store.commit_groups] == ["org/a", "org/b", "org/c"]
    assert store.selected_commit_count() == 0


def test_select_commit_replaces_only_target_entry() -> None:
    store = _store_with_commits()
    before = store.commit_groups

    store.select_commit("org/a", "aaa2")

    after = store.commit_groups
    assert after[1] is before[1]
    assert after[0] is not before[0]
    assert after[0].commits[0] is before[0].commits[0]
    assert after[0].commits[1].selected is True
    assert after[0].commits[1].commit is before[0].commits[1].commit
    assert [e.commit.sha for e in after[0].commits] == ["aaa1", "aaa2"]
    assert store.selected_commit_count() == 1


def test_select_commit_is_scoped_to_repository() -> None:
    store = SelectionStore()
    store.set_commit_groups([
        ("org/a", [CommitInfo(sha="same", message="x")]),
        ("org/b", [CommitInfo(sha="same", message="y")]),
    ])

    store.select_commit("org/b", "same")

    assert store.commit_groups[0].commits[0].selected is False
    assert store.commit_groups[1].commits[0].selected is True


def test_unknown_commit_toggle_is_noop() -> None:
    store = _store_with_commits()
    before = store.commit_groups

    store.select_commit("org/zzz", "aaa1")
    store.unselect_commit("org/zzz", "aaa1")
    store.select_commit("org/a", "nope")
    store.unselect_commit("org/a", "nope")

    assert store.commit_groups is before


def test_select_and_unselect_all_commits() -> None:
    store = _store_with_commits()

    store.select_all_commits("org/a")
    assert store.selected_commit_count() == 2
    assert store.commit_groups[1].commits[0].selected is False

    store.select_all_commits()
    assert store.selected_commit_count() == 3

    store.unselect_all_commits()
    assert store.selected_commit_count() == 0


def test_prebuilt_group_is_reset_to_unselected() -> None:
    store = _store_with_commits()
    store.select_commit("org/a", "aaa1")
    group = store.commit_groups[0]
    assert isinstance(group, CommitGroup)

    store.set_commit_groups([group])

    assert store.commit_groups[0].commits[0].selected is False
