from civicfeed.db.seed import SEED_ISSUES, SEED_TECHNICIANS, SEED_USERS
from civicfeed.db.store import EntityKind, MemoryStore
from civicfeed.schemas.issue import IssueCreate
from civicfeed.services import lifecycle


def test_seed_dataset(store):
    assert len(store.list_all(EntityKind.issue)) == SEED_ISSUES == 3
    assert len(store.list_all(EntityKind.user)) == SEED_USERS == 2
    assert len(store.list_all(EntityKind.technician)) == SEED_TECHNICIANS == 3


def test_seed_upvote_counts_match_voter_sets(store):
    for issue in store.list_all(EntityKind.issue):
        assert issue.upvote_count == len(store.voters(issue.id))


def test_get_returns_a_copy(store):
    issue = store.list_all(EntityKind.issue)[0]
    fetched = store.get(EntityKind.issue, issue.id)
    fetched.title = "changed"
    fetched.image_urls.append("/x.jpg")
    again = store.get(EntityKind.issue, issue.id)
    assert again.title == issue.title
    assert again.image_urls == issue.image_urls


def test_list_all_is_a_snapshot(store, citizen):
    snapshot = store.list_all(EntityKind.issue)
    lifecycle.create_issue(store, IssueCreate(
        title="t", description="d", category="c", severity="low", reporter_id=citizen.id,
    ))
    assert len(snapshot) == 3
    assert len(store.list_all(EntityKind.issue)) == 4


def test_get_missing_returns_none(store):
    assert store.get(EntityKind.issue, "nope") is None


def test_delete(store):
    issue = store.list_all(EntityKind.issue)[0]
    assert store.delete(EntityKind.issue, issue.id) is True
    assert store.delete(EntityKind.issue, issue.id) is False
    assert issue.id not in [i.id for i in store.list_all(EntityKind.issue)]


def test_put_overwrites_in_place(store):
    ids_before = [i.id for i in store.list_all(EntityKind.issue)]
    issue = store.get(EntityKind.issue, ids_before[1])
    issue.title = "renamed"
    store.put(EntityKind.issue, issue)
    assert [i.id for i in store.list_all(EntityKind.issue)] == ids_before
    assert store.get(EntityKind.issue, issue.id).title == "renamed"


def test_reset_restores_seed(store, citizen):
    created = lifecycle.create_issue(store, IssueCreate(
        title="t", description="d", category="c", severity="low", reporter_id=citizen.id,
    ))
    store.reset()
    issues = store.list_all(EntityKind.issue)
    assert len(issues) == 3
    assert len(store.list_all(EntityKind.user)) == 2
    assert created.id not in [i.id for i in issues]
    assert store.voters(created.id) == set()


def test_unseeded_store_is_empty():
    empty = MemoryStore(seed=False)
    assert empty.counts() == {"user": 0, "issue": 0, "technician": 0, "comment": 0}
