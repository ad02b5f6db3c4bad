"""Integration tests for the default attachment repository on SQLite."""

from __future__ import annotations

from app.domain.entities import DefaultAttachment
from app.infrastructure.database import session_scope
from app.infrastructure.default_attachments_table import DefaultAttachmentsTableBuilder
from app.infrastructure.repositories import DefaultAttachmentRepository


def _add(repository: DefaultAttachmentRepository, **fields) -> DefaultAttachment:
    return repository.add(DefaultAttachment(**fields))


def test_unset_fields_take_column_defaults(session):
    repository = DefaultAttachmentRepository(session)

    stored = _add(repository, name="Passport copy", type="Document", created_by="admin")

    assert stored.id is not None
    assert stored.active is True
    assert stored.is_required is True
    assert stored.applicant_type == 0
    assert stored.created_at is not None


def test_explicit_falsy_values_are_persisted(session):
    repository = DefaultAttachmentRepository(session)

    stored = _add(repository, name="Optional", active=False, is_required=False, applicant_type=0)
    fetched = repository.get(stored.id)

    assert fetched is not None
    assert fetched.active is False
    assert fetched.is_required is False
    assert fetched.applicant_type == 0


def test_add_then_get_round_trip(session):
    repository = DefaultAttachmentRepository(session)

    stored = _add(
        repository,
        name="Bank statement",
        type="Document",
        created_by="clerk",
        applicant_type=2,
        is_required=True,
        active=True,
    )
    fetched = repository.get(stored.id)

    assert fetched == stored
    assert (fetched.name, fetched.type, fetched.created_by, fetched.applicant_type) == (
        "Bank statement",
        "Document",
        "clerk",
        2,
    )


def test_created_at_is_store_assigned_and_non_decreasing(session):
    repository = DefaultAttachmentRepository(session)

    ids = [_add(repository, name=f"Doc {index}").id for index in range(3)]
    timestamps = [repository.get(attachment_id).created_at for attachment_id in ids]

    assert all(value is not None for value in timestamps)
    assert timestamps == sorted(timestamps)


def test_get_missing_id_returns_none(session):
    assert DefaultAttachmentRepository(session).get(12345) is None


def test_list_all_returns_newest_first(session):
    repository = DefaultAttachmentRepository(session)
    ids = [_add(repository, name=name).id for name in ("a", "b", "c")]

    assert [item.id for item in repository.list_all()] == sorted(ids, reverse=True)


def test_update_missing_id_returns_false(session):
    repository = DefaultAttachmentRepository(session)

    assert repository.update(DefaultAttachment(id=999, name="Nothing")) is False
    assert repository.list_all() == []


def test_update_overwrites_every_field_including_nulls(session):
    repository = DefaultAttachmentRepository(session)
    stored = _add(repository, name="Before", type="Document", created_by="admin", applicant_type=1)

    changed = repository.update(
        DefaultAttachment(id=stored.id, name="After", type=None, created_by=None, active=None)
    )
    fetched = repository.get(stored.id)

    assert changed is True
    assert fetched.name == "After"
    assert fetched.type is None
    assert fetched.created_by is None
    assert fetched.active is None
    assert fetched.is_required is None
    assert fetched.applicant_type is None
    assert fetched.created_at == stored.created_at


def test_delete_succeeds_exactly_once(session):
    repository = DefaultAttachmentRepository(session)
    stored = _add(repository, name="Temporary")

    assert repository.delete(stored.id) is True
    assert repository.delete(stored.id) is False
    assert repository.get(stored.id) is None


def test_paging_returns_disjoint_pages_with_true_total(session):
    repository = DefaultAttachmentRepository(session)
    for index in range(25):
        _add(repository, name=f"Document {index:02d}")

    pages = [repository.search(page_index=index, page_size=10) for index in range(3)]

    assert [len(page.items) for page in pages] == [10, 10, 5]
    assert all(page.total_count == 25 for page in pages)
    seen = [item.id for page in pages for item in page.items]
    assert len(set(seen)) == 25


def test_invalid_paging_arguments_are_clamped(session):
    repository = DefaultAttachmentRepository(session)
    for index in range(12):
        _add(repository, name=f"Item {index}")

    page = repository.search(page_index=-1, page_size=0)

    assert len(page.items) == 10
    assert page.total_count == 12


def test_name_desc_sorts_nulls_as_empty_and_breaks_ties_by_id(session):
    repository = DefaultAttachmentRepository(session)
    for name in ("beta", "alpha", None, "beta", "gamma", None):
        _add(repository, name=name)

    page = repository.search(page_size=50, sort_order="NameDesc")
    keys = [((item.name or ""), item.id) for item in page.items]

    assert keys == sorted(keys, reverse=True)
    assert page.items[-1].name is None


def test_unknown_sort_key_behaves_like_id_desc(session):
    repository = DefaultAttachmentRepository(session)
    for name in ("c", "a", "b"):
        _add(repository, name=name)

    unknown = repository.search(sort_order="Name; DROP TABLE DefaultAttachments")
    by_id_desc = repository.search(sort_order="IdDesc")

    assert [item.id for item in unknown.items] == [item.id for item in by_id_desc.items]
    assert [item.id for item in by_id_desc.items] == sorted(
        (item.id for item in by_id_desc.items), reverse=True
    )


def test_applicant_type_sort_treats_null_as_zero(session):
    repository = DefaultAttachmentRepository(session)
    first = _add(repository, name="two", applicant_type=2)
    second = _add(repository, name="one", applicant_type=1)
    nulled = _add(repository, name="null", applicant_type=5)
    repository.update(DefaultAttachment(id=nulled.id, name="null", applicant_type=None))

    page = repository.search(sort_order="ApplicantType")

    assert [item.id for item in page.items] == [nulled.id, second.id, first.id]


def test_integer_query_matches_names_or_applicant_type(session):
    repository = DefaultAttachmentRepository(session)
    by_name = _add(repository, name="Form 7", applicant_type=1)
    by_type = _add(repository, name="Other", applicant_type=7)
    _add(repository, name="Unrelated", applicant_type=2)

    page = repository.search(search_query="7")

    assert {item.id for item in page.items} == {by_name.id, by_type.id}
    assert page.total_count == 2


def test_boolean_query_matches_flags(session):
    repository = DefaultAttachmentRepository(session)
    optional = _add(repository, name="Optional", is_required=False, active=False)
    _add(repository, name="Required", is_required=True, active=True)

    page = repository.search(search_query="false")

    assert [item.id for item in page.items] == [optional.id]


def test_text_query_matches_substrings_of_type_and_creator(session):
    repository = DefaultAttachmentRepository(session)
    by_type = _add(repository, name="A", type="Document")
    by_creator = _add(repository, name="B", created_by="documentation-bot")
    _add(repository, name="C", type="Etc", created_by="System")

    page = repository.search(search_query="ocument")

    assert {item.id for item in page.items} == {by_type.id, by_creator.id}


def test_wildcards_in_query_are_matched_literally(session):
    repository = DefaultAttachmentRepository(session)
    literal = _add(repository, name="100% complete")
    _add(repository, name="1000 complete")

    page = repository.search(search_query="0%")

    assert [item.id for item in page.items] == [literal.id]


def test_operations_only_touch_the_selected_tenant(tmp_path, database_url):
    first = f"sqlite:///{tmp_path / 'first.db'}"
    second = f"sqlite:///{tmp_path / 'second.db'}"
    builder = DefaultAttachmentsTableBuilder(database_url)
    assert [result.succeeded for result in builder.provision_all([first, second])] == [True, True]

    with session_scope(first) as session:
        repository = DefaultAttachmentRepository(session)
        added = _add(repository, name="Tenant-only permit", type="Document")
        seeded = repository.search(search_query="Document", sort_order="ApplicantTypeDesc")
        assert [item.applicant_type for item in seeded.items] == [2, 1, 0]
        assert repository.delete(seeded.items[0].id) is True

    with session_scope(first) as session:
        page = DefaultAttachmentRepository(session).search(page_size=50)
        assert page.total_count == 3
        assert added.id in {item.id for item in page.items}

    with session_scope(second) as session:
        page = DefaultAttachmentRepository(session).search(page_size=50)
        assert page.total_count == 3
        assert "Tenant-only permit" not in {item.name for item in page.items}
        assert {item.applicant_type for item in page.items} == {0, 1, 2}
