from datetime import date

import pytest

from customer_api.app.repositories.customer import CustomerRepository
from customer_api.app.schemas.customer import (
    CustomerEmailUpdate,
    CustomerRequest,
    CustomerSearchCriteria,
    SortItem,
)
from customer_api.app.services.customer import (
    create_customer,
    delete_customer,
    get_customer_by_id,
    search_customers,
    update_customer,
    update_customer_email,
)
from customer_api.app.services.error_handling import (
    DatabaseError,
    NotFoundError,
    ResourceAlreadyExistsError,
    ServiceError,
)


def _request(**overrides):
    data = dict(
        first_name="John",
        last_name="Wick",
        email="jwick@tester.com",
        phone_number="0123456789",
        date_of_birth=date(1989, 1, 2),
    )
    data.update(overrides)
    return CustomerRequest(**data)


@pytest.fixture
def repo(db_session):
    return CustomerRepository(db_session)


def test_create_customer_echoes_fields(repo):
    created = create_customer(repo, _request())

    assert created.id is not None
    assert created.first_name == "John"
    assert created.email == "jwick@tester.com"
    assert created.phone_number == "0123456789"
    assert created.date_of_birth == date(1989, 1, 2)


def test_create_customer_duplicate_email(repo):
    create_customer(repo, _request())

    with pytest.raises(ResourceAlreadyExistsError):
        create_customer(repo, _request(first_name="Other"))


def test_create_customer_unique_constraint_backs_the_pre_check(repo, monkeypatch):
    create_customer(repo, _request())
    monkeypatch.setattr(repo, "find_by_email", lambda email: None)

    with pytest.raises(ResourceAlreadyExistsError):
        create_customer(repo, _request(first_name="Racer"))


def test_get_customer_by_id(repo):
    created = create_customer(repo, _request())

    assert get_customer_by_id(repo, created.id).email == "jwick@tester.com"


def test_get_customer_by_id_not_found(repo):
    with pytest.raises(NotFoundError):
        get_customer_by_id(repo, 999)


def test_update_customer_replaces_fields_and_keeps_id(repo):
    created = create_customer(repo, _request())

    updated = update_customer(repo, created.id, _request(
        first_name="Mark", last_name="Kent", email="mkent@tester.com", phone_number="0123456700",
    ))

    assert updated.id == created.id
    assert updated.first_name == "Mark"
    assert updated.email == "mkent@tester.com"
    assert repo.find_by_email("jwick@tester.com") is None


def test_update_customer_not_found_performs_no_write(repo, monkeypatch):
    saved = []
    monkeypatch.setattr(repo, "save", lambda customer: saved.append(customer))

    with pytest.raises(NotFoundError):
        update_customer(repo, 42, _request())

    assert saved == []


def test_update_customer_to_taken_email(repo):
    create_customer(repo, _request())
    other = create_customer(repo, _request(email="other@tester.com"))

    with pytest.raises(ResourceAlreadyExistsError):
        update_customer(repo, other.id, _request(email="jwick@tester.com"))


def test_update_customer_email(repo):
    created = create_customer(repo, _request())

    updated = update_customer_email(repo, created.id, CustomerEmailUpdate(email="test@test.com"))

    assert updated.email == "test@test.com"
    assert updated.first_name == "John"


def test_update_customer_email_not_found(repo):
    with pytest.raises(NotFoundError):
        update_customer_email(repo, 7, CustomerEmailUpdate(email="test@test.com"))


def test_delete_customer(repo):
    created = create_customer(repo, _request())

    delete_customer(repo, created.id)

    assert repo.find_by_id(created.id) is None


def test_delete_customer_not_found(repo):
    with pytest.raises(NotFoundError):
        delete_customer(repo, 1)


def test_search_customers_reports_total_and_sort(repo):
    for index in range(12):
        create_customer(repo, _request(
            first_name=f"Name{index:02d}",
            email=f"customer{index}@tester.com",
        ))

    page = search_customers(repo, CustomerSearchCriteria(
        page=0, size=10, sort_list=[SortItem(field="firstName", direction="DESC")],
    ))

    assert len(page.content) == 10
    assert page.content[0].first_name == "Name11"
    assert page.page.total_elements == 12
    assert page.page.total_pages == 2
    assert page.page.number == 0
    assert page.page.size == 10


def test_service_errors_map_to_status_codes():
    assert set(ServiceError.__subclasses__()) == {NotFoundError, ResourceAlreadyExistsError, DatabaseError}
    assert NotFoundError("Customer", "id", 1).status_code == 404
    assert ResourceAlreadyExistsError("Customer", "email", "a@b.c").status_code == 400
    assert DatabaseError("boom", original_error=RuntimeError()).status_code == 400
