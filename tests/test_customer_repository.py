from datetime import date

import pytest

from customer_api.app.models.customer import Customer
from customer_api.app.repositories.customer import CustomerRepository
from customer_api.app.schemas.customer import CustomerSearchCriteria
from customer_api.app.util.pagination import PageRequest, SortOrder


def _customer(first_name, last_name, email, phone_number="0123456789", dob=date(1989, 1, 2)):
    return Customer(
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone_number=phone_number,
        date_of_birth=dob,
    )


@pytest.fixture
def repo(db_session):
    repository = CustomerRepository(db_session)
    repository.save(_customer("John", "Wick", "jwick@tester.com", "0123456789"))
    repository.save(_customer("Sarah", "Wick", "swick@tester.com", "0123458881", date(1990, 5, 5)))
    repository.save(_customer("Maria", "Smith", "msmith@gmail.com", "5553338881"))
    return repository


def test_save_assigns_id_and_timestamps(db_session):
    repository = CustomerRepository(db_session)

    saved = repository.save(_customer("Anna", "Lee", "alee@tester.com"))

    assert saved.id is not None
    assert saved.created_date is not None
    assert saved.last_modified_date is not None


def test_find_by_email(repo):
    customer = repo.find_by_email("jwick@tester.com")

    assert customer is not None
    assert customer.first_name == "John"
    assert customer.date_of_birth == date(1989, 1, 2)


@pytest.mark.parametrize("email", ["abc@tester.com", None, ""])
def test_find_by_email_returns_nothing(repo, email):
    assert repo.find_by_email(email) is None


def test_exists_by_email_excludes_own_row(repo):
    john = repo.find_by_email("jwick@tester.com")

    assert repo.exists_by_email("jwick@tester.com")
    assert not repo.exists_by_email("jwick@tester.com", exclude_id=john.id)


def test_delete(repo):
    john = repo.find_by_email("jwick@tester.com")

    repo.delete(john)

    assert repo.find_by_id(john.id) is None


def test_search_without_filters_returns_everything(repo):
    page = repo.search(CustomerSearchCriteria(), PageRequest(page=0, size=10))

    assert len(page.content) == 3
    assert page.total_elements == 3


def test_search_first_name_prefix_is_case_insensitive(repo):
    page = repo.search(CustomerSearchCriteria(first_name="mAR"), PageRequest())

    assert [c.first_name for c in page.content] == ["Maria"]


def test_search_name_is_prefix_not_substring(repo):
    page = repo.search(CustomerSearchCriteria(last_name="ick"), PageRequest())

    assert page.total_elements == 0


def test_search_email_substring(repo):
    page = repo.search(CustomerSearchCriteria(email="TESTER"), PageRequest())

    assert sorted(c.first_name for c in page.content) == ["John", "Sarah"]


def test_search_phone_substring(repo):
    page = repo.search(CustomerSearchCriteria(phone_number="8881"), PageRequest())

    assert sorted(c.first_name for c in page.content) == ["Maria", "Sarah"]


def test_search_date_of_birth_exact(repo):
    page = repo.search(CustomerSearchCriteria(date_of_birth=date(1990, 5, 5)), PageRequest())

    assert [c.first_name for c in page.content] == ["Sarah"]


def test_search_combines_filters(repo):
    page = repo.search(CustomerSearchCriteria(last_name="wick", first_name="s"), PageRequest())

    assert [c.first_name for c in page.content] == ["Sarah"]


def test_search_like_wildcards_are_literal(repo):
    page = repo.search(CustomerSearchCriteria(email="%"), PageRequest())

    assert page.total_elements == 0


def test_search_sorts_in_given_order(repo):
    page_request = PageRequest(sort=(
        SortOrder(field="last_name", direction="DESC"),
        SortOrder(field="first_name", direction="DESC"),
    ))

    page = repo.search(CustomerSearchCriteria(), page_request)

    assert [c.first_name for c in page.content] == ["Sarah", "John", "Maria"]


def test_search_paginates_with_total_independent_of_size(repo):
    sort = (SortOrder(field="first_name"),)

    first = repo.search(CustomerSearchCriteria(), PageRequest(page=0, size=2, sort=sort))
    second = repo.search(CustomerSearchCriteria(), PageRequest(page=1, size=2, sort=sort))

    assert [c.first_name for c in first.content] == ["John", "Maria"]
    assert [c.first_name for c in second.content] == ["Sarah"]
    assert first.total_elements == second.total_elements == 3
    assert first.total_pages == 2


def test_search_no_match_returns_empty_page(repo):
    page = repo.search(CustomerSearchCriteria(first_name="xxxxx"), PageRequest())

    assert page.content == []
    assert page.total_elements == 0
