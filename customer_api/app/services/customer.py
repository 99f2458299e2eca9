import logging
from sqlalchemy.exc import IntegrityError

from ..models.customer import Customer
from ..repositories.customer import CustomerRepository
from ..schemas.customer import (
    CustomerEmailUpdate,
    CustomerPage,
    CustomerRequest,
    CustomerResponse,
    CustomerSearchCriteria,
)
from ..util.pagination import build_page_request
from ..util.timing import log_execution_time
from .error_handling import (
    handle_service_error,
    NotFoundError,
    ResourceAlreadyExistsError,
)

logger = logging.getLogger(__name__)


def to_customer_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse.model_validate(customer)


@handle_service_error
@log_execution_time
def create_customer(repo: CustomerRepository, customer_data: CustomerRequest) -> CustomerResponse:
    """
    Create a new customer.

    Raises:
        ResourceAlreadyExistsError: If the email is already registered
    """
    if repo.find_by_email(customer_data.email) is not None:
        raise ResourceAlreadyExistsError("Customer", "email", customer_data.email)

    customer = Customer(
        first_name=customer_data.first_name,
        last_name=customer_data.last_name,
        email=customer_data.email,
        phone_number=customer_data.phone_number,
        date_of_birth=customer_data.date_of_birth,
    )

    saved = _save_unique(repo, customer)
    logger.info(f"Created customer {saved.id}")
    return to_customer_response(saved)


@handle_service_error
@log_execution_time
def get_customer_by_id(repo: CustomerRepository, customer_id: int) -> CustomerResponse:
    return to_customer_response(_get_or_raise(repo, customer_id))


@handle_service_error
@log_execution_time
def update_customer(repo: CustomerRepository, customer_id: int, customer_data: CustomerRequest) -> CustomerResponse:
    """
    Replace every field of an existing customer. The stored id is kept.

    Raises:
        NotFoundError: If the customer does not exist
        ResourceAlreadyExistsError: If another customer owns the new email
    """
    customer = _get_or_raise(repo, customer_id)

    if repo.exists_by_email(customer_data.email, exclude_id=customer.id):
        raise ResourceAlreadyExistsError("Customer", "email", customer_data.email)

    customer.first_name = customer_data.first_name
    customer.last_name = customer_data.last_name
    customer.email = customer_data.email
    customer.phone_number = customer_data.phone_number
    customer.date_of_birth = customer_data.date_of_birth

    saved = _save_unique(repo, customer)
    logger.info(f"Updated customer {saved.id}")
    return to_customer_response(saved)


@handle_service_error
@log_execution_time
def update_customer_email(repo: CustomerRepository, customer_id: int, email_update: CustomerEmailUpdate) -> CustomerResponse:
    customer = _get_or_raise(repo, customer_id)

    if repo.exists_by_email(email_update.email, exclude_id=customer.id):
        raise ResourceAlreadyExistsError("Customer", "email", email_update.email)

    customer.email = email_update.email

    saved = _save_unique(repo, customer)
    logger.info(f"Updated email of customer {saved.id}")
    return to_customer_response(saved)


@handle_service_error
@log_execution_time
def delete_customer(repo: CustomerRepository, customer_id: int) -> None:
    customer = _get_or_raise(repo, customer_id)
    repo.delete(customer)
    logger.info(f"Deleted customer {customer_id}")


@handle_service_error
@log_execution_time
def search_customers(repo: CustomerRepository, criteria: CustomerSearchCriteria) -> CustomerPage:
    """
    Paginated customer search.

    Args:
        repo: Customer repository
        criteria: Optional filters plus page, size and sort list

    Returns:
        CustomerPage with the requested slice and total counts
    """
    page_request = build_page_request(criteria.page, criteria.size, criteria.sort_list)
    page = repo.search(criteria, page_request)
    return CustomerPage.from_page(page.map(to_customer_response))


def _get_or_raise(repo: CustomerRepository, customer_id: int) -> Customer:
    customer = repo.find_by_id(customer_id)
    if customer is None:
        raise NotFoundError("Customer", "id", customer_id)
    return customer


def _save_unique(repo: CustomerRepository, customer: Customer) -> Customer:
    # Concurrent writers can pass the pre-check; the unique index decides
    try:
        return repo.save(customer)
    except IntegrityError as e:
        logger.warning(f"Unique constraint violated for email {customer.email}: {str(e.orig)}")
        raise ResourceAlreadyExistsError("Customer", "email", customer.email) from e
