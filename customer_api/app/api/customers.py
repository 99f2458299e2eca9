from fastapi import APIRouter, Depends, status, Path
from sqlalchemy.orm import Session
from ..database import get_db
from ..dependencies.auth import is_admin, is_user_or_admin
from ..repositories.customer import CustomerRepository
from ..schemas.auth import Principal
from ..schemas.customer import (
    CustomerEmailUpdate,
    CustomerPage,
    CustomerRequest,
    CustomerResponse,
    CustomerSearchCriteria,
    MAX_DB_INTEGER,
)
from ..schemas.response import APIResponse
from ..services.customer import (
    create_customer,
    get_customer_by_id,
    update_customer,
    update_customer_email,
    delete_customer,
    search_customers,
)
from ..utils import success_response
from ..config import settings
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=f"{settings.API_PREFIX}/customers",
    tags=["Customers"],
)

def get_customer_repository(db: Session = Depends(get_db)) -> CustomerRepository:
    return CustomerRepository(db)

@router.post(
    "",
    response_model=APIResponse[CustomerResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add a new customer",
)
def create_new_customer(
    customer_data: CustomerRequest,
    repo: CustomerRepository = Depends(get_customer_repository),
    current_user: Principal = Depends(is_user_or_admin),
):
    new_customer = create_customer(repo, customer_data)
    headers = {"Location": f"{settings.BASE_URL}{settings.API_PREFIX}/customers/{new_customer.id}"}

    return success_response(
        results=new_customer,
        status_code=status.HTTP_201_CREATED,
        headers=headers
    )

@router.post(
    "/search",
    response_model=APIResponse[CustomerPage],
    summary="Search customers with pagination",
    description="Returns a paginated list of customers based on the search criteria",
)
def search_customers_page(
    criteria: CustomerSearchCriteria,
    repo: CustomerRepository = Depends(get_customer_repository),
    current_user: Principal = Depends(is_user_or_admin),
):
    page = search_customers(repo, criteria)
    return success_response(results=page)

@router.get(
    "/{customer_id}",
    response_model=APIResponse[CustomerResponse],
    summary="Find customer by ID",
    description="Returns a single customer",
)
def get_customer(
    customer_id: int = Path(..., ge=1, le=MAX_DB_INTEGER, description="The ID of the customer to get"),
    repo: CustomerRepository = Depends(get_customer_repository),
    current_user: Principal = Depends(is_user_or_admin),
):
    customer = get_customer_by_id(repo, customer_id)
    return success_response(results=customer)

@router.put(
    "/{customer_id}",
    response_model=APIResponse[CustomerResponse],
    summary="Update an existing customer",
)
def update_existing_customer(
    customer_data: CustomerRequest,
    customer_id: int = Path(..., ge=1, le=MAX_DB_INTEGER, description="The ID of the customer to update"),
    repo: CustomerRepository = Depends(get_customer_repository),
    current_user: Principal = Depends(is_user_or_admin),
):
    updated_customer = update_customer(repo, customer_id, customer_data)
    return success_response(results=updated_customer)

@router.patch(
    "/{customer_id}/email",
    response_model=APIResponse[CustomerResponse],
    summary="Partially update a customer's email",
)
def update_existing_customer_email(
    email_update: CustomerEmailUpdate,
    customer_id: int = Path(..., ge=1, le=MAX_DB_INTEGER, description="The ID of the customer to update"),
    repo: CustomerRepository = Depends(get_customer_repository),
    current_user: Principal = Depends(is_user_or_admin),
):
    updated_customer = update_customer_email(repo, customer_id, email_update)
    return success_response(results=updated_customer)

@router.delete(
    "/{customer_id}",
    response_model=APIResponse[str],
    summary="Delete a customer by ID",
)
def delete_existing_customer(
    customer_id: int = Path(..., ge=1, le=MAX_DB_INTEGER, description="The ID of the customer to delete"),
    repo: CustomerRepository = Depends(get_customer_repository),
    current_user: Principal = Depends(is_admin),
):
    delete_customer(repo, customer_id)
    logger.info(f"Customer {customer_id} deleted by {current_user.username or current_user.subject}")
    return success_response(results="Customer deleted successfully")
