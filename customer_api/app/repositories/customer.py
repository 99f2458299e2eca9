import logging
from typing import Optional
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models.customer import Customer
from ..util.pagination import Page, PageRequest

logger = logging.getLogger(__name__)


class CustomerRepository:
    """Persistence operations for Customer rows bound to one session."""

    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        return self.session.get(Customer, customer_id)

    def find_by_email(self, email: Optional[str]) -> Optional[Customer]:
        if not email:
            return None
        return self.session.scalars(
            select(Customer).where(Customer.email == email)
        ).first()

    def exists_by_email(self, email: str, exclude_id: Optional[int] = None) -> bool:
        stmt = select(Customer.id).where(Customer.email == email)
        if exclude_id is not None:
            stmt = stmt.where(Customer.id != exclude_id)
        return self.session.scalars(stmt.limit(1)).first() is not None

    def save(self, customer: Customer) -> Customer:
        self.session.add(customer)
        self.session.flush()
        self.session.refresh(customer)
        return customer

    def delete(self, customer: Customer) -> None:
        self.session.delete(customer)
        self.session.flush()

    def search(self, criteria, page_request: PageRequest) -> Page:
        """
        Filtered, sorted and paginated customer query.

        Args:
            criteria: Object exposing first_name, last_name, email,
                phone_number and date_of_birth; None values are ignored
            page_request: Page index, size and sort orders

        Returns:
            Page of Customer rows with the total number of matches
        """
        conditions = build_search_conditions(criteria)

        total = self.session.scalar(
            select(func.count()).select_from(Customer).where(*conditions)
        )

        stmt = select(Customer).where(*conditions)
        for order in page_request.sort:
            column = getattr(Customer, order.field)
            stmt = stmt.order_by(column.asc() if order.ascending else column.desc())

        stmt = stmt.offset(page_request.offset).limit(page_request.size)
        rows = list(self.session.scalars(stmt).all())

        logger.debug(f"Customer search matched {total} rows, returning {len(rows)}")
        return Page(content=rows, page_request=page_request, total_elements=total or 0)


def build_search_conditions(criteria) -> list:
    """
    Translate search criteria into SQL conditions.

    Names match by case-insensitive prefix, email and phone number by
    case-insensitive substring, date of birth exactly.
    """
    conditions = []

    if criteria.first_name is not None:
        conditions.append(func.lower(Customer.first_name).like(f"{_escape_like(criteria.first_name.lower())}%", escape="\\"))
    if criteria.last_name is not None:
        conditions.append(func.lower(Customer.last_name).like(f"{_escape_like(criteria.last_name.lower())}%", escape="\\"))
    if criteria.email is not None:
        conditions.append(func.lower(Customer.email).like(f"%{_escape_like(criteria.email.lower())}%", escape="\\"))
    if criteria.phone_number is not None:
        conditions.append(func.lower(Customer.phone_number).like(f"%{_escape_like(criteria.phone_number.lower())}%", escape="\\"))
    if criteria.date_of_birth is not None:
        conditions.append(Customer.date_of_birth == criteria.date_of_birth)

    return conditions


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
