from datetime import date
from typing import Optional

DATE_OF_BIRTH_MESSAGE = "Date of birth must be in the past and the customer must be at least {min_age} years old"


def calculate_age(date_of_birth: date, today: date) -> int:
    """Completed years between ``date_of_birth`` and ``today``."""
    years = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return years


def is_valid_date_of_birth(date_of_birth: Optional[date], min_age: int = 18, today: Optional[date] = None) -> bool:
    if date_of_birth is None:
        return False

    today = today or date.today()
    if date_of_birth > today:
        return False

    return calculate_age(date_of_birth, today) >= min_age


def date_of_birth_message(min_age: int) -> str:
    return DATE_OF_BIRTH_MESSAGE.format(min_age=min_age)
