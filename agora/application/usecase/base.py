"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from agora.domain.error import InvalidInputError
from agora.domain.value import Category

RequestT = TypeVar("RequestT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One forum operation: validated request in, response model out."""

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT: ...


def parse_category(raw: str) -> Category:
    """Turn caller input into a Category.

    Raises:
        InvalidInputError: If the category is blank once stripped or longer
            than 50 characters
    """
    try:
        return Category(raw)
    except ValidationError as e:
        raise InvalidInputError("Category must be 1-50 characters") from e
