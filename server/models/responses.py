from pydantic import BaseModel


class Company(BaseModel):
    name: str
    catchPhrase: str


class Address(BaseModel):
    city: str
    zipcode: str


class User(BaseModel):
    id: int
    firstname: str
    lastname: str
    email: str
    company: Company
    address: Address


class UsersPageResponse(BaseModel):
    """One page of the user listing. `next` is the next page number, None on the last page."""

    results: list[User]
    next: int | None
    count: int
