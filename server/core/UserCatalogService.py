"""In-memory user catalogue backing the demo API.

The catalogue is generated deterministically so that searches and page
boundaries are reproducible across runs and in tests.
"""

from shared.helper.HelperConfig import HelperConfig
from server.models.responses import Address, Company, User, UsersPageResponse

FIRST_NAMES = [
    "Alice", "Bob", "Carla", "David", "Emma", "Felix", "Grace", "Henry", "Ines", "Jonas",
    "Karin", "Lukas", "Mia", "Noah", "Olga", "Paul", "Quinn", "Rosa", "Sven", "Tara",
]
LAST_NAMES = ["Anders", "Becker", "Cruz", "Dietz", "Evans", "Fischer", "Garcia", "Hoffmann", "Ito", "Jensen"]
COMPANIES = [
    ("Acme", "Quality through innovation"),
    ("Globex", "Think globally, act globex"),
    ("Initech", "Synergy at scale"),
    ("Umbrella", "Protecting what matters"),
    ("Hooli", "Making the world a better place"),
]
CITIES = [("Berlin", "10115"), ("Hamburg", "20095"), ("Munich", "80331"), ("Cologne", "50667")]

DEFAULT_USER_COUNT = 57


def _build_user(user_id: int) -> User:
    """Build the user with the given 1-based id.

    Args:
        user_id (int): The id of the user.

    Returns:
        User: The generated user.
    """
    index = user_id - 1
    firstname = FIRST_NAMES[index % len(FIRST_NAMES)]
    lastname = LAST_NAMES[(index // len(FIRST_NAMES) + index) % len(LAST_NAMES)]
    company_name, catch_phrase = COMPANIES[index % len(COMPANIES)]
    city, zipcode = CITIES[index % len(CITIES)]
    return User(
        id=user_id,
        firstname=firstname,
        lastname=lastname,
        email=f"{firstname.lower()}.{lastname.lower()}{user_id}@example.org",
        company=Company(name=company_name, catchPhrase=catch_phrase),
        address=Address(city=city, zipcode=zipcode),
    )


class UserCatalogService:
    """Serves search and paging over a generated list of users."""

    def __init__(self, helper_config: HelperConfig, count: int | None = None) -> None:
        self.logging = helper_config.get_logger()
        if count is None:
            count = int(helper_config.get_number_val("USERS_COUNT", default=DEFAULT_USER_COUNT))
        self._users = [_build_user(user_id) for user_id in range(1, count + 1)]
        self.logging.info("User catalogue ready with %d users.", len(self._users))

    ##########################################
    ################# CORE ###################
    ##########################################

    def search(self, search: str | None = None) -> list[User]:
        """Return every user matching the search text, in id order.

        Matches case-insensitively against first name, last name, email and company name.

        Args:
            search (str | None): Text typed by the user. Empty or None matches everyone.

        Returns:
            list[User]: The matching users.
        """
        if not search or not search.strip():
            return list(self._users)
        needle = search.strip().lower()
        return [user for user in self._users if needle in self._haystack(user)]

    def get_page(self, search: str | None, page: int, page_size: int) -> UsersPageResponse:
        """Return one page of the matching users.

        Args:
            search (str | None): Text typed by the user.
            page (int): 1-based page number.
            page_size (int): Users per page.

        Returns:
            UsersPageResponse: The page, the next page number (or None) and the overall count.
        """
        matches = self.search(search)
        start = (page - 1) * page_size
        results = matches[start:start + page_size]
        next_page = page + 1 if start + page_size < len(matches) else None
        self.logging.debug("Serving page %d (%d users) for search=%r", page, len(results), search)
        return UsersPageResponse(results=results, next=next_page, count=len(matches))

    def get_user(self, user_id: int) -> User | None:
        if 1 <= user_id <= len(self._users):
            return self._users[user_id - 1]
        return None

    ##########################################
    ############### HELPERS ##################
    ##########################################

    def _haystack(self, user: User) -> str:
        return f"{user.firstname} {user.lastname} {user.email} {user.company.name}".lower()
