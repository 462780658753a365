"""Stack Overflow contributor credited by a book."""

from __future__ import annotations

from attrs import define


@define(slots=True, frozen=True)
class Contributor:
    """Stack Overflow contributor credited by a book.

    Attributes:
        user_id: Numeric Stack Overflow user id.
        url_part: URL-escaped user name as used in profile links.
        name: Display name.
    """

    user_id: int
    url_part: str
    name: str

    @property
    def url(self) -> str:
        return (
            f"https://stackoverflow.com/users/{self.user_id}/{self.url_part}"
        )
