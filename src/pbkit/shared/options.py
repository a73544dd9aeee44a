"""Query options for the PocketBase records and collections routes."""

from __future__ import annotations

from pydantic import BaseModel


class ViewOptions(BaseModel):
    """Options for routes returning a single record."""

    model_config = {"frozen": True}

    # Comma separated list of fields to return (all fields by default).
    fields: str | None = None
    # Relations to auto expand.
    expand: str | None = None
    sort: str | None = None

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.fields is not None:
            params["fields"] = self.fields
        if self.expand is not None:
            params["expand"] = self.expand
        if self.sort is not None:
            params["sort"] = self.sort
        return params


class ListOptions(BaseModel):
    """Query parameters of the paginated ``/records`` listing.

    Only the options that are set end up in the query string.
    """

    model_config = {"frozen": True}

    # Starts at 1.
    page: int | None = None
    per_page: int | None = None
    # Skipping the total count avoids a costly COUNT on large collections.
    skip_total: bool | None = None
    filter: str | None = None
    fields: str | None = None
    expand: str | None = None
    sort: str | None = None

    @classmethod
    def paginated(cls, page: int, per_page: int) -> ListOptions:
        return cls(page=page, per_page=per_page)

    @classmethod
    def paginated_and_skip(cls, page: int, per_page: int) -> ListOptions:
        return cls(page=page, per_page=per_page, skip_total=True)

    @classmethod
    def from_view(
        cls,
        page: int | None = None,
        per_page: int | None = None,
        filter: str | None = None,
        view: ViewOptions | None = None,
    ) -> ListOptions:
        """Build list options from a filter and optional view options."""
        view = view or ViewOptions()
        return cls(
            page=page,
            per_page=per_page,
            filter=filter,
            fields=view.fields,
            expand=view.expand,
            sort=view.sort,
            skip_total=True,
        )

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.page is not None:
            params["page"] = str(self.page)
        if self.per_page is not None:
            params["perPage"] = str(self.per_page)
        if self.skip_total is not None:
            params["skipTotal"] = "1" if self.skip_total else "0"
        if self.filter is not None:
            params["filter"] = self.filter
        if self.fields is not None:
            params["fields"] = self.fields
        if self.expand is not None:
            params["expand"] = self.expand
        if self.sort is not None:
            params["sort"] = self.sort
        return params
