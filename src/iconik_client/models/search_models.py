"""
Data Models for Search Requests and Responses
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

TAG_FIELD = "metadata._gcvi_tags"


class FilterTerm(BaseModel):
    """A single ``name == value`` condition in a search filter."""

    name: str
    value: str


class SearchFilter(BaseModel):
    """Combination of filter terms."""

    operator: str = Field("AND", description="Boolean operator joining the terms")
    terms: List[FilterTerm] = Field(default_factory=list)


class SearchCriteria(BaseModel):
    """
    Search request body for ``search/v1/search/``.

    ``query`` is free text matched by Iconik's full-text index; ``filter``
    holds exact field matches.
    """

    doc_types: List[str] = Field(default_factory=lambda: ["assets"])
    query: Optional[str] = None
    filter: SearchFilter = Field(default_factory=SearchFilter)

    def to_body(self) -> dict:
        """Serialize for the wire, leaving out an unset query."""
        return self.model_dump(exclude_none=True)

    @classmethod
    def for_tag(cls, tag: str) -> "SearchCriteria":
        return cls(filter=SearchFilter(terms=[FilterTerm(name=TAG_FIELD, value=tag)]))

    @classmethod
    def for_title_and_tag(cls, title: str, tag: str, exact: bool = False) -> "SearchCriteria":
        """
        Build criteria matching a title and/or a tag.

        Args:
            title: Asset title; matched exactly when ``exact`` is set,
                otherwise used as the free-text query
            tag: Value of the tag metadata field
            exact: Match the title as a filter term

        Empty arguments contribute nothing to the criteria.
        """
        criteria = cls()
        if title:
            if exact:
                criteria.filter.terms.append(FilterTerm(name="title", value=title))
            else:
                criteria.query = title
        if tag:
            criteria.filter.terms.append(FilterTerm(name=TAG_FIELD, value=tag))
        return criteria

    @classmethod
    def for_collection_title(cls, title: str) -> "SearchCriteria":
        return cls(
            doc_types=["collections"],
            filter=SearchFilter(terms=[FilterTerm(name="title", value=title)]),
        )


class IconikFile(BaseModel):
    """File entry attached to a search hit."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: str = ""


class IconikProxy(BaseModel):
    """Proxy entry attached to a search hit."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: Optional[str] = None


class IconikObject(BaseModel):
    """A search hit (asset or collection)."""

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    title: Optional[str] = None
    object_type: Optional[str] = None
    files: List[IconikFile] = Field(default_factory=list)
    proxies: List[IconikProxy] = Field(default_factory=list)

    @field_validator("files", "proxies", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value


class SearchResponse(BaseModel):
    """Search results page."""

    model_config = ConfigDict(extra="ignore")

    objects: List[IconikObject] = Field(default_factory=list)
    total: Optional[int] = None
    page: Optional[int] = None
    pages: Optional[int] = None

    @field_validator("objects", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value


class CollectionID(BaseModel):
    """Collection matched by title."""

    collection_id: str
    title: Optional[str] = None
